# power.py

import math
from dataclasses import dataclass
from enum import Enum


class FrequencyChoice(Enum):
    """Which rung of the frequency ladder to run at."""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


@dataclass(frozen=True)
class FreqLevel:
    """One discrete operating point: relative speed and power draw."""
    speed: float   # relative to the 1.0x reference frequency
    power: float   # Watts at this frequency (includes static power)
    label: str = 'f'

    def __post_init__(self):
        if not (math.isfinite(self.speed) and self.speed > 0):
            raise ValueError(f"Frequency level '{self.label}' must have a finite, positive speed, got {self.speed}")
        if not (math.isfinite(self.power) and self.power > 0):
            raise ValueError(f"Frequency level '{self.label}' must have a finite, positive power, got {self.power}")

    def to_dict(self):
        return {'label': self.label, 'speed': self.speed, 'power': self.power}


class PowerModel:
    """Ordered frequency levels (slowest first) plus the idle power draw."""

    def __init__(self, levels, idle_power):
        levels = tuple(levels)
        if not levels:
            raise ValueError("Power model needs at least one frequency level")
        for slower, faster in zip(levels, levels[1:]):
            if faster.speed <= slower.speed:
                raise ValueError(
                    f"Frequency levels must be in ascending speed order: "
                    f"'{faster.label}' ({faster.speed}) follows '{slower.label}' ({slower.speed})"
                )
        if not (math.isfinite(idle_power) and idle_power >= 0):
            raise ValueError(f"Idle power must be a finite, non-negative number, got {idle_power}")
        self._levels = levels
        self._idle_power = float(idle_power)

    @property
    def levels(self):
        return self._levels

    @property
    def idle_power(self):
        return self._idle_power

    def index_for(self, choice):
        if choice is FrequencyChoice.HIGH:
            return len(self._levels) - 1
        if choice is FrequencyChoice.MEDIUM and len(self._levels) > 1:
            return 1
        return 0

    def level_for(self, choice):
        return self._levels[self.index_for(choice)]

    def to_dict(self):
        return {
            'levels': [level.to_dict() for level in self._levels],
            'idle_power': self._idle_power,
        }

    def __repr__(self):
        return f"PowerModel(levels={list(self._levels)!r}, idle_power={self._idle_power})"


def default_power_model():
    # Illustrative numbers for a three-step part
    return PowerModel(
        [
            FreqLevel(1.0, 1.5, '1.0GHz'),
            FreqLevel(1.5, 2.6, '1.5GHz'),
            FreqLevel(2.0, 4.5, '2.0GHz'),
        ],
        idle_power=0.2,
    )
