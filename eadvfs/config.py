# config.py

import logging
import math
from dataclasses import dataclass, fields, asdict
from pathlib import Path

from eadvfs.power import FreqLevel, PowerModel, default_power_model

logger = logging.getLogger(__name__)

# Zero is allowed here: it means always race at the highest level
FRACTION_KEYS = frozenset(['short_fraction_threshold', 'util_threshold'])


class ConfigError(ValueError):
    """Raised for unusable tunables or a malformed config file."""


@dataclass(frozen=True)
class SchedulerConfig:
    """Tunables for the frequency heuristic and the simulation loop (times in ms)."""
    short_threshold: float = 30.0
    short_fraction_threshold: float = 0.6
    util_threshold: float = 0.6
    long_job_threshold: float = 200.0
    lookahead_ms: float = 200.0
    quantum_ms: float = 50.0
    epsilon: float = 1e-9
    horizon_ms: float = 100000.0  # None runs until every job is done

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == 'horizon_ms' and value is None:
                continue
            if not math.isfinite(value):
                raise ConfigError(f"'{f.name}' must be a finite number, got {value}")
            if f.name in FRACTION_KEYS:
                if value < 0:
                    raise ConfigError(f"'{f.name}' cannot be negative, got {value}")
            elif value <= 0:
                raise ConfigError(f"'{f.name}' must be positive, got {value}")

    @classmethod
    def from_mapping(cls, mapping):
        """Build a config from a dict of raw values, ignoring keys it doesn't know."""
        values = {}
        for key, raw in mapping.items():
            if key not in CONFIG_KEYS:
                continue
            if key == 'horizon_ms' and (raw is None or str(raw).strip().lower() in ('none', '')):
                values[key] = None
                continue
            try:
                values[key] = float(raw)
            except (TypeError, ValueError):
                raise ConfigError(f"'{key}' must be a number, got {raw!r}")
        return cls(**values)

    def with_overrides(self, mapping):
        return SchedulerConfig.from_mapping({**asdict(self), **mapping})

    def to_dict(self):
        return asdict(self)


CONFIG_KEYS = frozenset(f.name for f in fields(SchedulerConfig))


def parse_level(value):
    """Parse 'speed, power, label' into a FreqLevel."""
    parts = [p.strip() for p in value.split(',')]
    if len(parts) not in (2, 3):
        raise ConfigError(f"expected 'speed, power[, label]', got {value!r}")
    try:
        speed = float(parts[0])
        power = float(parts[1])
    except ValueError:
        raise ConfigError(f"level speed and power must be numbers, got {value!r}")
    label = parts[2] if len(parts) == 3 else f"{speed:g}x"
    try:
        return FreqLevel(speed, power, label)
    except ValueError as e:
        raise ConfigError(str(e))


def load_config(config_file):
    """Load tunables and the power model from a key = value config file.

    Lines look like:
        quantum_ms = 25
        idle_power = 0.1
        level = 1.0, 1.5, 1.0GHz

    Any ``level`` lines replace the default frequency table, in file order.
    Returns a ``(SchedulerConfig, PowerModel)`` pair.
    """
    config_path = Path(config_file)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_file}' not found")

    settings = {}
    levels = []
    idle_power = None
    with open(config_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                raise ConfigError(f"{config_file}:{line_number}: expected 'key = value', got {line!r}")

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()
            try:
                if key == 'level':
                    levels.append(parse_level(value))
                elif key == 'idle_power':
                    idle_power = float(value)
                elif key in CONFIG_KEYS:
                    settings[key] = value
                else:
                    logger.warning("%s:%d: ignoring unknown setting '%s'", config_file, line_number, key)
            except ValueError as e:
                raise ConfigError(f"{config_file}:{line_number}: {e}")

    try:
        config = SchedulerConfig.from_mapping(settings)
        default = default_power_model()
        power_model = PowerModel(
            levels or default.levels,
            default.idle_power if idle_power is None else idle_power,
        )
    except ValueError as e:
        raise ConfigError(f"{config_file}: {e}")
    return config, power_model
