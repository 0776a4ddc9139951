"""Tests for the frequency ladder and its tagged choices."""

import pytest

from eadvfs.power import FreqLevel, FrequencyChoice, PowerModel, default_power_model


class TestFreqLevel:

    def test_rejects_non_positive_speed(self) -> None:
        with pytest.raises(ValueError):
            FreqLevel(0.0, 1.0, 'stalled')

    @pytest.mark.parametrize("speed, power", [(float('nan'), 1.0), (1.0, float('inf'))])
    def test_rejects_non_finite_values(self, speed, power) -> None:
        with pytest.raises(ValueError):
            FreqLevel(speed, power, 'broken')

    def test_rejects_non_positive_power(self) -> None:
        with pytest.raises(ValueError):
            FreqLevel(1.0, -0.5, 'generator')


class TestPowerModel:
    """Verify construction checks and choice-to-level mapping."""

    def test_default_model_has_three_ascending_levels(self) -> None:
        model = default_power_model()
        speeds = [level.speed for level in model.levels]
        assert speeds == [1.0, 1.5, 2.0]
        assert model.idle_power == 0.2

    def test_empty_table_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            PowerModel([], idle_power=0.1)

    def test_descending_table_is_rejected(self) -> None:
        """Index-based choices need slowest-first ordering."""
        with pytest.raises(ValueError):
            PowerModel([FreqLevel(2.0, 4.0), FreqLevel(1.0, 1.0)], idle_power=0.1)

    def test_duplicate_speeds_are_rejected(self) -> None:
        with pytest.raises(ValueError):
            PowerModel([FreqLevel(1.0, 1.0), FreqLevel(1.0, 2.0)], idle_power=0.1)

    def test_negative_idle_power_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            PowerModel([FreqLevel(1.0, 1.0)], idle_power=-1)

    def test_non_finite_idle_power_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            PowerModel([FreqLevel(1.0, 1.0)], idle_power=float('nan'))

    def test_choices_map_to_ends_and_middle(self) -> None:
        model = default_power_model()
        assert model.index_for(FrequencyChoice.LOW) == 0
        assert model.index_for(FrequencyChoice.MEDIUM) == 1
        assert model.index_for(FrequencyChoice.HIGH) == 2
        assert model.level_for(FrequencyChoice.HIGH).label == '2.0GHz'

    def test_single_level_serves_every_choice(self) -> None:
        model = PowerModel([FreqLevel(1.0, 1.0, 'only')], idle_power=0.0)
        assert {model.index_for(choice) for choice in FrequencyChoice} == {0}

    def test_two_levels_medium_is_the_fast_one(self) -> None:
        model = PowerModel([FreqLevel(1.0, 1.0), FreqLevel(2.0, 3.0)], idle_power=0.0)
        assert model.index_for(FrequencyChoice.MEDIUM) == 1

    def test_to_dict_lists_levels(self) -> None:
        data = default_power_model().to_dict()
        assert data['idle_power'] == 0.2
        assert data['levels'][0] == {'label': '1.0GHz', 'speed': 1.0, 'power': 1.5}
