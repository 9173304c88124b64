"""
Tests for ExecutionerConfig validation and derived values.
"""

import pytest

from executioner.config import DifficultySetting, ExecutionerConfig
from executioner.errors import ConfigError


class TestValidation:
    """Impossible values are rejected, repairable ones repaired."""

    def test_skill_bounds_inverted(self):
        with pytest.raises(ConfigError):
            ExecutionerConfig(min_skill=0.9, max_skill=0.1)

    def test_threshold_bounds_inverted(self):
        with pytest.raises(ConfigError):
            ExecutionerConfig(min_hits_to_increase=5, max_hits_to_increase=2)

    def test_empty_ring_buffer(self):
        with pytest.raises(ConfigError):
            ExecutionerConfig(recent_guesses_to_track=0)

    @pytest.mark.parametrize("name", [
        "density_weight_bands", "letter_pool_bands", "coordinate_pool_bands",
    ])
    def test_empty_bands(self, name):
        with pytest.raises(ConfigError, match=name):
            ExecutionerConfig(**{name: ()})

    def test_think_time_clamped(self, caplog):
        cfg = ExecutionerConfig(min_think_time=5.0, max_think_time=2.0)
        assert cfg.min_think_time == cfg.max_think_time == 2.0
        assert "clamping" in caplog.text

    def test_density_bands_sorted(self):
        cfg = ExecutionerConfig(density_weight_bands=((0.0, 0.8, 0.2), (0.5, 0.3, 0.7)))
        assert cfg.density_weight_bands[0][0] == 0.5

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestFromDict:
    """Plain mappings become configs."""

    def test_known_keys(self):
        cfg = ExecutionerConfig.from_dict({"skill_step": 0.1, "always_remember_recent": 4})
        assert cfg.skill_step == 0.1
        assert cfg.always_remember_recent == 4

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="bogus"):
            ExecutionerConfig.from_dict({"bogus": 1})


class TestDerivedValues:
    """Lookups computed from the knobs."""

    @pytest.mark.parametrize("fill, expected", [
        (0.50, (0.40, 0.60)),
        (0.35, (0.40, 0.60)),
        (0.25, (0.50, 0.50)),
        (0.15, (0.65, 0.35)),
        (0.05, (0.80, 0.20)),
    ])
    def test_density_weights(self, fill, expected):
        assert ExecutionerConfig().strategy_weights_for_density(fill) == expected

    @pytest.mark.parametrize("skill, letters, coords", [
        (0.95, 1, 1), (0.75, 2, 3), (0.5, 5, 8), (0.2, 10, 15),
    ])
    def test_pool_sizes(self, skill, letters, coords):
        cfg = ExecutionerConfig()
        assert cfg.letter_pool_size(skill) == letters
        assert cfg.coordinate_pool_size(skill) == coords

    def test_forget_chance(self):
        cfg = ExecutionerConfig()
        assert cfg.forget_chance(0.5) == pytest.approx(0.15)
        assert cfg.forget_chance(0.15) == pytest.approx(0.255)

    def test_custom_forget_curve_is_clamped(self):
        cfg = ExecutionerConfig(forget_chance_fn=lambda skill: 2.0)
        assert cfg.forget_chance(0.5) == 1.0

    def test_word_guess_threshold(self):
        assert ExecutionerConfig().word_guess_threshold(0.5) == pytest.approx(0.65)

    def test_start_skill_lookup(self):
        cfg = ExecutionerConfig()
        assert cfg.start_skill_for(DifficultySetting.HARD) == pytest.approx(0.75)
        assert cfg.hits_to_increase_for(DifficultySetting.EASY) == 5
        assert cfg.misses_to_decrease_for(DifficultySetting.EASY) == 2


class TestDifficultySetting:
    """Labels parse and invert."""

    def test_parse(self):
        assert DifficultySetting.parse(" Hard ") is DifficultySetting.HARD
        assert DifficultySetting.parse(DifficultySetting.EASY) is DifficultySetting.EASY

    def test_parse_rejects_unknown(self):
        with pytest.raises(ConfigError):
            DifficultySetting.parse("nightmare")

    def test_inverse(self):
        assert DifficultySetting.EASY.inverse() is DifficultySetting.HARD
        assert DifficultySetting.HARD.inverse() is DifficultySetting.EASY
        assert DifficultySetting.NORMAL.inverse() is DifficultySetting.NORMAL
