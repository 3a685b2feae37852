"""
Unit tests for board configuration and presets.
"""
import pytest
from minefield import (
    BoardConfig,
    Difficulty,
    InvalidConfiguration,
    PRESETS,
    resolve_config,
)


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self) -> None:
        """Valid configuration should be created successfully."""
        config = BoardConfig(8, 6, 10)
        assert (config.width, config.height, config.num_mines) == (8, 6, 10)
        assert config.total_cells == 48
        assert config.safe_cells == 38

    @pytest.mark.parametrize("width, height", [(4, 10), (10, 4), (21, 10), (10, 21)])
    def test_out_of_range_sides_raise_error(self, width: int, height: int) -> None:
        """Sides outside 5..20 should be rejected."""
        with pytest.raises(InvalidConfiguration, match="between 5 and 20"):
            BoardConfig(width, height, 3)

    def test_bounds_are_inclusive(self) -> None:
        """5 and 20 are both allowed."""
        assert BoardConfig(5, 20, 1).width == 5
        assert BoardConfig(20, 5, 1).width == 20

    def test_zero_mines_raises_error(self) -> None:
        """A board needs at least one mine."""
        with pytest.raises(InvalidConfiguration, match="at least one mine"):
            BoardConfig(5, 5, 0)

    def test_too_many_mines_raises_error(self) -> None:
        """Mine count must leave one safe cell."""
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            BoardConfig(5, 5, 25)

    def test_max_mines_is_valid(self) -> None:
        """width * height - 1 mines should be accepted."""
        assert BoardConfig(5, 5, 24).num_mines == 24

    @pytest.mark.parametrize("value", [5.0, "5", True])
    def test_non_integer_raises_error(self, value) -> None:
        """Only real integers are accepted."""
        with pytest.raises(InvalidConfiguration, match="integer"):
            BoardConfig(value, 5, 3)

    def test_invalid_configuration_is_value_error(self) -> None:
        """Callers catching ValueError still see configuration errors."""
        with pytest.raises(ValueError):
            BoardConfig(1, 1, 1)


# ============================================================================
# Preset Tests
# ============================================================================

class TestPresets:
    """Test difficulty presets and fallback."""

    @pytest.mark.parametrize("difficulty, expected", [
        ("easy", (5, 5, 7)),
        ("medium", (10, 10, 15)),
        ("hard", (20, 20, 30)),
    ])
    def test_preset_values(self, difficulty: str, expected: tuple) -> None:
        """Presets match the documented sizes."""
        config = PRESETS[Difficulty(difficulty)]
        assert (config.width, config.height, config.num_mines) == expected

    def test_default_is_medium(self) -> None:
        """No arguments resolves to medium."""
        config, difficulty = resolve_config()
        assert difficulty == Difficulty.MEDIUM
        assert config == PRESETS[Difficulty.MEDIUM]

    def test_unknown_difficulty_falls_back_to_medium(self) -> None:
        """Unknown names resolve to medium."""
        _, difficulty = resolve_config("impossible")
        assert difficulty == Difficulty.MEDIUM

    def test_valid_custom_size_overrides_preset(self) -> None:
        """A valid custom size wins and has no preset key."""
        config, difficulty = resolve_config("hard", 7, 9, 12)
        assert config == BoardConfig(7, 9, 12)
        assert difficulty is None

    def test_invalid_custom_size_uses_preset_silently(self) -> None:
        """An invalid custom size falls back without raising."""
        config, difficulty = resolve_config("easy", 30, 30, 12)
        assert difficulty == Difficulty.EASY
        assert config == PRESETS[Difficulty.EASY]

    def test_partial_custom_size_uses_preset(self) -> None:
        """Custom size needs all three values."""
        config, difficulty = resolve_config("hard", width=7)
        assert difficulty == Difficulty.HARD
        assert config.width == 20
