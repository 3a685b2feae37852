"""
Unit tests for BestScores persistence.
"""
import json
from pathlib import Path

import pytest
from minefield import BestScores, Difficulty, ScoreStoreError


class TestBestScores:
    """Test best-time storage."""

    def test_missing_file_means_no_scores(self, tmp_path: Path) -> None:
        """A new store is empty and creates nothing."""
        scores = BestScores(tmp_path / "scores.json")
        assert scores.best("easy") is None
        assert scores.all() == {}
        assert not (tmp_path / "scores.json").exists()

    def test_record_first_score(self, tmp_path: Path) -> None:
        """First win is always a best and is written to disk."""
        path = tmp_path / "nested" / "scores.json"
        scores = BestScores(path)
        assert scores.record(Difficulty.EASY, 42) is True
        assert json.loads(path.read_text()) == {"easy": 42}

    def test_only_faster_times_replace(self, tmp_path: Path) -> None:
        """Slower or equal times are ignored."""
        scores = BestScores(tmp_path / "scores.json")
        scores.record("medium", 100)
        assert scores.record("medium", 120) is False
        assert scores.record("medium", 100) is False
        assert scores.record("medium", 80) is True
        assert scores.best(Difficulty.MEDIUM) == 80

    def test_scores_keyed_by_difficulty(self, tmp_path: Path) -> None:
        """Each preset keeps its own best."""
        scores = BestScores(tmp_path / "scores.json")
        scores.record("easy", 10)
        scores.record("hard", 500)
        assert scores.all() == {"easy": 10, "hard": 500}

    def test_scores_survive_reload(self, tmp_path: Path) -> None:
        """A second store reads what the first wrote."""
        path = tmp_path / "scores.json"
        BestScores(path).record("hard", 321)
        assert BestScores(path).best("hard") == 321

    def test_unknown_difficulty_raises(self, tmp_path: Path) -> None:
        """Scores are only kept for presets."""
        scores = BestScores(tmp_path / "scores.json")
        with pytest.raises(ValueError):
            scores.record("custom", 10)

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"easy": "fast"}'])
    def test_corrupt_file_raises(self, tmp_path: Path, content: str) -> None:
        """A damaged score file is reported, not overwritten."""
        path = tmp_path / "scores.json"
        path.write_text(content)
        with pytest.raises(ScoreStoreError):
            BestScores(path)
        assert path.read_text() == content
