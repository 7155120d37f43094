"""Tests for runner configuration loading."""

from pathlib import Path

import pytest

from unit_test_runner.config_loader import load_runner_config
from unit_test_runner.models.config import DEFAULT_WIDTH, RunnerConfig


class TestLoadRunnerConfig:
    """Tests for load_runner_config function."""

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads and validates a complete config file."""
        path = tmp_path / "runner.yaml"
        path.write_text(
            """
width: 90
color: false
cursor: false
rethrow_failures: true
"""
        )

        config = load_runner_config(path)

        assert config == RunnerConfig(
            width=90, color=False, cursor=False, rethrow_failures=True
        )

    def test_defaults_for_missing_keys(self, tmp_path: Path) -> None:
        """Unset keys keep their defaults."""
        path = tmp_path / "runner.yaml"
        path.write_text("color: true\n")

        config = load_runner_config(path)

        assert config.width == DEFAULT_WIDTH
        assert config.color is True
        assert config.cursor is None
        assert config.rethrow_failures is False

    def test_raises_for_missing_file(self, tmp_path: Path) -> None:
        """Raises FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_runner_config(tmp_path / "missing.yaml")

    def test_raises_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ValueError for malformed YAML."""
        path = tmp_path / "runner.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_runner_config(path)

    def test_raises_for_empty_file(self, tmp_path: Path) -> None:
        """Raises ValueError for an empty file."""
        path = tmp_path / "runner.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Empty config file"):
            load_runner_config(path)

    def test_raises_for_non_mapping(self, tmp_path: Path) -> None:
        """Raises ValueError when the document is not a mapping."""
        path = tmp_path / "runner.yaml"
        path.write_text("- width\n- color\n")

        with pytest.raises(ValueError, match="Invalid runner config schema"):
            load_runner_config(path)

    @pytest.mark.parametrize(
        "content",
        [
            "width: 10\n",
            "width: wide\n",
            "colour: true\n",
        ],
    )
    def test_raises_for_invalid_schema(self, tmp_path: Path, content: str) -> None:
        """Raises ValueError for values failing validation or unknown keys."""
        path = tmp_path / "runner.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match="Invalid runner config schema"):
            load_runner_config(path)
