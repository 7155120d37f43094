"""Loading of runner configuration from YAML files."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from unit_test_runner.models.config import RunnerConfig

log = logging.getLogger(__name__)


def load_runner_config(path: Path) -> RunnerConfig:
    """Load and validate a runner configuration file.

    Args:
        path: Path to a YAML file

    Returns:
        The validated configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML, or fails validation

    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        raise ValueError(f"Empty config file: {path}")

    if not isinstance(data, dict):
        raise ValueError(f"Invalid runner config schema in {path}: expected a mapping")

    try:
        config = RunnerConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid runner config schema in {path}: {exc}") from exc

    log.info("Loaded runner config from %s", path)
    return config
