"""Runner configuration loaded from YAML files and command-line overrides."""

from pydantic import Field

from unit_test_runner.models.base import Model

DEFAULT_WIDTH = 110


class RunnerConfig(Model):
    """Configuration for a single test run."""

    width: int = Field(
        default=DEFAULT_WIDTH, ge=40, description="Total report width in columns"
    )
    color: bool | None = Field(
        default=None,
        description="Emit ANSI colour codes (None means detect a terminal)",
    )
    cursor: bool | None = Field(
        default=None,
        description="Overwrite status placeholders in place (None follows color)",
    )
    rethrow_failures: bool = Field(
        default=False,
        description="Re-raise the root cause of the first failing test method",
    )
