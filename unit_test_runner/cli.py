"""CLI entry point for the unit test runner."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from colorama import just_fix_windows_console

from unit_test_runner.config_loader import load_runner_config
from unit_test_runner.loading import ModuleLoadError, load_test_modules
from unit_test_runner.models.config import RunnerConfig
from unit_test_runner.orchestrator import run_tests

MAX_EXIT_STATUS = 255


def build_config(
    config_path: Path | None,
    width: int | None = None,
    no_color: bool = False,
    rethrow: bool = False,
) -> RunnerConfig:
    """Combine the optional config file with command-line overrides."""
    config = load_runner_config(config_path) if config_path else RunnerConfig()

    overrides: dict[str, object] = {}
    if width is not None:
        overrides["width"] = width
    if no_color:
        overrides["color"] = False
        overrides["cursor"] = False
    if rethrow:
        overrides["rethrow_failures"] = True

    if not overrides:
        return config
    return RunnerConfig.model_validate(config.model_dump() | overrides)


def exit_status(failures: int) -> int:
    """Clamp a failure count to a valid process exit status."""
    return min(failures, MAX_EXIT_STATUS)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the unit tests registered in Python modules"
    )
    parser.add_argument(
        "modules",
        nargs="+",
        help="Test modules, as paths to .py files or dotted module names",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with runner configuration",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Report width in columns",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colour codes and in-place status updates",
    )
    parser.add_argument(
        "--rethrow",
        action="store_true",
        help="Abort on the first failing test and re-raise its exception",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics written to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args.config, args.width, args.no_color, args.rethrow)
        modules = load_test_modules(args.modules)
    except (ModuleLoadError, FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    just_fix_windows_console()
    failures = run_tests(modules, config)
    sys.exit(exit_status(failures))


if __name__ == "__main__":  # pragma: no cover
    main()
