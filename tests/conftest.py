"""Shared fixtures for unit_test_runner tests."""

import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path
from types import ModuleType

import pytest

from unit_test_runner.loading import load_test_module
from unit_test_runner.testing.clock import StepClock


@pytest.fixture
def clock() -> StepClock:
    """Clock advancing one tick per reading."""
    return StepClock()


@pytest.fixture
def write_module(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a test module source file and return its path."""

    def write(name: str, source: str) -> Path:
        path = tmp_path / f"{name}.py"
        path.write_text(textwrap.dedent(source))
        return path

    return write


@pytest.fixture
def module_factory(
    write_module: Callable[[str, str], Path],
) -> Generator[Callable[[str, str], ModuleType]]:
    """Write and import test modules, unloading them afterwards."""
    loaded: list[ModuleType] = []

    def create(name: str, source: str) -> ModuleType:
        module = load_test_module(str(write_module(name, source)))
        loaded.append(module)
        return module

    yield create

    for module in loaded:
        sys.modules.pop(module.__name__, None)
