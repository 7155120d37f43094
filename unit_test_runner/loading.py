"""Loading of test modules from file paths or dotted module names."""

import importlib
import importlib.util
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from types import ModuleType

log = logging.getLogger(__name__)


class ModuleLoadError(Exception):
    """Raised when a test module cannot be located or imported."""


def load_test_module(target: str) -> ModuleType:
    """Load a test module.

    Args:
        target: Path to a ``.py`` file, or an importable dotted module name
            (e.g., "tests.runtime.test_math")

    Returns:
        The imported module

    Raises:
        ModuleLoadError: If the module is missing or raises while importing

    """
    path = Path(target)
    if path.suffix == ".py" or path.exists():
        return _load_from_path(path)

    try:
        return importlib.import_module(target)
    except ImportError as exc:
        raise ModuleLoadError(f"Cannot import test module '{target}': {exc}") from exc
    except Exception as exc:
        raise ModuleLoadError(f"Error while importing '{target}': {exc}") from exc


def load_test_modules(targets: Iterable[str]) -> Sequence[ModuleType]:
    """Load every target, preserving order and dropping duplicates."""
    modules: list[ModuleType] = []
    for target in targets:
        module = load_test_module(target)
        if any(module is loaded for loaded in modules):
            log.info("Skipping duplicate test module %s", module.__name__)
            continue
        modules.append(module)
    return modules


def _load_from_path(path: Path) -> ModuleType:
    if not path.is_file():
        raise ModuleLoadError(f"Test module not found: {path}")

    resolved = path.resolve()
    module_name = resolved.stem
    if (existing := sys.modules.get(module_name)) is not None:
        if _module_file(existing) == resolved:
            return existing
        # name taken by an unrelated module
        module_name = f"{resolved.stem}_{abs(hash(resolved)):x}"

    spec = importlib.util.spec_from_file_location(module_name, resolved)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"Cannot load test module from {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    # sibling imports inside the test module resolve against its directory
    parent = str(resolved.parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)

    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        del sys.modules[module_name]
        raise ModuleLoadError(f"Error while importing {path}: {exc}") from exc

    log.info("Loaded test module %s from %s", module_name, resolved)
    return module


def _module_file(module: ModuleType) -> Path | None:
    file = getattr(module, "__file__", None)
    return Path(file).resolve() if file else None
