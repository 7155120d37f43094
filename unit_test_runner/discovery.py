"""Discovery of test classes and test method invocations in loaded modules."""

import inspect
import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from types import ModuleType
from typing import Any

from unit_test_runner.binding import bind_arguments, parameter_type_names
from unit_test_runner.classifier import BindingError
from unit_test_runner.models.discovery import TestClassInfo, TestMethodInvocation
from unit_test_runner.suite.markers import (
    MethodMarker,
    argument_sets,
    class_marker,
    method_marker,
)

log = logging.getLogger(__name__)


def discover_test_classes(modules: Iterable[ModuleType]) -> Sequence[TestClassInfo]:
    """Find registered test classes in ``modules``.

    Only classes defined in the module itself are considered, so a test class
    imported into another test module is not run twice.

    Returns:
        Test classes ordered by priority (highest first), then by name

    """
    classes: list[TestClassInfo] = []
    seen: set[type] = set()

    for module in modules:
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls in seen or cls.__module__ != module.__name__:
                continue
            marker = class_marker(cls)
            if marker is None or not marker.registered:
                continue
            seen.add(cls)
            classes.append(
                TestClassInfo(
                    name=f"{cls.__module__}.{cls.__qualname__}",
                    module_name=module.__name__,
                    module_file=_module_file_name(module),
                    cls=cls,
                    skip=marker.skip,
                    priority=marker.priority,
                )
            )

    log.info("Discovered %d test class(es)", len(classes))
    return order_test_classes(classes)


def order_test_classes(classes: Iterable[TestClassInfo]) -> Sequence[TestClassInfo]:
    """Order classes by priority (highest first), ties broken by name."""
    return sorted(classes, key=lambda test_class: test_class.sort_key)


def enumerate_invocations(test_class: TestClassInfo) -> Sequence[TestMethodInvocation]:
    """List every (method, argument set) invocation of a test class.

    Methods are ordered by name; the argument sets of one method keep their
    declaration order. A set that cannot be bound to the method still yields
    an invocation, carrying the binding error.
    """
    invocations: list[TestMethodInvocation] = []

    for name, func, marker in sorted(
        _test_methods(test_class.cls), key=lambda method: method[0]
    ):
        for args in argument_sets(marker):
            invocations.append(_invocation(name, func, args, skip=marker.skip))

    return invocations


def _invocation(
    name: str, func: Callable[..., Any], args: Sequence[Any], *, skip: bool
) -> TestMethodInvocation:
    try:
        binding = bind_arguments(func, args)
    except BindingError as exc:
        log.debug("Binding failed for %s: %s", name, exc)
        return TestMethodInvocation(
            method_name=name,
            func=func,
            args=tuple(args),
            skip=skip,
            parameter_types=parameter_type_names(func),
            binding_error=exc,
        )

    return TestMethodInvocation(
        method_name=name,
        func=func,
        args=tuple(args),
        skip=skip,
        type_arguments=binding.type_arguments,
        parameter_types=binding.parameter_types,
    )


def _test_methods(
    cls: type,
) -> Iterable[tuple[str, Callable[..., Any], MethodMarker]]:
    for name, member in inspect.getmembers(cls, inspect.isfunction):
        marker = method_marker(member)
        if marker is not None and marker.registered:
            yield name, member, marker


def _module_file_name(module: ModuleType) -> str:
    file = getattr(module, "__file__", None)
    return Path(file).name if file else module.__name__
