"""Decorators that register test classes and test methods for discovery.

Markers are plain records stored on the decorated object. Decorators may be
stacked in any order; each one fetches or creates the record and updates it.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, overload

CLASS_MARKER_ATTR = "__unit_test_class__"
METHOD_MARKER_ATTR = "__unit_test_method__"


@dataclass(kw_only=True)
class ClassMarker:
    """Discovery metadata attached to a test class."""

    registered: bool = False
    priority: int = 0
    skip: bool = False


@dataclass(kw_only=True)
class MethodMarker:
    """Discovery metadata attached to a test method."""

    registered: bool = False
    skip: bool = False
    argument_sets: list[tuple[Any, ...]] = field(default_factory=list)


def class_marker(cls: type) -> ClassMarker | None:
    """Return the marker declared directly on ``cls``, if any.

    Markers are not inherited: a subclass of a registered test class has to be
    registered itself.
    """
    marker = cls.__dict__.get(CLASS_MARKER_ATTR)
    return marker if isinstance(marker, ClassMarker) else None


def method_marker(func: Any) -> MethodMarker | None:
    """Return the marker attached to ``func``, if any."""
    marker = getattr(func, METHOD_MARKER_ATTR, None)
    return marker if isinstance(marker, MethodMarker) else None


def _ensure_class_marker(cls: type) -> ClassMarker:
    if (marker := class_marker(cls)) is None:
        marker = ClassMarker()
        setattr(cls, CLASS_MARKER_ATTR, marker)
    return marker


def _ensure_method_marker(func: Callable[..., Any]) -> MethodMarker:
    if (marker := method_marker(func)) is None:
        marker = MethodMarker()
        setattr(func, METHOD_MARKER_ATTR, marker)
    return marker


@overload
def test_class[C: type](cls: C, /) -> C: ...


@overload
def test_class[C: type](*, priority: int = 0) -> Callable[[C], C]: ...


def test_class(cls: Any = None, /, *, priority: int = 0) -> Any:
    """Register a class as a test class.

    Usable bare (``@test_class``) or with arguments
    (``@test_class(priority=5)``). Classes with a higher priority run first;
    equal priorities run in name order.
    """

    def register(target: type) -> type:
        marker = _ensure_class_marker(target)
        marker.registered = True
        marker.priority = priority
        return target

    if cls is None:
        return register
    return register(cls)


test_class.__test__ = False  # type: ignore[attr-defined]


def test_method[F: Callable[..., Any]](func: F) -> F:
    """Register a function as a test method of its test class."""
    _ensure_method_marker(func).registered = True
    return func


test_method.__test__ = False  # type: ignore[attr-defined]


def test_with[F: Callable[..., Any]](*args: Any) -> Callable[[F], F]:
    """Attach one literal argument set to a test method.

    Apply several times to run the method once per argument set. Sets run in
    the order they are written, top to bottom.
    """

    def attach(func: F) -> F:
        # decorators apply bottom-up, prepend to keep source order
        _ensure_method_marker(func).argument_sets.insert(0, tuple(args))
        return func

    return attach


test_with.__test__ = False  # type: ignore[attr-defined]


def skip_test[T](target: T) -> T:
    """Mark a test class or a test method as skipped."""
    if isinstance(target, type):
        _ensure_class_marker(target).skip = True
    else:
        _ensure_method_marker(target).skip = True  # type: ignore[arg-type]
    return target


def argument_sets(marker: MethodMarker) -> Sequence[tuple[Any, ...]]:
    """Return the argument sets to invoke a method with.

    An unparameterized method runs once with no arguments.
    """
    return list(marker.argument_sets) or [()]
