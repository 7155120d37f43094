"""Models for discovered test classes and test method invocations."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from unit_test_runner.classifier import BindingError


@dataclass(frozen=True, kw_only=True)
class TestClassInfo:
    """A discovered test class."""

    __test__ = False

    name: str
    module_name: str
    module_file: str
    cls: type = field(repr=False)
    skip: bool = False
    priority: int = 0

    @property
    def sort_key(self) -> tuple[int, str]:
        """Key ordering classes by priority (descending), then by name."""
        return (-self.priority, self.name)


@dataclass(frozen=True, kw_only=True)
class TestMethodInvocation:
    """One (method, argument set) pair to execute."""

    __test__ = False

    method_name: str
    func: Callable[..., Any] = field(repr=False)
    args: Sequence[Any] = ()
    skip: bool = False
    type_arguments: Mapping[str, type] = field(default_factory=dict)
    parameter_types: Sequence[str] = ()
    binding_error: BindingError | None = None

    @property
    def signature(self) -> str:
        """Method name with parameter types, e.g. ``check_sum(int, int)``."""
        return f"{self.method_name}({', '.join(self.parameter_types)})"

    @property
    def arguments(self) -> str:
        """Comma separated argument literals."""
        return ", ".join(repr(arg) for arg in self.args)

    @property
    def label(self) -> str:
        """Display text, e.g. ``check_sum(int, int) with (1, 2)``."""
        return f"{self.signature} with ({self.arguments})"
