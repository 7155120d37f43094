"""Binding of parameterized test methods to their literal argument sets.

Generic test methods (PEP 695 type parameters or ``TypeVar`` annotations) have
their type arguments inferred from the runtime type of the literal passed at
each generically annotated parameter position.
"""

import inspect
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from unit_test_runner.classifier import BindingError


@dataclass(frozen=True, kw_only=True)
class MethodBinding:
    """Concrete type arguments and parameter type names for one invocation."""

    type_arguments: Mapping[str, type] = field(default_factory=dict)
    parameter_types: Sequence[str] = ()


def bind_arguments(func: Callable[..., Any], args: Sequence[Any]) -> MethodBinding:
    """Bind ``args`` to the parameters of the unbound method ``func``.

    Args:
        func: Test method as found on its class (first parameter is ``self``)
        args: One literal argument set

    Returns:
        The inferred type arguments and display names of the parameter types

    Raises:
        BindingError: If the arguments do not fit the signature, or a type
            parameter cannot be bound consistently

    """
    signature = inspect.signature(func)
    try:
        bound = signature.bind(None, *args)
    except TypeError as exc:
        raise BindingError(
            f"{func.__qualname__}{signature} cannot take arguments {tuple(args)!r}: "
            f"{exc}"
        ) from exc

    declared = _type_params(func)
    annotations = inspect.get_annotations(func)
    parameters = list(signature.parameters.values())[1:]

    bindings: dict[str, type] = {}
    for param in parameters:
        annotation = _resolve(annotations.get(param.name), declared)
        if not isinstance(annotation, TypeVar) or param.name not in bound.arguments:
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        _bind(func, annotation, type(bound.arguments[param.name]), bindings)

    if missing := [name for name in declared if name not in bindings]:
        raise BindingError(
            f"Cannot infer type parameter(s) {', '.join(missing)} "
            f"of {func.__qualname__} from arguments {tuple(args)!r}"
        )

    return MethodBinding(
        type_arguments=bindings,
        parameter_types=[
            _type_name(_resolve(annotations.get(p.name), declared), bindings)
            for p in parameters
        ],
    )


def parameter_type_names(func: Callable[..., Any]) -> Sequence[str]:
    """Display names of a method's parameter types, without binding."""
    declared = _type_params(func)
    annotations = inspect.get_annotations(func)
    parameters = list(inspect.signature(func).parameters.values())[1:]
    return [
        _type_name(_resolve(annotations.get(p.name), declared), {}) for p in parameters
    ]


def _bind(
    func: Callable[..., Any],
    type_var: TypeVar,
    candidate: type,
    bindings: dict[str, type],
) -> None:
    name = type_var.__name__

    if constraints := type_var.__constraints__:
        matching = [
            c for c in constraints if isinstance(c, type) and issubclass(candidate, c)
        ]
        if not matching:
            raise BindingError(
                f"{candidate.__name__} does not satisfy the constraints of "
                f"type parameter {name} of {func.__qualname__}"
            )
        candidate = matching[0]
    elif isinstance(bound := type_var.__bound__, type) and not issubclass(
        candidate, bound
    ):
        raise BindingError(
            f"{candidate.__name__} is not a subtype of {bound.__name__}, the bound "
            f"of type parameter {name} of {func.__qualname__}"
        )

    if (previous := bindings.get(name)) is not None and previous is not candidate:
        raise BindingError(
            f"Type parameter {name} of {func.__qualname__} bound to both "
            f"{previous.__name__} and {candidate.__name__}"
        )
    bindings[name] = candidate


def _resolve(annotation: Any, declared: Mapping[str, TypeVar]) -> Any:
    # string annotations (postponed evaluation) may name a type parameter
    if isinstance(annotation, str):
        return declared.get(annotation, annotation)
    return annotation


def _type_name(annotation: Any, bindings: Mapping[str, type]) -> str:
    if annotation is None:
        return "Any"
    if isinstance(annotation, TypeVar):
        if (concrete := bindings.get(annotation.__name__)) is not None:
            return concrete.__qualname__
        return annotation.__name__
    if isinstance(annotation, type):
        return annotation.__qualname__
    return str(annotation)


def _type_params(func: Callable[..., Any]) -> Mapping[str, TypeVar]:
    return {
        param.__name__: param
        for param in getattr(func, "__type_params__", ())
        if isinstance(param, TypeVar)
    }
