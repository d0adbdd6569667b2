"""Handler operation resolution.

Finds, for a handler object and an event type, the single public method
that should receive events of that type.  The rules:

1. The candidate parameter types are the event type itself plus the
   contract types (ABCs, Protocols) listed *directly* in its bases.  A
   concrete superclass is not a candidate, and neither are contracts
   inherited further up the chain.
2. Only public instance methods taking exactly one argument besides
   ``self`` are scanned.
3. A method is eligible when its parameter's type hint *is* one of the
   candidates.  Unannotated parameters never match.  Only that one
   annotation is evaluated; a string annotation that cannot be evaluated
   in the method's module (a class defined inside a function, say) is
   matched against the candidates by name.

Exactly one eligible method must exist.

Python does not separate "extends an interface" from "implements an
interface", so contracts are never inferred from their bases.  A contract
derived from another contract must say so again, the way a sub-protocol
re-lists ``Protocol``::

    class Marker(ABC): ...
    class SubMarker(Marker, ABC): ...    # a contract
    class Tick(Marker): ...              # a concrete event implementing Marker
"""

from __future__ import annotations

import inspect
import logging
import sys
from abc import ABC
from typing import Any, Callable

from eventrouter.errors import ConfigurationError

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


def is_contract_type(cls: type) -> bool:
    """Return ``True`` if *cls* is an interface-only contract type.

    A contract is a ``typing.Protocol``, a class with unimplemented
    abstract methods, or a class that declares itself abstract by
    inheriting ``abc.ABC`` directly.
    """
    if getattr(cls, "_is_protocol", False):
        return True
    if inspect.isabstract(cls):
        return True
    return ABC in cls.__bases__


def check_event_type(event_type: Any) -> type:
    """Validate that *event_type* can be used as a route key."""
    if not isinstance(event_type, type):
        raise ConfigurationError(
            f"Event type must be a class, got {event_type!r}"
        )
    if is_contract_type(event_type):
        raise ConfigurationError(
            f"Event must be a concrete class. {event_type.__name__} is an interface."
        )
    return event_type


def candidate_types(event_type: type) -> tuple[type, ...]:
    """Return the event type followed by its directly declared contracts."""
    direct = [b for b in event_type.__bases__ if is_contract_type(b)]
    return (event_type, *direct)


# ---------------------------------------------------------------------------
# Parameter inspection
# ---------------------------------------------------------------------------


def _single_parameter(signature: inspect.Signature) -> inspect.Parameter | None:
    params = list(signature.parameters.values())
    if len(params) != 1 or params[0].kind not in _POSITIONAL:
        return None
    return params[0]


def _module_namespace(func: Callable[..., Any]) -> dict[str, Any]:
    func = inspect.unwrap(getattr(func, "__func__", func))
    namespace = getattr(func, "__globals__", None)
    if namespace is not None:
        return namespace
    module = sys.modules.get(getattr(func, "__module__", None) or "")
    return vars(module) if module is not None else {}


def _parameter_hint(func: Callable[..., Any], param: inspect.Parameter) -> Any:
    """Return the evaluated annotation of *param*, or ``None`` if it has none.

    Only this parameter's annotation is evaluated, so annotations elsewhere
    on *func* (the return type, say) never get in the way.  A string that
    cannot be evaluated in the function's module is returned unchanged.
    """
    annotation = param.annotation
    if annotation is inspect.Parameter.empty:
        return None
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, _module_namespace(func))
    except (NameError, AttributeError, SyntaxError, TypeError):
        logger.debug(
            "Could not evaluate annotation %r of %s; matching it by name",
            annotation,
            getattr(func, "__qualname__", func),
        )
        return annotation


def _hint_matches(hint: Any, candidate: type) -> bool:
    """Whether *hint* designates *candidate*.

    Evaluated hints must be the candidate itself.  Unevaluated string hints
    match on the last dotted component of the name, which covers both
    ``__name__`` and ``__qualname__``.
    """
    if isinstance(hint, str):
        return hint.strip().rpartition(".")[2] == candidate.__name__
    return hint is candidate


def _method_parameter_hint(func: Callable[..., Any]) -> Any:
    """Hint of the sole non-self parameter of a plain function, or ``None``."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    params = list(signature.parameters.values())
    if len(params) != 2 or any(p.kind not in _POSITIONAL for p in params):
        return None
    return _parameter_hint(func, params[1])


def public_operations(handler_class: type) -> list[tuple[str, Callable[..., Any]]]:
    """List ``(name, function)`` for the public plain functions of *handler_class*.

    Inherited methods are included.  Static methods, class methods and
    properties are not.  Entries are sorted by name.
    """
    operations: list[tuple[str, Callable[..., Any]]] = []
    for name in dir(handler_class):
        if name.startswith("_"):
            continue
        try:
            attr = inspect.getattr_static(handler_class, name)
        except AttributeError:
            continue
        if inspect.isfunction(attr):
            operations.append((name, attr))
    return operations


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_operation(handler: Any, event_type: type) -> tuple[str, Callable[..., Any]]:
    """Find the one method on *handler* that accepts *event_type*.

    Returns
    -------
    tuple[str, Callable]
        The method name and the method bound to *handler*.

    Raises
    ------
    ConfigurationError
        If no method, or more than one method, is eligible.
    """
    handler_name = type(handler).__name__
    candidates = candidate_types(event_type)

    found: tuple[str, Callable[..., Any]] | None = None
    for name, func in public_operations(type(handler)):
        hint = _method_parameter_hint(func)
        if not any(_hint_matches(hint, candidate) for candidate in candidates):
            continue
        if found is not None:
            raise ConfigurationError(
                f"Only one method in {handler_name} can handle the event type "
                f"{event_type.__name__} (found {found[0]!r} and {name!r})"
            )
        found = (name, getattr(handler, name))

    if found is None:
        raise ConfigurationError(
            f"No handler method found on {handler_name} for event type "
            f"{event_type.__name__}"
        )
    return found


def validate_binding(operation: Any, event_type: type) -> tuple[Any, str]:
    """Check an explicitly supplied callable against *event_type*.

    The callable must take exactly one positional argument.  When that
    argument is annotated with a class, the class must be one of the
    candidate types for *event_type*.

    Returns
    -------
    tuple[Any, str]
        The handler identity (``__self__`` of a bound method, otherwise the
        callable itself) and a display name for the operation.
    """
    if not callable(operation):
        raise ConfigurationError(
            f"Binding for event type {event_type.__name__} must be callable, "
            f"got {type(operation).__name__}"
        )

    display = getattr(operation, "__qualname__", type(operation).__name__)
    try:
        signature = inspect.signature(operation)
    except (TypeError, ValueError):
        signature = None

    if signature is not None:
        param = _single_parameter(signature)
        if param is None:
            raise ConfigurationError(
                f"{display} must take exactly one argument to handle the event "
                f"type {event_type.__name__}"
            )
        hint = _parameter_hint(operation, param)
        if isinstance(hint, type) and not any(hint is c for c in candidate_types(event_type)):
            raise ConfigurationError(
                f"{display} cannot handle the event type {event_type.__name__}: "
                f"its parameter is annotated {hint.__name__}"
            )

    handler = operation.__self__ if inspect.ismethod(operation) else operation
    return handler, display
