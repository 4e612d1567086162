from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Tuple, get_origin, get_type_hints

from dibox._internal.type_checks import Kind
from dibox.exceptions import (
    DIBoxInsufficientArgumentsError,
    DIBoxNoValuesReturnedError,
    DIBoxUnsupportedStoredConcreteKindError,
)

_TUPLE_ANNOTATION_PREFIXES = ("tuple[", "Tuple[", "typing.Tuple[")
_NONE_ANNOTATIONS = ("None", "NoneType")
_POSITIONAL_KINDS = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    },
)


def factory_signature(factory: Callable[..., Any]) -> inspect.Signature:
    """Return the factory signature or report the factory as unsupported.

    A factory is called with positional arguments only, so a required
    keyword-only parameter makes it unsupported as well.
    """
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError) as error:
        raise DIBoxUnsupportedStoredConcreteKindError(Kind.CALLABLE) from error

    for parameter in signature.parameters.values():
        if (
            parameter.kind is inspect.Parameter.KEYWORD_ONLY
            and parameter.default is inspect.Parameter.empty
        ):
            raise DIBoxUnsupportedStoredConcreteKindError(Kind.CALLABLE)
    return signature


def positional_arity(signature: inspect.Signature) -> int:
    """Count the parameters that can receive a positional argument.

    Defaulted parameters and ``*args`` count once each. Keyword-only
    parameters and ``**kwargs`` do not count.
    """
    return sum(
        1 for parameter in signature.parameters.values() if parameter.kind in _POSITIONAL_KINDS
    )


def _return_annotation(factory: Callable[..., Any], signature: inspect.Signature) -> Any:
    # String annotations stay strings when they cannot be evaluated.
    annotation = signature.return_annotation
    if isinstance(annotation, str):
        try:
            return get_type_hints(factory).get("return", annotation)
        except (NameError, TypeError):
            return annotation
    return annotation


def declares_multiple_outputs(
    factory: Callable[..., Any],
    signature: inspect.Signature,
) -> bool:
    """Return true when the factory's return annotation is a tuple type.

    String annotations (``from __future__ import annotations``) are evaluated
    when possible and matched textually otherwise.
    """
    annotation = _return_annotation(factory, signature)
    if isinstance(annotation, str):
        return annotation.startswith(_TUPLE_ANNOTATION_PREFIXES)
    return annotation in (tuple, Tuple) or get_origin(annotation) is tuple


def declares_no_outputs(
    factory: Callable[..., Any],
    signature: inspect.Signature,
) -> bool:
    """Return true when the factory is annotated ``-> None``."""
    annotation = _return_annotation(factory, signature)
    if isinstance(annotation, str):
        return annotation.strip() in _NONE_ANNOTATIONS
    return annotation is None or annotation is type(None)


def call_factory(factory: Callable[..., Any], args: tuple[Any, ...]) -> Any:
    """Invoke a bound factory and return its first output.

    The positional parameter count must equal ``len(args)`` exactly. A factory
    annotated ``-> None``, an unannotated factory returning ``None`` and an
    empty tuple from a tuple-annotated factory count as no output. A ``None``
    result from any other annotated factory (``-> Service | None``) is a
    regular output. Outputs after the first are discarded.
    """
    signature = factory_signature(factory)
    expected = positional_arity(signature)
    if expected != len(args):
        raise DIBoxInsufficientArgumentsError(expected=expected, got=len(args))

    result = factory(*args)
    if declares_no_outputs(factory, signature):
        raise DIBoxNoValuesReturnedError()
    if result is None and signature.return_annotation is inspect.Signature.empty:
        raise DIBoxNoValuesReturnedError()

    if declares_multiple_outputs(factory, signature) and isinstance(result, tuple):
        if not result:
            raise DIBoxNoValuesReturnedError()
        return result[0]
    return result


__all__ = [
    "call_factory",
    "declares_multiple_outputs",
    "declares_no_outputs",
    "factory_signature",
    "positional_arity",
]
