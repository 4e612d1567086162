from __future__ import annotations

import dataclasses
import functools
import inspect
import types
from enum import Enum
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin

from typing_extensions import get_protocol_members, is_protocol

_NON_RECORD_MODULES = frozenset(
    {
        "abc",
        "builtins",
        "collections.abc",
        "types",
        "typing",
        "typing_extensions",
    },
)


class Kind(Enum):
    """Shape of a value as seen by the container."""

    CONTRACT = "contract"
    """A class defined purely by a method set: a ``Protocol`` or abstract class."""

    TYPE = "type"
    """Any other class handle."""

    RECORD = "record"
    """An immutable record value: ``NamedTuple`` or frozen dataclass instance."""

    REFERENCE = "reference"
    """An instance of a mutable user-defined class."""

    CALLABLE = "callable"
    """A function, lambda, bound method, builtin routine or ``functools.partial``."""

    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_contract_type(candidate: object) -> TypeGuard[type[Any]]:
    """Return true for ``Protocol`` classes and abstract base classes."""
    if not is_runtime_class(candidate):
        return False
    return is_protocol(candidate) or inspect.isabstract(candidate)


def is_record_type(candidate: object) -> TypeGuard[type[Any]]:
    """Return true for user-defined, non-contract classes."""
    if not is_runtime_class(candidate) or is_contract_type(candidate):
        return False
    return candidate.__module__ not in _NON_RECORD_MODULES


def is_immutable_record(value: object) -> bool:
    """Return true for ``NamedTuple`` instances and frozen dataclass instances."""
    value_type = type(value)
    if not is_record_type(value_type):
        return False
    if isinstance(value, tuple) and hasattr(value_type, "_fields"):
        return True
    if dataclasses.is_dataclass(value_type):
        return bool(value_type.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    return False


def is_factory(value: object) -> bool:
    return inspect.isroutine(value) or isinstance(value, functools.partial)


def kind_of(value: object) -> Kind:
    """Classify a value into exactly one ``Kind``.

    Class handles are checked first, so a class is never reported as a
    callable even though calling it builds an instance.
    """
    if is_runtime_class(value):
        return Kind.CONTRACT if is_contract_type(value) else Kind.TYPE
    if is_factory(value):
        return Kind.CALLABLE
    if is_immutable_record(value):
        return Kind.RECORD
    if is_record_type(type(value)):
        return Kind.REFERENCE
    return Kind.OTHER


def strip_indirections(value: Any) -> Any:
    """Return the class a value stands for, or ``None`` when there is none.

    ``Annotated[T, ...]`` and ``Optional[T]`` unwrap to ``T`` any number of
    times. Instances stand for their class.
    """
    while True:
        origin = get_origin(value)
        if origin is Annotated:
            value = get_args(value)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in get_args(value) if arg is not type(None)]
            if len(members) != 1:
                return None
            value = members[0]
            continue
        break

    if is_runtime_class(value):
        return value
    if origin is not None:
        # Generic aliases such as list[int] carry no single class.
        return None
    return type(value)


def canonical_name(cls: type[Any]) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def describe(value: object) -> str:
    """Return a readable type name for error messages."""
    if is_runtime_class(value):
        return canonical_name(value)
    return canonical_name(type(value))


def contract_members(contract: type[Any]) -> frozenset[str]:
    """Return the member names a concrete must provide to satisfy a contract."""
    if is_protocol(contract):
        return frozenset(get_protocol_members(contract))
    return frozenset(getattr(contract, "__abstractmethods__", ()))


def implements_contract(contract: type[Any], concrete: object) -> bool:
    """Return true when an instance satisfies a contract nominally or structurally.

    Protocol members that are callable on the contract must be callable on
    the concrete. Data members only need to be present.
    """
    concrete_type = type(concrete)
    if contract in concrete_type.__mro__:
        return True
    if not is_protocol(contract) and issubclass(concrete_type, contract):
        return True

    for name in contract_members(contract):
        if not hasattr(concrete, name):
            return False
        if callable(getattr(contract, name, None)) and not callable(getattr(concrete, name)):
            return False
    return True


__all__ = [
    "Kind",
    "canonical_name",
    "contract_members",
    "describe",
    "implements_contract",
    "is_contract_type",
    "is_factory",
    "is_immutable_record",
    "is_record_type",
    "is_runtime_class",
    "kind_of",
    "strip_indirections",
]
