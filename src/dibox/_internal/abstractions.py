from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from dibox._internal.type_checks import (
    canonical_name,
    is_contract_type,
    is_record_type,
    strip_indirections,
)


@dataclass(frozen=True, slots=True)
class ContractAbstraction:
    """An abstraction that denotes a ``Protocol`` or abstract class."""

    contract: type[Any]

    @property
    def key(self) -> str:
        return canonical_name(self.contract)


@dataclass(frozen=True, slots=True)
class RecordAbstraction:
    """An abstraction that denotes a record class used as its own key."""

    record: type[Any]

    @property
    def key(self) -> str:
        return canonical_name(self.record)


@dataclass(frozen=True, slots=True)
class InvalidAbstraction:
    """A value that denotes neither a contract nor a record."""

    value: Any


Abstraction = Union[ContractAbstraction, RecordAbstraction, InvalidAbstraction]


def contract_of(value: Any) -> type[Any] | None:
    candidate = strip_indirections(value)
    if is_contract_type(candidate):
        return candidate
    return None


def record_of(value: Any) -> type[Any] | None:
    candidate = strip_indirections(value)
    if is_record_type(candidate):
        return candidate
    return None


def classify_abstraction(value: Any) -> Abstraction:
    """Classify a bind/resolve abstraction argument.

    The class handle, an instance, ``Annotated[...]`` and ``Optional[...]``
    spellings of the same class all classify identically. Contract
    interpretation wins over record interpretation.
    """
    contract = contract_of(value)
    if contract is not None:
        return ContractAbstraction(contract=contract)

    record = record_of(value)
    if record is not None:
        return RecordAbstraction(record=record)

    return InvalidAbstraction(value=value)


__all__ = [
    "Abstraction",
    "ContractAbstraction",
    "InvalidAbstraction",
    "RecordAbstraction",
    "classify_abstraction",
    "contract_of",
    "record_of",
]
