from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, ClassVar, Optional, Protocol

import pytest

from dibox._internal.fields import (
    FieldDescriptor,
    declared_kind,
    evaluate_annotation,
    field_descriptors,
    is_externally_mutable,
)
from dibox._internal.type_checks import Kind
from dibox.markers import Inject, Injected

if TYPE_CHECKING:
    from decimal import Decimal


class Clock(Protocol):
    def now(self) -> float: ...


class Settings:
    pass


class Base:
    clock: Injected[Clock]


class Target(Base):
    settings: Annotated[Settings, Inject("settings")]
    maybe_clock: Injected[Optional[Clock]]
    retries: Injected[int]
    plain: Clock
    _hidden: Injected[Clock]
    registry: ClassVar[Injected[Settings]]

    @property
    def computed(self) -> Settings:
        return Settings()


class Ledger:
    clock: Injected[Clock]
    amount: Decimal
    total: Injected[Decimal]
    limits: ClassVar[Decimal]


class OverridingTarget(Base):
    settings: Injected[Settings]
    clock: Injected[Settings]


def test_field_descriptors_follow_declaration_order() -> None:
    names = [descriptor.name for descriptor in field_descriptors(Target)]

    assert names == ["clock", "settings", "maybe_clock", "retries", "plain", "_hidden"]


def test_field_descriptors_content() -> None:
    descriptors = {descriptor.name: descriptor for descriptor in field_descriptors(Target)}

    assert descriptors["clock"] == FieldDescriptor(
        name="clock",
        declared_type=Clock,
        kind=Kind.CONTRACT,
        marker=Inject(),
        mutable=True,
    )
    assert descriptors["settings"].marker == Inject("settings")
    assert descriptors["settings"].kind is Kind.RECORD
    assert descriptors["maybe_clock"].declared_type == Optional[Clock]
    assert descriptors["maybe_clock"].kind is Kind.CONTRACT


def test_field_candidates() -> None:
    candidates = [d.name for d in field_descriptors(Target) if d.is_candidate]

    assert candidates == ["clock", "settings", "maybe_clock"]


def test_declared_kind() -> None:
    assert declared_kind(Clock) is Kind.CONTRACT
    assert declared_kind(Annotated[Settings, "meta"]) is Kind.RECORD
    assert declared_kind(int) is None
    assert declared_kind(list[Settings]) is None


def test_is_externally_mutable() -> None:
    assert is_externally_mutable(Target, "clock")
    assert not is_externally_mutable(Target, "_hidden")
    assert not is_externally_mutable(Target, "computed")


def test_field_descriptors_skip_untagged_unevaluable_annotations() -> None:
    descriptors = {descriptor.name: descriptor for descriptor in field_descriptors(Ledger)}

    assert list(descriptors) == ["clock", "total"]
    assert descriptors["clock"].is_candidate
    assert descriptors["total"].unresolved_annotation == "Injected[Decimal]"
    assert descriptors["total"].declared_type is None
    assert descriptors["total"].is_unresolved_candidate
    assert not descriptors["total"].is_candidate


def test_redeclared_field_keeps_base_position_and_new_type() -> None:
    descriptors = field_descriptors(OverridingTarget)

    assert [descriptor.name for descriptor in descriptors] == ["clock", "settings"]
    assert descriptors[0].declared_type is Settings
    assert descriptors[0].kind is Kind.RECORD


def test_evaluate_annotation_uses_declaring_module() -> None:
    assert evaluate_annotation("Injected[Clock]", Target) == Injected[Clock]
    assert evaluate_annotation(Settings, Target) is Settings

    with pytest.raises(NameError):
        evaluate_annotation("Decimal", Ledger)
