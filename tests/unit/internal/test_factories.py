from __future__ import annotations

import functools
import inspect
from typing import Any, Tuple

import pytest

import dibox._internal.factories as factories_module
from dibox._internal.factories import (
    call_factory,
    declares_multiple_outputs,
    declares_no_outputs,
    factory_signature,
    positional_arity,
)
from dibox.exceptions import (
    DIBoxInsufficientArgumentsError,
    DIBoxNoValuesReturnedError,
    DIBoxUnsupportedStoredConcreteKindError,
)


def pair(left: int, right: int) -> tuple[int, int]:
    return left, right


def legacy_pair() -> Tuple[str, str]:
    return "first", "second"


def variadic(*values: int) -> int:
    return sum(values)


def no_output() -> None:
    return None


def maybe_output(value: int) -> int | None:
    return value if value > 0 else None


def configured(name: str, *, prefix: str = "svc", **options: Any) -> str:
    return f"{prefix}-{name}"


def keyword_required(*, name: str) -> str:
    return name


def test_call_factory_passes_arguments_positionally() -> None:
    assert call_factory(lambda a, b: a - b, (5, 3)) == 2


def test_call_factory_returns_first_declared_output() -> None:
    assert call_factory(pair, (1, 2)) == 1
    assert call_factory(legacy_pair, ()) == "first"


def test_call_factory_counts_variadic_parameter_once() -> None:
    assert call_factory(variadic, (4,)) == 4

    with pytest.raises(DIBoxInsufficientArgumentsError) as exc_info:
        call_factory(variadic, (1, 2))

    assert (exc_info.value.expected, exc_info.value.got) == (1, 2)


def test_call_factory_does_not_call_on_arity_mismatch() -> None:
    calls: list[Any] = []

    def factory(value: int) -> int:
        calls.append(value)
        return value

    with pytest.raises(DIBoxInsufficientArgumentsError):
        call_factory(factory, ())

    assert calls == []


def test_call_factory_rejects_missing_output() -> None:
    with pytest.raises(DIBoxNoValuesReturnedError):
        call_factory(no_output, ())


def test_declares_multiple_outputs() -> None:
    assert declares_multiple_outputs(pair, inspect.signature(pair))
    assert declares_multiple_outputs(legacy_pair, inspect.signature(legacy_pair))
    assert not declares_multiple_outputs(variadic, inspect.signature(variadic))

    partial = functools.partial(pair, 1)
    assert declares_multiple_outputs(partial, inspect.signature(partial))


def test_declares_multiple_outputs_with_unresolvable_annotation() -> None:
    def factory() -> tuple[Missing, int]:  # type: ignore[name-defined]  # noqa: F821
        return ()

    assert declares_multiple_outputs(factory, inspect.signature(factory))


def test_factory_signature_reports_uninspectable_callables(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def raise_value_error(obj: object) -> inspect.Signature:
        msg = f"no signature found for {obj!r}"
        raise ValueError(msg)

    monkeypatch.setattr(factories_module.inspect, "signature", raise_value_error)

    with pytest.raises(DIBoxUnsupportedStoredConcreteKindError):
        factory_signature(len)


def test_call_factory_returns_none_from_optional_factory() -> None:
    assert call_factory(maybe_output, (0,)) is None
    assert call_factory(maybe_output, (3,)) == 3


def test_call_factory_rejects_none_from_unannotated_factory() -> None:
    with pytest.raises(DIBoxNoValuesReturnedError):
        call_factory(lambda: None, ())


def test_declares_no_outputs() -> None:
    def unresolvable() -> Missing:  # type: ignore[name-defined]  # noqa: F821
        return None

    assert declares_no_outputs(no_output, inspect.signature(no_output))
    assert not declares_no_outputs(maybe_output, inspect.signature(maybe_output))
    assert not declares_no_outputs(unresolvable, inspect.signature(unresolvable))

    no_hints = lambda: None  # noqa: E731
    assert not declares_no_outputs(no_hints, inspect.signature(no_hints))


def test_positional_arity_ignores_keyword_parameters() -> None:
    assert positional_arity(inspect.signature(configured)) == 1
    assert positional_arity(inspect.signature(variadic)) == 1
    assert positional_arity(inspect.signature(pair)) == 2


def test_call_factory_uses_keyword_defaults() -> None:
    assert call_factory(configured, ("db",)) == "svc-db"


def test_call_factory_rejects_required_keyword_only_parameter() -> None:
    with pytest.raises(DIBoxUnsupportedStoredConcreteKindError) as exc_info:
        call_factory(keyword_required, ("x",))

    assert str(exc_info.value) == "type callable is not supported"
