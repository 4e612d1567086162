from __future__ import annotations

import logging
from typing import Any

from dibox._internal.abstractions import (
    ContractAbstraction,
    RecordAbstraction,
    classify_abstraction,
    record_of,
)
from dibox._internal.factories import call_factory
from dibox._internal.fields import field_descriptors
from dibox._internal.registry import Binding, Registry
from dibox._internal.type_checks import (
    Kind,
    canonical_name,
    describe,
    implements_contract,
    kind_of,
)
from dibox.exceptions import (
    DIBoxAbstractNotBoundError,
    DIBoxConcreteDoesNotImplementContractError,
    DIBoxConcreteIsNotARecordError,
    DIBoxInjectDepthExceededError,
    DIBoxInvalidBindArgumentsError,
    DIBoxInvalidInjectTargetTypeError,
    DIBoxInvalidResolveArgumentsError,
    DIBoxRecordTypeMismatchError,
    DIBoxUnresolvableFieldTypeError,
    DIBoxUnsupportedConcreteKindError,
    DIBoxUnsupportedStoredConcreteKindError,
)
from dibox.lock_mode import LockMode

logger = logging.getLogger(__name__)


class Container:
    """Bind abstractions to concretes, resolve them and inject tagged fields.

    Abstractions are either contracts (``typing.Protocol`` classes or abstract
    base classes) or record classes used as their own key. A contract may be
    bound to a factory function or to an instance that satisfies it. A record
    may only be bound to a record of the same class.

    Bound instances are shared: every ``resolve`` of the same abstraction
    returns the same object, so mutations are visible to every holder.
    Factories run on every ``resolve`` with the arguments given there.

    Containers are independent of each other. There is no global registry
    and no teardown: the bindings live as long as the container object.
    """

    def __init__(
        self,
        *,
        lock_mode: LockMode | str = LockMode.THREAD,
        max_inject_depth: int | None = None,
    ) -> None:
        """Create an empty container.

        Args:
            lock_mode: Registry locking strategy. Accepts ``LockMode`` or its
                string value. Keep ``THREAD`` when several threads share the
                container.
            max_inject_depth: Optional limit on nested ``inject`` calls. When
                unset, a binding cycle recurses until Python raises
                ``RecursionError``.

        Examples:
            .. code-block:: python

                container = Container()

                single_threaded = Container(lock_mode="none", max_inject_depth=32)

        """
        if max_inject_depth is not None and max_inject_depth < 1:
            msg = f"max_inject_depth must be a positive integer, got {max_inject_depth!r}."
            raise ValueError(msg)

        self._lock_mode = LockMode(lock_mode)
        self._max_inject_depth = max_inject_depth
        self._registry = Registry(lock_mode=self._lock_mode)

    def bind(self, abstraction: Any, concrete: Any) -> None:
        """Store ``concrete`` under ``abstraction``, replacing any previous binding.

        Args:
            abstraction: A contract or record class, or any value standing for
                one (an instance, ``Annotated[...]`` or ``Optional[...]``).
            concrete: For contracts, a factory function or an instance that
                implements the contract. For records, an instance (or the
                class handle) of the same record class.

        Raises:
            DIBoxInvalidBindArgumentsError: ``abstraction`` is neither a
                contract nor a record.
            DIBoxConcreteDoesNotImplementContractError: The instance misses
                members of the contract.
            DIBoxUnsupportedConcreteKindError: The concrete for a contract is
                neither a factory nor a mutable instance.
            DIBoxConcreteIsNotARecordError: The concrete for a record is not a
                record.
            DIBoxRecordTypeMismatchError: The concrete is a different record.

        """
        classified = classify_abstraction(abstraction)
        if isinstance(classified, ContractAbstraction):
            self._bind_contract(classified, concrete)
            return
        if isinstance(classified, RecordAbstraction):
            self._bind_record(classified, concrete)
            return
        raise DIBoxInvalidBindArgumentsError()

    def resolve(self, abstraction: Any, *args: Any) -> Any:
        """Return the concrete bound to ``abstraction``.

        Bound instances are returned as-is. Bound factories are called with
        ``args`` and their first output is returned.

        Raises:
            DIBoxInvalidResolveArgumentsError: ``abstraction`` is neither a
                contract nor a record.
            DIBoxAbstractNotBoundError: Nothing is bound to ``abstraction``.
            DIBoxUnsupportedStoredConcreteKindError: The stored concrete
                cannot serve this abstraction.
            DIBoxInsufficientArgumentsError: ``args`` does not match the
                factory's parameter count.
            DIBoxNoValuesReturnedError: The factory produced no output.

        """
        classified = classify_abstraction(abstraction)
        if isinstance(classified, ContractAbstraction):
            return self._resolve_contract(classified, args)
        if isinstance(classified, RecordAbstraction):
            return self._resolve_record(classified)
        raise DIBoxInvalidResolveArgumentsError()

    def inject(self, target: Any) -> None:
        """Populate the tagged fields of ``target`` from the registry.

        Fields annotated with ``Injected[T]`` (or ``Annotated[T, Inject()]``)
        whose type is a contract or record are resolved and assigned in
        declaration order. Each resolved instance is injected recursively
        before it is assigned. Untagged fields, private fields, read-only
        properties and fields of other types are left untouched.

        The first failure aborts the walk and is raised unchanged, so fields
        processed before it stay assigned.

        Raises:
            DIBoxInvalidInjectTargetTypeError: ``target`` is not an instance of
                a mutable class.
            DIBoxInjectDepthExceededError: Nesting exceeded
                ``max_inject_depth``.
            DIBoxUnresolvableFieldTypeError: A tagged field names a type
                that does not exist at runtime.
            DIBoxResolveError: Any resolution failure of a tagged field.

        """
        self._inject(target, depth=0)

    def _bind_contract(self, abstraction: ContractAbstraction, concrete: Any) -> None:
        kind = kind_of(concrete)
        if kind is Kind.REFERENCE:
            if not implements_contract(abstraction.contract, concrete):
                raise DIBoxConcreteDoesNotImplementContractError(
                    concrete_kind=describe(concrete),
                    contract_name=abstraction.key,
                )
        elif kind is not Kind.CALLABLE:
            raise DIBoxUnsupportedConcreteKindError(kind)

        self._registry.store(Binding(key=abstraction.key, kind=kind, concrete=concrete))
        logger.debug("Bound contract %s to %s %s", abstraction.key, kind, describe(concrete))

    def _bind_record(self, abstraction: RecordAbstraction, concrete: Any) -> None:
        record = record_of(concrete)
        if record is None:
            raise DIBoxConcreteIsNotARecordError()

        concrete_name = canonical_name(record)
        if concrete_name != abstraction.key:
            raise DIBoxRecordTypeMismatchError(expected=abstraction.key, got=concrete_name)

        kind = kind_of(concrete)
        self._registry.store(Binding(key=abstraction.key, kind=kind, concrete=concrete))
        logger.debug("Bound record %s to %s", abstraction.key, kind)

    def _load(self, key: str) -> Binding:
        binding = self._registry.load(key)
        if binding is None:
            raise DIBoxAbstractNotBoundError(key)
        return binding

    def _resolve_contract(self, abstraction: ContractAbstraction, args: tuple[Any, ...]) -> Any:
        binding = self._load(abstraction.key)
        if binding.kind is Kind.CALLABLE:
            logger.debug("Calling factory for %s with %d argument(s)", binding.key, len(args))
            return call_factory(binding.concrete, args)
        if binding.kind is Kind.REFERENCE:
            return binding.concrete
        raise DIBoxUnsupportedStoredConcreteKindError(binding.kind)

    def _resolve_record(self, abstraction: RecordAbstraction) -> Any:
        binding = self._load(abstraction.key)
        if binding.kind in (Kind.RECORD, Kind.REFERENCE):
            return binding.concrete
        raise DIBoxUnsupportedStoredConcreteKindError(binding.kind)

    def _inject(self, target: Any, *, depth: int) -> None:
        kind = kind_of(target)
        if kind is not Kind.REFERENCE:
            raise DIBoxInvalidInjectTargetTypeError(kind)
        if self._max_inject_depth is not None and depth > self._max_inject_depth:
            raise DIBoxInjectDepthExceededError(self._max_inject_depth)

        for descriptor in field_descriptors(type(target)):
            if descriptor.is_unresolved_candidate:
                raise DIBoxUnresolvableFieldTypeError(
                    owner_name=canonical_name(type(target)),
                    field=descriptor.name,
                    annotation=descriptor.unresolved_annotation,
                )
            if not descriptor.is_candidate:
                continue

            value = self.resolve(descriptor.declared_type)
            # Immutable records and builtin factory outputs have no fields to fill.
            if kind_of(value) is Kind.REFERENCE:
                self._inject(value, depth=depth + 1)

            setattr(target, descriptor.name, value)
            logger.debug(
                "Injected %s.%s at depth %d",
                describe(target),
                descriptor.name,
                depth,
            )


__all__ = ["Container"]
