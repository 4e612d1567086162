from __future__ import annotations

from typing import Any


class DIBoxError(Exception):
    """Represent a base class for all dibox-specific failures.

    Catch this type when you want to handle any dibox error path without
    matching each concrete exception class individually.
    """


class DIBoxBindError(DIBoxError):
    """Group every failure raised by ``Container.bind``.

    A failed bind never mutates the registry.
    """


class DIBoxResolveError(DIBoxError):
    """Group every failure raised by ``Container.resolve``."""


class DIBoxInjectError(DIBoxError):
    """Group failures raised by ``Container.inject`` itself.

    Errors raised while resolving a tagged field are not wrapped: they reach
    the caller as the original ``DIBoxResolveError`` subclass.
    """


class DIBoxInvalidBindArgumentsError(DIBoxBindError):
    """Signal a bind call whose abstraction is neither a contract nor a record.

    Typical triggers are builtin values or classes such as ``"string"`` or
    ``int``. Use a ``Protocol``/abstract class or a user-defined class instead.
    """

    def __init__(self) -> None:
        super().__init__("binding error! Invalid arguments")


class DIBoxConcreteDoesNotImplementContractError(DIBoxBindError):
    """Signal that a bound instance does not satisfy the contract's method set.

    The concrete's class must either subclass the contract or provide every
    member the contract declares.
    """

    def __init__(self, concrete_kind: str, contract_name: str) -> None:
        self.concrete_kind = concrete_kind
        self.contract_name = contract_name
        super().__init__(f"{concrete_kind} is not an instance of {contract_name}")


class DIBoxUnsupportedConcreteKindError(DIBoxBindError):
    """Signal a contract bound to something that is neither a factory nor an instance.

    Immutable record values, classes and builtin values are rejected. Bind an
    instance of a mutable class or a factory function instead.
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"non-supported kind of concrete. Got {kind}")


class DIBoxConcreteIsNotARecordError(DIBoxBindError):
    """Signal a record abstraction bound to a value that is not a record."""

    def __init__(self) -> None:
        super().__init__(
            "called record_of with a value that is not a record instance or record class",
        )


class DIBoxRecordTypeMismatchError(DIBoxBindError):
    """Signal a record abstraction bound to a record of a different type.

    Records are their own keys, so the concrete's canonical name must match
    the abstraction's exactly. Subclasses do not match.
    """

    def __init__(self, expected: str, got: str) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"expects {expected}. Got {got}")


class DIBoxInvalidResolveArgumentsError(DIBoxResolveError):
    """Signal a resolve call whose abstraction is neither a contract nor a record."""

    def __init__(self) -> None:
        super().__init__("resolving error! Invalid arguments")


class DIBoxAbstractNotBoundError(DIBoxResolveError):
    """Signal that an abstraction has no binding.

    Raised by ``resolve`` and by ``inject`` for tagged fields whose declared
    type was never bound. Typical fix is calling ``bind`` during startup.
    """

    def __init__(self, abstraction_name: str) -> None:
        self.abstraction_name = abstraction_name
        super().__init__(f"{abstraction_name} is not bound yet")


class DIBoxUnsupportedStoredConcreteKindError(DIBoxResolveError):
    """Signal a stored binding that cannot serve the requested abstraction.

    For example a record abstraction bound to its class handle instead of an
    instance, a factory whose signature cannot be introspected, or a factory
    with a required keyword-only parameter (factories get positional
    arguments only).
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"type {kind} is not supported")


class DIBoxInsufficientArgumentsError(DIBoxResolveError):
    """Signal a factory resolved with the wrong number of arguments.

    Every positional parameter counts, defaulted ones and ``*args`` included.
    Keyword-only parameters and ``**kwargs`` do not count.
    """

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"expects to have {expected} input arguments. Got {got}")


class DIBoxNoValuesReturnedError(DIBoxResolveError):
    """Signal a factory that produced no output.

    That is a factory annotated ``-> None``, an unannotated factory returning
    ``None``, or a tuple-annotated factory returning an empty tuple. A factory
    annotated ``-> Service | None`` may return ``None`` as its output.
    """

    def __init__(self) -> None:
        super().__init__("expects to have at least 1 value returned. Got 0")


class DIBoxInvalidInjectTargetTypeError(DIBoxInjectError):
    """Signal ``inject`` called with something other than a mutable instance.

    Immutable record values (``NamedTuple``, frozen dataclasses), classes and
    builtin values cannot receive fields.
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"injecting to {kind} is not supported")


class DIBoxInjectDepthExceededError(DIBoxInjectError):
    """Signal nested injection deeper than ``Container(max_inject_depth=...)``.

    Only raised when the guard is configured. Usually means the bindings form
    a cycle such as ``A`` requiring ``B`` requiring ``A``.
    """

    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(f"injection depth exceeded the limit of {depth}")


class DIBoxUnresolvableFieldTypeError(DIBoxInjectError):
    """Signal an injection-tagged field whose annotation cannot be evaluated.

    Usually the declared type is imported only under ``TYPE_CHECKING``. Import
    it at runtime, or drop the ``Injected[...]`` tag if the field is not meant
    to be injected.
    """

    def __init__(self, owner_name: str, field: str, annotation: str) -> None:
        self.owner_name = owner_name
        self.field = field
        self.annotation = annotation
        super().__init__(f"cannot evaluate annotation {annotation!r} of {owner_name}.{field}")
