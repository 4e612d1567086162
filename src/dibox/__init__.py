from dibox.container import Container
from dibox.exceptions import (
    DIBoxAbstractNotBoundError,
    DIBoxBindError,
    DIBoxConcreteDoesNotImplementContractError,
    DIBoxConcreteIsNotARecordError,
    DIBoxError,
    DIBoxInjectDepthExceededError,
    DIBoxInjectError,
    DIBoxInsufficientArgumentsError,
    DIBoxInvalidBindArgumentsError,
    DIBoxInvalidInjectTargetTypeError,
    DIBoxInvalidResolveArgumentsError,
    DIBoxNoValuesReturnedError,
    DIBoxRecordTypeMismatchError,
    DIBoxResolveError,
    DIBoxUnsupportedConcreteKindError,
    DIBoxUnresolvableFieldTypeError,
    DIBoxUnsupportedStoredConcreteKindError,
)
from dibox.lock_mode import LockMode
from dibox.markers import Inject, Injected
from dibox.types import Kind

__all__ = [
    "Container",
    "DIBoxAbstractNotBoundError",
    "DIBoxBindError",
    "DIBoxConcreteDoesNotImplementContractError",
    "DIBoxConcreteIsNotARecordError",
    "DIBoxError",
    "DIBoxInjectDepthExceededError",
    "DIBoxInjectError",
    "DIBoxInsufficientArgumentsError",
    "DIBoxInvalidBindArgumentsError",
    "DIBoxInvalidInjectTargetTypeError",
    "DIBoxInvalidResolveArgumentsError",
    "DIBoxNoValuesReturnedError",
    "DIBoxRecordTypeMismatchError",
    "DIBoxResolveError",
    "DIBoxUnresolvableFieldTypeError",
    "DIBoxUnsupportedConcreteKindError",
    "DIBoxUnsupportedStoredConcreteKindError",
    "Inject",
    "Injected",
    "Kind",
    "LockMode",
]
