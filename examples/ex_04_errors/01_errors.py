"""Errors: every failure is a ``DIBoxError`` subclass with a readable message."""

from __future__ import annotations

from typing import Protocol

from dibox import (
    Container,
    DIBoxAbstractNotBoundError,
    DIBoxConcreteDoesNotImplementContractError,
    DIBoxInsufficientArgumentsError,
    DIBoxInvalidBindArgumentsError,
)


class Service(Protocol):
    def run(self) -> str: ...


class Unrelated:
    pass


def main() -> None:
    container = Container()

    try:
        container.resolve(Service)
    except DIBoxAbstractNotBoundError as error:
        not_bound = type(error).__name__
    print(f"not_bound={not_bound}")  # => not_bound=DIBoxAbstractNotBoundError

    try:
        container.bind(Service, Unrelated())
    except DIBoxConcreteDoesNotImplementContractError as error:
        mismatch = type(error).__name__
    print(f"mismatch={mismatch}")  # => mismatch=DIBoxConcreteDoesNotImplementContractError

    try:
        container.bind("string", Unrelated())
    except DIBoxInvalidBindArgumentsError as error:
        message = str(error)
    print(f"invalid={message}")  # => invalid=binding error! Invalid arguments

    container.bind(Service, lambda label: label)
    try:
        container.resolve(Service)
    except DIBoxInsufficientArgumentsError as error:
        message = str(error)
    print(f"arity={message}")  # => arity=expects to have 1 input arguments. Got 0


if __name__ == "__main__":
    main()
