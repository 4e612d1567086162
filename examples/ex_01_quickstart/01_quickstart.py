"""Quickstart: bind a contract to an instance and resolve it.

Contracts are ``typing.Protocol`` classes. Any instance that provides the
contract's methods can be bound to it, and every resolution returns that same
instance.
"""

from __future__ import annotations

from typing import Protocol

from dibox import Container


class Greeter(Protocol):
    def greet(self, name: str) -> str: ...


class EnglishGreeter:
    def __init__(self) -> None:
        self.calls = 0

    def greet(self, name: str) -> str:
        self.calls += 1
        return f"hello {name}"


def main() -> None:
    container = Container()
    container.bind(Greeter, EnglishGreeter())

    greeter = container.resolve(Greeter)
    print(greeter.greet("ada"))  # => hello ada

    same = container.resolve(Greeter)
    print(f"shared={same is greeter} calls={same.calls}")  # => shared=True calls=1


if __name__ == "__main__":
    main()
