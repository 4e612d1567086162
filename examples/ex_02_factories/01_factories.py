"""Factories: bind a contract to a function and pass arguments at resolve time.

The factory runs on every ``resolve``. Only its first output is returned, so a
factory following the ``(value, error)`` convention hands back the value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from dibox import Container


class SupportsError(Protocol):
    def error(self) -> str: ...


class AppError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def error(self) -> str:
        return self.message


@dataclass(frozen=True)
class Settings:
    environment: str


def new_error(message: str) -> SupportsError:
    return AppError(message)


def main() -> None:
    container = Container()
    container.bind(SupportsError, new_error)
    container.bind(Settings, Settings(environment="prod"))

    error = container.resolve(SupportsError, "boom")
    print(f"error={error.error()}")  # => error=boom

    other = container.resolve(SupportsError, "bang")
    print(f"fresh={other is not error}")  # => fresh=True

    settings = container.resolve(Settings)
    print(f"environment={settings.environment}")  # => environment=prod


if __name__ == "__main__":
    main()
