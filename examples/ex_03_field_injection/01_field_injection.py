"""Field injection: populate ``Injected[...]`` fields recursively.

Each resolved instance is injected before it is assigned, so nested
dependency graphs are filled bottom-up.
"""

from __future__ import annotations

from typing import Protocol

from dibox import Container, Injected


class Clock(Protocol):
    def now(self) -> str: ...


class Repository(Protocol):
    def stamp(self) -> str: ...


class FixedClock:
    def now(self) -> str:
        return "2024-01-01T00:00:00"


class MemoryRepository:
    clock: Injected[Clock]

    def stamp(self) -> str:
        return f"saved at {self.clock.now()}"


class Handler:
    repository: Injected[Repository]
    name: str = "handler"


def main() -> None:
    container = Container()
    container.bind(Clock, FixedClock())
    container.bind(Repository, MemoryRepository())

    handler = Handler()
    container.inject(handler)

    print(handler.repository.stamp())  # => saved at 2024-01-01T00:00:00
    print(f"name={handler.name}")  # => name=handler


if __name__ == "__main__":
    main()
