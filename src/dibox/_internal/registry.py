from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Any

from dibox._internal.type_checks import Kind
from dibox.lock_mode import LockMode


@dataclass(frozen=True, slots=True)
class Binding:
    """A registry entry: the concrete stored under an abstraction key."""

    key: str
    kind: Kind
    concrete: Any


class Registry:
    """Map abstraction keys to bindings.

    Every load and store happens under one lock, so readers never see a
    partially written entry and racing writers of the same key resolve to
    whichever store ran last.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._items: dict[str, Binding] = {}
        self._lock: AbstractContextManager[Any] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def store(self, binding: Binding) -> None:
        with self._lock:
            self._items[binding.key] = binding

    def load(self, key: str) -> Binding | None:
        with self._lock:
            return self._items.get(key)

    def keys(self) -> tuple[str, ...]:
        """Return a snapshot of the bound keys."""
        with self._lock:
            return tuple(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = ["Binding", "Registry"]
