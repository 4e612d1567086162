from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for registry reads and writes.

    Use ``THREAD`` (the default) when the container is shared by several
    threads. ``NONE`` removes the lock for single-threaded programs. The
    container also accepts the string values at configuration time.
    """

    THREAD = "thread"
    """Guard each registry load and store with ``threading.Lock``."""

    NONE = "none"
    """Disable locking around registry reads and writes."""
