"""Shared pytest fixtures for dibox tests."""

import pytest

from dibox.container import Container
from dibox.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Default container with thread locking and no depth guard."""
    return Container()


@pytest.fixture()
def unlocked_container() -> Container:
    """Container with registry locking disabled."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def guarded_container() -> Container:
    """Container that stops nested injection after a few levels."""
    return Container(max_inject_depth=5)
