"""Shared pytest fixtures."""

import pytest

from slotkit import Subject, create_subject


class Recorder:
    """Handler that records every payload it receives."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, payload: object) -> None:
        self.calls.append(payload)


@pytest.fixture
def subject() -> Subject[int]:
    """Create a fresh subject for each test."""
    return create_subject()


@pytest.fixture
def recorder() -> Recorder:
    """Create a recording handler."""
    return Recorder()
