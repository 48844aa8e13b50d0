"""Shared testing fixtures for the trivia_quiz test suite."""

from .clock import FakeClock, FakeHandle, FakeScheduler  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "FakeClock",
    "FakeHandle",
    "FakeScheduler",
    "WorkspaceBuilder",
]
