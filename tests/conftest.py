"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from colonytasks.config import ColonySettings
from colonytasks.sim import SimRoom
from colonytasks.storage import LocalAssignmentStore


class RecordingGateway:
    """Forwards commands to a SimRoom and records the command names issued."""

    def __init__(self, room: SimRoom):
        self._room = room
        self.calls: list[str] = []

    def __getattr__(self, name: str) -> Callable[..., Any]:
        command = getattr(self._room, name)

        def record(*args: Any, **kwargs: Any) -> Any:
            self.calls.append(name)
            return command(*args, **kwargs)

        return record


@pytest.fixture
def room() -> SimRoom:
    """Empty 50x50 room at tick 1."""
    return SimRoom(tick=1)


@pytest.fixture
def store() -> LocalAssignmentStore:
    return LocalAssignmentStore()


@pytest.fixture
def gateway(room: SimRoom) -> RecordingGateway:
    return RecordingGateway(room)


@pytest.fixture
def settings() -> ColonySettings:
    """Settings independent of COLONY_* variables in the environment."""
    return ColonySettings(
        log_level="DEBUG",
        housekeeping_interval=10,
        max_population=6,
        tower_range=20,
        history_size=50,
    )
