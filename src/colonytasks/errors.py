"""Exceptions for programming errors.

Game-level failures are never raised: commands return an ActionStatus and
queries return None. The exceptions below signal misuse of the API.
"""

from __future__ import annotations


class ColonyError(Exception):
    """Base class for colonytasks errors."""

    pass


class StaleHandleError(ColonyError):
    """Raised when a handle fetched on an earlier tick is used in a command."""

    def __init__(self, handle_tick: int, current_tick: int):
        super().__init__(
            f"Handle fetched on tick {handle_tick} used on tick {current_tick}; "
            "re-resolve by id or position instead of caching handles"
        )
        self.handle_tick = handle_tick
        self.current_tick = current_tick


class UnknownObjectError(ColonyError):
    """Raised when a command names an object the host never knew about."""

    pass


class ScenarioError(ColonyError):
    """Raised when a scenario document cannot be turned into a room."""

    pass
