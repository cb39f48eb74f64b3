"""Assignment storage backends."""

from colonytasks.storage.local import LocalAssignmentStore
from colonytasks.storage.protocol import AssignmentStore

__all__ = [
    "AssignmentStore",
    "LocalAssignmentStore",
]
