"""Identity functionality: stable object ids and room positions."""

from colonytasks.core.identity.models import ROOM_SIZE, ObjectId, Position

__all__ = [
    "ObjectId",
    "Position",
    "ROOM_SIZE",
]
