"""In-memory room storage."""

from unolite.session.registry import RoomNotFound, RoomRegistry

__all__ = ["RoomNotFound", "RoomRegistry"]
