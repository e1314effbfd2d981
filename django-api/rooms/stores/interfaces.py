"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from rooms.domain import BookingSlot, Result, Room


class RoomStore(ABC):
    """Interface for room persistence operations."""

    @abstractmethod
    def find_by_id(self, identifier: int) -> Room | None:
        """Return a room by its number, or None if not found."""
        ...

    @abstractmethod
    def room_exists(self, identifier: int) -> bool:
        """Check if a room with this number exists."""
        ...

    @abstractmethod
    def create(self, room: Room) -> Room:
        """Persist a new room with its schedule and return it."""
        ...

    @abstractmethod
    def update(self, room: Room) -> Room:
        """Persist the room's status, layout and screen. Bookings are untouched."""
        ...

    @abstractmethod
    def delete(self, identifier: int) -> None:
        """Delete a room and its bookings."""
        ...

    @abstractmethod
    def add_booking(self, identifier: int, booking: BookingSlot) -> Result[Room]:
        """Store one booking and return the reloaded room.

        Fails with ROOM_NOT_AVAILABLE_FOR_PERIOD when a stored booking
        overlaps it at write time.
        """
        ...

    @abstractmethod
    def delete_booking(self, identifier: int, booking_uid: str) -> Room:
        """Remove one booking from the room and return the reloaded room."""
        ...
