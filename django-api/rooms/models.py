"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class Room(models.Model):
    """Persistence model for cinema rooms."""

    class Status(models.TextChoices):
        AVAILABLE = "AVAILABLE"
        CLOSED = "CLOSED"

    identifier = models.PositiveSmallIntegerField(primary_key=True)
    uid = models.CharField(max_length=64, unique=True)
    layout = models.JSONField()
    screen_size = models.PositiveSmallIntegerField()
    screen_type = models.CharField(max_length=10)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["identifier"]

    def __str__(self) -> str:
        return f"Room {self.identifier}"


class Booking(models.Model):
    """Persistence model for a room booking slot."""

    class Type(models.TextChoices):
        SCREENING = "SCREENING"
        CLEANING = "CLEANING"
        MAINTENANCE = "MAINTENANCE"
        EXIT_TIME = "EXIT_TIME"
        ENTRY_TIME = "ENTRY_TIME"

    booking_uid = models.CharField(max_length=64, primary_key=True)
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="bookings")
    screening_uid = models.CharField(max_length=64, blank=True, null=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    type = models.CharField(max_length=20, choices=Type.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["room", "start_time"], name="rooms_booking_room_start_idx"),
            models.Index(fields=["screening_uid"], name="rooms_booking_screening_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.start_time} - {self.end_time}"
