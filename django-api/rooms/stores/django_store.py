"""Django ORM implementation of the RoomStore."""

from django.db import transaction

from rooms import models as orm
from rooms.domain import (
    BookingData,
    BookingSlot,
    DomainFailure,
    FailureCode,
    HydrateRoomInput,
    Result,
    Room,
    ScreenInput,
    failure,
    success,
)
from rooms.stores.interfaces import RoomStore


class DjangoRoomStore(RoomStore):
    """Database-backed room store using Django ORM."""

    def find_by_id(self, identifier: int) -> Room | None:
        row = orm.Room.objects.prefetch_related("bookings").filter(identifier=identifier).first()
        return to_domain(row) if row is not None else None

    def room_exists(self, identifier: int) -> bool:
        return orm.Room.objects.filter(identifier=identifier).exists()

    @transaction.atomic
    def create(self, room: Room) -> Room:
        row = orm.Room.objects.create(identifier=room.identifier.value, uid=room.uid.value, **_room_fields(room))
        orm.Booking.objects.bulk_create(_booking_row(row, booking) for booking in room.all_bookings())
        return self._reload(room.identifier.value)

    @transaction.atomic
    def update(self, room: Room) -> Room:
        row = orm.Room.objects.select_for_update().get(identifier=room.identifier.value)
        for name, value in _room_fields(room).items():
            setattr(row, name, value)
        row.save()
        return self._reload(row.identifier)

    def delete(self, identifier: int) -> None:
        row = orm.Room.objects.filter(identifier=identifier).first()
        if row is not None:
            row.delete()

    @transaction.atomic
    def add_booking(self, identifier: int, booking: BookingSlot) -> Result[Room]:
        row = orm.Room.objects.select_for_update().get(identifier=identifier)
        # Another request may have booked the period since validation ran.
        if row.bookings.filter(start_time__lt=booking.end_time, end_time__gt=booking.start_time).exists():
            return failure(
                DomainFailure(
                    FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD,
                    {"start_date": booking.start_time.isoformat(), "end_date": booking.end_time.isoformat()},
                )
            )
        _booking_row(row, booking).save(force_insert=True)
        return success(self._reload(identifier))

    @transaction.atomic
    def delete_booking(self, identifier: int, booking_uid: str) -> Room:
        booking = orm.Booking.objects.filter(room_id=identifier, booking_uid=booking_uid).first()
        if booking is not None:
            booking.delete()
        return self._reload(identifier)

    def _reload(self, identifier: int) -> Room:
        return to_domain(orm.Room.objects.prefetch_related("bookings").get(identifier=identifier))


def to_domain(row: orm.Room) -> Room:
    return Room.hydrate(
        HydrateRoomInput(
            room_uid=row.uid,
            identifier=row.identifier,
            layout=row.layout,
            screen=ScreenInput(size=row.screen_size, type=row.screen_type),
            status=row.status,
            schedule=[
                BookingData(
                    booking_uid=booking.booking_uid,
                    screening_uid=booking.screening_uid,
                    start_time=booking.start_time,
                    end_time=booking.end_time,
                    type=booking.type,
                )
                for booking in row.bookings.all()
            ],
        )
    )


def _room_fields(room: Room) -> dict:
    return {
        "layout": room.layout.to_configuration(),
        "screen_size": room.screen_size,
        "screen_type": room.screen_type,
        "status": room.status.value,
    }


def _booking_row(row: orm.Room, booking: BookingSlot) -> orm.Booking:
    data = booking.to_data()
    return orm.Booking(
        booking_uid=data.booking_uid,
        room=row,
        screening_uid=data.screening_uid,
        start_time=data.start_time,
        end_time=data.end_time,
        type=data.type,
    )
