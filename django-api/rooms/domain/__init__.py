from rooms.domain.booking import BookingData, BookingSlot, BookingType
from rooms.domain.errors import DomainFailure, FailureCode, TechnicalError
from rooms.domain.models import CreateRoomInput, HydrateRoomInput, Room, RoomAdministrativeStatus, ScreenInput
from rooms.domain.result import Failure, Result, Success, combine, failure, success
from rooms.domain.schedule import FreeSlot, RoomSchedule
from rooms.domain.seating import SeatLayout, SeatRow, SeatRowConfiguration
from rooms.domain.value_objects import RoomIdentifier, RoomUID, Screen, ScreeningUID, ScreenType

__all__ = [
    "Room",
    "RoomAdministrativeStatus",
    "CreateRoomInput",
    "HydrateRoomInput",
    "ScreenInput",
    "RoomSchedule",
    "FreeSlot",
    "BookingSlot",
    "BookingData",
    "BookingType",
    "SeatLayout",
    "SeatRow",
    "SeatRowConfiguration",
    "RoomIdentifier",
    "RoomUID",
    "ScreeningUID",
    "Screen",
    "ScreenType",
    "DomainFailure",
    "FailureCode",
    "TechnicalError",
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "combine",
]
