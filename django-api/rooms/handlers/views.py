"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain failures to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from typing import Any

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from rooms.domain import BookingType, FailureCode, Result
from rooms.handlers.serializers import (
    CreateRoomSerializer,
    FreeSlotSerializer,
    FreeSlotsQuerySerializer,
    RoomSerializer,
    ScheduleActivitySerializer,
)
from rooms.services.room_service import RoomService
from rooms.stores.django_store import DjangoRoomStore

logger = logging.getLogger(__name__)

FAILURE_STATUS: dict[FailureCode, int] = {
    FailureCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureCode.BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE: status.HTTP_404_NOT_FOUND,
    FailureCode.BOOKING_NOT_FOUND_IN_ROOM: status.HTTP_404_NOT_FOUND,
    FailureCode.RESOURCE_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD: status.HTTP_409_CONFLICT,
    FailureCode.ROOM_HAS_FUTURE_BOOKINGS: status.HTTP_409_CONFLICT,
    FailureCode.BOOKING_ALREADY_STARTED: status.HTTP_409_CONFLICT,
    FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING: status.HTTP_409_CONFLICT,
}


def room_cache_key(room_id: int) -> str:
    return f"rooms:{room_id}"


def get_room_service() -> RoomService:
    return RoomService(DjangoRoomStore())


def failure_response(result: Result[Any]) -> Response:
    """Render failures; the first failure decides the status code."""
    first = result.failures[0]
    return Response(
        {
            "errors": [
                {"code": f.code.value, "message": f.message, "details": f.details}
                for f in result.failures
            ]
        },
        status=FAILURE_STATUS.get(first.code, status.HTTP_422_UNPROCESSABLE_ENTITY),
    )


def invalid_request_response(errors: Any) -> Response:
    return Response(
        {"errors": [{"code": "INVALID_REQUEST", "message": "Request is invalid", "details": errors}]},
        status=status.HTTP_400_BAD_REQUEST,
    )


def room_data(room) -> dict:
    return RoomSerializer(room).data


class RoomListView(APIView):
    """Handler for POST /api/rooms"""

    def post(self, request: Request) -> Response:
        serializer = CreateRoomSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info("Rejected room payload: %s", serializer.errors)
            return invalid_request_response(serializer.errors)

        result = get_room_service().create(**serializer.to_arguments())
        if result.invalid:
            return failure_response(result)
        return Response({"data": room_data(result.value)}, status=status.HTTP_201_CREATED)


class RoomDetailView(APIView):
    """Handler for GET/DELETE /api/rooms/{room_id}"""

    def get(self, request: Request, room_id: int) -> Response:
        key = room_cache_key(room_id)
        data = cache.get(key)
        if data is not None:
            logger.debug("Cache hit for %s", key)
            return Response({"data": data})

        result = get_room_service().find_by_id(room_id)
        if result.invalid:
            return failure_response(result)

        data = room_data(result.value)
        cache.set(key, data, settings.ROOM_CACHE_TIMEOUT)
        return Response({"data": data})

    def delete(self, request: Request, room_id: int) -> Response:
        result = get_room_service().delete(room_id)
        if result.invalid:
            return failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoomCloseView(APIView):
    """Handler for POST /api/rooms/{room_id}/close"""

    def post(self, request: Request, room_id: int) -> Response:
        result = get_room_service().close_room(room_id)
        if result.invalid:
            return failure_response(result)
        return Response({"data": room_data(result.value)})


class ScheduleActivityView(APIView):
    """Base handler for scheduling a standalone activity on a room."""

    activity: BookingType

    def post(self, request: Request, room_id: int) -> Response:
        serializer = ScheduleActivitySerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        service = get_room_service()
        schedule = {
            BookingType.CLEANING: service.schedule_cleaning,
            BookingType.MAINTENANCE: service.schedule_maintenance,
        }[self.activity]

        result = schedule(room_id, serializer.validated_data["start_date"], serializer.validated_data["duration"])
        if result.invalid:
            return failure_response(result)
        return Response({"data": room_data(result.value)}, status=status.HTTP_201_CREATED)


class ScheduleCleaningView(ScheduleActivityView):
    """Handler for POST /api/rooms/{room_id}/schedule-cleaning"""

    activity = BookingType.CLEANING


class ScheduleMaintenanceView(ScheduleActivityView):
    """Handler for POST /api/rooms/{room_id}/schedule-maintenance"""

    activity = BookingType.MAINTENANCE


class RemoveActivityView(APIView):
    """Base handler for removing a standalone activity from a room."""

    activity: BookingType

    def delete(self, request: Request, room_id: int, booking_uid: str) -> Response:
        service = get_room_service()
        remove = {
            BookingType.CLEANING: service.remove_cleaning,
            BookingType.MAINTENANCE: service.remove_maintenance,
        }[self.activity]

        result = remove(room_id, booking_uid)
        if result.invalid:
            return failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RemoveCleaningView(RemoveActivityView):
    """Handler for DELETE /api/rooms/{room_id}/cleaning/{booking_uid}"""

    activity = BookingType.CLEANING


class RemoveMaintenanceView(RemoveActivityView):
    """Handler for DELETE /api/rooms/{room_id}/maintenance/{booking_uid}"""

    activity = BookingType.MAINTENANCE


class FreeSlotsView(APIView):
    """Handler for GET /api/rooms/{room_id}/free-slots"""

    def get(self, request: Request, room_id: int) -> Response:
        serializer = FreeSlotsQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        result = get_room_service().free_slots(
            room_id, serializer.validated_data["date"], serializer.validated_data["min_minutes"]
        )
        if result.invalid:
            return failure_response(result)
        return Response({"data": FreeSlotSerializer(result.value, many=True).data})
