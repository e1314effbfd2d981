from django.urls import path

from rooms.handlers import (
    FreeSlotsView,
    RemoveCleaningView,
    RemoveMaintenanceView,
    RoomCloseView,
    RoomDetailView,
    RoomListView,
    ScheduleCleaningView,
    ScheduleMaintenanceView,
)

urlpatterns = [
    path("rooms", RoomListView.as_view(), name="room-list"),
    path("rooms/<int:room_id>", RoomDetailView.as_view(), name="room-detail"),
    path("rooms/<int:room_id>/close", RoomCloseView.as_view(), name="room-close"),
    path(
        "rooms/<int:room_id>/schedule-cleaning",
        ScheduleCleaningView.as_view(),
        name="room-schedule-cleaning",
    ),
    path(
        "rooms/<int:room_id>/schedule-maintenance",
        ScheduleMaintenanceView.as_view(),
        name="room-schedule-maintenance",
    ),
    path(
        "rooms/<int:room_id>/cleaning/<str:booking_uid>",
        RemoveCleaningView.as_view(),
        name="room-remove-cleaning",
    ),
    path(
        "rooms/<int:room_id>/maintenance/<str:booking_uid>",
        RemoveMaintenanceView.as_view(),
        name="room-remove-maintenance",
    ),
    path("rooms/<int:room_id>/free-slots", FreeSlotsView.as_view(), name="room-free-slots"),
]
