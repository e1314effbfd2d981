from rooms.handlers.views import (
    FreeSlotsView,
    RemoveCleaningView,
    RemoveMaintenanceView,
    RoomCloseView,
    RoomDetailView,
    RoomListView,
    ScheduleCleaningView,
    ScheduleMaintenanceView,
)

__all__ = [
    "FreeSlotsView",
    "RemoveCleaningView",
    "RemoveMaintenanceView",
    "RoomCloseView",
    "RoomDetailView",
    "RoomListView",
    "ScheduleCleaningView",
    "ScheduleMaintenanceView",
]
