from django.contrib import admin

from rooms.models import Booking, Room


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    fields = ["booking_uid", "type", "screening_uid", "start_time", "end_time"]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ["identifier", "uid", "status", "screen_type", "screen_size", "created_at"]
    list_filter = ["status", "screen_type"]
    search_fields = ["uid"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["booking_uid", "room", "type", "start_time", "end_time"]
    list_filter = ["type", "room"]
    search_fields = ["booking_uid", "screening_uid"]
