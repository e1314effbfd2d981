"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from rooms.handlers.views import room_cache_key
from rooms.models import Booking, Room

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Room)
def invalidate_room_cache(sender, instance, **kwargs):
    """Invalidate the room detail cache when a room is saved or deleted."""
    cache.delete(room_cache_key(instance.identifier))
    logger.debug("Invalidated cache for room %s", instance.identifier)


@receiver([post_save, post_delete], sender=Booking)
def invalidate_room_cache_for_booking(sender, instance, **kwargs):
    """Invalidate the owning room's cache when one of its bookings changes."""
    cache.delete(room_cache_key(instance.room_id))
    logger.debug("Invalidated cache for room %s", instance.room_id)
