import logging
from typing import Optional

from django.conf import settings

from .event_bus_interface import EventBus
from .memory_event_bus import InMemoryEventBus
from .redis_event_bus import RedisEventBus


logger = logging.getLogger(__name__)

# Singleton instance
_event_bus_instance: Optional[EventBus] = None


def create_event_bus(backend: Optional[str] = None) -> EventBus:
    backend_type = backend or getattr(settings, "EVENT_BUS_BACKEND", "memory")
    logger.info(f"Creating event bus backend: {backend_type}")

    if backend_type == "memory":
        return InMemoryEventBus()
    if backend_type == "redis":
        return RedisEventBus()
    raise ValueError(f"Invalid event bus backend: {backend_type}. Must be 'memory' or 'redis'")


def get_event_bus() -> EventBus:
    """Get singleton event bus instance."""
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = create_event_bus()
    return _event_bus_instance


def reset_event_bus():
    """Drop the singleton. Subscriptions registered on the old instance are lost."""
    global _event_bus_instance
    _event_bus_instance = None
