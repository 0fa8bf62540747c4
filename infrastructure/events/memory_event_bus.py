import logging
from typing import Callable, Dict, List

from .event_bus_interface import DomainEvent, EventBus


logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Synchronous in-process event bus used in development and tests."""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self.published: List[dict] = []

    def publish(self, event_type: str, payload: dict):
        envelope = DomainEvent(event_type=event_type, payload=payload).to_dict()
        self.published.append(envelope)
        logger.info(f"Published event: {event_type}")

        for handler in self._subscribers.get(event_type, []):
            try:
                handler(envelope)
            except Exception as e:
                logger.error(f"Handler error for {event_type}: {str(e)}", exc_info=True)

    def subscribe(self, event_type: str, handler: Callable):
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.info(f"Registered handler for event: {event_type}")

    def clear_published(self):
        self.published.clear()
