import json
import logging
import threading
from typing import Callable, Optional

import redis
from django.conf import settings

from .event_bus_interface import DomainEvent, EventBus


logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "forme.events."


class RedisEventBus(EventBus):
    """Redis pub/sub implementation of event bus."""

    def __init__(self, redis_url: Optional[str] = None, client=None):
        self.redis_url = redis_url or getattr(settings, "REDIS_URL", "redis://localhost:6379/0")
        self.redis_client = client

        if self.redis_client is None:
            try:
                self.redis_client = redis.from_url(self.redis_url)
            except (redis.RedisError, ValueError) as e:
                logger.error(f"Failed to connect to Redis at {self.redis_url}: {e}")
                self.redis_client = None

        self._subscribers = {}
        self._listening = False

    def publish(self, event_type: str, payload: dict):
        """Publish event to its Redis channel."""
        if not self.redis_client:
            logger.warning(f"Redis client not available. Event {event_type} dropped.")
            return

        try:
            message = DomainEvent(event_type=event_type, payload=payload).to_dict()
            self.redis_client.publish(f"{CHANNEL_PREFIX}{event_type}", json.dumps(message, default=str))
            logger.info(f"Published event: {event_type}")
        except redis.RedisError as e:
            logger.error(f"Failed to publish event {event_type}: {str(e)}")

    def subscribe(self, event_type: str, handler: Callable):
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.info(f"Registered handler for event: {event_type}")

    def start_listening(self):
        """Start listening to subscribed channels (background thread)."""
        if self._listening or not self.redis_client:
            return

        def listen():
            try:
                pubsub = self.redis_client.pubsub()
                channels = [f"{CHANNEL_PREFIX}{et}" for et in self._subscribers.keys()]

                if not channels:
                    return

                pubsub.subscribe(*channels)
                self._listening = True
                logger.info(f"EventBus listening on: {channels}")

                for message in pubsub.listen():
                    if message["type"] == "message":
                        self._handle_message(message)
            except redis.RedisError as e:
                logger.error(f"EventBus listener crashed: {e}")
                self._listening = False

        thread = threading.Thread(target=listen, daemon=True)
        thread.start()

    def _handle_message(self, message):
        """Decode a pub/sub message and hand the envelope to every handler."""
        try:
            data = json.loads(message["data"])
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to decode event message: {str(e)}")
            return

        event_type = data.get("event_type")
        for handler in self._subscribers.get(event_type, []):
            try:
                handler(data)
            except Exception as e:
                logger.error(f"Handler error for {event_type}: {str(e)}", exc_info=True)
