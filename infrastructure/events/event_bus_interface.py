from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict

from django.utils import timezone


class EventTypes:
    """Names of the domain events published by the services."""

    USER_FOLLOWED = "user.followed"
    LISTING_FOLLOWED = "listing.followed"
    SHOP_FOLLOWED = "shop.followed"
    POST_LIKED = "post.liked"
    POST_BOOKMARKED = "post.bookmarked"
    COMMENT_CREATED = "comment.created"
    RESERVATION_CREATED = "reservation.created"
    RESERVATION_STATUS_CHANGED = "reservation.status_changed"
    RESERVATION_CANCELLED = "reservation.cancelled"
    REVIEW_CREATED = "review.created"
    MESSAGE_SENT = "message.sent"


@dataclass
class DomainEvent:
    """Envelope delivered to every subscribed handler."""

    event_type: str
    occurred_at: datetime = field(default_factory=timezone.now)
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"event_type": self.event_type, "occurred_at": self.occurred_at.isoformat(), "payload": self.payload}


class EventBus(ABC):
    """
    Publish/subscribe contract for domain events.

    Handlers receive the envelope as a dict:
        {"event_type": ..., "occurred_at": ..., "payload": {...}}

    Publishing never raises into the caller; a failed delivery is logged.
    """

    @abstractmethod
    def publish(self, event_type: str, payload: dict):
        pass

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable):
        pass

    def start_listening(self):
        """Start delivering events from an external broker. No-op for in-process buses."""
        return None
