"""
Turn domain events into in-app notifications.

Every handler receives the bus envelope ``{"event_type", "occurred_at",
"payload"}``. Failures are logged and never propagate back into the
publishing service.
"""

import logging

from infrastructure.container import container
from infrastructure.events import EventTypes, get_event_bus

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Someone"

STATUS_NOTIFICATIONS = {
    "accepted": "RESERVATION_ACCEPTED",
    "declined": "RESERVATION_DECLINED",
    "completed": "RESERVATION_COMPLETED",
}


def _name(payload: dict, key: str) -> str:
    return payload.get(key) or FALLBACK_NAME


def _notify(recipient_id, notification_type: str, content: str):
    if not recipient_id:
        logger.warning(f"Dropping {notification_type} notification without a recipient")
        return
    result = container.notification_service().notify(recipient_id, notification_type, content)
    if not result.ok:
        logger.error(f"Failed to create {notification_type} notification for {recipient_id}: {result.error_detail}")


def handle_user_followed(event_data):
    try:
        payload = event_data.get("payload", {})
        name = _name(payload, "follower_name")
        _notify(payload.get("followed_id"), "NEW_FOLLOWER", f"{name} started following you")
        if payload.get("mutual"):
            _notify(
                payload.get("followed_id"),
                "MUTUAL_FOLLOW",
                f"{name} followed you back - you are now mutually following each other!",
            )
    except Exception as e:
        logger.error(f"Error handling user.followed event: {e}", exc_info=True)


def handle_listing_followed(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(
            payload.get("owner_id"),
            "LISTING_FOLLOW",
            f"{_name(payload, 'follower_name')} started following your listing {payload.get('target_name', '')}".strip(),
        )
    except Exception as e:
        logger.error(f"Error handling listing.followed event: {e}", exc_info=True)


def handle_shop_followed(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(
            payload.get("owner_id"),
            "SHOP_FOLLOW",
            f"{_name(payload, 'follower_name')} started following your shop {payload.get('target_name', '')}".strip(),
        )
    except Exception as e:
        logger.error(f"Error handling shop.followed event: {e}", exc_info=True)


def handle_post_liked(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(payload.get("author_id"), "NEW_LIKE", f"{_name(payload, 'actor_name')} liked your post")
    except Exception as e:
        logger.error(f"Error handling post.liked event: {e}", exc_info=True)


def handle_post_bookmarked(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(payload.get("author_id"), "NEW_BOOKMARK", f"{_name(payload, 'actor_name')} bookmarked your post")
    except Exception as e:
        logger.error(f"Error handling post.bookmarked event: {e}", exc_info=True)


def handle_comment_created(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(payload.get("author_id"), "NEW_COMMENT", f"{_name(payload, 'actor_name')} commented on your post")
    except Exception as e:
        logger.error(f"Error handling comment.created event: {e}", exc_info=True)


def handle_reservation_created(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(
            payload.get("owner_id"),
            "NEW_RESERVATION",
            f"{_name(payload, 'customer_name')} booked {payload.get('service_name')} at "
            f"{payload.get('listing_title')} for {payload.get('date', '')[:10]} at {payload.get('time')}",
        )
    except Exception as e:
        logger.error(f"Error handling reservation.created event: {e}", exc_info=True)


def handle_reservation_status_changed(event_data):
    try:
        payload = event_data.get("payload", {})
        status = payload.get("status")
        notification_type = STATUS_NOTIFICATIONS.get(status)
        if notification_type is None:
            logger.debug(f"No notification for reservation status {status}")
            return
        _notify(
            payload.get("customer_id"),
            notification_type,
            f"Your reservation for {payload.get('service_name')} at {payload.get('listing_title')} has been {status}",
        )
    except Exception as e:
        logger.error(f"Error handling reservation.status_changed event: {e}", exc_info=True)


def handle_reservation_cancelled(event_data):
    try:
        payload = event_data.get("payload", {})
        if payload.get("cancelled_by") == "business":
            _notify(
                payload.get("customer_id"),
                "RESERVATION_CANCELLED_BY_BUSINESS",
                f"Your reservation at {payload.get('listing_title')} has been cancelled by the business",
            )
        else:
            _notify(
                payload.get("owner_id"),
                "RESERVATION_CANCELLED_BY_USER",
                f"{_name(payload, 'customer_name')} has cancelled their reservation for {payload.get('date')}",
            )
    except Exception as e:
        logger.error(f"Error handling reservation.cancelled event: {e}", exc_info=True)


def handle_review_created(event_data):
    try:
        payload = event_data.get("payload", {})
        target = "your listing" if payload.get("target_type") == "listing" else "you"
        _notify(
            payload.get("recipient_id"),
            "NEW_REVIEW",
            f"{_name(payload, 'author_name')} left {target} a {payload.get('rating')}-star review",
        )
    except Exception as e:
        logger.error(f"Error handling review.created event: {e}", exc_info=True)


def handle_message_sent(event_data):
    try:
        payload = event_data.get("payload", {})
        _notify(
            payload.get("recipient_id"),
            "NEW_MESSAGE",
            f"{_name(payload, 'sender_name')} sent you a message: \"{payload.get('preview', '')}\"",
        )
    except Exception as e:
        logger.error(f"Error handling message.sent event: {e}", exc_info=True)


HANDLERS = {
    EventTypes.USER_FOLLOWED: handle_user_followed,
    EventTypes.LISTING_FOLLOWED: handle_listing_followed,
    EventTypes.SHOP_FOLLOWED: handle_shop_followed,
    EventTypes.POST_LIKED: handle_post_liked,
    EventTypes.POST_BOOKMARKED: handle_post_bookmarked,
    EventTypes.COMMENT_CREATED: handle_comment_created,
    EventTypes.RESERVATION_CREATED: handle_reservation_created,
    EventTypes.RESERVATION_STATUS_CHANGED: handle_reservation_status_changed,
    EventTypes.RESERVATION_CANCELLED: handle_reservation_cancelled,
    EventTypes.REVIEW_CREATED: handle_review_created,
    EventTypes.MESSAGE_SENT: handle_message_sent,
}


def register_activity_listeners(event_bus=None):
    """Register all notification listeners on ``event_bus`` (default: the shared bus)."""
    event_bus = event_bus or get_event_bus()
    for event_type, handler in HANDLERS.items():
        event_bus.subscribe(event_type, handler)
    logger.info("Activity event listeners registered")
    return event_bus
