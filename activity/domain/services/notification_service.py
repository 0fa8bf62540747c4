from typing import List

from django.contrib.auth import get_user_model

from activity.domain.models import Notification
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

DEFAULT_LIMIT = 20
NOTIFICATION_TYPES = {choice for choice, _ in Notification.TYPE_CHOICES}


class NotificationService(BaseService):
    """
    In-app notifications. Most are written by the activity event listeners;
    a recipient can only see, mark or delete their own.
    """

    @BaseService.log_performance
    def list_for(self, user, limit: int = DEFAULT_LIMIT) -> ServiceResult[List[Notification]]:
        return service_ok(list(Notification.objects.filter(recipient=user).order_by("-created_at")[: max(0, limit)]))

    def unread_count(self, user) -> int:
        return Notification.objects.filter(recipient=user, is_read=False).count()

    @BaseService.log_performance
    def mark_read(self, user, notification_id) -> ServiceResult[Notification]:
        notification = get_or_none(Notification, pk=notification_id, recipient=user)
        if notification is None:
            return service_err(ErrorCodes.NOT_FOUND, "Notification not found")

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return service_ok(notification)

    @BaseService.log_performance
    def mark_all_read(self, user) -> ServiceResult[dict]:
        updated = Notification.objects.filter(recipient=user, is_read=False).update(is_read=True)
        return service_ok({"updated": updated})

    @BaseService.log_performance
    def delete(self, user, notification_id) -> ServiceResult[bool]:
        notification = get_or_none(Notification, pk=notification_id, recipient=user)
        if notification is None:
            return service_err(ErrorCodes.NOT_FOUND, "Notification not found")

        notification.delete()
        return service_ok(True)

    @BaseService.log_performance
    def notify(self, user_id, notification_type: str, content: str) -> ServiceResult[Notification]:
        if notification_type not in NOTIFICATION_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown notification type '{notification_type}'")
        if not content:
            return service_err(ErrorCodes.INVALID_INPUT, "Notification content is required")

        recipient = get_or_none(User, pk=user_id)
        if recipient is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        notification = Notification.objects.create(recipient=recipient, type=notification_type, content=content)
        self.logger.debug(f"Notification {notification_type} -> {recipient.pk}")
        return service_ok(notification)
