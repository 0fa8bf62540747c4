"""
ChatService - one-to-one conversations between users.

A pair of users shares a single conversation; starting a chat with someone
you already talk to returns the existing one. Read state is kept per
message in ``seen_by``.
"""

from typing import List

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, IntegerField, OuterRef, Prefetch, Subquery
from django.db.models.functions import Coalesce

from chat.domain.models import Conversation, Message
from infrastructure.events import EventBus, EventTypes, get_event_bus
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

PREVIEW_LENGTH = 30


def message_preview(body: str) -> str:
    body = body or ""
    return body[:PREVIEW_LENGTH] + "..." if len(body) > PREVIEW_LENGTH else body


class ChatService(BaseService):
    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    def _conversation_for(self, user, conversation_id):
        """Return (conversation, error_result)."""
        conversation = get_or_none(Conversation, pk=conversation_id)
        if conversation is None:
            return None, service_err(ErrorCodes.CONVERSATION_NOT_FOUND, "Conversation not found")
        if not conversation.participants.filter(pk=user.pk).exists():
            return None, service_err(ErrorCodes.PERMISSION_DENIED, "You are not part of this conversation")
        return conversation, None

    @BaseService.log_performance
    def get_or_create_conversation(self, user, other_user_id) -> ServiceResult[dict]:
        """
        Returns:
            ServiceResult with {"conversation": Conversation, "created": bool}
        """
        other = get_or_none(User, pk=other_user_id)
        if other is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        if other.pk == user.pk:
            return service_err(ErrorCodes.INVALID_INPUT, "You cannot start a conversation with yourself")

        with transaction.atomic():
            # Lock both users in pk order; one conversation per pair
            list(User.objects.select_for_update().filter(pk__in=[user.pk, other.pk]).order_by("pk"))

            existing = Conversation.objects.filter(participants=user).filter(participants=other).first()
            if existing is not None:
                return service_ok({"conversation": existing, "created": False})

            conversation = Conversation.objects.create()
            conversation.participants.add(user, other)

        self.logger.info(f"Conversation {conversation.pk} started between {user.pk} and {other.pk}")
        return service_ok({"conversation": conversation, "created": True})

    @BaseService.log_performance
    def list_conversations(self, user) -> ServiceResult[List[dict]]:
        try:
            latest = Message.objects.filter(conversation=OuterRef("pk")).order_by("-created_at")
            unread = (
                Message.objects.filter(conversation=OuterRef("pk"))
                .exclude(sender=user)
                .exclude(seen_by=user)
                .order_by()
                .values("conversation")
                .annotate(total=Count("pk"))
                .values("total")
            )
            conversations = (
                Conversation.objects.filter(participants=user)
                .annotate(
                    last_body=Subquery(latest.values("body")[:1]),
                    last_created_at=Subquery(latest.values("created_at")[:1]),
                    unread_count=Coalesce(Subquery(unread, output_field=IntegerField()), 0),
                )
                .prefetch_related(Prefetch("participants", queryset=User.objects.exclude(pk=user.pk)))
                .order_by("-last_message_at")
            )

            summaries = []
            for conversation in conversations:
                other = next(iter(conversation.participants.all()), None)
                summaries.append(
                    {
                        "id": str(conversation.pk),
                        "other_user": (
                            {"id": str(other.pk), "name": other.name, "image": other.image or None} if other else None
                        ),
                        "last_message": (
                            {"content": conversation.last_body, "created_at": conversation.last_created_at.isoformat()}
                            if conversation.last_created_at
                            else None
                        ),
                        "unread_count": conversation.unread_count,
                        "last_message_at": conversation.last_message_at.isoformat(),
                    }
                )
            return service_ok(summaries)
        except Exception as e:
            self.logger.error(f"Error listing conversations for {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def send_message(self, user, conversation_id, body: str, image: str = None) -> ServiceResult[Message]:
        conversation, error = self._conversation_for(user, conversation_id)
        if error:
            return error

        body = (body or "").strip()
        if not body and not image:
            return service_err(ErrorCodes.INVALID_INPUT, "Message body or image is required")

        with transaction.atomic():
            message = Message.objects.create(conversation=conversation, sender=user, body=body, image=image or "")
            message.seen_by.add(user)
            conversation.last_message_at = message.created_at
            conversation.save(update_fields=["last_message_at"])

        for recipient in conversation.participants.exclude(pk=user.pk):
            self.event_bus.publish(
                EventTypes.MESSAGE_SENT,
                {
                    "conversation_id": str(conversation.pk),
                    "message_id": str(message.pk),
                    "sender_id": str(user.pk),
                    "sender_name": user.name,
                    "recipient_id": str(recipient.pk),
                    "preview": message_preview(body),
                },
            )
        return service_ok(message)

    @BaseService.log_performance
    def list_messages(self, user, conversation_id) -> ServiceResult[List[Message]]:
        conversation, error = self._conversation_for(user, conversation_id)
        if error:
            return error
        return service_ok(
            list(conversation.messages.select_related("sender").prefetch_related("seen_by").order_by("created_at"))
        )

    @BaseService.log_performance
    def mark_read(self, user, conversation_id) -> ServiceResult[dict]:
        conversation, error = self._conversation_for(user, conversation_id)
        if error:
            return error

        unseen = list(conversation.messages.exclude(seen_by=user))
        for message in unseen:
            message.seen_by.add(user)
        return service_ok({"marked_read": len(unseen)})
