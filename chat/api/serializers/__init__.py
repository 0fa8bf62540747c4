from .conversation_serializers import (
    ConversationSummarySerializer,
    LastMessageSerializer,
    MessageSerializer,
    SendMessageSerializer,
    StartConversationSerializer,
)


__all__ = [
    "ConversationSummarySerializer",
    "LastMessageSerializer",
    "MessageSerializer",
    "SendMessageSerializer",
    "StartConversationSerializer",
]
