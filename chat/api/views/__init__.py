from .conversation_views import ConversationViewSet


__all__ = ["ConversationViewSet"]
