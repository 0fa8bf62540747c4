from .follow_service import FollowService
from .profile_service import ProfileService, user_summary
from .subscription_service import SubscriptionService


__all__ = ["FollowService", "ProfileService", "SubscriptionService", "user_summary"]
