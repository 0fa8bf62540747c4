"""
FollowService - follow/unfollow users, listings and shops.

A follow is a toggle: calling it twice restores the original state. Only the
"follow" direction publishes an event; the activity app turns those events
into notifications for the followed party.
"""

from django.contrib.auth import get_user_model

from infrastructure.events import EventBus, EventTypes, get_event_bus
from marketplace.models import Listing, Shop
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

TARGET_TYPES = ("user", "listing", "shop")


class FollowService(BaseService):
    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    @BaseService.log_performance
    def toggle(self, actor, target_id, target_type: str = "user") -> ServiceResult[dict]:
        """
        Flip the follow relationship between ``actor`` and the target.

        Returns:
            ServiceResult with {"following", "followers_count", "target_type", "target_id"}
        """
        target_type = (target_type or "user").lower()
        if target_type not in TARGET_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid follow type '{target_type}'")

        try:
            if target_type == "user":
                return self._toggle_user(actor, target_id)
            return self._toggle_followable(actor, target_id, target_type)
        except Exception as e:
            self.logger.error(f"Error toggling follow on {target_type} {target_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def _toggle_user(self, actor, target_id) -> ServiceResult[dict]:
        target = get_or_none(User, pk=target_id)
        if target is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        if target.pk == actor.pk:
            return service_err(ErrorCodes.INVALID_INPUT, "You cannot follow yourself")

        following = not actor.following.filter(pk=target.pk).exists()
        if following:
            actor.following.add(target)
            mutual = target.following.filter(pk=actor.pk).exists()
            self.event_bus.publish(
                EventTypes.USER_FOLLOWED,
                {
                    "follower_id": str(actor.pk),
                    "follower_name": actor.name,
                    "followed_id": str(target.pk),
                    "mutual": mutual,
                },
            )
        else:
            actor.following.remove(target)

        self.logger.info(f"User {actor.pk} {'followed' if following else 'unfollowed'} user {target.pk}")
        return service_ok(self._result(following, target.followers.count(), "user", target.pk))

    def _toggle_followable(self, actor, target_id, target_type: str) -> ServiceResult[dict]:
        model = Listing if target_type == "listing" else Shop
        target = get_or_none(model, pk=target_id)
        if target is None:
            code = ErrorCodes.LISTING_NOT_FOUND if target_type == "listing" else ErrorCodes.SHOP_NOT_FOUND
            return service_err(code, f"{target_type.capitalize()} not found")

        following = not target.followers.filter(pk=actor.pk).exists()
        if following:
            target.followers.add(actor)
            if target.owner_id != actor.pk:
                event_type = EventTypes.LISTING_FOLLOWED if target_type == "listing" else EventTypes.SHOP_FOLLOWED
                self.event_bus.publish(
                    event_type,
                    {
                        "follower_id": str(actor.pk),
                        "follower_name": actor.name,
                        "owner_id": str(target.owner_id),
                        "target_id": str(target.pk),
                        "target_name": getattr(target, "title", None) or getattr(target, "name", ""),
                    },
                )
        else:
            target.followers.remove(actor)

        self.logger.info(f"User {actor.pk} {'followed' if following else 'unfollowed'} {target_type} {target.pk}")
        return service_ok(self._result(following, target.followers.count(), target_type, target.pk))

    @staticmethod
    def _result(following: bool, followers_count: int, target_type: str, target_id) -> dict:
        return {
            "following": following,
            "followers_count": followers_count,
            "target_type": target_type,
            "target_id": str(target_id),
        }
