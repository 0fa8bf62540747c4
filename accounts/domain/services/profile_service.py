from django.contrib.auth import get_user_model
from django.db.models import Q

from utils.lookups import get_or_none
from utils.rbac import is_provider
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

DEFAULT_BIO = "No Bio Provided Yet.."
RECENT_POSTS_LIMIT = 10
MIN_QUERY_LENGTH = 2

EDITABLE_FIELDS = ("name", "image", "bio", "location", "user_type", "job_title", "interests")


def user_summary(user) -> dict:
    """Minimal author/participant block embedded in other view models."""
    if user is None:
        return None
    return {"id": str(user.pk), "name": user.name, "image": user.image or None}


class ProfileService(BaseService):
    """Public profile pages, user search and profile edits."""

    @BaseService.log_performance
    def get_profile(self, user_id, viewer=None) -> ServiceResult[dict]:
        try:
            user = get_or_none(User, pk=user_id)
            if user is None:
                return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

            viewer_id = getattr(viewer, "pk", None) if getattr(viewer, "is_authenticated", False) else None

            return service_ok(
                {
                    "id": str(user.pk),
                    "name": user.name,
                    "email": user.email if viewer_id == user.pk else None,
                    "image": user.image or None,
                    "bio": user.bio or DEFAULT_BIO,
                    "location": user.location or None,
                    "user_type": user.user_type,
                    "job_title": user.job_title or None,
                    "interests": user.interests or [],
                    "gallery_images": user.gallery_images or [],
                    "is_provider": is_provider(user),
                    "followers_count": user.followers.count(),
                    "following_count": user.following.count(),
                    "is_following": bool(viewer_id) and user.followers.filter(pk=viewer_id).exists(),
                    "is_self": viewer_id == user.pk,
                    "listings": [
                        {
                            "id": str(listing.pk),
                            "title": listing.title,
                            "category": listing.category,
                            "image_src": listing.image_src,
                        }
                        for listing in user.listings.all()
                    ],
                    "shops": [{"id": str(shop.pk), "name": shop.name, "logo": shop.logo} for shop in user.shops.all()],
                    "posts": [
                        {
                            "id": str(post.pk),
                            "content": post.content,
                            "media_url": post.media_url or post.image_src or None,
                            "created_at": post.created_at.isoformat(),
                        }
                        for post in user.posts.order_by("-created_at")[:RECENT_POSTS_LIMIT]
                    ],
                    "date_joined": user.date_joined.isoformat(),
                }
            )
        except Exception as e:
            self.logger.error(f"Error loading profile {user_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def search_users(self, q: str, limit: int = 10) -> ServiceResult[list]:
        query = (q or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return service_ok([])

        try:
            users = User.objects.filter(
                Q(name__icontains=query) | Q(email__icontains=query) | Q(username__icontains=query)
            ).order_by("name")[: max(0, limit)]
            return service_ok([user_summary(user) for user in users])
        except Exception as e:
            self.logger.error(f"Error searching users: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_profile(self, user, data: dict) -> ServiceResult:
        """Update the whitelisted profile fields of ``user``."""
        changes = {field: data[field] for field in EDITABLE_FIELDS if field in data}

        user_types = {choice for choice, _ in User.USER_TYPE_CHOICES}
        if "user_type" in changes and changes["user_type"] not in user_types:
            return service_err(ErrorCodes.INVALID_INPUT, f"user_type must be one of {sorted(user_types)}")
        if "interests" in changes and not isinstance(changes["interests"], list):
            return service_err(ErrorCodes.INVALID_INPUT, "interests must be a list")

        try:
            for field, value in changes.items():
                setattr(user, field, value)
            if changes:
                user.save(update_fields=list(changes))
            return service_ok(user)
        except Exception as e:
            self.logger.error(f"Error updating profile for {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def add_gallery_image(self, user, image) -> ServiceResult:
        if not image or not isinstance(image, str):
            return service_err(ErrorCodes.INVALID_INPUT, "Image URL is required")

        user.gallery_images = [*(user.gallery_images or []), image]
        user.save(update_fields=["gallery_images"])
        self.logger.info(f"Added gallery image for {user.pk} ({len(user.gallery_images)} total)")
        return service_ok(user)

    @BaseService.log_performance
    def remove_gallery_image(self, user, image_index) -> ServiceResult:
        """Drop the image at ``image_index``; an index past the end changes nothing."""
        if image_index in (None, ""):
            return service_err(ErrorCodes.INVALID_INPUT, "Image index is required")
        try:
            image_index = int(image_index)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.INVALID_INPUT, "Image index must be an integer")

        images = user.gallery_images or []
        user.gallery_images = [image for index, image in enumerate(images) if index != image_index]
        user.save(update_fields=["gallery_images"])
        return service_ok(user)
