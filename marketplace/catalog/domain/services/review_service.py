"""
ReviewService - reviews of providers and listings.

A review is marked as a verified booking when its author has a completed
reservation on the reviewed listing or with an employee record of the
reviewed provider. The flag is computed when reviews are read.
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal

from django.contrib.auth import get_user_model
from django.db import IntegrityError

from bookings.models import Reservation
from infrastructure.events import EventBus, EventTypes, get_event_bus
from marketplace.catalog.domain.models import Review
from marketplace.listings.domain.models import Listing
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

TARGET_TYPES = ("user", "listing")
RATINGS = (1, 2, 3, 4, 5)


def rating_stats(ratings) -> dict:
    """Average (one decimal) and per-star counts for a list of ratings."""
    ratings = list(ratings)
    average = 0
    if ratings:
        mean = Decimal(sum(ratings)) / Decimal(len(ratings))
        average = float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return {
        "average_rating": average,
        "rating_distribution": [{"rating": star, "count": ratings.count(star)} for star in RATINGS],
    }


class ReviewService(BaseService):
    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    def is_verified_booking(self, author_id, target_type: str, target_id) -> bool:
        completed = Reservation.objects.filter(customer_id=author_id, status="completed")
        if target_type == "user":
            return completed.filter(employee__user_id=target_id).exists()
        return completed.filter(listing_id=target_id).exists()

    @BaseService.log_performance
    def create_review(self, user, data: dict) -> ServiceResult[dict]:
        """
        Args:
            data: rating, comment, target_type, target_user_id | target_listing_id

        Returns:
            ServiceResult with {"review": Review, "is_verified_booking": bool}
        """
        try:
            rating = int(data.get("rating") or 0)
        except (TypeError, ValueError):
            rating = 0
        if rating not in RATINGS:
            return service_err(ErrorCodes.INVALID_INPUT, "Rating must be between 1 and 5")

        target_type = data.get("target_type")
        if target_type not in TARGET_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid target type")

        target_id = data.get("target_user_id") if target_type == "user" else data.get("target_listing_id")
        if not target_id:
            return service_err(ErrorCodes.INVALID_INPUT, f"Target {target_type} ID is required")

        if target_type == "user":
            target = get_or_none(User, pk=target_id)
            if target is None:
                return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
            if target.pk == user.pk:
                return service_err(ErrorCodes.INVALID_INPUT, "You can't review yourself")
            lookup = {"target_user": target}
            recipient_id = target.pk
        else:
            target = get_or_none(Listing, pk=target_id)
            if target is None:
                return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
            lookup = {"target_listing": target}
            recipient_id = target.owner_id

        if Review.objects.filter(author=user, **lookup).exists():
            return service_err(ErrorCodes.DUPLICATE_REVIEW, "You have already reviewed this")

        try:
            review = Review.objects.create(
                author=user,
                target_type=target_type,
                rating=rating,
                comment=data.get("comment") or "",
                **lookup,
            )
        except IntegrityError:
            return service_err(ErrorCodes.DUPLICATE_REVIEW, "You have already reviewed this")
        except Exception as e:
            self.logger.error(f"Error creating review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        if recipient_id != user.pk:
            self.event_bus.publish(
                EventTypes.REVIEW_CREATED,
                {
                    "review_id": str(review.pk),
                    "author_id": str(user.pk),
                    "author_name": user.name,
                    "recipient_id": str(recipient_id),
                    "target_type": target_type,
                    "target_id": str(target.pk),
                    "rating": rating,
                },
            )

        return service_ok(
            {"review": review, "is_verified_booking": self.is_verified_booking(user.pk, target_type, target.pk)}
        )

    @BaseService.log_performance
    def list_reviews(self, target_type: str, target_id, limit: int = 20, offset: int = 0) -> ServiceResult[dict]:
        """
        One page of reviews, newest first, plus the target's rating stats.

        ``average_rating`` and ``rating_distribution`` cover every review of
        the target, not only the returned page.
        """
        if target_type not in TARGET_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid target type")
        if not target_id:
            return service_err(ErrorCodes.INVALID_INPUT, f"Target {target_type} ID is required")

        try:
            target_id = uuid.UUID(str(target_id))
        except ValueError:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid target id")

        limit = max(0, limit)
        offset = max(0, offset)
        field = "target_user_id" if target_type == "user" else "target_listing_id"

        try:
            queryset = Review.objects.filter(target_type=target_type, **{field: target_id})
            ratings = list(queryset.values_list("rating", flat=True))

            page = list(
                queryset.select_related("author").prefetch_related("helpful_votes").order_by("-created_at")[
                    offset : offset + limit
                ]
            )
            verified_authors = self._verified_authors({review.author_id for review in page}, target_type, target_id)
            for review in page:
                review.is_verified_booking = review.author_id in verified_authors

            return service_ok({"reviews": page, "total_count": len(ratings), **rating_stats(ratings)})
        except Exception as e:
            self.logger.error(f"Error listing reviews for {target_type} {target_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def _verified_authors(self, author_ids, target_type: str, target_id) -> set:
        if not author_ids:
            return set()
        completed = Reservation.objects.filter(customer_id__in=author_ids, status="completed")
        if target_type == "user":
            completed = completed.filter(employee__user_id=target_id)
        else:
            completed = completed.filter(listing_id=target_id)
        return set(completed.values_list("customer_id", flat=True))

    @BaseService.log_performance
    def toggle_helpful(self, user, review_id) -> ServiceResult[dict]:
        review = get_or_none(Review, pk=review_id)
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        if review.author_id == user.pk:
            return service_err(ErrorCodes.INVALID_INPUT, "You can't vote on your own review")

        helpful = not review.helpful_votes.filter(pk=user.pk).exists()
        if helpful:
            review.helpful_votes.add(user)
        else:
            review.helpful_votes.remove(user)

        return service_ok({"helpful": helpful, "helpful_count": review.helpful_votes.count()})
