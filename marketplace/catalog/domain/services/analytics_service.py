"""
AnalyticsService - provider dashboard.

All figures are computed from the provider's own listings, the reservations
made on them, their posts and the reviews they received.
"""

from collections import OrderedDict
from datetime import datetime

from django.db.models import Count, Sum
from django.utils import timezone

from activity.models import Post
from bookings.models import Reservation
from marketplace.catalog.domain.models import Review
from marketplace.catalog.domain.services.review_service import rating_stats
from marketplace.listings.domain.models import Listing, Service
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

MONTHS = 12
RECENT_LIMIT = 10
TOP_SERVICES_LIMIT = 10


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_windows(now: datetime, count: int = MONTHS):
    """``count`` calendar months ending with the month of ``now``, oldest first, as (label, start, end)."""
    windows = []
    for offset in range(count - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        next_year, next_month = _shift_month(year, month, 1)
        start = now.replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)
        end = now.replace(year=next_year, month=next_month, day=1, hour=0, minute=0, second=0, microsecond=0)
        windows.append((start.strftime("%b %Y"), start, end))
    return windows


class AnalyticsService(BaseService):
    @BaseService.log_performance
    def get_dashboard(self, user, now: datetime = None) -> ServiceResult[dict]:
        now = timezone.localtime(now or timezone.now())

        try:
            reservations = Reservation.objects.filter(listing__owner=user)
            posts = Post.objects.filter(author=user)

            return service_ok(
                {
                    "overview": {
                        "total_listings": Listing.objects.filter(owner=user).count(),
                        "total_reservations": reservations.count(),
                        "total_revenue": reservations.filter(payment_status="completed").aggregate(
                            total=Sum("total_price")
                        )["total"]
                        or 0,
                        "total_posts": posts.count(),
                        "total_followers": user.followers.count(),
                        "total_following": user.following.count(),
                    },
                    "reviews": self._review_stats(user),
                    "recent_activity": {
                        "reservations": self._recent_reservations(reservations),
                        "posts": self._recent_posts(posts),
                    },
                    "monthly_data": self._monthly_data(reservations, posts, now),
                    "top_services": self._top_services(user),
                    "listings": self._listing_stats(user),
                }
            )
        except Exception as e:
            self.logger.error(f"Error building analytics for {user.pk}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @staticmethod
    def _review_stats(user) -> dict:
        ratings = list(Review.objects.filter(target_type="user", target_user=user).values_list("rating", flat=True))
        return {"total_reviews": len(ratings), **rating_stats(ratings)}

    @staticmethod
    def _recent_reservations(reservations) -> list:
        recent = reservations.select_related("customer", "listing").order_by("-created_at")[:RECENT_LIMIT]
        return [
            {
                "id": str(reservation.pk),
                "service_name": reservation.service_name,
                "date": reservation.date.isoformat(),
                "total_price": reservation.total_price,
                "status": reservation.status,
                "user": {"name": reservation.customer.name, "image": reservation.customer.image or None},
                "listing": {"title": reservation.listing.title},
            }
            for reservation in recent
        ]

    @staticmethod
    def _recent_posts(posts) -> list:
        recent = posts.annotate(
            likes_count=Count("likes", distinct=True), comments_count=Count("comments", distinct=True)
        ).order_by("-created_at")[:RECENT_LIMIT]
        return [
            {
                "id": str(post.pk),
                "content": post.content,
                "created_at": post.created_at.isoformat(),
                "likes": post.likes_count,
                "comments": post.comments_count,
            }
            for post in recent
        ]

    @staticmethod
    def _monthly_data(reservations, posts, now: datetime) -> list:
        windows = month_windows(now)
        first_start = windows[0][1]

        booked = list(reservations.filter(created_at__gte=first_start).values_list("created_at", "total_price"))
        posted = list(posts.filter(created_at__gte=first_start).values_list("created_at", flat=True))

        data = []
        for label, start, end in windows:
            in_month = [price for created, price in booked if start <= created < end]
            data.append(
                {
                    "month": label,
                    "reservations": len(in_month),
                    "revenue": sum(in_month),
                    "posts": sum(1 for created in posted if start <= created < end),
                }
            )
        return data

    @staticmethod
    def _top_services(user) -> list:
        services = Service.objects.filter(listing__owner=user).annotate(
            bookings=Count("reservations"), revenue=Sum("reservations__total_price")
        )

        grouped = OrderedDict()
        for service in services:
            key = (service.service_name, service.category)
            entry = grouped.setdefault(
                key, {"service_name": service.service_name, "category": service.category, "bookings": 0, "revenue": 0}
            )
            entry["bookings"] += service.bookings
            entry["revenue"] += service.revenue or 0

        return sorted(grouped.values(), key=lambda entry: entry["bookings"], reverse=True)[:TOP_SERVICES_LIMIT]

    @staticmethod
    def _listing_stats(user) -> list:
        listings = (
            Listing.objects.filter(owner=user)
            .annotate(reservations_count=Count("reservations"), revenue=Sum("reservations__total_price"))
            .order_by("-created_at")
        )
        return [
            {
                "id": str(listing.pk),
                "title": listing.title,
                "category": listing.category,
                "reservations": listing.reservations_count,
                "revenue": listing.revenue or 0,
                "created_at": listing.created_at.isoformat(),
            }
            for listing in listings
        ]
