from datetime import datetime, timezone as dt_timezone

import pytest
from django.utils import timezone

from activity.tests.factories import CommentFactory, PostFactory
from bookings.tests.factories import ReservationFactory
from marketplace.catalog.domain.services import AnalyticsService
from marketplace.catalog.domain.services.analytics_service import month_windows
from marketplace.tests.factories import ListingFactory, ProviderFactory, ReviewFactory, ServiceFactory, UserFactory


@pytest.mark.unit
def test_month_windows_cover_twelve_calendar_months():
    windows = month_windows(datetime(2025, 3, 15, 12, 0, tzinfo=dt_timezone.utc))

    assert len(windows) == 12
    assert windows[0][0] == "Apr 2024"
    assert windows[-1][0] == "Mar 2025"
    assert windows[-1][1] == datetime(2025, 3, 1, tzinfo=dt_timezone.utc)
    assert windows[-1][2] == datetime(2025, 4, 1, tzinfo=dt_timezone.utc)


@pytest.mark.unit
@pytest.mark.django_db
class TestDashboard:
    def test_dashboard_aggregates_provider_activity(self):
        provider = ProviderFactory()
        listing = ListingFactory(owner=provider, title="Fade Factory")
        cut = ServiceFactory(listing=listing, service_name="Cut", category="Hair", price=30)
        shave = ServiceFactory(listing=listing, service_name="Shave", category="Face", price=20)

        ReservationFactory(listing=listing, service=cut, total_price=30, status="completed", payment_status="completed")
        ReservationFactory(listing=listing, service=cut, total_price=30)
        ReservationFactory(listing=listing, service=shave, total_price=20)
        ReservationFactory()  # someone else's listing

        post = PostFactory(author=provider)
        post.likes.add(UserFactory())
        CommentFactory(post=post)

        fan = UserFactory()
        fan.following.add(provider)
        ReviewFactory(target_type="user", target_user=provider, target_listing=None, rating=4)
        ReviewFactory(target_type="user", target_user=provider, target_listing=None, rating=5)

        result = AnalyticsService().get_dashboard(provider, now=timezone.now())

        assert result.ok is True
        data = result.value
        assert data["overview"] == {
            "total_listings": 1,
            "total_reservations": 3,
            "total_revenue": 30,
            "total_posts": 1,
            "total_followers": 1,
            "total_following": 0,
        }
        assert data["reviews"]["total_reviews"] == 2
        assert data["reviews"]["average_rating"] == 4.5

        assert len(data["recent_activity"]["reservations"]) == 3
        assert data["recent_activity"]["posts"][0]["likes"] == 1
        assert data["recent_activity"]["posts"][0]["comments"] == 1

        assert len(data["monthly_data"]) == 12
        assert data["monthly_data"][-1]["reservations"] == 3
        assert data["monthly_data"][-1]["revenue"] == 80
        assert data["monthly_data"][-1]["posts"] == 1

        assert data["top_services"][0] == {"service_name": "Cut", "category": "Hair", "bookings": 2, "revenue": 60}
        assert data["listings"] == [
            {
                "id": str(listing.pk),
                "title": "Fade Factory",
                "category": listing.category,
                "reservations": 3,
                "revenue": 80,
                "created_at": listing.created_at.isoformat(),
            }
        ]

    def test_empty_dashboard(self):
        data = AnalyticsService().get_dashboard(UserFactory()).value

        assert data["overview"]["total_revenue"] == 0
        assert data["reviews"]["average_rating"] == 0
        assert data["top_services"] == []
        assert all(month["reservations"] == 0 for month in data["monthly_data"])

    def test_review_average_rounds_halves_up(self):
        provider = ProviderFactory()
        for rating in (4, 4, 4, 5):
            ReviewFactory(target_type="user", target_user=provider, target_listing=None, rating=rating)

        reviews = AnalyticsService().get_dashboard(provider).value["reviews"]

        assert reviews["total_reviews"] == 4
        assert reviews["average_rating"] == 4.3
