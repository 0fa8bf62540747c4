import uuid
from unittest.mock import MagicMock

import pytest

from bookings.tests.factories import ReservationFactory
from infrastructure.events import EventTypes
from marketplace.catalog.domain.services import ReviewService
from marketplace.catalog.domain.services.review_service import rating_stats
from marketplace.tests.factories import EmployeeFactory, ListingFactory, ReviewFactory, UserFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def event_bus():
    return MagicMock()


@pytest.fixture
def review_service(event_bus):
    return ReviewService(event_bus=event_bus)


@pytest.mark.unit
def test_rating_stats_rounds_to_one_decimal():
    stats = rating_stats([5, 4, 4])

    assert stats["average_rating"] == 4.3
    assert stats["rating_distribution"][3] == {"rating": 4, "count": 2}
    assert rating_stats([])["average_rating"] == 0


@pytest.mark.unit
@pytest.mark.parametrize("ratings,expected", [([4, 4, 4, 5], 4.3), ([1, 2, 2, 2], 1.8), ([3, 3, 3, 4], 3.3)])
def test_rating_stats_rounds_halves_up(ratings, expected):
    assert rating_stats(ratings)["average_rating"] == expected


@pytest.mark.unit
@pytest.mark.django_db
class TestCreateReview:
    def test_listing_review_with_completed_booking_is_verified(self, review_service, event_bus):
        reservation = ReservationFactory(status="completed")

        result = review_service.create_review(
            reservation.customer,
            {"rating": 5, "target_type": "listing", "target_listing_id": reservation.listing.pk, "comment": "Great"},
        )

        assert result.ok is True
        assert result.value["is_verified_booking"] is True
        event_bus.publish.assert_called_once()
        event_type, payload = event_bus.publish.call_args[0]
        assert event_type == EventTypes.REVIEW_CREATED
        assert payload["recipient_id"] == str(reservation.listing.owner_id)

    def test_provider_review_verified_through_employee(self, review_service):
        employee = EmployeeFactory()
        reservation = ReservationFactory(listing=employee.listing, employee=employee, status="completed")

        result = review_service.create_review(
            reservation.customer, {"rating": 4, "target_type": "user", "target_user_id": employee.user.pk}
        )

        assert result.value["is_verified_booking"] is True

    def test_pending_booking_is_not_verified(self, review_service):
        reservation = ReservationFactory(status="pending")

        result = review_service.create_review(
            reservation.customer, {"rating": 3, "target_type": "listing", "target_listing_id": reservation.listing.pk}
        )

        assert result.value["is_verified_booking"] is False

    def test_validation_errors(self, review_service):
        user = UserFactory()

        assert review_service.create_review(user, {"rating": 6, "target_type": "user"}).error_detail == (
            "Rating must be between 1 and 5"
        )
        assert review_service.create_review(user, {"rating": 3, "target_type": "shop"}).error_detail == (
            "Invalid target type"
        )
        assert review_service.create_review(user, {"rating": 3, "target_type": "user"}).error == (
            ErrorCodes.INVALID_INPUT
        )
        assert review_service.create_review(
            user, {"rating": 3, "target_type": "user", "target_user_id": user.pk}
        ).error_detail == "You can't review yourself"

    def test_one_review_per_target(self, review_service):
        review = ReviewFactory()

        result = review_service.create_review(
            review.author, {"rating": 2, "target_type": "listing", "target_listing_id": review.target_listing.pk}
        )

        assert result.error == ErrorCodes.DUPLICATE_REVIEW

    def test_unknown_listing(self, review_service):
        result = review_service.create_review(
            UserFactory(), {"rating": 2, "target_type": "listing", "target_listing_id": uuid.uuid4()}
        )

        assert result.error == ErrorCodes.LISTING_NOT_FOUND


@pytest.mark.unit
@pytest.mark.django_db
class TestListReviews:
    def test_page_and_stats(self, review_service):
        listing = ListingFactory()
        for rating in (5, 4, 1):
            ReviewFactory(target_listing=listing, rating=rating)
        ReviewFactory(rating=2)  # other listing

        result = review_service.list_reviews("listing", listing.pk, limit=2, offset=0)

        assert result.ok is True
        assert len(result.value["reviews"]) == 2
        assert result.value["total_count"] == 3
        assert result.value["average_rating"] == 3.3
        assert [bucket["count"] for bucket in result.value["rating_distribution"]] == [1, 0, 0, 1, 1]

    def test_marks_verified_authors(self, review_service):
        reservation = ReservationFactory(status="completed")
        ReviewFactory(author=reservation.customer, target_listing=reservation.listing)
        ReviewFactory(target_listing=reservation.listing)

        reviews = review_service.list_reviews("listing", reservation.listing.pk).value["reviews"]

        verified = {review.author_id: review.is_verified_booking for review in reviews}
        assert verified[reservation.customer.pk] is True
        assert list(verified.values()).count(True) == 1

    def test_invalid_target(self, review_service):
        assert review_service.list_reviews("shop", uuid.uuid4()).error == ErrorCodes.INVALID_INPUT
        assert review_service.list_reviews("listing", "nope").error == ErrorCodes.INVALID_INPUT


@pytest.mark.unit
@pytest.mark.django_db
class TestToggleHelpful:
    def test_toggle_and_own_review(self, review_service):
        review = ReviewFactory()
        voter = UserFactory()

        assert review_service.toggle_helpful(voter, review.pk).value == {"helpful": True, "helpful_count": 1}
        assert review_service.toggle_helpful(voter, review.pk).value == {"helpful": False, "helpful_count": 0}
        assert review_service.toggle_helpful(review.author, review.pk).error == ErrorCodes.INVALID_INPUT
