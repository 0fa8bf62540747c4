from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from bookings.domain.services import ReservationService
from bookings.domain.services.reservation_service import parse_reservation_date
from bookings.models import Reservation
from bookings.tests.factories import ReservationFactory
from infrastructure.events import EventTypes
from marketplace.tests.factories import EmployeeFactory, ListingFactory, ServiceFactory, UserFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def event_bus():
    return MagicMock()


@pytest.fixture
def reservation_service(event_bus):
    return ReservationService(event_bus=event_bus)


@pytest.fixture
def booking_data():
    listing = ListingFactory()
    service = ServiceFactory(listing=listing, service_name="Fade", price=40)
    employee = EmployeeFactory(listing=listing)
    return {
        "listing_id": listing.pk,
        "service_id": service.pk,
        "employee_id": employee.pk,
        "service_name": "Fade",
        "date": "2025-06-01",
        "time": "2:00 PM",
        "total_price": 40,
        "note": "First visit",
    }


@pytest.mark.unit
def test_parse_reservation_date():
    assert parse_reservation_date("2025-06-01").isoformat() == "2025-06-01T00:00:00+00:00"
    assert parse_reservation_date("2025-06-01T14:30:00Z") == datetime.fromisoformat("2025-06-01T14:30:00+00:00")
    assert parse_reservation_date("June first") is None
    assert parse_reservation_date("2025-13-40") is None


@pytest.mark.unit
@pytest.mark.django_db
class TestCreateReservation:
    def test_creates_pending_reservation(self, reservation_service, booking_data, event_bus):
        customer = UserFactory(name="Robin")

        result = reservation_service.create(customer, booking_data)

        assert result.ok is True
        reservation = result.value
        assert reservation.status == "pending"
        assert reservation.payment_status == "pending"
        assert reservation.total_price == 40
        assert reservation.note == "First visit"

        event_type, payload = event_bus.publish.call_args[0]
        assert event_type == EventTypes.RESERVATION_CREATED
        assert payload["customer_name"] == "Robin"
        assert payload["owner_id"] == str(reservation.listing.owner_id)

    def test_missing_fields(self, reservation_service, booking_data):
        del booking_data["employee_id"]

        result = reservation_service.create(UserFactory(), booking_data)

        assert result.error == ErrorCodes.INVALID_INPUT
        assert result.error_detail == "Missing required fields: employee_id"

    def test_service_must_belong_to_listing(self, reservation_service, booking_data):
        booking_data["service_id"] = ServiceFactory().pk

        result = reservation_service.create(UserFactory(), booking_data)

        assert result.error == ErrorCodes.NOT_FOUND
        assert Reservation.objects.count() == 0

    def test_bad_date(self, reservation_service, booking_data):
        booking_data["date"] = "tomorrow"

        result = reservation_service.create(UserFactory(), booking_data)

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_unknown_listing(self, reservation_service, booking_data):
        booking_data["listing_id"] = "00000000-0000-0000-0000-000000000000"

        result = reservation_service.create(UserFactory(), booking_data)

        assert result.error == ErrorCodes.LISTING_NOT_FOUND


@pytest.mark.unit
@pytest.mark.django_db
class TestReservationLists:
    def test_trips_and_provider_views(self, reservation_service):
        mine = ReservationFactory()
        ReservationFactory()
        on_my_listing = ReservationFactory(listing=ListingFactory(owner=mine.customer))

        trips = reservation_service.list_trips(mine.customer).value
        provider = reservation_service.list_for_provider(mine.customer).value

        assert [r.pk for r in trips] == [mine.pk]
        assert [r.pk for r in provider] == [on_my_listing.pk]


@pytest.mark.unit
@pytest.mark.django_db
class TestUpdateStatus:
    def test_owner_accepts_then_completes(self, reservation_service, event_bus):
        reservation = ReservationFactory()
        owner = reservation.listing.owner

        accepted = reservation_service.update_status(owner, reservation.pk, "accepted")
        completed = reservation_service.update_status(owner, reservation.pk, "completed")

        assert accepted.ok is True
        assert completed.value.status == "completed"
        assert completed.value.payment_status == "completed"
        event_type, payload = event_bus.publish.call_args[0]
        assert event_type == EventTypes.RESERVATION_STATUS_CHANGED
        assert payload["previous_status"] == "accepted"
        assert payload["customer_id"] == str(reservation.customer_id)

    def test_customer_cannot_accept(self, reservation_service):
        reservation = ReservationFactory()

        result = reservation_service.update_status(reservation.customer, reservation.pk, "accepted")

        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_invalid_transition(self, reservation_service, event_bus):
        reservation = ReservationFactory(status="declined")

        result = reservation_service.update_status(reservation.listing.owner, reservation.pk, "completed")

        assert result.error == ErrorCodes.INVALID_STATE
        event_bus.publish.assert_not_called()

    def test_unknown_status(self, reservation_service):
        reservation = ReservationFactory()

        result = reservation_service.update_status(reservation.listing.owner, reservation.pk, "archived")

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_reads_the_reservation_under_a_row_lock(self, reservation_service):
        reservation = ReservationFactory()

        with patch.object(reservation_service, "locked_queryset", wraps=reservation_service.locked_queryset) as locked:
            reservation_service.update_status(reservation.listing.owner, reservation.pk, "accepted")

        locked.assert_called_once()
        query = reservation_service.locked_queryset().query
        assert query.select_for_update is True
        assert query.select_for_update_of == ("self",)

    def test_second_decision_on_a_pending_booking_is_rejected(self, reservation_service, event_bus):
        reservation = ReservationFactory()
        owner = reservation.listing.owner

        accepted = reservation_service.update_status(owner, reservation.pk, "accepted")
        declined = reservation_service.update_status(owner, reservation.pk, "declined")

        assert accepted.ok is True
        assert declined.error == ErrorCodes.INVALID_STATE
        reservation.refresh_from_db()
        assert reservation.status == "accepted"
        assert event_bus.publish.call_count == 1

    def test_status_change_rolls_back_when_publish_fails(self, reservation_service, event_bus):
        reservation = ReservationFactory()
        event_bus.publish.side_effect = RuntimeError("bus down")

        with pytest.raises(RuntimeError):
            reservation_service.update_status(reservation.listing.owner, reservation.pk, "accepted")

        reservation.refresh_from_db()
        assert reservation.status == "pending"


@pytest.mark.unit
@pytest.mark.django_db
class TestCancel:
    def test_customer_cancels(self, reservation_service, event_bus):
        reservation = ReservationFactory()

        result = reservation_service.cancel(reservation.customer, reservation.pk)

        assert result.value == {"message": "Reservation cancelled successfully"}
        assert not Reservation.objects.filter(pk=reservation.pk).exists()
        event_type, payload = event_bus.publish.call_args[0]
        assert event_type == EventTypes.RESERVATION_CANCELLED
        assert payload["cancelled_by"] == "user"

    def test_business_cancels(self, reservation_service, event_bus):
        reservation = ReservationFactory()

        reservation_service.cancel(reservation.listing.owner, reservation.pk)

        assert event_bus.publish.call_args[0][1]["cancelled_by"] == "business"

    def test_stranger_cannot_cancel(self, reservation_service):
        reservation = ReservationFactory()

        result = reservation_service.cancel(UserFactory(), reservation.pk)

        assert result.error == ErrorCodes.PERMISSION_DENIED
        assert Reservation.objects.filter(pk=reservation.pk).exists()

    def test_missing_reservation(self, reservation_service):
        result = reservation_service.cancel(UserFactory(), "00000000-0000-0000-0000-000000000000")

        assert result.error == ErrorCodes.RESERVATION_NOT_FOUND

    def test_cancel_reads_the_reservation_under_a_row_lock(self, reservation_service):
        reservation = ReservationFactory()

        with patch.object(reservation_service, "locked_queryset", wraps=reservation_service.locked_queryset) as locked:
            reservation_service.cancel(reservation.customer, reservation.pk)

        locked.assert_called_once()

    def test_cancel_is_undone_when_publish_fails(self, reservation_service, event_bus):
        reservation = ReservationFactory()
        event_bus.publish.side_effect = RuntimeError("bus down")

        with pytest.raises(RuntimeError):
            reservation_service.cancel(reservation.customer, reservation.pk)

        assert Reservation.objects.filter(pk=reservation.pk).exists()
