"""
ReservationService - booking a service slot at a listing.

Customers create reservations; the listing owner accepts, declines or
completes them. Either side may cancel, which removes the reservation. Every
lifecycle step publishes a domain event so the activity app can notify the
other party.
"""

from datetime import datetime, time
from datetime import timezone as dt_timezone
from typing import List, Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from bookings.domain.models import Reservation
from infrastructure.events import EventBus, EventTypes, get_event_bus
from marketplace.infra.observability.metrics import reservations_total
from marketplace.models import Employee, Listing, Service
from utils.lookups import get_or_none, missing_fields
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

REQUIRED_RESERVATION_FIELDS = (
    "listing_id",
    "date",
    "time",
    "total_price",
    "service_id",
    "service_name",
    "employee_id",
)


def parse_reservation_date(value) -> Optional[datetime]:
    """Accept an ISO date or datetime and return an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            return None
    if parsed is None:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


class ReservationService(BaseService):
    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    def base_queryset(self) -> QuerySet:
        return Reservation.objects.select_related("customer", "listing", "listing__owner", "service", "employee")

    @BaseService.log_performance
    def create(self, user, data: dict) -> ServiceResult[Reservation]:
        missing = missing_fields(data, REQUIRED_RESERVATION_FIELDS)
        if missing:
            return service_err(ErrorCodes.INVALID_INPUT, f"Missing required fields: {', '.join(missing)}")

        date = parse_reservation_date(data["date"])
        if date is None:
            return service_err(ErrorCodes.INVALID_INPUT, "date must be an ISO date or datetime")

        try:
            total_price = int(data["total_price"])
        except (TypeError, ValueError):
            return service_err(ErrorCodes.INVALID_INPUT, "total_price must be an integer")
        if total_price < 0:
            return service_err(ErrorCodes.INVALID_INPUT, "total_price must not be negative")

        listing = get_or_none(Listing.objects.select_related("owner"), pk=data["listing_id"])
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")

        service = get_or_none(Service, pk=data["service_id"], listing=listing)
        if service is None:
            return service_err(ErrorCodes.NOT_FOUND, "Service not found for this listing")

        employee = get_or_none(Employee, pk=data["employee_id"], listing=listing)
        if employee is None:
            return service_err(ErrorCodes.NOT_FOUND, "Employee not found for this listing")

        try:
            reservation = Reservation.objects.create(
                customer=user,
                listing=listing,
                service=service,
                employee=employee,
                date=date,
                time=data["time"],
                note=data.get("note") or "",
                service_name=data["service_name"],
                total_price=total_price,
                status="pending",
            )
        except Exception as e:
            self.logger.error(f"Error creating reservation: {e}", exc_info=True)
            reservations_total.labels(event="create_failed").inc()
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        reservations_total.labels(event="created").inc()
        self.logger.info(f"Reservation {reservation.pk} created by {user.pk} at listing {listing.pk}")

        if listing.owner_id != user.pk:
            self.event_bus.publish(
                EventTypes.RESERVATION_CREATED,
                {
                    "reservation_id": str(reservation.pk),
                    "customer_id": str(user.pk),
                    "customer_name": user.name,
                    "owner_id": str(listing.owner_id),
                    "listing_title": listing.title,
                    "service_name": reservation.service_name,
                    "date": reservation.date.isoformat(),
                    "time": reservation.time,
                },
            )
        return service_ok(reservation)

    @BaseService.log_performance
    def list_for_provider(self, user) -> ServiceResult[List[Reservation]]:
        """Reservations made on any listing the user owns, newest first."""
        return self.wrap_exception(
            lambda: list(self.base_queryset().filter(listing__owner=user).order_by("-created_at"))
        )

    @BaseService.log_performance
    def list_trips(self, user) -> ServiceResult[List[Reservation]]:
        """The user's own reservations, newest first."""
        return self.wrap_exception(lambda: list(self.base_queryset().filter(customer=user).order_by("-created_at")))

    def locked_queryset(self) -> QuerySet:
        # service and employee are nullable joins, so only the reservation row is locked
        return self.base_queryset().select_for_update(of=("self",))

    @BaseService.log_performance
    @transaction.atomic
    def update_status(self, user, reservation_id, status: str) -> ServiceResult[Reservation]:
        if status not in {choice for choice, _ in Reservation.STATUS_CHOICES}:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown status '{status}'")

        reservation = get_or_none(self.locked_queryset(), pk=reservation_id)
        if reservation is None:
            return service_err(ErrorCodes.RESERVATION_NOT_FOUND, "Reservation not found")
        if reservation.listing.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the listing owner can update this reservation")
        if not reservation.can_transition_to(status):
            return service_err(
                ErrorCodes.INVALID_STATE, f"Cannot move a {reservation.status} reservation to {status}"
            )

        previous = reservation.status
        reservation.status = status
        update_fields = ["status", "updated_at"]
        if status == "completed":
            reservation.payment_status = "completed"
            update_fields.append("payment_status")
        reservation.save(update_fields=update_fields)

        reservations_total.labels(event=status).inc()
        self.logger.info(f"Reservation {reservation.pk} moved from {previous} to {status}")

        self.event_bus.publish(
            EventTypes.RESERVATION_STATUS_CHANGED,
            {
                "reservation_id": str(reservation.pk),
                "customer_id": str(reservation.customer_id),
                "owner_id": str(user.pk),
                "listing_title": reservation.listing.title,
                "service_name": reservation.service_name,
                "previous_status": previous,
                "status": status,
            },
        )
        return service_ok(reservation)

    @BaseService.log_performance
    @transaction.atomic
    def cancel(self, user, reservation_id) -> ServiceResult[dict]:
        reservation = get_or_none(self.locked_queryset(), pk=reservation_id)
        if reservation is None:
            return service_err(ErrorCodes.RESERVATION_NOT_FOUND, "Reservation not found")

        is_customer = reservation.customer_id == user.pk
        is_owner = reservation.listing.owner_id == user.pk
        if not is_customer and not is_owner:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot cancel this reservation")

        payload = {
            "reservation_id": str(reservation.pk),
            "customer_id": str(reservation.customer_id),
            "customer_name": reservation.customer.name,
            "owner_id": str(reservation.listing.owner_id),
            "listing_title": reservation.listing.title,
            "date": reservation.date.date().isoformat(),
            # The owner wins when someone books their own listing
            "cancelled_by": "business" if is_owner else "user",
        }

        reservation.delete()
        reservations_total.labels(event="cancelled").inc()
        self.logger.info(f"Reservation {payload['reservation_id']} cancelled by {payload['cancelled_by']}")

        self.event_bus.publish(EventTypes.RESERVATION_CANCELLED, payload)
        return service_ok({"message": "Reservation cancelled successfully"})
