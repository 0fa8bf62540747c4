from bookings.domain.models import Reservation


__all__ = ["Reservation"]
