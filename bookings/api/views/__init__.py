from .reservation_views import ReservationViewSet


__all__ = ["ReservationViewSet"]
