"""
WaitlistService - pre-launch email capture and demo requests.

Both flows are upserts keyed on the lower-cased email: signing up again
reactivates the existing row and refreshes its source instead of failing.
"""

import re

from django.db import IntegrityError

from marketplace.infra.observability.metrics import waitlist_signups_total
from utils.logging_utils import mask_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from waitlist.domain.models import DemoRequest, WaitlistEntry

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
DEFAULT_SOURCE = "coming_soon"


def _validate_email(email) -> str:
    """Return an error message for a bad email, or an empty string."""
    if not email or not isinstance(email, str):
        return "Email is required"
    if not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"
    return ""


class WaitlistService(BaseService):
    @BaseService.log_performance
    def join(self, email, source: str = None) -> ServiceResult[dict]:
        """
        Add ``email`` to the waitlist or reactivate it.

        Returns:
            ServiceResult with {"message", "data": {"id", "email"}, "created"}
        """
        error = _validate_email(email)
        if error:
            waitlist_signups_total.labels(kind="waitlist", outcome="invalid").inc()
            return service_err(ErrorCodes.INVALID_INPUT, error)

        email = email.lower()
        try:
            entry, created = WaitlistEntry.objects.update_or_create(
                email=email, defaults={"source": source or DEFAULT_SOURCE, "is_active": True}
            )
        except IntegrityError:
            self.logger.warning(f"Waitlist race on {mask_value(email)}")
            waitlist_signups_total.labels(kind="waitlist", outcome="conflict").inc()
            return service_err(ErrorCodes.CONFLICT, "Email already exists in waitlist")
        except Exception as e:
            self.logger.error(f"Waitlist signup error for {mask_value(email)}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to add email to waitlist")

        waitlist_signups_total.labels(kind="waitlist", outcome="created" if created else "updated").inc()
        self.logger.info(f"Waitlist {'signup' if created else 'update'} for {mask_value(email)}")
        return service_ok(
            {
                "message": "Email added to waitlist successfully" if created else "Email updated successfully",
                "data": {"id": str(entry.pk), "email": entry.email},
                "created": created,
            }
        )

    def count(self) -> ServiceResult[int]:
        return service_ok(WaitlistEntry.objects.filter(is_active=True).count())

    @BaseService.log_performance
    def request_demo(self, name, email, source: str = None) -> ServiceResult[dict]:
        """
        Record a demo request and queue the confirmation email.

        The email is queued after the row is written; a broker failure is
        logged and does not fail the request.
        """
        if not name or not isinstance(name, str) or not name.strip():
            waitlist_signups_total.labels(kind="demo", outcome="invalid").inc()
            return service_err(ErrorCodes.INVALID_INPUT, "Name is required")

        error = _validate_email(email)
        if error:
            waitlist_signups_total.labels(kind="demo", outcome="invalid").inc()
            return service_err(ErrorCodes.INVALID_INPUT, error)

        email = email.lower()
        name = name.strip()
        try:
            demo_request, created = DemoRequest.objects.update_or_create(
                email=email, defaults={"name": name, "source": source or DEFAULT_SOURCE, "is_active": True}
            )
        except IntegrityError:
            self.logger.warning(f"Demo request race on {mask_value(email)}")
            waitlist_signups_total.labels(kind="demo", outcome="conflict").inc()
            return service_err(ErrorCodes.CONFLICT, "Demo request already exists for this email")
        except Exception as e:
            self.logger.error(f"Demo request error for {mask_value(email)}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to submit demo request")

        waitlist_signups_total.labels(kind="demo", outcome="created" if created else "updated").inc()
        self._queue_confirmation(demo_request)

        return service_ok(
            {
                "message": "Demo request submitted successfully" if created else "Demo request updated successfully",
                "data": {"id": str(demo_request.pk), "email": demo_request.email},
                "created": created,
            }
        )

    def demo_count(self) -> ServiceResult[int]:
        return service_ok(DemoRequest.objects.filter(is_active=True).count())

    def _queue_confirmation(self, demo_request: DemoRequest):
        from waitlist.tasks import send_demo_request_confirmation

        try:
            send_demo_request_confirmation.delay(str(demo_request.pk))
            self.logger.debug(f"Queued demo confirmation for {mask_value(demo_request.email)}")
        except Exception as e:
            self.logger.warning(f"Could not queue demo confirmation for {demo_request.pk}: {e}")
