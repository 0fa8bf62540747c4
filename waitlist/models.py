from waitlist.domain.models import DemoRequest, WaitlistEntry


__all__ = ["WaitlistEntry", "DemoRequest"]
