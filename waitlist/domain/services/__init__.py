from .waitlist_service import WaitlistService


__all__ = ["WaitlistService"]
