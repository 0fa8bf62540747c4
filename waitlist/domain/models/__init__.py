from .signup import DemoRequest, WaitlistEntry


__all__ = ["WaitlistEntry", "DemoRequest"]
