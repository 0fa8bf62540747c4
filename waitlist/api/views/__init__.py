from .signup_views import DemoRequestView, WaitlistView


__all__ = ["WaitlistView", "DemoRequestView"]
