from .signup_serializers import (
    DemoRequestInputSerializer,
    SignupCountSerializer,
    SignupResponseSerializer,
    WaitlistSignupInputSerializer,
)


__all__ = [
    "WaitlistSignupInputSerializer",
    "DemoRequestInputSerializer",
    "SignupResponseSerializer",
    "SignupCountSerializer",
]
