PROVIDER_TYPES = ("individual", "team")


def is_provider(user) -> bool:
    """True for accounts that run a listing or shop (individual or team)."""
    return getattr(user, "user_type", None) in PROVIDER_TYPES
