from accounts.domain.models import CustomUser


__all__ = ["CustomUser"]
