import json

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db.models import Model, QuerySet


def get_or_none(source, **lookup):
    """Fetch one row or return None.

    Malformed primary keys (a non-UUID string for a UUID column) are treated
    as a miss rather than an error.
    """
    queryset = source._default_manager.all() if isinstance(source, type) and issubclass(source, Model) else source
    if not isinstance(queryset, QuerySet):
        queryset = queryset.all()
    try:
        return queryset.get(**lookup)
    except (ObjectDoesNotExist, ValidationError, ValueError, TypeError):
        return None


def parse_bool(value, default=None):
    """Interpret query-string flags such as ``true``, ``1``, ``false``."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def parse_json_value(value, default=None):
    """Accept either decoded JSON or a JSON string (multipart form submissions).

    Raises ValueError when a string is not valid JSON.
    """
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


def missing_fields(data, required) -> list:
    """Names of required keys that are absent, None or an empty string."""
    return [name for name in required if data.get(name) in (None, "")]
