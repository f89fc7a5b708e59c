"""Helpers that turn operation arguments into a request parameter bag."""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from typing import Any

from .errors import InvalidArgument

MAX_LIMIT = 100
DEFAULT_LIMIT = 100


def clamp_limit(limit: Any) -> int:
    """
    Normalize a page size for list endpoints.

    Anything that is not an int in 1..MAX_LIMIT is replaced with DEFAULT_LIMIT
    instead of being rejected.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        return DEFAULT_LIMIT
    if limit < 1 or limit > MAX_LIMIT:
        return DEFAULT_LIMIT
    return limit


def join_values(value: Any) -> Any:
    """Join a list or tuple into the comma separated form the API expects. None members are dropped."""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value if v is not None)
    return value


def is_set(value: Any) -> bool:
    """Return True when an optional parameter carries something worth sending."""
    if value is None:
        return False
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, (list, tuple)):
        return any(v is not None for v in value)
    return True


def require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"{name} parameter may not be empty and must be a string")
    return value


def require_ids(name: str, value: Any) -> str | int:
    """
    Validate an identifier argument that may be a single id or a list of ids.

    Raises:
        InvalidArgument: If nothing usable was given.
    """
    if isinstance(value, bool) or not is_set(value):
        raise InvalidArgument(f"{name} parameter may not be empty")
    if not isinstance(value, (str, int, list, tuple)):
        raise InvalidArgument(f"{name} must be an id or a list of ids, got {type(value).__name__}")
    return join_values(value)


def optional_params(**values: Any) -> dict[str, Any]:
    """Build a bag from keyword arguments, keeping only the ones that are set."""
    return {key: value for key, value in values.items() if is_set(value)}


def encode_params(params: Mapping[str, Any]) -> str:
    """
    Form-encode a bag (space becomes '+', reserved characters are escaped).

    Keys whose value is None are left out.
    """
    bag = {key: join_values(value) for key, value in params.items() if value is not None}
    return urllib.parse.urlencode(bag)
