from __future__ import annotations

from typing import Any, Iterable

from dev_profiles.exceptions import RequestValidationFailed


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def field_error(param: str, msg: str, value: Any = None, location: str = "body") -> dict:
    return {"value": value if value is not None else "", "msg": msg, "param": param, "location": location}


def require_fields(data: dict, checks: Iterable[tuple[str, str]]) -> None:
    """Raise RequestValidationFailed listing every (param, message) whose value is empty."""
    errors = [
        field_error(param, msg, data.get(param))
        for param, msg in checks
        if _is_empty(data.get(param))
    ]
    if errors:
        raise RequestValidationFailed(errors)
