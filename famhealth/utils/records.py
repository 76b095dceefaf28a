from typing import Any


def record_value(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from a dict, a pydantic model or an ORM row.

    ``None`` values fall back to ``default`` so callers can treat missing and
    null columns alike.
    """
    if obj is None:
        return default
    if isinstance(obj, dict):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    return default if value is None else value
