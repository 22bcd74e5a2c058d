from datetime import datetime
from typing import Any, Optional


def dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def load_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def drop_none(document: dict[str, Any]) -> dict[str, Any]:
    """Omitted optional fields are absent from stored documents, not null."""
    return {k: v for k, v in document.items() if v is not None}


def merge_fields(body: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    """Apply a patch; a None value removes the field instead of storing null."""
    merged = dict(body)
    for key, value in fields.items():
        if key == 'id':
            continue
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged
