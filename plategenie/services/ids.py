# plategenie/services/ids.py
from uuid import UUID


def normalize_id(value: object) -> str | None:
    """Canonical string form of a UUID id, or None when the value is not one."""
    if value is None:
        return None
    try:
        return str(UUID(str(value).strip()))
    except ValueError:
        return None
