from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

_HIDDEN_FIELDS = {"password_hash"}


def to_primitive(value: Any) -> Any:
    """Turn domain objects into JSON-ready structures (ISO dates, enum values)."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_primitive(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in _HIDDEN_FIELDS
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {str(k.value if isinstance(k, Enum) else k): to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_primitive(v) for v in value]
    return value
