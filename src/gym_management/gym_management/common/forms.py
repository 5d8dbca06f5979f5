"""Form validation shared by create and edit flows.

Each entity exposes a typed form object and a pure ``validate_*`` function
returning a :class:`FormResult`. Callers either read ``result.value`` or turn
the field errors into a :class:`ValidationError` with ``result.unwrap()``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from ..core.enums import ActiveStatus
from ..core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class FormResult(Generic[T]):
    value: Optional[T] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        if self.errors:
            first = next(iter(self.errors.values()))
            raise ValidationError(first, field_errors=self.errors)
        return self.value


class FieldCollector:
    """Runs field checks and collects the first error per field."""

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def check(self, field_name: str, fn: Callable[[], Any], default: Any = None) -> Any:
        try:
            return fn()
        except ValidationError as e:
            self.errors.setdefault(field_name, str(e))
            return default


def parse_status(value: Any) -> ActiveStatus:
    try:
        return ActiveStatus(str(value).upper())
    except ValueError:
        raise ValidationError("Invalid status (use ACTIVE or INACTIVE)")
