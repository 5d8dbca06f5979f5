from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.constants import CPF_DIGITS, EMAIL_MAX_LENGTH, INT_MAX
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
_LETTER_RE = re.compile(r"[^\W\d_]")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must have at least {min_len} characters")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must have at most {max_len} characters")
    return value


def require_letters(value: Optional[str], field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _LETTER_RE.search(value):
        raise ValidationError(f"{field_name} must contain letters")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    """Accept ints and integral strings; reject bools, floats with a fraction, zero, negatives and overflow."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a positive integer")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError(f"{field_name} must be a positive integer")
        value = int(value)
    try:
        number = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError:
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    if number > INT_MAX:
        raise ValidationError(f"{field_name} is too large")
    return number


def optional_non_negative_number(value: Any, field_name: str, *, integer: bool = False, maximum: float = INT_MAX):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if number > maximum:
        raise ValidationError(f"{field_name} cannot be greater than {maximum}")
    if integer:
        if not number.is_integer():
            raise ValidationError(f"{field_name} must be a whole number")
        return int(number)
    return number


def normalize_cpf(value: Optional[str]) -> str:
    """Strip punctuation and require exactly 11 digits."""
    digits = re.sub(r"\D", "", value or "")
    if not digits:
        raise ValidationError("CPF is required")
    if len(digits) != CPF_DIGITS:
        raise ValidationError(f"CPF must have {CPF_DIGITS} digits")
    return digits


def require_email(value: Optional[str]) -> str:
    value = require_non_empty(value, "E-mail")
    require_max_length(value, "E-mail", EMAIL_MAX_LENGTH)
    if not _EMAIL_RE.match(value):
        raise ValidationError("Invalid e-mail")
    return value.lower()
