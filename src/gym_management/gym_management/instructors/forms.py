from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.forms import FieldCollector, FormResult, parse_status
from ..common.validators import (
    normalize_cpf,
    require_email,
    require_letters,
    require_max_length,
    require_min_length,
)
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import ActiveStatus


@dataclass(frozen=True)
class InstructorForm:
    full_name: Optional[str] = None
    cpf: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "InstructorForm":
        return cls(
            full_name=data.get("full_name"),
            cpf=data.get("cpf"),
            email=data.get("email"),
            password=data.get("password"),
            status=data.get("status"),
        )


def validate_instructor_form(form: InstructorForm, *, partial: bool = False) -> FormResult[dict]:
    """Validate a create form, or with ``partial=True`` only the fields that were sent."""

    c = FieldCollector()
    out: dict = {}

    if not partial or form.full_name is not None:
        out["full_name"] = c.check(
            "full_name", lambda: require_max_length(require_letters(form.full_name, "Name"), "Name", NAME_MAX_LENGTH)
        )
    if not partial or form.cpf is not None:
        out["cpf"] = c.check("cpf", lambda: normalize_cpf(form.cpf))
    if not partial or form.email is not None:
        out["email"] = c.check("email", lambda: require_email(form.email))
    if not partial or form.password is not None:
        out["password"] = c.check(
            "password", lambda: require_min_length(form.password, "Password", MIN_PASSWORD_LENGTH)
        )
    if form.status is not None:
        out["status"] = c.check("status", lambda: parse_status(form.status))
    elif not partial:
        out["status"] = ActiveStatus.ACTIVE

    return FormResult(value=None if c.errors else out, errors=c.errors)
