from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.forms import FieldCollector, FormResult, parse_status
from ..common.validators import (
    normalize_cpf,
    require_email,
    require_letters,
    require_max_length,
    require_min_length,
    require_positive_int,
)
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import ActiveStatus, PlanTier
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class StudentForm:
    """Raw student fields as submitted by a client (create, edit or sign-up)."""

    full_name: Optional[str] = None
    cpf: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    status: Optional[str] = None
    plan_tier: Optional[str] = None
    instructor_id: Any = None
    payment_date: Optional[str] = None
    due_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StudentForm":
        return cls(**{k: data.get(k) for k in cls.__dataclass_fields__})


def parse_plan_tier(value: Any) -> PlanTier:
    try:
        return PlanTier(str(value).upper())
    except ValueError:
        raise ValidationError("Invalid plan tier")


def _optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value))


def validate_student_form(
    form: StudentForm,
    *,
    partial: bool = False,
    require_password: bool = False,
    require_instructor: bool = False,
) -> FormResult[dict]:
    """Pure validation shared by admin create/edit and public sign-up.

    With ``partial=True`` only the fields present on the form are checked and returned.
    """

    c = FieldCollector()
    out: dict = {}

    def wanted(value) -> bool:
        return not partial or value is not None

    if wanted(form.full_name):
        out["full_name"] = c.check(
            "full_name", lambda: require_max_length(require_letters(form.full_name, "Name"), "Name", NAME_MAX_LENGTH)
        )
    if wanted(form.cpf):
        out["cpf"] = c.check("cpf", lambda: normalize_cpf(form.cpf))
    if wanted(form.email):
        out["email"] = c.check("email", lambda: require_email(form.email))

    if form.password is not None or require_password:
        out["password"] = c.check(
            "password", lambda: require_min_length(form.password, "Password", MIN_PASSWORD_LENGTH)
        )

    if form.status is not None:
        out["status"] = c.check("status", lambda: parse_status(form.status))
    if form.plan_tier is not None:
        out["plan_tier"] = c.check("plan_tier", lambda: parse_plan_tier(form.plan_tier))

    if form.instructor_id is not None and str(form.instructor_id).strip():
        out["instructor_id"] = c.check("instructor_id", lambda: require_positive_int(form.instructor_id, "Instructor"))
    elif require_instructor and not partial:
        c.errors.setdefault("instructor_id", "Instructor is required")

    if form.payment_date is not None:
        out["payment_date"] = c.check("payment_date", lambda: _optional_date(form.payment_date))
    if form.due_date is not None:
        out["due_date"] = c.check("due_date", lambda: _optional_date(form.due_date))

    if out.get("payment_date") and out.get("due_date") and out["due_date"] < out["payment_date"]:
        c.errors.setdefault("due_date", "Due date cannot be before the payment date")

    return FormResult(value=None if c.errors else out, errors=c.errors)
