from __future__ import annotations

from datetime import date

import pytest

from src.gym_management.gym_management.common.datetime_utils import (
    membership_standing,
    month_bounds,
    next_month,
    parse_iso_date,
    previous_month,
    shift_month,
)
from src.gym_management.gym_management.common.forms import FieldCollector, FormResult, parse_status
from src.gym_management.gym_management.common.serialization import to_primitive
from src.gym_management.gym_management.common.validators import (
    normalize_cpf,
    optional_non_negative_number,
    require_email,
    require_max_length,
    require_min_length,
    require_positive_int,
)
from src.gym_management.gym_management.core.enums import ActiveStatus, MembershipStanding, PlanTier
from src.gym_management.gym_management.core.exceptions import ValidationError
from src.gym_management.gym_management.reports.model import TierRevenue


def test_month_rolls_over_year_boundaries():
    assert next_month(2024, 12) == (2025, 1)
    assert previous_month(2024, 1) == (2023, 12)
    assert shift_month(2024, 11, 14) == (2026, 1)
    assert shift_month(2024, 3, -15) == (2022, 12)


def test_month_bounds_are_inclusive_and_leap_aware():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


def test_month_bounds_rejects_bad_month():
    with pytest.raises(ValidationError):
        month_bounds(2024, 13)


def test_parse_iso_date():
    assert parse_iso_date(" 2024-05-06 ") == date(2024, 5, 6)
    with pytest.raises(ValidationError):
        parse_iso_date("06/05/2024")


def test_membership_standing():
    ref = date(2024, 5, 10)
    assert membership_standing(None, ref) == MembershipStanding.NO_DATE
    assert membership_standing(date(2024, 5, 10), ref) == MembershipStanding.CURRENT
    assert membership_standing(date(2024, 5, 9), ref) == MembershipStanding.OVERDUE


@pytest.mark.parametrize("value", [0, -1, "abc", 1.5, True, None, "", 2**31, "99999999999"])
def test_require_positive_int_rejects(value):
    with pytest.raises(ValidationError):
        require_positive_int(value, "Position")


def test_require_positive_int_accepts_integral_values():
    assert require_positive_int("3", "Position") == 3
    assert require_positive_int(2.0, "Position") == 2


def test_optional_number():
    assert optional_non_negative_number("", "Sets") is None
    assert optional_non_negative_number("12.5", "Load") == 12.5
    assert optional_non_negative_number("4", "Sets", integer=True) == 4
    with pytest.raises(ValidationError):
        optional_non_negative_number(-1, "Load")
    with pytest.raises(ValidationError):
        optional_non_negative_number(2.5, "Sets", integer=True)


@pytest.mark.parametrize("value", ["nan", "inf", float("-inf"), 10**12, "1e400"])
def test_optional_number_rejects_non_finite_and_oversized(value):
    with pytest.raises(ValidationError):
        optional_non_negative_number(value, "Reps", integer=True)


def test_optional_number_honours_maximum():
    assert optional_non_negative_number("9999.99", "Load", maximum=9999.99) == 9999.99
    with pytest.raises(ValidationError):
        optional_non_negative_number("10000", "Load", maximum=9999.99)


def test_cpf_and_email_normalization():
    assert normalize_cpf("123.456.789-09") == "12345678909"
    with pytest.raises(ValidationError):
        normalize_cpf("1234")
    assert require_email(" Ana@Gym.COM ") == "ana@gym.com"
    with pytest.raises(ValidationError):
        require_email("ana.gym.com")
    with pytest.raises(ValidationError):
        require_email("a" * 150 + "@gym.com.br.xx")


def test_password_length_ignores_surrounding_blanks():
    with pytest.raises(ValidationError):
        require_min_length("  1234567  ", "Password", 8)


def test_max_length_allows_none_and_limit():
    assert require_max_length(None, "Note", 3) is None
    assert require_max_length("abc", "Note", 3) == "abc"
    with pytest.raises(ValidationError):
        require_max_length("abcd", "Note", 3)


def test_parse_status_is_case_insensitive():
    assert parse_status("inactive") == ActiveStatus.INACTIVE
    with pytest.raises(ValidationError):
        parse_status("paused")


def test_form_result_unwrap_raises_with_field_errors():
    c = FieldCollector()
    c.check("cpf", lambda: normalize_cpf("12"))
    c.check("email", lambda: require_email("ok@gym.com"))
    result = FormResult(value=None, errors=c.errors)

    assert not result.ok
    with pytest.raises(ValidationError) as exc:
        result.unwrap()
    assert set(exc.value.field_errors) == {"cpf"}


def test_to_primitive_converts_enums_and_dates():
    row = TierRevenue(tier=PlanTier.ANNUAL, active_students=5, monthly_price=80, revenue=400)
    assert to_primitive([row]) == [{"tier": "ANNUAL", "active_students": 5, "monthly_price": 80, "revenue": 400}]
    assert to_primitive({"day": date(2024, 1, 2)}) == {"day": "2024-01-02"}
