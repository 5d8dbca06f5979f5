from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Login identity resolved from the admins, instructors or students table."""

    role: Role
    account_id: int
    full_name: str
    email: str
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    role: Role
    account_id: int
    full_name: str
    email: str
