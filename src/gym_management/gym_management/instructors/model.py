from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ActiveStatus


@dataclass(frozen=True)
class Instructor:
    """Domain entity: Instructor. Owns zero or more students."""

    instructor_id: int
    full_name: str
    cpf: str
    email: str
    status: ActiveStatus = ActiveStatus.ACTIVE
    password_hash: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == ActiveStatus.ACTIVE
