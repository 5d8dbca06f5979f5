from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    def find_by_email(self, email: str) -> Optional[Account]:
        """First match among admins, instructors and students, in that order."""

        raise NotImplementedError
