from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError
from .model import SessionUser
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an admin, instructor or student (login)."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthenticationError("Enter e-mail and password")

        account = self._accounts.find_by_email(email)
        if not account or not account.is_active or not account.password_hash:
            raise AuthenticationError("Invalid e-mail or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("failed login for %s", email)
            raise AuthenticationError("Invalid e-mail or password")

        return SessionUser(
            role=account.role,
            account_id=account.account_id,
            full_name=account.full_name,
            email=account.email,
        )
