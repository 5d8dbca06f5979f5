from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.gym_management.gym_management.accounts.model import Account
from src.gym_management.gym_management.accounts.service import AuthService
from src.gym_management.gym_management.core.enums import Role
from src.gym_management.gym_management.core.exceptions import AuthenticationError


@pytest.fixture
def service(accounts_repo):
    accounts_repo.accounts.extend(
        [
            Account(Role.ADMIN, 1, "Administrator", "admin@gym.local", generate_password_hash("admin1234")),
            Account(Role.INSTRUCTOR, 4, "Carla", "carla@gym.local", generate_password_hash("carla1234")),
            Account(Role.STUDENT, 9, "Ana", "ana@gym.local", generate_password_hash("ana12345"), is_active=False),
            Account(Role.STUDENT, 10, "Bia", "bia@gym.local", "not-a-hash"),
        ]
    )
    return AuthService(accounts_repo)


def test_authenticate_returns_session_user(service):
    user = service.authenticate("  Carla@Gym.Local ", "carla1234")
    assert (user.role, user.account_id, user.full_name) == (Role.INSTRUCTOR, 4, "Carla")


@pytest.mark.parametrize(
    "email,password",
    [
        ("admin@gym.local", "wrong"),
        ("nobody@gym.local", "admin1234"),
        ("", "admin1234"),
        ("ana@gym.local", "ana12345"),
        ("bia@gym.local", "whatever"),
    ],
)
def test_authenticate_failures(service, email, password):
    with pytest.raises(AuthenticationError):
        service.authenticate(email, password)
