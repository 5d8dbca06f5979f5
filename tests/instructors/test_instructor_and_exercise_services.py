from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.gym_management.gym_management.core.enums import ActiveStatus
from src.gym_management.gym_management.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.gym_management.gym_management.exercises.service import ExerciseService
from src.gym_management.gym_management.instructors.forms import InstructorForm
from src.gym_management.gym_management.instructors.service import InstructorService


@pytest.fixture
def service(instructors_repo):
    return InstructorService(instructors_repo)


def _form(**overrides):
    data = {"full_name": "Bruno Alves", "cpf": "987.654.321-00", "email": "Bruno@Gym.com", "password": "treino123"}
    data.update(overrides)
    return InstructorForm.from_dict(data)


def test_create_defaults_to_active(service):
    instructor = service.create(_form())
    assert instructor.status == ActiveStatus.ACTIVE
    assert instructor.email == "bruno@gym.com"
    assert check_password_hash(instructor.password_hash, "treino123")


def test_create_requires_every_field(service):
    with pytest.raises(ValidationError) as exc:
        service.create(InstructorForm())
    assert set(exc.value.field_errors) == {"full_name", "cpf", "email", "password"}


def test_duplicate_email_is_conflict(service):
    service.create(_form())
    with pytest.raises(ConflictError) as exc:
        service.create(_form(cpf="11111111111", email="bruno@gym.com"))
    assert exc.value.field == "email"


def test_partial_update_and_first_active(service):
    first = service.create(_form())
    second = service.create(_form(cpf="22222222222", email="c@gym.com", full_name="Carla"))

    service.update(first.instructor_id, InstructorForm(status="inactive"))

    assert service.get(first.instructor_id).full_name == "Bruno Alves"
    assert service.first_active().instructor_id == second.instructor_id

    with pytest.raises(ValidationError):
        service.update(first.instructor_id, InstructorForm(password="short"))
    with pytest.raises(NotFoundError):
        service.update(404, InstructorForm(full_name="X"))


def test_delete(service):
    instructor = service.create(_form())
    service.delete(instructor.instructor_id)
    with pytest.raises(NotFoundError):
        service.delete(instructor.instructor_id)


def test_exercise_catalog(exercises_repo):
    catalog = ExerciseService(exercises_repo)

    created = catalog.create(name="  Deadlift ", muscle_group=" ", equipment="Barbell")

    assert (created.name, created.muscle_group, created.equipment) == ("Deadlift", None, "Barbell")
    assert [e.name for e in catalog.list_all()] == ["Deadlift"]
    with pytest.raises(ValidationError):
        catalog.create(name="")
    with pytest.raises(ValidationError):
        catalog.create(name="Deadlift", muscle_group="m" * 61)
    with pytest.raises(NotFoundError):
        catalog.get(99)
