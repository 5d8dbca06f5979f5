from __future__ import annotations

import dataclasses
from datetime import date
from typing import Optional

import pytest

from src.gym_management.gym_management.accounts.model import Account
from src.gym_management.gym_management.attendance.model import AttendanceRecord, RosterEntry, StudentMonthCounts
from src.gym_management.gym_management.common.datetime_utils import membership_standing
from src.gym_management.gym_management.core.enums import ActiveStatus, AttendanceStatus, PlanTier
from src.gym_management.gym_management.core.exceptions import ConflictError
from src.gym_management.gym_management.exercises.model import Exercise
from src.gym_management.gym_management.instructors.model import Instructor
from src.gym_management.gym_management.reports.model import StudentTotals
from src.gym_management.gym_management.students.model import Student, StudentRow
from src.gym_management.gym_management.workouts.model import WorkoutExercise, WorkoutExerciseView, WorkoutPlan
from src.gym_management.gym_management.workouts.ordering import duplicate_exercise_conflict, position_conflict


class InMemoryInstructors:
    def __init__(self):
        self.rows: dict[int, Instructor] = {}
        self._next_id = 1

    def get_by_id(self, instructor_id):
        return self.rows.get(int(instructor_id))

    def first_active(self):
        active = [i for i in self.rows.values() if i.is_active]
        return min(active, key=lambda i: i.instructor_id, default=None)

    def search(self, q=None):
        q = (q or "").lower()
        return [i for i in self.rows.values() if q in i.full_name.lower() or q in i.email]

    def create(self, *, full_name, cpf, email, password_hash, status):
        for i in self.rows.values():
            if i.cpf == cpf:
                raise ConflictError("CPF already registered", field="cpf")
            if i.email == email:
                raise ConflictError("E-mail already registered", field="email")
        iid = self._next_id
        self._next_id += 1
        self.rows[iid] = Instructor(
            instructor_id=iid, full_name=full_name, cpf=cpf, email=email, status=status, password_hash=password_hash
        )
        return iid

    def update(self, instructor_id, **fields):
        current = self.rows.get(int(instructor_id))
        if not current:
            return False
        self.rows[current.instructor_id] = dataclasses.replace(current, **fields)
        return True

    def delete(self, instructor_id):
        return self.rows.pop(int(instructor_id), None) is not None

    def count(self):
        return len(self.rows)


class InMemoryStudents:
    def __init__(self, instructors: InMemoryInstructors):
        self.rows: dict[int, Student] = {}
        self._instructors = instructors
        self._next_id = 1

    def _row(self, s: Student) -> StudentRow:
        instructor = self._instructors.get_by_id(s.instructor_id) if s.instructor_id else None
        return StudentRow(
            student_id=s.student_id,
            instructor_id=s.instructor_id,
            instructor_name=instructor.full_name if instructor else None,
            full_name=s.full_name,
            email=s.email,
            cpf=s.cpf,
            status=s.status,
            plan_tier=s.plan_tier,
            payment_date=s.payment_date,
            due_date=s.due_date,
            standing=membership_standing(s.due_date),
        )

    def get_by_id(self, student_id):
        return self.rows.get(int(student_id))

    def search(self, q=None):
        q = (q or "").lower()
        found = [s for s in self.rows.values() if q in s.full_name.lower() or q in s.email or q in s.cpf]
        return [self._row(s) for s in sorted(found, key=lambda s: s.full_name)]

    def list_for_instructor(self, instructor_id, q=None):
        return [r for r in self.search(q) if r.instructor_id == int(instructor_id)]

    def create(
        self,
        *,
        instructor_id,
        full_name,
        cpf,
        email,
        password_hash,
        status,
        plan_tier,
        payment_date=None,
        due_date=None,
    ):
        for s in self.rows.values():
            if s.cpf == cpf:
                raise ConflictError("CPF already registered", field="cpf")
            if s.email == email:
                raise ConflictError("E-mail already registered", field="email")
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = Student(
            student_id=sid,
            instructor_id=instructor_id,
            full_name=full_name,
            cpf=cpf,
            email=email,
            status=status,
            plan_tier=plan_tier,
            payment_date=payment_date,
            due_date=due_date,
            password_hash=password_hash,
        )
        return sid

    def update(self, student_id, **fields):
        current = self.rows.get(int(student_id))
        if not current:
            return False
        self.rows[current.student_id] = dataclasses.replace(current, **fields)
        return True

    def set_status_for_instructor(self, *, student_id, instructor_id, status):
        current = self.rows.get(int(student_id))
        if not current or current.instructor_id != int(instructor_id):
            return False
        self.rows[current.student_id] = dataclasses.replace(current, status=status)
        return True

    def set_active_plan(self, *, student_id, plan_id):
        return self.update(student_id, active_plan_id=plan_id)

    def delete(self, student_id):
        return self.rows.pop(int(student_id), None) is not None

    def count(self):
        return len(self.rows)


class InMemoryExercises:
    def __init__(self):
        self.rows: dict[int, Exercise] = {}
        self._next_id = 1

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.name)

    def get_by_id(self, exercise_id):
        return self.rows.get(int(exercise_id))

    def create(self, *, name, description=None, muscle_group=None, equipment=None, image_url=None):
        eid = self._next_id
        self._next_id += 1
        self.rows[eid] = Exercise(
            exercise_id=eid,
            name=name,
            description=description,
            muscle_group=muscle_group,
            equipment=equipment,
            image_url=image_url,
        )
        return eid


class InMemoryWorkouts:
    """Mirrors the two unique constraints of workout_exercises."""

    def __init__(self, exercises: InMemoryExercises):
        self._exercises = exercises
        self.plans: dict[int, WorkoutPlan] = {}
        self.items: dict[tuple[int, int], WorkoutExercise] = {}
        self._next_id = 1

    def _insert(self, item: WorkoutExercise) -> None:
        if (item.plan_id, item.exercise_id) in self.items:
            raise duplicate_exercise_conflict(item.exercise_id)
        if self.position_taken(plan_id=item.plan_id, position=item.position):
            raise position_conflict(item.position)
        self.items[(item.plan_id, item.exercise_id)] = item

    def create_plan(self, *, student_id, instructor_id, name, notes, exercises=()):
        pid = self._next_id
        self._next_id += 1
        self.plans[pid] = WorkoutPlan(
            plan_id=pid, student_id=student_id, instructor_id=instructor_id, name=name, notes=notes
        )
        for item in exercises:
            self._insert(dataclasses.replace(item, plan_id=pid))
        return pid

    def get_plan(self, plan_id):
        return self.plans.get(int(plan_id))

    def list_plans(self, *, student_id=None, instructor_id=None):
        return [
            p
            for p in self.plans.values()
            if (student_id is None or p.student_id == student_id)
            and (instructor_id is None or p.instructor_id == instructor_id)
        ]

    def update_plan(self, plan_id, *, name, notes):
        plan = self.plans.get(int(plan_id))
        if not plan:
            return False
        self.plans[plan.plan_id] = dataclasses.replace(plan, name=name, notes=notes)
        return True

    def delete_plan(self, plan_id):
        for key in [k for k in self.items if k[0] == int(plan_id)]:
            del self.items[key]
        return self.plans.pop(int(plan_id), None) is not None

    def count_plans(self):
        return len(self.plans)

    def _view(self, item: WorkoutExercise) -> WorkoutExerciseView:
        exercise = self._exercises.get_by_id(item.exercise_id)
        return WorkoutExerciseView(
            plan_id=item.plan_id,
            exercise_id=item.exercise_id,
            position=item.position,
            sets=item.sets,
            reps=item.reps,
            load_kg=item.load_kg,
            rest_seconds=item.rest_seconds,
            exercise_name=exercise.name,
            muscle_group=exercise.muscle_group,
        )

    def list_exercises(self, plan_id):
        views = [self._view(i) for (pid, _), i in self.items.items() if pid == int(plan_id)]
        return sorted(views, key=lambda v: (v.position, v.exercise_name))

    def get_exercise(self, plan_id, exercise_id):
        item = self.items.get((int(plan_id), int(exercise_id)))
        return self._view(item) if item else None

    def position_taken(self, *, plan_id, position, exclude_exercise_id=None):
        return any(
            i.plan_id == plan_id and i.position == position and i.exercise_id != exclude_exercise_id
            for i in self.items.values()
        )

    def attach_exercise(self, item):
        self._insert(item)

    def update_exercise(self, item):
        key = (item.plan_id, item.exercise_id)
        if key not in self.items:
            return False
        if self.position_taken(plan_id=item.plan_id, position=item.position, exclude_exercise_id=item.exercise_id):
            raise position_conflict(item.position)
        self.items[key] = item
        return True

    def detach_exercise(self, plan_id, exercise_id):
        return self.items.pop((int(plan_id), int(exercise_id)), None) is not None


class InMemoryAttendance:
    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self._next_id = 1

    def upsert(self, *, student_id, attendance_date, status, note=None):
        existing = self.rows.get((student_id, attendance_date))
        if existing:
            aid = existing.attendance_id
        else:
            aid = self._next_id
            self._next_id += 1
        self.rows[(student_id, attendance_date)] = AttendanceRecord(
            attendance_id=aid, student_id=student_id, attendance_date=attendance_date, status=status, note=note
        )
        return aid

    def get_for_student_and_date(self, student_id, attendance_date):
        return self.rows.get((int(student_id), attendance_date))

    def list_for_student_between(self, student_id, start, end):
        found = [r for (sid, d), r in self.rows.items() if sid == int(student_id) and start <= d <= end]
        return sorted(found, key=lambda r: r.attendance_date)

    def roster_for_instructor(self, instructor_id, attendance_date):
        out = []
        for row in self._students.list_for_instructor(instructor_id):
            mark = self.rows.get((row.student_id, attendance_date))
            out.append(
                RosterEntry(
                    student_id=row.student_id,
                    full_name=row.full_name,
                    attendance_id=mark.attendance_id if mark else None,
                    status=mark.status if mark else None,
                    note=mark.note if mark else None,
                )
            )
        return out

    def month_counts(self, start, end):
        out = []
        for s in sorted(self._students.rows.values(), key=lambda s: s.full_name):
            marks = [r for (sid, d), r in self.rows.items() if sid == s.student_id and start <= d <= end]
            out.append(
                StudentMonthCounts(
                    student_id=s.student_id,
                    full_name=s.full_name,
                    presences=sum(1 for r in marks if r.status == AttendanceStatus.PRESENT),
                    absences=sum(1 for r in marks if r.status == AttendanceStatus.ABSENT),
                )
            )
        return out


class InMemoryReports:
    def __init__(self, students: InMemoryStudents):
        self._students = students

    def student_totals(self):
        rows = list(self._students.rows.values())
        active = sum(1 for s in rows if s.status == ActiveStatus.ACTIVE)
        return StudentTotals(total=len(rows), active=active, inactive=len(rows) - active)

    def active_counts_by_tier(self):
        counts: dict[PlanTier, int] = {}
        for s in self._students.rows.values():
            if s.status == ActiveStatus.ACTIVE:
                counts[s.plan_tier] = counts.get(s.plan_tier, 0) + 1
        return counts


class InMemoryAccounts:
    def __init__(self, accounts: Optional[list[Account]] = None):
        self.accounts = list(accounts or [])

    def find_by_email(self, email):
        return next((a for a in self.accounts if a.email == email), None)


@pytest.fixture
def instructors_repo():
    return InMemoryInstructors()


@pytest.fixture
def students_repo(instructors_repo):
    return InMemoryStudents(instructors_repo)


@pytest.fixture
def exercises_repo():
    return InMemoryExercises()


@pytest.fixture
def workouts_repo(exercises_repo):
    return InMemoryWorkouts(exercises_repo)


@pytest.fixture
def attendance_store(students_repo):
    return InMemoryAttendance(students_repo)


@pytest.fixture
def reports_repo(students_repo):
    return InMemoryReports(students_repo)


@pytest.fixture
def accounts_repo():
    return InMemoryAccounts()


@pytest.fixture
def instructor(instructors_repo):
    iid = instructors_repo.create(
        full_name="Carla Souza",
        cpf="11122233344",
        email="carla@gym.local",
        password_hash="x",
        status=ActiveStatus.ACTIVE,
    )
    return instructors_repo.get_by_id(iid)


@pytest.fixture
def add_student(students_repo, instructor):
    counter = iter(range(1, 1000))

    def _add(full_name="Ana Lima", *, status=ActiveStatus.ACTIVE, tier=PlanTier.MONTHLY, instructor_id=None, due_date=None):
        n = next(counter)
        sid = students_repo.create(
            instructor_id=instructor_id or instructor.instructor_id,
            full_name=full_name,
            cpf=f"{n:011d}",
            email=f"student{n}@gym.local",
            password_hash=None,
            status=status,
            plan_tier=tier,
            due_date=due_date,
        )
        return students_repo.get_by_id(sid)

    return _add
