from __future__ import annotations

from dataclasses import dataclass

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.service import AuthService
from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceStore
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .exercises.mysql_exercise_repository import MySQLExerciseRepository
from .exercises.service import ExerciseService
from .instructors.mysql_instructor_repository import MySQLInstructorRepository
from .instructors.service import InstructorService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.pricing.standard_price_table import StandardPriceTable
from .reports.service import BillingReportGenerator, DashboardService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .workouts.mysql_workout_repository import MySQLWorkoutRepository
from .workouts.ordering import WorkoutExerciseOrderingRule
from .workouts.service import WorkoutService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    student_service: StudentService
    instructor_service: InstructorService
    exercise_service: ExerciseService
    workout_service: WorkoutService
    attendance_service: AttendanceService
    billing_report: BillingReportGenerator
    dashboard_service: DashboardService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    accounts_repo = MySQLAccountRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    instructors_repo = MySQLInstructorRepository(conn)
    exercises_repo = MySQLExerciseRepository(conn)
    workouts_repo = MySQLWorkoutRepository(conn)
    attendance_store = MySQLAttendanceStore(conn)
    reports_repo = MySQLReportRepository(conn)

    return Container(
        auth_service=AuthService(accounts_repo),
        student_service=StudentService(students_repo, instructors_repo),
        instructor_service=InstructorService(instructors_repo),
        exercise_service=ExerciseService(exercises_repo),
        workout_service=WorkoutService(
            workouts_repo,
            students_repo,
            instructors_repo,
            exercises_repo,
            ordering=WorkoutExerciseOrderingRule(workouts_repo),
        ),
        attendance_service=AttendanceService(
            attendance_store,
            students_repo,
            aggregator=AttendanceAggregator(attendance_store),
        ),
        billing_report=BillingReportGenerator(reports_repo, attendance_store, prices=StandardPriceTable()),
        dashboard_service=DashboardService(students_repo, instructors_repo, workouts_repo),
    )
