from __future__ import annotations

from pathlib import Path

from src.gym_management.gym_management.database.bootstrap import iter_sql_statements

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_split_ignores_semicolons_in_literals():
    sql = "INSERT INTO t VALUES ('a;b', \"c;d\", 'it\\'s;');\nSELECT 1;  \n"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b', \"c;d\", 'it\\'s;')", "SELECT 1"]


def test_schema_script_creates_every_table():
    statements = list(iter_sql_statements((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")))
    created = [s.split("EXISTS", 1)[1].split("(", 1)[0].strip() for s in statements if "CREATE TABLE" in s]
    assert created == [
        "admins",
        "instructors",
        "students",
        "exercises",
        "workout_plans",
        "workout_exercises",
        "attendance_records",
    ]


def test_position_and_exercise_are_unique_per_plan():
    schema = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
    assert "uq_plan_position" in schema
    assert "PRIMARY KEY (plan_id, exercise_id)" in schema
