"""Apply schema/seed SQL files and create demo accounts."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


_CREATE_OR_USE_RE = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE\b|USE\b).*?;\s*$")
_LINE_COMMENT_RE = re.compile(r"(?m)^\s*--.*$")


def _prepare_sql(sql: str) -> str:
    # schema.sql must run against whatever database DB_CONFIG names
    return _LINE_COMMENT_RE.sub("", _CREATE_OR_USE_RE.sub("", sql))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted literals."""

    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _prepare_sql(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_file(db_config, schema_path)
    logger.info("schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_file(db_config, seed_path)
    logger.info("seed applied from %s", seed_path)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create (or reset the password of) one admin, one instructor and one student."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute(
            """
            INSERT INTO admins(email, password_hash) VALUES(%s, %s)
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash)
            """,
            ("admin@gym.local", generate_password_hash("admin1234")),
        )

        cur.execute(
            """
            INSERT INTO instructors(full_name, cpf, email, password_hash, status)
            VALUES(%s, %s, %s, %s, 'ACTIVE')
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash), status='ACTIVE'
            """,
            ("Demo Instructor", "11111111111", "instructor@gym.local", generate_password_hash("instructor123")),
        )
        cur.execute("SELECT instructor_id FROM instructors WHERE email=%s", ("instructor@gym.local",))
        instructor_id = int(cur.fetchone()["instructor_id"])

        cur.execute(
            """
            INSERT INTO students(instructor_id, full_name, cpf, email, password_hash, status, plan_tier, payment_date)
            VALUES(%s, %s, %s, %s, %s, 'ACTIVE', 'MONTHLY', CURDATE())
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash)
            """,
            (instructor_id, "Demo Student", "22222222222", "student@gym.local", generate_password_hash("student123")),
        )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
