from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, DomainError, InfrastructureError, NotFoundError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_DUP_KEY_RE = re.compile(r"for key '(?:[\w]+\.)?([\w]+)'")


def duplicate_key_name(err: mysql.connector.Error) -> Optional[str]:
    """Extract the index name from a MySQL duplicate-entry message."""

    match = _DUP_KEY_RE.search(str(getattr(err, "msg", "") or err))
    return match.group(1) if match else None


def translate_error(err: mysql.connector.Error) -> DomainError:
    errno = getattr(err, "errno", None)
    if errno == errorcode.ER_DUP_ENTRY:
        return ConflictError("Duplicate entry", field=duplicate_key_name(err))
    if errno in (errorcode.ER_ROW_IS_REFERENCED, errorcode.ER_ROW_IS_REFERENCED_2):
        return ConflictError("Record is still referenced by other records")
    if errno in (errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2):
        return NotFoundError("Referenced record does not exist")
    if errno == errorcode.ER_DATA_TOO_LONG:
        return ValidationError("Value is too long for its field")
    if errno == errorcode.ER_WARN_DATA_OUT_OF_RANGE:
        return ValidationError("Value is out of range for its field")
    return InfrastructureError(f"Database error: {err}")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Check out a connection, yield (conn, cursor), commit on success.

    Driver errors leave as DomainError subclasses, see translate_error.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.debug("query failed: %s", e)
        raise translate_error(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def like_pattern(q: Optional[str]) -> Optional[str]:
    q = (q or "").strip()
    if not q:
        return None
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
