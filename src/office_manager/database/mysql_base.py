from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import ConflictError, ValidationError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    with conn_factory.connection() as conn:
        try:
            cur = conn.cursor(dictionary=dictionary)
            try:
                yield conn, cur
                conn.commit()
            finally:
                cur.close()
        except Exception:
            conn.rollback()
            raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def translate_integrity_error(err: mysql_errors.IntegrityError, *, duplicate_message: str = "Duplicate entry") -> Exception:
    """Map MySQL integrity failures onto domain errors.

    Unknown integrity errors are returned unchanged so callers re-raise them.
    """

    if err.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError(duplicate_message)
    if err.errno in (errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2):
        return ValidationError("User does not exist")
    return err
