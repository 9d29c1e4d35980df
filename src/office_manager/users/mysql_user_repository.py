from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_error
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, full_name, organization_name, email, phone_no, password_hash, created_at, updated_at
"""


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        organization_name=row["organization_name"],
        email=row["email"],
        phone_no=row["phone_no"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        full_name: str,
        organization_name: str,
        email: str,
        phone_no: str,
        password_hash: str,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(full_name, organization_name, email, phone_no, password_hash)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (full_name, organization_name, email, phone_no, password_hash),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            raise translate_integrity_error(e, duplicate_message="Email already registered") from e

    def delete_by_id(self, user_id: int) -> bool:
        # employees, tasks and files rows go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id")
            return [_row_to_user(r) for r in fetchall(cur)]
