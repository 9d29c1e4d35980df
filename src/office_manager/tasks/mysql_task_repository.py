from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_error
from .model import Task, TaskValues
from .repository import TaskRepository

_TASK_COLUMNS = "task_id, user_id, title, description, status, priority, due_date, created_at, updated_at"


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=int(r["task_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        description=r.get("description"),
        status=TaskStatus(r["status"]),
        priority=TaskPriority(r["priority"]),
        due_date=r.get("due_date"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TASK_COLUMNS}
                FROM tasks
                WHERE user_id=%s
                ORDER BY created_at DESC, task_id DESC
                """,
                (int(user_id),),
            )
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE task_id=%s", (int(task_id),))
            row = fetchone(cur)
            return _row_to_task(row) if row else None

    def create_task(self, *, user_id: int, values: TaskValues) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO tasks(user_id, title, description, status, priority, due_date)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        values.title,
                        values.description,
                        values.status.value,
                        values.priority.value,
                        values.due_date,
                    ),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            raise translate_integrity_error(e) from e

    def update_task(self, *, task_id: int, values: TaskValues) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET title=%s, description=%s, status=%s, priority=%s, due_date=%s
                WHERE task_id=%s
                """,
                (
                    values.title,
                    values.description,
                    values.status.value,
                    values.priority.value,
                    values.due_date,
                    int(task_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            return cur.rowcount > 0
