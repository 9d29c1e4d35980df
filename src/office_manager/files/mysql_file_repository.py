from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import FileCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_error
from .model import CategoryStat, FileRecord
from .repository import FileRepository

_FILE_COLUMNS = """
    file_id, user_id, file_name, original_file_name, file_type, file_size,
    file_category, description, tags, file_path, uploaded_date, updated_date
"""


def _row_to_file(r: dict) -> FileRecord:
    return FileRecord(
        file_id=int(r["file_id"]),
        user_id=int(r["user_id"]),
        file_name=r["file_name"],
        original_file_name=r["original_file_name"],
        file_type=r["file_type"],
        file_size=int(r["file_size"]),
        file_category=FileCategory(r["file_category"]),
        description=r.get("description"),
        tags=r.get("tags"),
        file_path=r["file_path"],
        uploaded_date=r.get("uploaded_date"),
        updated_date=r.get("updated_date"),
    )


class MySQLFileRepository(FileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int, category: Optional[FileCategory] = None) -> Sequence[FileRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if category is not None:
            clauses.append("file_category=%s")
            params.append(category.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_FILE_COLUMNS}
                FROM files
                WHERE {where}
                ORDER BY uploaded_date DESC, file_id DESC
                """,
                tuple(params),
            )
            return [_row_to_file(r) for r in fetchall(cur)]

    def get_by_id(self, file_id: int) -> Optional[FileRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_FILE_COLUMNS} FROM files WHERE file_id=%s", (int(file_id),))
            row = fetchone(cur)
            return _row_to_file(row) if row else None

    def create_file(
        self,
        *,
        user_id: int,
        file_name: str,
        original_file_name: str,
        file_type: str,
        file_size: int,
        file_category: FileCategory,
        description: Optional[str],
        tags: Optional[str],
        file_path: str,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO files(
                        user_id, file_name, original_file_name, file_type, file_size,
                        file_category, description, tags, file_path
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        file_name,
                        original_file_name,
                        file_type,
                        int(file_size),
                        file_category.value,
                        description,
                        tags,
                        file_path,
                    ),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            raise translate_integrity_error(e) from e

    def update_metadata(
        self,
        *,
        file_id: int,
        file_category: FileCategory,
        description: Optional[str],
        tags: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE files
                SET file_category=%s, description=%s, tags=%s, updated_date=CURRENT_TIMESTAMP
                WHERE file_id=%s
                """,
                (file_category.value, description, tags, int(file_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, file_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM files WHERE file_id=%s", (int(file_id),))
            return cur.rowcount > 0

    def category_stats(self, *, user_id: int) -> Sequence[CategoryStat]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT file_category, COUNT(*) AS file_count, COALESCE(SUM(file_size), 0) AS total_size
                FROM files
                WHERE user_id=%s
                GROUP BY file_category
                ORDER BY file_category
                """,
                (int(user_id),),
            )
            return [
                CategoryStat(
                    category=FileCategory(r["file_category"]),
                    count=int(r["file_count"]),
                    size=int(r["total_size"] or 0),
                )
                for r in fetchall(cur)
            ]
