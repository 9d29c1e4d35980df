from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import EmployeeStatus, EmploymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_error
from .model import Employee, EmployeeValues
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = """
    employee_id, user_id, full_name, email, phone_no, position, department,
    employment_type, join_date, status, reporting_to, address,
    emergency_contact_name, emergency_contact_phone, skills, salary,
    created_at, updated_at
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        user_id=int(r["user_id"]),
        full_name=r["full_name"],
        email=r["email"],
        phone_no=r.get("phone_no"),
        position=r["position"],
        department=r["department"],
        employment_type=EmploymentType(r["employment_type"]),
        join_date=r["join_date"],
        status=EmployeeStatus(r["status"]),
        reporting_to=r.get("reporting_to"),
        address=r.get("address"),
        emergency_contact_name=r.get("emergency_contact_name"),
        emergency_contact_phone=r.get("emergency_contact_phone"),
        skills=r.get("skills"),
        salary=r.get("salary"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _params(values: EmployeeValues) -> tuple:
    return (
        values.full_name,
        values.email,
        values.phone_no,
        values.position,
        values.department,
        values.employment_type.value,
        values.join_date,
        values.status.value,
        values.reporting_to,
        values.address,
        values.emergency_contact_name,
        values.emergency_contact_phone,
        values.skills,
        values.salary,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE user_id=%s
                ORDER BY created_at DESC, employee_id DESC
                """,
                (int(user_id),),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create_employee(self, *, user_id: int, values: EmployeeValues) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(
                        user_id, full_name, email, phone_no, position, department,
                        employment_type, join_date, status, reporting_to, address,
                        emergency_contact_name, emergency_contact_phone, skills, salary
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id),) + _params(values),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            raise translate_integrity_error(e) from e

    def update_employee(self, *, employee_id: int, values: EmployeeValues) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, email=%s, phone_no=%s, position=%s, department=%s,
                    employment_type=%s, join_date=%s, status=%s, reporting_to=%s, address=%s,
                    emergency_contact_name=%s, emergency_contact_phone=%s, skills=%s, salary=%s
                WHERE employee_id=%s
                """,
                _params(values) + (int(employee_id),),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
