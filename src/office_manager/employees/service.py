from __future__ import annotations

from typing import Sequence

from ..common.validators import (
    is_blank,
    optional_text,
    parse_date_field,
    parse_decimal,
    parse_enum,
    parse_id,
)
from ..core.enums import EmployeeStatus, EmploymentType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee, EmployeeFields, EmployeeValues
from .repository import EmployeeRepository

EMPLOYEE_NOT_FOUND = "Employee not found"


class EmployeeService:
    """Use cases: CRUD over an owner's employee records."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    @staticmethod
    def _validate(fields: EmployeeFields) -> EmployeeValues:
        required = (fields.full_name, fields.email, fields.position, fields.department, fields.join_date)
        if any(is_blank(v) for v in required):
            raise ValidationError("fullName, email, position, department, and joinDate are required")

        return EmployeeValues(
            full_name=str(fields.full_name).strip(),
            email=str(fields.email).strip(),
            phone_no=optional_text(fields.phone_no),
            position=str(fields.position).strip(),
            department=str(fields.department).strip(),
            employment_type=parse_enum(
                EmploymentType, fields.employment_type, EmploymentType.FULL_TIME, "employmentType"
            ),
            join_date=parse_date_field(fields.join_date, "joinDate"),
            status=parse_enum(EmployeeStatus, fields.status, EmployeeStatus.ACTIVE, "status"),
            reporting_to=optional_text(fields.reporting_to),
            address=optional_text(fields.address),
            emergency_contact_name=optional_text(fields.emergency_contact_name),
            emergency_contact_phone=optional_text(fields.emergency_contact_phone),
            skills=optional_text(fields.skills),
            salary=parse_decimal(fields.salary, "salary"),
        )

    def list_employees(self, user_id: int) -> Sequence[Employee]:
        return self._employees.list_for_user(user_id=user_id)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(EMPLOYEE_NOT_FOUND)
        return employee

    def create(self, fields: EmployeeFields) -> int:
        if is_blank(fields.user_id):
            raise ValidationError("userId, fullName, email, position, department, and joinDate are required")
        user_id = parse_id(fields.user_id, "userId")
        return self._employees.create_employee(user_id=user_id, values=self._validate(fields))

    def update(self, employee_id: int, fields: EmployeeFields) -> None:
        """Full replace of every mutable field."""
        values = self._validate(fields)
        if not self._employees.update_employee(employee_id=employee_id, values=values):
            raise NotFoundError(EMPLOYEE_NOT_FOUND)

    def delete(self, employee_id: int) -> None:
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError(EMPLOYEE_NOT_FOUND)
