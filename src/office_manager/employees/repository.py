from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeValues


class EmployeeRepository(Protocol):
    def list_for_user(self, *, user_id: int) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create_employee(self, *, user_id: int, values: EmployeeValues) -> int:
        raise NotImplementedError

    def update_employee(self, *, employee_id: int, values: EmployeeValues) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
