from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import iso
from ..core.enums import EmployeeStatus, EmploymentType


@dataclass(frozen=True)
class Employee:
    """Staff record kept by an account owner."""

    employee_id: int
    user_id: int
    full_name: str
    email: str
    phone_no: Optional[str]
    position: str
    department: str
    employment_type: EmploymentType
    join_date: date
    status: EmployeeStatus
    reporting_to: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    skills: Optional[str] = None
    salary: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "userId": self.user_id,
            "fullName": self.full_name,
            "email": self.email,
            "phoneNo": self.phone_no,
            "position": self.position,
            "department": self.department,
            "employmentType": self.employment_type.value,
            "joinDate": iso(self.join_date),
            "status": self.status.value,
            "reportingTo": self.reporting_to,
            "address": self.address,
            "emergencyContactName": self.emergency_contact_name,
            "emergencyContactPhone": self.emergency_contact_phone,
            "skills": self.skills,
            # String keeps the DECIMAL precision intact.
            "salary": str(self.salary) if self.salary is not None else None,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


@dataclass(frozen=True)
class EmployeeFields:
    """Raw create/update body.

    Defaults applied by the service: employmentType=Full-time, status=Active;
    blank optional fields are stored as NULL.
    """

    user_id: Any = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_no: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    employment_type: Optional[str] = None
    join_date: Optional[str] = None
    status: Optional[str] = None
    reporting_to: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    skills: Optional[str] = None
    salary: Any = None

    @classmethod
    def from_payload(cls, data: dict) -> "EmployeeFields":
        return cls(
            user_id=data.get("userId"),
            full_name=data.get("fullName"),
            email=data.get("email"),
            phone_no=data.get("phoneNo"),
            position=data.get("position"),
            department=data.get("department"),
            employment_type=data.get("employmentType"),
            join_date=data.get("joinDate"),
            status=data.get("status"),
            reporting_to=data.get("reportingTo"),
            address=data.get("address"),
            emergency_contact_name=data.get("emergencyContactName"),
            emergency_contact_phone=data.get("emergencyContactPhone"),
            skills=data.get("skills"),
            salary=data.get("salary"),
        )


@dataclass(frozen=True)
class EmployeeValues:
    """Validated column values, ready for INSERT/UPDATE."""

    full_name: str
    email: str
    phone_no: Optional[str]
    position: str
    department: str
    employment_type: EmploymentType
    join_date: date
    status: EmployeeStatus
    reporting_to: Optional[str]
    address: Optional[str]
    emergency_contact_name: Optional[str]
    emergency_contact_phone: Optional[str]
    skills: Optional[str]
    salary: Optional[Decimal]
