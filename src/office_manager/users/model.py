from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class User:
    """Account that owns employees, tasks and files.

    Note: plain data object; password_hash never leaves the service layer.
    """

    user_id: int
    full_name: str
    organization_name: str
    email: str
    phone_no: str
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "fullName": self.full_name,
            "organizationName": self.organization_name,
            "email": self.email,
            "phoneNo": self.phone_no,
            "createdAt": iso(self.created_at),
        }


@dataclass(frozen=True)
class SignUpForm:
    full_name: Optional[str] = None
    organization_name: Optional[str] = None
    email: Optional[str] = None
    phone_no: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "SignUpForm":
        return cls(
            full_name=data.get("fullName"),
            organization_name=data.get("organizationName"),
            email=data.get("email"),
            phone_no=data.get("phoneNo"),
            password=data.get("password"),
        )
