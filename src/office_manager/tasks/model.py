from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import iso
from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: int
    user_id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": iso(self.due_date),
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


@dataclass(frozen=True)
class TaskFields:
    """Raw create/update body; status defaults to Pending, priority to Medium."""

    user_id: Any = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "TaskFields":
        return cls(
            user_id=data.get("userId"),
            title=data.get("title"),
            description=data.get("description"),
            status=data.get("status"),
            priority=data.get("priority"),
            due_date=data.get("dueDate"),
        )


@dataclass(frozen=True)
class TaskValues:
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date]
