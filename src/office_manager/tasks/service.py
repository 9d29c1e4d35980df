from __future__ import annotations

from typing import Sequence

from ..common.validators import is_blank, optional_text, parse_date_field, parse_enum, parse_id
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Task, TaskFields, TaskValues
from .repository import TaskRepository

TASK_NOT_FOUND = "Task not found"


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    @staticmethod
    def _validate(fields: TaskFields) -> TaskValues:
        if is_blank(fields.title):
            raise ValidationError("title is required")
        return TaskValues(
            title=str(fields.title).strip(),
            description=optional_text(fields.description),
            status=parse_enum(TaskStatus, fields.status, TaskStatus.PENDING, "status"),
            priority=parse_enum(TaskPriority, fields.priority, TaskPriority.MEDIUM, "priority"),
            due_date=parse_date_field(fields.due_date, "dueDate"),
        )

    def list_tasks(self, user_id: int) -> Sequence[Task]:
        return self._tasks.list_for_user(user_id=user_id)

    def get(self, task_id: int) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    def create(self, fields: TaskFields) -> int:
        if is_blank(fields.user_id) or is_blank(fields.title):
            raise ValidationError("userId and title are required")
        user_id = parse_id(fields.user_id, "userId")
        return self._tasks.create_task(user_id=user_id, values=self._validate(fields))

    def update(self, task_id: int, fields: TaskFields) -> None:
        values = self._validate(fields)
        if not self._tasks.update_task(task_id=task_id, values=values):
            raise NotFoundError(TASK_NOT_FOUND)

    def delete(self, task_id: int) -> None:
        if not self._tasks.delete_by_id(task_id):
            raise NotFoundError(TASK_NOT_FOUND)
