from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Task, TaskValues


class TaskRepository(Protocol):
    def list_for_user(self, *, user_id: int) -> Sequence[Task]:
        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def create_task(self, *, user_id: int, values: TaskValues) -> int:
        raise NotImplementedError

    def update_task(self, *, task_id: int, values: TaskValues) -> bool:
        raise NotImplementedError

    def delete_by_id(self, task_id: int) -> bool:
        raise NotImplementedError
