from __future__ import annotations

from dataclasses import replace

from flask import Flask

from ..common.http import (
    current_user_id,
    ensure_owner,
    error_response,
    make_token_required,
    ok,
    request_data,
    server_error,
)
from ..common.validators import is_blank, parse_id
from ..core.exceptions import DomainError
from ..container import Container
from .model import TaskFields
from .service import TASK_NOT_FOUND


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(app, container.auth_service)
    tasks = container.task_service

    def _guard(task_id: int) -> None:
        if current_user_id() is not None:
            ensure_owner(tasks.get(task_id).user_id, TASK_NOT_FOUND)

    @app.route("/api/tasks/<int:user_id>", methods=["GET"], endpoint="list_tasks")
    @token_required
    def list_tasks(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            rows = tasks.list_tasks(user_id)
            return ok(tasks=[t.to_dict() for t in rows])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/tasks/detail/<int:task_id>", methods=["GET"], endpoint="get_task")
    @token_required
    def get_task(task_id: int):
        try:
            task = tasks.get(task_id)
            ensure_owner(task.user_id, TASK_NOT_FOUND)
            return ok(task=task.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @app.route("/api/tasks/", methods=["POST"], endpoint="create_task_slash")
    @token_required
    def create_task():
        try:
            fields = TaskFields.from_payload(request_data())
            if is_blank(fields.user_id) and current_user_id() is not None:
                fields = replace(fields, user_id=current_user_id())
            if not is_blank(fields.user_id):
                ensure_owner(parse_id(fields.user_id, "userId"), "User not found")

            task_id = tasks.create(fields)
            return ok(201, message="Task created successfully", taskId=task_id)
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="update_task")
    @token_required
    def update_task(task_id: int):
        try:
            _guard(task_id)
            tasks.update(task_id, TaskFields.from_payload(request_data()))
            return ok(message="Task updated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @token_required
    def delete_task(task_id: int):
        try:
            _guard(task_id)
            tasks.delete(task_id)
            return ok(message="Task deleted successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)
