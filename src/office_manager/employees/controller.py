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
from .model import EmployeeFields
from .service import EMPLOYEE_NOT_FOUND


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(app, container.auth_service)
    employees = container.employee_service

    def _guard(employee_id: int) -> None:
        if current_user_id() is not None:
            ensure_owner(employees.get(employee_id).user_id, EMPLOYEE_NOT_FOUND)

    @app.route("/api/employees/<int:user_id>", methods=["GET"], endpoint="list_employees")
    @token_required
    def list_employees(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            rows = employees.list_employees(user_id)
            return ok(employees=[e.to_dict() for e in rows])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/employees/detail/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @token_required
    def get_employee(employee_id: int):
        try:
            employee = employees.get(employee_id)
            ensure_owner(employee.user_id, EMPLOYEE_NOT_FOUND)
            return ok(employee=employee.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @app.route("/api/employees/", methods=["POST"], endpoint="create_employee_slash")
    @token_required
    def create_employee():
        try:
            fields = EmployeeFields.from_payload(request_data())
            if is_blank(fields.user_id) and current_user_id() is not None:
                fields = replace(fields, user_id=current_user_id())
            if not is_blank(fields.user_id):
                ensure_owner(parse_id(fields.user_id, "userId"), "User not found")

            employee_id = employees.create(fields)
            return ok(201, message="Employee created successfully", employeeId=employee_id)
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @token_required
    def update_employee(employee_id: int):
        try:
            _guard(employee_id)
            employees.update(employee_id, EmployeeFields.from_payload(request_data()))
            return ok(message="Employee updated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @token_required
    def delete_employee(employee_id: int):
        try:
            _guard(employee_id)
            employees.delete(employee_id)
            return ok(message="Employee deleted successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)
