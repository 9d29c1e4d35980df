from __future__ import annotations

from flask import Flask

from ..common.http import ensure_owner, error_response, make_token_required, ok, request_data, server_error
from ..core.exceptions import DomainError
from ..container import Container
from .model import SignUpForm


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(app, container.auth_service)

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        try:
            result = container.auth_service.sign_up(SignUpForm.from_payload(request_data()))
            return ok(
                201,
                message="User registered successfully",
                userId=result.user.user_id,
                user=result.user.to_public_dict(),
                token=result.token,
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/auth/signin", methods=["POST"], endpoint="signin")
    def signin():
        try:
            data = request_data()
            result = container.auth_service.sign_in(data.get("email"), data.get("password"))
            return ok(message="Sign in successful", user=result.user.to_public_dict(), token=result.token)
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/auth/users", methods=["GET"], endpoint="list_users")
    @token_required
    def list_users():
        try:
            users = container.user_service.list_users()
            return ok(users=[u.to_public_dict() for u in users])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/auth/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @token_required
    def get_user(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            return ok(user=container.user_service.get_user(user_id).to_public_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/auth/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @token_required
    def delete_user(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            container.user_service.delete_user(user_id)
            return ok(message="User deleted successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)
