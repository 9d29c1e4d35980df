from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, g, jsonify, request

from ..core.exceptions import AuthenticationError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


def ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status


def error_response(e: DomainError):
    return jsonify({"success": False, "message": str(e)}), e.status_code


def server_error(e: Exception):
    # The raw message is surfaced to the client on purpose.
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"success": False, "message": str(e)}), 500


def request_data() -> dict:
    """JSON body, falling back to form fields (multipart uploads)."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def bearer_token(header: Optional[str]) -> str:
    if not header:
        raise AuthenticationError("Missing authorization token")
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid authorization header")
    return parts[1]


def make_token_required(app: Flask, auth_service):
    """Build the decorator that resolves the caller from a bearer token.

    With REQUIRE_AUTH off every request passes and `g.current_user` is None.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = None
            if app.config.get("REQUIRE_AUTH"):
                try:
                    token = bearer_token(request.headers.get("Authorization"))
                    g.current_user = auth_service.authenticate_token(token)
                except DomainError as e:
                    return error_response(e)
                except Exception as e:
                    return server_error(e)
            return view(*args, **kwargs)

        return wrapper

    return token_required


def current_user_id() -> Optional[int]:
    user = g.get("current_user")
    return user.user_id if user is not None else None


def ensure_owner(owner_id: int, not_found_message: str) -> None:
    """Hide other owners' records behind a 404 when a caller is authenticated."""
    caller = current_user_id()
    if caller is not None and int(owner_id) != caller:
        raise NotFoundError(not_found_message)
