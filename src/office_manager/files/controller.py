from __future__ import annotations

from flask import Flask, request, send_file
from werkzeug.exceptions import RequestEntityTooLarge

from ..common.http import (
    current_user_id,
    ensure_owner,
    error_response,
    make_token_required,
    ok,
    request_data,
    server_error,
)
from ..common.validators import parse_id
from ..core.exceptions import DomainError
from ..container import Container
from .model import FileMetadata, IncomingFile
from .service import FILE_NOT_FOUND


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(app, container.auth_service)
    files = container.file_service

    def _guard(file_id: int) -> None:
        if current_user_id() is not None:
            ensure_owner(files.get(file_id).user_id, FILE_NOT_FOUND)

    @app.route("/api/files/<int:user_id>", methods=["GET"], endpoint="list_files")
    @token_required
    def list_files(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            records = files.list_files(
                user_id,
                search=request.args.get("search"),
                category=request.args.get("category"),
            )
            return ok(files=[r.to_dict() for r in records])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/files/<int:user_id>/stats", methods=["GET"], endpoint="file_stats")
    @token_required
    def file_stats(user_id: int):
        try:
            ensure_owner(user_id, "User not found")
            return ok(stats=files.stats(user_id).to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/files/upload", methods=["POST"], endpoint="upload_file")
    @token_required
    def upload_file():
        try:
            user_id = request.form.get("userId") or current_user_id()
            if user_id:
                ensure_owner(parse_id(user_id, "userId"), "User not found")
            file_id = files.upload(
                user_id=user_id,
                incoming=IncomingFile.from_upload(request.files.get("file")),
                metadata=FileMetadata.from_payload(request.form),
            )
            return ok(201, message="File uploaded successfully", fileId=file_id)
        except DomainError as e:
            return error_response(e)
        except RequestEntityTooLarge:
            raise
        except Exception as e:
            return server_error(e)

    @app.route("/api/files/download/<int:file_id>", methods=["GET"], endpoint="download_file")
    @token_required
    def download_file(file_id: int):
        try:
            _guard(file_id)
            record = files.resolve_download(file_id)
            return send_file(
                record.file_path,
                mimetype=record.file_type,
                as_attachment=True,
                download_name=record.original_file_name,
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/files/<int:file_id>", methods=["PUT"], endpoint="update_file")
    @token_required
    def update_file(file_id: int):
        try:
            _guard(file_id)
            files.update_metadata(file_id, FileMetadata.from_payload(request_data()))
            return ok(message="File updated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)

    @app.route("/api/files/<int:file_id>", methods=["DELETE"], endpoint="delete_file")
    @token_required
    def delete_file(file_id: int):
        try:
            _guard(file_id)
            files.delete(file_id)
            return ok(message="File deleted successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error(e)
