"""HTTP client for the Office Manager API.

Mirrors what the browser client does: keeps the signed-in user and token
between calls, and uploads several files one request at a time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote

import requests


class ApiError(Exception):
    """A `success: false` envelope (or a non-JSON error) from the server."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


@dataclass(frozen=True)
class UploadResult:
    path: str
    file_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OfficeClient:
    def __init__(self, base_url: str, *, session: Optional[requests.Session] = None, timeout: float = 30.0):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self.user: Optional[dict] = None
        self.token: Optional[str] = None

    # -------- plumbing --------
    def _url(self, path: str) -> str:
        return f"{self._base_url}/api/{path.lstrip('/')}"

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> dict:
        resp = self._session.request(
            method, self._url(path), headers=self._headers(), timeout=self._timeout, **kwargs
        )
        try:
            body = resp.json()
        except ValueError:
            raise ApiError(resp.status_code, resp.text or resp.reason or "Invalid response")

        if resp.status_code >= 400 or not body.get("success", False):
            raise ApiError(resp.status_code, str(body.get("message", "Request failed")))
        return body

    def _require_user_id(self, user_id: Optional[int]) -> int:
        if user_id is not None:
            return int(user_id)
        if not self.user:
            raise ApiError(401, "Not signed in")
        return int(self.user["id"])

    # -------- auth --------
    def health(self) -> dict:
        return self._request("GET", "health")

    def sign_up(self, *, full_name: str, organization_name: str, email: str, phone_no: str, password: str) -> dict:
        body = self._request(
            "POST",
            "auth/signup",
            json={
                "fullName": full_name,
                "organizationName": organization_name,
                "email": email,
                "phoneNo": phone_no,
                "password": password,
            },
        )
        self.user, self.token = body["user"], body.get("token")
        return self.user

    def sign_in(self, email: str, password: str) -> dict:
        body = self._request("POST", "auth/signin", json={"email": email, "password": password})
        self.user, self.token = body["user"], body.get("token")
        return self.user

    def sign_out(self) -> None:
        self.user = None
        self.token = None

    def list_users(self) -> list[dict]:
        return self._request("GET", "auth/users")["users"]

    def delete_account(self, user_id: Optional[int] = None) -> None:
        self._request("DELETE", f"auth/users/{self._require_user_id(user_id)}")
        if user_id is None or (self.user and int(self.user["id"]) == int(user_id)):
            self.sign_out()

    # -------- employees --------
    def list_employees(self, user_id: Optional[int] = None) -> list[dict]:
        return self._request("GET", f"employees/{self._require_user_id(user_id)}")["employees"]

    def get_employee(self, employee_id: int) -> dict:
        return self._request("GET", f"employees/detail/{int(employee_id)}")["employee"]

    def create_employee(self, fields: dict[str, Any]) -> int:
        payload = {"userId": self._require_user_id(fields.get("userId")), **fields}
        return int(self._request("POST", "employees", json=payload)["employeeId"])

    def update_employee(self, employee_id: int, fields: dict[str, Any]) -> None:
        self._request("PUT", f"employees/{int(employee_id)}", json=fields)

    def delete_employee(self, employee_id: int) -> None:
        self._request("DELETE", f"employees/{int(employee_id)}")

    # -------- tasks --------
    def list_tasks(self, user_id: Optional[int] = None) -> list[dict]:
        return self._request("GET", f"tasks/{self._require_user_id(user_id)}")["tasks"]

    def create_task(self, fields: dict[str, Any]) -> int:
        payload = {"userId": self._require_user_id(fields.get("userId")), **fields}
        return int(self._request("POST", "tasks", json=payload)["taskId"])

    def update_task(self, task_id: int, fields: dict[str, Any]) -> None:
        self._request("PUT", f"tasks/{int(task_id)}", json=fields)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"tasks/{int(task_id)}")

    # -------- files --------
    def list_files(
        self,
        user_id: Optional[int] = None,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[dict]:
        params = {k: v for k, v in (("search", search), ("category", category)) if v}
        return self._request("GET", f"files/{self._require_user_id(user_id)}", params=params)["files"]

    def file_stats(self, user_id: Optional[int] = None) -> dict:
        return self._request("GET", f"files/{self._require_user_id(user_id)}/stats")["stats"]

    def upload_file(
        self,
        path: str | Path,
        *,
        mimetype: str,
        category: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> int:
        path = Path(path)
        data = {"userId": str(self._require_user_id(user_id))}
        for key, value in (("fileCategory", category), ("description", description), ("tags", tags)):
            if value:
                data[key] = value

        with path.open("rb") as fh:
            body = self._request("POST", "files/upload", data=data, files={"file": (path.name, fh, mimetype)})
        return int(body["fileId"])

    def upload_files(self, items: Iterable[tuple[str | Path, str]], **metadata) -> list[UploadResult]:
        """Upload (path, mimetype) pairs one by one; a failure does not stop the rest."""
        results: list[UploadResult] = []
        for path, mimetype in items:
            try:
                file_id = self.upload_file(path, mimetype=mimetype, **metadata)
                results.append(UploadResult(path=str(path), file_id=file_id))
            except (ApiError, OSError, requests.RequestException) as e:
                results.append(UploadResult(path=str(path), error=str(e)))
        return results

    def download_file(self, file_id: int, dest_dir: str | Path) -> Path:
        """Save the file under its original name inside dest_dir."""
        resp = self._session.get(
            self._url(f"files/download/{int(file_id)}"),
            headers=self._headers(),
            timeout=self._timeout,
            stream=True,
        )
        if resp.status_code != 200:
            try:
                message = resp.json().get("message", "Download failed")
            except ValueError:
                message = resp.text or "Download failed"
            raise ApiError(resp.status_code, message)

        name = _filename_from_disposition(resp.headers.get("Content-Disposition", "")) or f"file-{file_id}"
        target = Path(dest_dir) / os.path.basename(name)
        with target.open("wb") as out:
            for chunk in resp.iter_content(chunk_size=64 * 1024):
                out.write(chunk)
        return target

    def update_file(
        self,
        file_id: int,
        *,
        category: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> None:
        self._request(
            "PUT",
            f"files/{int(file_id)}",
            json={"fileCategory": category, "description": description, "tags": tags},
        )

    def delete_file(self, file_id: int) -> None:
        self._request("DELETE", f"files/{int(file_id)}")


def _filename_from_disposition(header: str) -> Optional[str]:
    # Prefer RFC 5987 filename* (non-ASCII names), then plain filename.
    parts = [p.strip() for p in header.split(";")]
    for part in parts:
        if part.lower().startswith("filename*="):
            value = part.split("=", 1)[1]
            if "''" in value:
                value = value.split("''", 1)[1]
            return unquote(value.strip('"'))
    for part in parts:
        if part.lower().startswith("filename="):
            return part.split("=", 1)[1].strip('"')
    return None
