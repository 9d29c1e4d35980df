from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from office_manager.container import Container
from office_manager.core.enums import FileCategory
from office_manager.core.exceptions import ConflictError, ValidationError
from office_manager.employees.model import Employee, EmployeeValues
from office_manager.employees.service import EmployeeService
from office_manager.files.model import CategoryStat, FileRecord
from office_manager.files.service import FileService
from office_manager.files.storage import BlobStorage
from office_manager.main import create_app
from office_manager.tasks.model import Task, TaskValues
from office_manager.tasks.service import TaskService
from office_manager.users.model import User
from office_manager.users.security import PasswordHasher, TokenService
from office_manager.users.service import AuthService, UserService

BASE_TIME = datetime(2026, 1, 5, 9, 0, 0)


class InMemoryStore:
    """Shared tables so deleting a user cascades like ON DELETE CASCADE."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.employees: dict[int, Employee] = {}
        self.tasks: dict[int, Task] = {}
        self.files: dict[int, FileRecord] = {}
        self._next_id = 0
        self._tick = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def now(self) -> datetime:
        self._tick += 1
        return BASE_TIME + timedelta(seconds=self._tick)

    def require_user(self, user_id: int) -> None:
        if int(user_id) not in self.users:
            raise ValidationError("User does not exist")


class InMemoryUsers:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._store.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._store.users.values() if u.email == email), None)

    def create_user(self, *, full_name, organization_name, email, phone_no, password_hash) -> int:
        if self.get_by_email(email):
            raise ConflictError("Email already registered")
        uid = self._store.next_id()
        now = self._store.now()
        self._store.users[uid] = User(
            user_id=uid,
            full_name=full_name,
            organization_name=organization_name,
            email=email,
            phone_no=phone_no,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        return uid

    def delete_by_id(self, user_id: int) -> bool:
        if self._store.users.pop(int(user_id), None) is None:
            return False
        for table in (self._store.employees, self._store.tasks, self._store.files):
            for key in [k for k, row in table.items() if row.user_id == int(user_id)]:
                del table[key]
        return True

    def list_all(self):
        return sorted(self._store.users.values(), key=lambda u: u.user_id)


class InMemoryEmployees:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_for_user(self, *, user_id: int):
        rows = [e for e in self._store.employees.values() if e.user_id == int(user_id)]
        return sorted(rows, key=lambda e: e.created_at, reverse=True)

    def get_by_id(self, employee_id: int):
        return self._store.employees.get(int(employee_id))

    def create_employee(self, *, user_id: int, values: EmployeeValues) -> int:
        self._store.require_user(user_id)
        eid = self._store.next_id()
        now = self._store.now()
        self._store.employees[eid] = Employee(
            employee_id=eid, user_id=int(user_id), created_at=now, updated_at=now, **vars(values)
        )
        return eid

    def update_employee(self, *, employee_id: int, values: EmployeeValues) -> bool:
        current = self._store.employees.get(int(employee_id))
        if current is None:
            return False
        self._store.employees[int(employee_id)] = replace(current, updated_at=self._store.now(), **vars(values))
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self._store.employees.pop(int(employee_id), None) is not None


class InMemoryTasks:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_for_user(self, *, user_id: int):
        rows = [t for t in self._store.tasks.values() if t.user_id == int(user_id)]
        return sorted(rows, key=lambda t: t.created_at, reverse=True)

    def get_by_id(self, task_id: int):
        return self._store.tasks.get(int(task_id))

    def create_task(self, *, user_id: int, values: TaskValues) -> int:
        self._store.require_user(user_id)
        tid = self._store.next_id()
        now = self._store.now()
        self._store.tasks[tid] = Task(task_id=tid, user_id=int(user_id), created_at=now, updated_at=now, **vars(values))
        return tid

    def update_task(self, *, task_id: int, values: TaskValues) -> bool:
        current = self._store.tasks.get(int(task_id))
        if current is None:
            return False
        self._store.tasks[int(task_id)] = replace(current, updated_at=self._store.now(), **vars(values))
        return True

    def delete_by_id(self, task_id: int) -> bool:
        return self._store.tasks.pop(int(task_id), None) is not None


class InMemoryFiles:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.fail_next_create = False

    def list_for_user(self, *, user_id: int, category: Optional[FileCategory] = None):
        rows = [
            f
            for f in self._store.files.values()
            if f.user_id == int(user_id) and (category is None or f.file_category == category)
        ]
        return sorted(rows, key=lambda f: f.uploaded_date, reverse=True)

    def get_by_id(self, file_id: int):
        return self._store.files.get(int(file_id))

    def create_file(self, *, user_id, file_name, original_file_name, file_type, file_size, file_category,
                    description, tags, file_path) -> int:
        if self.fail_next_create:
            self.fail_next_create = False
            raise RuntimeError("insert failed")
        self._store.require_user(user_id)
        fid = self._store.next_id()
        now = self._store.now()
        self._store.files[fid] = FileRecord(
            file_id=fid,
            user_id=int(user_id),
            file_name=file_name,
            original_file_name=original_file_name,
            file_type=file_type,
            file_size=int(file_size),
            file_category=file_category,
            description=description,
            tags=tags,
            file_path=file_path,
            uploaded_date=now,
            updated_date=now,
        )
        return fid

    def update_metadata(self, *, file_id, file_category, description, tags) -> bool:
        current = self._store.files.get(int(file_id))
        if current is None:
            return False
        self._store.files[int(file_id)] = replace(
            current,
            file_category=file_category,
            description=description,
            tags=tags,
            updated_date=self._store.now(),
        )
        return True

    def delete_by_id(self, file_id: int) -> bool:
        return self._store.files.pop(int(file_id), None) is not None

    def category_stats(self, *, user_id: int):
        totals: dict[FileCategory, list[int]] = {}
        for f in self._store.files.values():
            if f.user_id == int(user_id):
                bucket = totals.setdefault(f.file_category, [0, 0])
                bucket[0] += 1
                bucket[1] += f.file_size
        return [
            CategoryStat(category=c, count=v[0], size=v[1])
            for c, v in sorted(totals.items(), key=lambda kv: kv[0].value)
        ]


class FakeConnection:
    def __init__(self, healthy: bool = True):
        self.healthy = healthy
        self.config = None

    def ping(self) -> bool:
        return self.healthy


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def storage(tmp_path) -> BlobStorage:
    blobs = BlobStorage(tmp_path / "uploads")
    blobs.ensure_root()
    return blobs


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("test-jwt-secret", expires_days=1)


@pytest.fixture
def container(store, storage, hasher, tokens) -> Container:
    users_repo = InMemoryUsers(store)
    employees_repo = InMemoryEmployees(store)
    tasks_repo = InMemoryTasks(store)
    files_repo = InMemoryFiles(store)
    return Container(
        conn=FakeConnection(),
        storage=storage,
        users_repo=users_repo,
        employees_repo=employees_repo,
        tasks_repo=tasks_repo,
        files_repo=files_repo,
        auth_service=AuthService(users_repo, hasher, tokens),
        user_service=UserService(users_repo, files_repo, storage),
        employee_service=EmployeeService(employees_repo),
        task_service=TaskService(tasks_repo),
        file_service=FileService(files_repo, storage),
    )


@pytest.fixture
def make_app(monkeypatch, container, tmp_path):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(**overrides):
        settings = {"UPLOAD_FOLDER": str(tmp_path / "uploads"), "AUTO_INIT_DB": False, "REQUIRE_AUTH": False}
        settings.update(overrides)
        return create_app(settings, container=container)

    return _make


@pytest.fixture
def client(make_app):
    return make_app().test_client()


@pytest.fixture
def signed_up(client):
    """Register the default account and return its JSON body."""
    res = client.post(
        "/api/auth/signup",
        json={
            "fullName": "A",
            "organizationName": "Org",
            "email": "a@x.com",
            "phoneNo": "1",
            "password": "secret1",
        },
    )
    assert res.status_code == 201
    return res.get_json()
