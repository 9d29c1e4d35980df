from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_POOL_SIZE, DEFAULT_TOKEN_DAYS, MAX_UPLOAD_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .files.mysql_file_repository import MySQLFileRepository
from .files.service import FileService
from .files.storage import BlobStorage
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.security import PasswordHasher, TokenService
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    storage: BlobStorage

    users_repo: MySQLUserRepository
    employees_repo: MySQLEmployeeRepository
    tasks_repo: MySQLTaskRepository
    files_repo: MySQLFileRepository

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    task_service: TaskService
    file_service: FileService


def build_container(
    *,
    db_config: dict,
    upload_folder: str | Path,
    jwt_secret: str,
    pool_size: int = DEFAULT_POOL_SIZE,
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    jwt_exp_days: int = DEFAULT_TOKEN_DAYS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config, pool_size=pool_size))
    storage = BlobStorage(upload_folder)

    users_repo = MySQLUserRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    files_repo = MySQLFileRepository(conn)

    auth_service = AuthService(
        users_repo,
        PasswordHasher(rounds=bcrypt_rounds),
        TokenService(jwt_secret, expires_days=jwt_exp_days),
    )
    user_service = UserService(users_repo, files_repo, storage)
    employee_service = EmployeeService(employees_repo)
    task_service = TaskService(tasks_repo)
    file_service = FileService(files_repo, storage, max_bytes=max_upload_bytes)

    return Container(
        conn=conn,
        storage=storage,
        users_repo=users_repo,
        employees_repo=employees_repo,
        tasks_repo=tasks_repo,
        files_repo=files_repo,
        auth_service=auth_service,
        user_service=user_service,
        employee_service=employee_service,
        task_service=task_service,
        file_service=file_service,
    )
