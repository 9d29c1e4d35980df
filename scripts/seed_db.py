"""Create a demo account with a few employees and tasks.

Re-running is safe: an existing demo account is reused.
"""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from office_manager.config import get_settings_module
from office_manager.container import build_container
from office_manager.core.exceptions import ConflictError
from office_manager.employees.model import EmployeeFields
from office_manager.tasks.model import TaskFields
from office_manager.users.model import SignUpForm

DEMO_EMAIL = "demo@office.local"
DEMO_PASSWORD = "demo12345"


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        upload_folder=settings.UPLOAD_FOLDER,
        jwt_secret=settings.JWT_SECRET,
        bcrypt_rounds=settings.BCRYPT_LOG_ROUNDS,
    )

    try:
        result = container.auth_service.sign_up(
            SignUpForm(
                full_name="Demo Admin",
                organization_name="Demo Org",
                email=DEMO_EMAIL,
                phone_no="0000000000",
                password=DEMO_PASSWORD,
            )
        )
    except ConflictError:
        print(f"Demo account {DEMO_EMAIL} already exists, nothing to do.")
        return

    user_id = result.user.user_id
    employees = [
        ("John Smith", "john@demo.local", "Senior Developer", "Engineering", "2022-01-15"),
        ("Sarah Johnson", "sarah@demo.local", "Designer", "Design", "2023-03-20"),
        ("Mike Davis", "mike@demo.local", "Manager", "Sales", "2021-06-10"),
    ]
    for full_name, email, position, department, join_date in employees:
        container.employee_service.create(
            EmployeeFields(
                user_id=user_id,
                full_name=full_name,
                email=email,
                position=position,
                department=department,
                join_date=join_date,
            )
        )

    for title, status, priority in (
        ("Website Redesign", "In Progress", "High"),
        ("API Integration", "Pending", "High"),
        ("Database Migration", "Completed", "Medium"),
    ):
        container.task_service.create(TaskFields(user_id=user_id, title=title, status=status, priority=priority))

    print(f"OK: Seeded demo account {DEMO_EMAIL} / {DEMO_PASSWORD} (userId={user_id})")


if __name__ == "__main__":
    main()
