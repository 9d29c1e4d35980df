from __future__ import annotations

from enum import Enum


class EmploymentType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERN = "Intern"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FileCategory(str, Enum):
    """Closed set of document tags used for filtering and stats."""

    NOTE = "Note"
    DOCUMENT = "Document"
    DATA = "Data"
    STATISTICS = "Statistics"
    REPORT = "Report"
    OTHER = "Other"
    SPREADSHEET = "Spreadsheet"
    PRESENTATION = "Presentation"
