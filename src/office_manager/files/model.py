from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Optional

from ..common.datetime_utils import iso
from ..common.validators import optional_text
from ..core.enums import FileCategory


@dataclass(frozen=True)
class FileRecord:
    """Metadata row for one stored blob."""

    file_id: int
    user_id: int
    file_name: str
    original_file_name: str
    file_type: str
    file_size: int
    file_category: FileCategory
    description: Optional[str]
    tags: Optional[str]
    file_path: str
    uploaded_date: Optional[datetime] = None
    updated_date: Optional[datetime] = None

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match over names, description and tags."""
        needle = needle.lower()
        haystack = (self.file_name, self.original_file_name, self.description, self.tags)
        return any(value and needle in value.lower() for value in haystack)

    def to_dict(self) -> dict:
        # file_path is server-local and stays out of responses.
        return {
            "id": self.file_id,
            "userId": self.user_id,
            "fileName": self.file_name,
            "originalFileName": self.original_file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
            "fileCategory": self.file_category.value,
            "description": self.description,
            "tags": self.tags,
            "uploadedDate": iso(self.uploaded_date),
            "updatedDate": iso(self.updated_date),
        }


@dataclass(frozen=True)
class FileMetadata:
    """Editable metadata; category defaults to Document when omitted."""

    file_category: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "FileMetadata":
        return cls(
            file_category=optional_text(data.get("fileCategory")),
            description=optional_text(data.get("description")),
            tags=optional_text(data.get("tags")),
        )


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded payload before it reaches storage."""

    filename: str
    mimetype: str
    stream: BinaryIO

    @classmethod
    def from_upload(cls, upload) -> Optional["IncomingFile"]:
        """Wrap a werkzeug FileStorage; None when the form had no file."""
        if upload is None or not upload.filename:
            return None
        return cls(filename=upload.filename, mimetype=upload.mimetype or "", stream=upload.stream)

    def size(self) -> int:
        pos = self.stream.tell()
        self.stream.seek(0, 2)
        end = self.stream.tell()
        self.stream.seek(pos)
        return end


@dataclass(frozen=True)
class CategoryStat:
    category: FileCategory
    count: int
    size: int

    def to_dict(self) -> dict:
        return {"category": self.category.value, "count": self.count, "size": self.size}


@dataclass(frozen=True)
class FileStats:
    total_files: int
    total_size: int
    by_category: list[CategoryStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "totalSize": self.total_size,
            "byCategory": [c.to_dict() for c in self.by_category],
        }
