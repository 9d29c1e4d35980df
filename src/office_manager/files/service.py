from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import is_blank, parse_enum, parse_id
from ..core.constants import ALL_CATEGORIES, ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES
from ..core.enums import FileCategory
from ..core.exceptions import NotFoundError, UnsupportedTypeError, ValidationError
from .model import FileMetadata, FileRecord, FileStats, IncomingFile
from .repository import FileRepository
from .storage import BlobStorage

logger = logging.getLogger(__name__)

FILE_NOT_FOUND = "File not found"


class FileService:
    """Use cases: list, aggregate, upload, download, edit and delete files."""

    def __init__(
        self,
        files: FileRepository,
        storage: BlobStorage,
        *,
        max_bytes: int = MAX_UPLOAD_BYTES,
        allowed_types: Iterable[str] = ALLOWED_MIME_TYPES,
    ):
        self._files = files
        self._storage = storage
        self._max_bytes = int(max_bytes)
        self._allowed_types = frozenset(allowed_types)

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @staticmethod
    def _parse_category_filter(category: Optional[str]) -> Optional[FileCategory]:
        if is_blank(category) or str(category).strip() == ALL_CATEGORIES:
            return None
        return parse_enum(FileCategory, category, FileCategory.DOCUMENT, "fileCategory")

    def list_files(
        self,
        user_id: int,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Sequence[FileRecord]:
        files = self._files.list_for_user(user_id=user_id, category=self._parse_category_filter(category))

        # Search runs over the already-fetched rows of this owner.
        needle = (search or "").strip()
        if needle:
            files = [f for f in files if f.matches(needle)]
        return list(files)

    def stats(self, user_id: int) -> FileStats:
        by_category = list(self._files.category_stats(user_id=user_id))
        return FileStats(
            total_files=sum(c.count for c in by_category),
            total_size=sum(c.size for c in by_category),
            by_category=by_category,
        )

    def upload(self, *, user_id, incoming: Optional[IncomingFile], metadata: FileMetadata) -> int:
        if is_blank(user_id) or incoming is None:
            raise ValidationError("userId and file are required")
        owner_id = parse_id(user_id, "userId")

        if incoming.mimetype not in self._allowed_types:
            raise UnsupportedTypeError(f"File type {incoming.mimetype or 'unknown'} not allowed")

        size = incoming.size()
        if size > self._max_bytes:
            raise ValidationError("File too large")

        category = parse_enum(FileCategory, metadata.file_category, FileCategory.DOCUMENT, "fileCategory")

        stored_name = self._storage.generate_name(incoming.filename)
        path = self._storage.save(incoming.stream, stored_name)
        try:
            file_id = self._files.create_file(
                user_id=owner_id,
                file_name=stored_name,
                original_file_name=incoming.filename,
                file_type=incoming.mimetype,
                file_size=size,
                file_category=category,
                description=metadata.description,
                tags=metadata.tags,
                file_path=str(path),
            )
        except Exception:
            # No row points at the blob; drop it.
            self._storage.remove_quietly(path)
            raise

        logger.info("Stored file %s for user %s (%d bytes)", file_id, owner_id, size)
        return file_id

    def get(self, file_id: int) -> FileRecord:
        record = self._files.get_by_id(file_id)
        if not record:
            raise NotFoundError(FILE_NOT_FOUND)
        return record

    def resolve_download(self, file_id: int) -> FileRecord:
        record = self.get(file_id)
        if not self._storage.exists(record.file_path):
            raise NotFoundError("File missing from storage")
        return record

    def update_metadata(self, file_id: int, metadata: FileMetadata) -> None:
        category = parse_enum(FileCategory, metadata.file_category, FileCategory.DOCUMENT, "fileCategory")
        updated = self._files.update_metadata(
            file_id=file_id,
            file_category=category,
            description=metadata.description,
            tags=metadata.tags,
        )
        if not updated:
            raise NotFoundError(FILE_NOT_FOUND)

    def delete(self, file_id: int) -> None:
        record = self.get(file_id)
        # Blob first (best effort), row last.
        self._storage.remove_quietly(record.file_path)
        if not self._files.delete_by_id(file_id):
            raise NotFoundError(FILE_NOT_FOUND)
