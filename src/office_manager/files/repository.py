from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import FileCategory
from .model import CategoryStat, FileRecord


class FileRepository(Protocol):
    def list_for_user(self, *, user_id: int, category: Optional[FileCategory] = None) -> Sequence[FileRecord]:
        """Newest upload first."""

        raise NotImplementedError

    def get_by_id(self, file_id: int) -> Optional[FileRecord]:
        raise NotImplementedError

    def create_file(
        self,
        *,
        user_id: int,
        file_name: str,
        original_file_name: str,
        file_type: str,
        file_size: int,
        file_category: FileCategory,
        description: Optional[str],
        tags: Optional[str],
        file_path: str,
    ) -> int:
        raise NotImplementedError

    def update_metadata(
        self,
        *,
        file_id: int,
        file_category: FileCategory,
        description: Optional[str],
        tags: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, file_id: int) -> bool:
        raise NotImplementedError

    def category_stats(self, *, user_id: int) -> Sequence[CategoryStat]:
        raise NotImplementedError
