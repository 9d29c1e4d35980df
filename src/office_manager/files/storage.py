from __future__ import annotations

import logging
import os
import secrets
import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)


class BlobStorage:
    """Uploaded bytes on the local filesystem, one file per FileRecord."""

    def __init__(self, root: str | Path):
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_name(original_name: str, *, now: Optional[datetime] = None) -> str:
        """`<epoch ms>-<9 random digits>-<sanitized original name>`."""
        stamp = int((now or now_local()).timestamp() * 1000)
        suffix = secrets.randbelow(10**9)
        safe = secure_filename(original_name) or "upload"
        return f"{stamp}-{suffix}-{safe}"

    def save(self, stream: BinaryIO, stored_name: str) -> Path:
        self.ensure_root()
        path = self._root / stored_name
        stream.seek(0)
        with path.open("xb") as out:
            shutil.copyfileobj(stream, out)
        return path

    def exists(self, path: str | Path) -> bool:
        return Path(path).is_file()

    def remove(self, path: str | Path) -> None:
        os.remove(path)

    def remove_quietly(self, path: str | Path) -> bool:
        """Unlink a blob; failures are logged, never raised."""
        try:
            self.remove(path)
            return True
        except OSError as e:
            logger.warning("Could not delete stored file %s: %s", path, e)
            return False
