"""
JSON File Storage Implementation

The ledger lives in a single UTF-8 JSON file.

TRADEOFFS:
- Whole-file rewrite on every mutation (fine for a personal ledger)
- One writer only; no locking between processes

Writes go to a temporary file that then replaces the target, so a crash
mid-write never leaves a half-written ledger behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from money_manager.services.storage.interface import (
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    File-backed ledger storage.

    Transient OS errors (e.g. a file briefly locked by a sync client)
    are retried before giving up.
    """

    def __init__(self, path: Union[str, Path], create_parents: bool = True):
        self._path = Path(path)
        self._create_parents = create_parents

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        if not self._path.exists():
            return None
        try:
            return self._read()
        except OSError as e:
            raise StorageError(f"Failed to read ledger from {self._path}: {e}") from e

    def save(self, document: str) -> None:
        parent = self._path.parent
        if not parent.exists():
            if not self._create_parents:
                raise NotFoundError(f"Ledger directory does not exist: {parent}")
            parent.mkdir(parents=True, exist_ok=True)
        try:
            self._write(document)
        except OSError as e:
            raise StorageError(f"Failed to write ledger to {self._path}: {e}") from e
        logger.debug("ledger_saved", path=str(self._path), size=len(document))

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete ledger at {self._path}: {e}") from e

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, document: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
