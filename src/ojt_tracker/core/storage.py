"""CSV storage manager with atomic operations and locking."""

import csv
import logging
import os
import shutil
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Optional

from ojt_tracker.core.errors import StorageError
from ojt_tracker.core.models import ENTRY_FIELDNAMES, PREFERENCE_FIELDNAMES

logger = logging.getLogger(__name__)


def _lock_file(file_obj: Any, exclusive: bool = True) -> None:
    """Lock a file in a cross-platform way.

    Args:
        file_obj: File object to lock
        exclusive: If True, acquire exclusive lock; if False, acquire shared lock
    """
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        mode = msvcrt.LK_LOCK if exclusive else msvcrt.LK_RLCK
        msvcrt.locking(file_obj.fileno(), mode, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        mode = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(file_obj.fileno(), mode)


def _unlock_file(file_obj: Any) -> None:
    """Unlock a file in a cross-platform way.

    Args:
        file_obj: File object to unlock
    """
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        msvcrt.locking(file_obj.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        fcntl.flock(file_obj.fileno(), fcntl.LOCK_UN)


class StorageManager:
    """Manages CSV storage for entries and preferences with atomic operations.

    Every read-modify-write sequence must run inside :meth:`transaction`,
    which holds an exclusive lock on ``.lock`` in the data directory. Row
    filters applied inside a transaction are therefore atomic with the write
    that follows them, across threads and processes.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize storage manager.

        Args:
            data_dir: Custom data directory. Defaults to ~/.ojt-tracker/data
        """
        if data_dir is None:
            data_dir = Path.home() / ".ojt-tracker" / "data"

        self.data_dir = Path(data_dir)
        self.entries_file = self.data_dir / "entries.csv"
        self.preferences_file = self.data_dir / "preferences.csv"
        self.sequence_file = self.data_dir / "entries.seq"
        self.lock_path = self.data_dir / ".lock"
        self.backup_dir = self.data_dir.parent / "backups"

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            self._initialize_files()
        except OSError as e:
            logger.error(f"Failed to initialize storage in {self.data_dir}: {e}")
            raise StorageError() from e

    def _initialize_files(self) -> None:
        """Create CSV files with headers if they don't exist."""
        with self.transaction():
            if not self.entries_file.exists():
                self._write_csv_atomic(self.entries_file, ENTRY_FIELDNAMES, [])
            if not self.preferences_file.exists():
                self._write_csv_atomic(self.preferences_file, PREFERENCE_FIELDNAMES, [])

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the exclusive storage lock for the duration of the block.

        Raises:
            StorageError: If the lock file cannot be opened or locked
        """
        try:
            lock_file = open(self.lock_path, "a+", encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to open storage lock {self.lock_path}: {e}")
            raise StorageError() from e

        with lock_file:
            try:
                _lock_file(lock_file, exclusive=True)
            except OSError as e:
                logger.error(f"Failed to lock storage: {e}")
                raise StorageError() from e
            try:
                yield
            finally:
                _unlock_file(lock_file)

    def _write_csv_atomic(
        self, file_path: Path, fieldnames: list[str], rows: list[dict[str, Any]]
    ) -> None:
        """Write CSV file atomically using temporary file and rename.

        Args:
            file_path: Target file path
            fieldnames: CSV field names
            rows: List of row dictionaries

        Raises:
            StorageError: If the file cannot be written
        """
        temp_file = file_path.with_suffix(".tmp")

        try:
            with open(temp_file, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)

                # Flush to disk
                f.flush()
                os.fsync(f.fileno())

            # Atomic rename
            temp_file.replace(file_path)

        except (OSError, csv.Error) as e:
            if temp_file.exists():
                temp_file.unlink()
            logger.error(f"Failed to write {file_path}: {e}")
            raise StorageError() from e

    def _read_csv(self, file_path: Path) -> list[dict[str, Any]]:
        """Read CSV file with a shared lock.

        Args:
            file_path: CSV file to read

        Returns:
            List of row dictionaries

        Raises:
            StorageError: If the file cannot be read
        """
        if not file_path.exists():
            return []

        try:
            with open(file_path, newline="", encoding="utf-8") as f:
                _lock_file(f, exclusive=False)
                try:
                    return list(csv.DictReader(f))
                finally:
                    _unlock_file(f)
        except (OSError, csv.Error) as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise StorageError() from e

    def backup(self, label: Optional[str] = None) -> Path:
        """Create backup of all data files.

        Args:
            label: Optional label for backup. Defaults to timestamp

        Returns:
            Path to backup directory
        """
        if label is None:
            label = datetime.now().strftime("%Y%m%d_%H%M%S")

        backup_path = self.backup_dir / label
        backup_path.mkdir(parents=True, exist_ok=True)

        with self.transaction():
            for file in [self.entries_file, self.preferences_file, self.sequence_file]:
                if file.exists():
                    shutil.copy2(file, backup_path / file.name)

        logger.info(f"Backed up data files to {backup_path}")
        return backup_path

    # Entry rows

    def read_entry_rows(self) -> list[dict[str, Any]]:
        """Read all entry rows."""
        return self._read_csv(self.entries_file)

    def write_entry_rows(self, rows: list[dict[str, Any]]) -> None:
        """Replace all entry rows. Call inside :meth:`transaction`."""
        self._write_csv_atomic(self.entries_file, ENTRY_FIELDNAMES, rows)

    def next_entry_id(self, rows: list[dict[str, Any]]) -> int:
        """Allocate the next entry id. Call inside :meth:`transaction`.

        Ids are never reused, even after the highest one is deleted.
        """
        last_id = max((int(row["id"]) for row in rows), default=0)
        try:
            if self.sequence_file.exists():
                last_id = max(last_id, int(self.sequence_file.read_text().strip() or 0))
            next_id = last_id + 1
            self.sequence_file.write_text(str(next_id))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to allocate entry id: {e}")
            raise StorageError() from e
        return next_id

    # Preference rows

    def read_preference_rows(self) -> list[dict[str, Any]]:
        """Read all preference rows."""
        return self._read_csv(self.preferences_file)

    def write_preference_rows(self, rows: list[dict[str, Any]]) -> None:
        """Replace all preference rows. Call inside :meth:`transaction`."""
        self._write_csv_atomic(self.preferences_file, PREFERENCE_FIELDNAMES, rows)
