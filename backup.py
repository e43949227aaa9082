"""backup.py — One backup copy per file per session."""

import logging
import threading
from pathlib import Path

from project import BACKUP_SUFFIX, create_backup

logger = logging.getLogger(__name__)


class BackupTracker:
    """
    Remembers which files were already backed up during this process.

    Only the first save of each file creates a .bak copy. The host creates
    one tracker at startup and passes it to every write command.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._backed_up: set[Path] = set()

    def backup_if_needed(self, path: Path, backup_suffix: str = BACKUP_SUFFIX) -> bool:
        """
        Back up path unless it was already handled this session.

        Returns True if this call handled it (copied, or marked because the
        file does not exist yet), False if it was already tracked. A failed
        copy raises OSError and leaves the path untracked so it can be retried.
        """
        path = Path(path)
        with self._lock:
            if path in self._backed_up:
                return False

            if path.exists():
                backup_path = create_backup(path, backup_suffix)
                logger.info("Backed up %s to %s", path, backup_path)
            else:
                logger.debug("No backup needed for new file %s", path)

            self._backed_up.add(path)
            return True

    def is_tracked(self, path: Path) -> bool:
        with self._lock:
            return Path(path) in self._backed_up

    def __len__(self) -> int:
        with self._lock:
            return len(self._backed_up)
