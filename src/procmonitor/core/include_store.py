"""
Durable storage of pinned process names.

A pinned process is reported on every cycle even after its memory usage
falls back below the threshold. The list survives restarts in a plain text
file holding one name per line.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import FrozenSet, Optional, Set, Union

from ..validation import ErrorSeverity, handle_file_error

logger = logging.getLogger(__name__)


class IncludeListStore:
    """
    In-memory include set backed by a text file.

    The store assumes a single writer; concurrent cycles must serialize
    their calls to load() and save().

    Attributes:
        path: Location of the include-list file.
        dirty: True when names were added since the last successful save.
    """

    def __init__(self, path: Union[str, Path], logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or globals()["logger"]
        self._names: Set[str] = set()
        self.dirty = False

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset(self._names)

    def add(self, name: str) -> bool:
        """
        Pin a process name.

        Returns:
            True if the name was not pinned before.
        """
        if name in self._names:
            return False
        self._names.add(name)
        self.dirty = True
        self.logger.debug(
            "New process added to the list of metrics to be permanently reported, "
            f"even if falling back below threshold: {name}"
        )
        return True

    def load(self) -> FrozenSet[str]:
        """
        Read pinned names from the include-list file into the store.

        A missing file is the normal first-run case. Any other read error is
        logged and treated as an empty list so startup is never blocked.

        Returns:
            The names read from the file.
        """
        loaded: Set[str] = set()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    name = line.strip()
                    if name:
                        loaded.add(name)
        except FileNotFoundError:
            self.logger.info(
                f"Include list {self.path} not found. This might be the first run; "
                "starting with no pinned processes."
            )
            return frozenset()
        except (OSError, UnicodeDecodeError) as e:
            handle_file_error(
                error=e,
                context=f"reading include list {self.path}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=self.logger,
            )
            return frozenset()

        self._names.update(loaded)
        self.logger.info(f"Loaded {len(loaded)} pinned processes from {self.path}")
        return frozenset(loaded)

    def save(self) -> bool:
        """
        Replace the include-list file with the current names, sorted.

        The content is written to a temporary file next to the target and
        moved into place, so an interrupted write leaves the previous file
        intact.

        Returns:
            True on success, False if the file could not be written.
        """
        content = "".join(f"{name}\n" for name in sorted(self._names))
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            handle_file_error(
                error=e,
                context=f"writing include list {self.path}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=self.logger,
            )
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError as cleanup_error:
                    self.logger.debug(f"Could not remove {tmp_path}: {cleanup_error}")
            return False

        self.dirty = False
        self.logger.debug(f"Saved {len(self._names)} pinned processes to {self.path}")
        return True
