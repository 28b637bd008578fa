"""Task storage backends.

Two interchangeable implementations of the TaskStore protocol:

- InMemoryStore keeps records in a list for the life of the process.
- FileStore keeps one record per line in a text file and re-reads the file
  on every call; the object itself only remembers the path.

Records are addressed by 0-based position. Out-of-range indexes are a silent
no-op reported through the boolean returned by mark_completed.
"""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union, runtime_checkable

from models import Task, SEPARATOR, completed_line

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path.home() / '.tasks.txt'
ENCODING = 'utf-8'
# damaged bytes (e.g. a write cut off inside a multi-byte character) are
# shown as U+FFFD but carried through a rewrite unchanged
_DISPLAY_ERRORS = 'replace'
_REWRITE_ERRORS = 'surrogateescape'
_FORBIDDEN = ('\n', '\r', SEPARATOR)

PathLike = Union[str, Path]


class StorageError(Exception):
    """Base class for errors raised by the storage layer."""


class InvalidDescriptionError(StorageError, ValueError):
    """Description cannot be encoded by the file backend."""


@runtime_checkable
class TaskStore(Protocol):
    def add_task(self, description: str) -> None:
        ...

    def get_tasks(self) -> List[str]:
        ...

    def mark_completed(self, index: int) -> bool:
        ...


class InMemoryStore:
    def __init__(self) -> None:
        self._tasks: List[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def add_task(self, description: str) -> None:
        self._tasks.append(Task(description))

    def get_tasks(self) -> List[str]:
        return [task.display() for task in self._tasks]

    def mark_completed(self, index: int) -> bool:
        if not _in_range(index, len(self._tasks)):
            return False
        self._tasks[index].completed = True
        return True


class FileStore:
    """Flat-file backend: line n of the file is task n.

    I/O failures never propagate; they are logged, remembered in
    ``last_error`` and the call degrades to "nothing happened".
    """

    def __init__(self, path: PathLike = DEFAULT_TASKS_FILE):
        self.path = Path(path)
        self.last_error: Optional[str] = None

    def __len__(self) -> int:
        return len(self._read_lines() or [])

    # -------------------- operations --------------------
    def add_task(self, description: str) -> None:
        _check_description(description)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            prefix = '' if self._ends_cleanly() else '\n'
            with open(self.path, 'a', encoding=ENCODING, newline='\n') as f:
                f.write(prefix + Task(description).to_line() + '\n')
        except OSError as e:
            self._failed('append to', e)
            return
        self.last_error = None

    def get_tasks(self) -> List[str]:
        lines = self._read_lines(_DISPLAY_ERRORS)
        if lines is None:
            return []
        return [Task.from_line(line).display() for line in lines]

    def mark_completed(self, index: int) -> bool:
        lines = self._read_lines(_REWRITE_ERRORS)
        if lines is None or not _in_range(index, len(lines)):
            return False
        lines[index] = completed_line(lines[index])
        try:
            self._replace_contents(lines)
        except OSError as e:
            self._failed('rewrite', e)
            return False
        self.last_error = None
        return True

    # -------------------- file helpers --------------------
    def _read_lines(self, errors: str = _DISPLAY_ERRORS) -> Optional[List[str]]:
        """Return stored lines without terminators; None if unreadable.

        A missing file is an empty store, not a failure. Undecodable bytes
        never fail the read; they only affect the line they sit on.
        """
        if not self.path.exists():
            self.last_error = None
            return []
        try:
            with open(self.path, 'r', encoding=ENCODING, errors=errors, newline='\n') as f:
                lines = [line.rstrip('\r\n') for line in f]
        except OSError as e:
            self._failed('read', e)
            return None
        self.last_error = None
        return lines

    def _replace_contents(self, lines: List[str]) -> None:
        """Write lines to a temp file beside the store, then swap it in.

        The store file is either fully old or fully new; a failed write
        leaves it untouched.
        """
        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix='.' + self.path.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding=ENCODING, errors=_REWRITE_ERRORS, newline='\n') as f:
                _write_lines(f, lines)
            shutil.copymode(self.path, temp_path)
            os.replace(temp_path, self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise

    def _ends_cleanly(self) -> bool:
        """True if appending can start a fresh line (empty, missing or newline-terminated)."""
        if not self.path.exists():
            return True
        with open(self.path, 'rb') as f:
            f.seek(0, 2)
            if f.tell() == 0:
                return True
            f.seek(-1, 2)
            last = f.read(1)
        if last != b'\n':
            logger.warning("Truncated last line in %s; starting new record on a fresh line", self.path)
            return False
        return True

    def _failed(self, action: str, err: Exception) -> None:
        self.last_error = f"Could not {action} {self.path}: {err}"
        logger.exception(self.last_error)


def _write_lines(f, lines: Iterable[str]) -> None:
    for line in lines:
        f.write(line + '\n')

def _in_range(index: int, length: int) -> bool:
    return 0 <= index < length

def _check_description(description: str) -> None:
    for ch in _FORBIDDEN:
        if ch in description:
            raise InvalidDescriptionError(
                f"Task description may not contain {ch!r} when stored in a file."
            )
