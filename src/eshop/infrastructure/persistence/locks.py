"""Process-wide locks keyed by data file.

Every repository instance that points at the same file shares one lock, so
read-compare-write sequences on that file cannot interleave.
"""

from __future__ import annotations

import threading
from pathlib import Path

_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path.resolve(), threading.Lock())
