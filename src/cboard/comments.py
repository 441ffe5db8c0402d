# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Comment:
    timestamp: datetime
    message: str


class CommentLog:
    """Append-only sequence of comments, kept in append order.

    The log does no authorization; callers resolve a session first.
    Timestamps are whatever the caller supplied, so "most recent" means last
    appended, not greatest timestamp.
    """

    def __init__(self, initial: Optional[Iterable[Comment]] = None) -> None:
        self._items: List[Comment] = list(initial or [])
        self._lock = threading.Lock()

    def list(self) -> Tuple[Comment, ...]:
        """Snapshot of all comments in append order."""
        with self._lock:
            return tuple(self._items)

    def append(self, message: str, timestamp: datetime) -> Comment:
        c = Comment(timestamp=timestamp, message=message)
        with self._lock:
            self._items.append(c)
        return c

    def latest(self) -> Optional[Comment]:
        with self._lock:
            return self._items[-1] if self._items else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
