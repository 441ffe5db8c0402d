# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from itsdangerous import BadData, URLSafeTimedSerializer

Clock = Callable[[], datetime]

TOKEN_BYTES = 32


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    token: str
    username: str
    created_at: datetime
    expires_at: Optional[datetime] = None  # None: no expiry

    def expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def __repr__(self) -> str:
        return f"Session(username={self.username!r}, expires_at={self.expires_at!r})"


class SessionRegistry:
    """Opaque token -> Session, guarded by a single lock.

    Lifecycle is Active -> Destroyed, via destroy() or expiry. Expiry is
    checked when a token is resolved; there is no background sweep.
    """

    def __init__(self, *, max_age: Optional[timedelta] = None, clock: Clock = utcnow) -> None:
        self._max_age = max_age
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    @property
    def max_age(self) -> Optional[timedelta]:
        return self._max_age

    def create(self, username: str) -> str:
        now = self._clock()
        expires_at = now + self._max_age if self._max_age else None
        with self._lock:
            token = secrets.token_urlsafe(TOKEN_BYTES)
            while token in self._sessions:
                token = secrets.token_urlsafe(TOKEN_BYTES)
            self._sessions[token] = Session(
                token=token,
                username=username,
                created_at=now,
                expires_at=expires_at,
            )
        return token

    def get(self, token: str) -> Optional[Session]:
        if not token:
            return None
        now = self._clock()
        with self._lock:
            s = self._sessions.get(token)
            if s is None:
                return None
            if s.expired(now):
                del self._sessions[token]
                return None
            return s

    def resolve(self, token: str) -> Optional[str]:
        """Bound username for an active token, else None."""
        s = self.get(token)
        return s.username if s else None

    def destroy(self, token: str) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            dead = [t for t, s in self._sessions.items() if s.expired(now)]
            for t in dead:
                del self._sessions[t]
        return len(dead)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class TokenCookie:
    """Signs the opaque session token for transport in a cookie."""

    def __init__(self, secret_key: str, *, salt: str = "cboard.session.v1", max_age: Optional[int] = None) -> None:
        if not secret_key:
            raise RuntimeError("Falta SECRET_KEY (o CBOARD_SECRET_KEY) en entorno")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)
        self._max_age = max_age

    def dumps(self, token: str) -> str:
        return self._serializer.dumps({"t": token})

    def loads(self, value: str) -> str:
        if not value:
            return ""
        try:
            data = self._serializer.loads(value, max_age=self._max_age)
        except BadData:
            return ""
        t = (data or {}).get("t") if isinstance(data, dict) else None
        return str(t or "")
