# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The operations the HTTP layer calls: login, current user, comments, logout.

Every protected operation resolves the session before the comment log is
touched, so an unauthenticated caller never reads or changes it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from argon2 import PasswordHasher

from cboard.auth.session import Clock, SessionRegistry, utcnow
from cboard.auth.users import CredentialStore
from cboard.comments import Comment, CommentLog
from cboard.errors import Unauthenticated, Unauthorized
from cboard.logger import logger
from cboard.seed import Seed
from cboard.settings import Settings


class Board:
    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionRegistry,
        comments: CommentLog,
        *,
        clock: Clock = utcnow,
    ) -> None:
        self.credentials = credentials
        self.sessions = sessions
        self.comments = comments
        self._clock = clock

    def login(self, username: str, password: str) -> str:
        if not self.credentials.verify(username, password):
            logger.info("Login rejected")
            raise Unauthorized()
        token = self.sessions.create(username.strip())
        logger.info(f"Login ok for {username!r}")
        return token

    def current_user(self, token: str) -> str:
        u = self.sessions.resolve(token)
        if u is None:
            raise Unauthenticated()
        return u

    def get_comments(self, token: str) -> Tuple[Comment, ...]:
        self.current_user(token)
        return self.comments.list()

    def post_comment(self, token: str, message: str, timestamp: Optional[datetime] = None) -> Tuple[Comment, ...]:
        username = self.current_user(token)
        m = (message or "").strip()
        if not m:
            raise ValueError("El mensaje no puede estar vacío")
        self.comments.append(message, timestamp or self._clock())
        logger.info(f"Comment appended by {username!r} ({len(message)} chars)")
        return self.comments.list()

    def logout(self, token: str) -> None:
        u = self.sessions.resolve(token)
        self.sessions.destroy(token)
        if u is not None:
            logger.info(f"Logout for {u!r}")

    def register(self, username: str, password: str) -> None:
        self.credentials.register(username, password)
        logger.info(f"Registered user {username.strip()!r}")

    @classmethod
    def build(
        cls,
        seed: Optional[Seed] = None,
        *,
        settings: Optional[Settings] = None,
        hasher: Optional[PasswordHasher] = None,
        clock: Clock = utcnow,
    ) -> "Board":
        seed = seed or Seed()
        settings = settings or Settings()
        return cls(
            CredentialStore.from_records(seed.users, hasher=hasher),
            SessionRegistry(max_age=settings.session_ttl, clock=clock),
            CommentLog(seed.comments),
            clock=clock,
        )
