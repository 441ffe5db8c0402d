# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

from cboard.auth.passwords import default_hasher, hash_password, verify_password
from cboard.errors import DuplicateUser


@dataclass(frozen=True)
class UserRecord:
    username: str
    password_hash: str

    def __repr__(self) -> str:
        return f"UserRecord(username={self.username!r})"


def _clean(username: str) -> str:
    return (username or "").strip()


class CredentialStore:
    """Known users and their argon2 hashes.

    Records are immutable once stored. Reads take no lock (a dict lookup of an
    immutable value); writes are serialized so concurrent registrations of the
    same name resolve first-writer-wins.
    """

    def __init__(self, *, hasher: Optional[PasswordHasher] = None) -> None:
        self._hasher = hasher or default_hasher()
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()
        # Unknown users are checked against this so both failure paths cost one verify.
        self._dummy_hash = self._hasher.hash("cboard-dummy-password")

    def register(self, username: str, password: str) -> UserRecord:
        u = _clean(username)
        if not u:
            raise ValueError("Username vacío")
        password_hash = hash_password(password, hasher=self._hasher)
        return self.add_hashed(u, password_hash)

    def add_hashed(self, username: str, password_hash: str) -> UserRecord:
        u = _clean(username)
        if not u:
            raise ValueError("Username vacío")
        if not password_hash:
            raise ValueError(f"Hash vacío para '{u}'")
        record = UserRecord(username=u, password_hash=password_hash)
        with self._lock:
            if u in self._users:
                raise DuplicateUser(u)
            self._users[u] = record
        return record

    def verify(self, username: str, password: str) -> bool:
        u = self._users.get(_clean(username))
        if u is None or not password:
            self._burn(password)
            return False
        return verify_password(u.password_hash, password, hasher=self._hasher)

    def _burn(self, password: str) -> None:
        # Failure paths cost one argon2 verify, same as a wrong password.
        try:
            self._hasher.verify(self._dummy_hash, password or "")
        except VerificationError:
            pass

    def usernames(self) -> List[str]:
        return sorted(self._users)

    def __contains__(self, username: object) -> bool:
        return isinstance(username, str) and _clean(username) in self._users

    def __len__(self) -> int:
        return len(self._users)

    @classmethod
    def from_records(cls, records: Iterable[UserRecord], *, hasher: Optional[PasswordHasher] = None) -> "CredentialStore":
        store = cls(hasher=hasher)
        for r in records:
            store.add_hashed(r.username, r.password_hash)
        return store
