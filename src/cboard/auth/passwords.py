# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_PH = PasswordHasher()


def default_hasher() -> PasswordHasher:
    return _PH


def hash_password(plain: str, *, hasher: Optional[PasswordHasher] = None) -> str:
    if not plain:
        raise ValueError("Password vacío")
    return (hasher or _PH).hash(plain)


def verify_password(hash_value: str, plain: str, *, hasher: Optional[PasswordHasher] = None) -> bool:
    if not hash_value or not plain:
        return False
    try:
        return (hasher or _PH).verify(hash_value, plain)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
