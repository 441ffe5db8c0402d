# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Initial board state from a YAML file (users with argon2 hashes, demo comments)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

import yaml

from cboard.auth.users import UserRecord
from cboard.comments import Comment


@dataclass
class Seed:
    users: List[UserRecord] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value or "").strip()
        if not s:
            return None
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_seed(raw: Any) -> Seed:
    out = Seed()
    if not isinstance(raw, dict):
        return out

    users = raw.get("users") or {}
    if isinstance(users, dict):
        for uname, udata in users.items():
            if not isinstance(udata, dict):
                continue
            username = str(uname).strip()
            ph = str(udata.get("password_hash") or "").strip()
            if not username or not ph:
                continue
            out.users.append(UserRecord(username=username, password_hash=ph))

    comments = raw.get("comments") or []
    if isinstance(comments, list):
        for item in comments:
            if not isinstance(item, dict):
                continue
            ts = _parse_timestamp(item.get("timestamp"))
            msg = item.get("message")
            if ts is None or msg is None:
                continue
            out.comments.append(Comment(timestamp=ts, message=str(msg)))
    return out


def load_seed(path: Path) -> Seed:
    if not path.exists():
        return Seed()
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return parse_seed(raw)
