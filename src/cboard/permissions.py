# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import Request

from cboard.board import Board
from cboard.errors import Unauthenticated


def get_board(request: Request) -> Board:
    return request.app.state.board


def token_from_request(request: Request) -> str:
    """Opaque session token carried by the signed cookie, or ''."""
    settings = request.app.state.settings
    raw = request.cookies.get(settings.cookie_name, "")
    return request.app.state.token_cookie.loads(raw)


def current_user_optional(request: Request) -> Optional[str]:
    token = token_from_request(request)
    if not token:
        return None
    try:
        return get_board(request).current_user(token)
    except Unauthenticated:
        return None


def require_user(request: Request) -> str:
    # Missing and invalid sessions are the same outcome.
    u = current_user_optional(request)
    if u is None:
        raise Unauthenticated()
    return u
