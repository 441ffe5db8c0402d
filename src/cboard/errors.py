# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Expected, user-facing outcomes of board operations.

These are raised by the Board facade and rendered by the HTTP layer; none of
them is a fault. Anything else escaping a request is.
"""

from __future__ import annotations

from http import HTTPStatus


class BoardError(Exception):
    code = "board_error"
    status = HTTPStatus.BAD_REQUEST
    message = "Operación no permitida"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": str(self)}


class Unauthorized(BoardError):
    """Login credentials did not verify (unknown user or wrong password alike)."""

    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Credenciales inválidas"


class Unauthenticated(BoardError):
    """No active session for a protected operation."""

    code = "login_required"
    status = HTTPStatus.UNAUTHORIZED
    message = "Inicia sesión para continuar"


class DuplicateUser(BoardError):
    code = "duplicate_user"
    status = HTTPStatus.CONFLICT
    message = "El usuario ya existe"

    def __init__(self, username: str) -> None:
        super().__init__(f"El usuario '{username}' ya existe")
        self.username = username
