# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from cboard.auth.session import TokenCookie
from cboard.board import Board
from cboard.errors import BoardError, Unauthenticated, Unauthorized
from cboard.logger import logger, setup_logging
from cboard.permissions import get_board, require_user, token_from_request
from cboard.seed import load_seed
from cboard.settings import Settings

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None, *, status_code: int = 200):
    """TemplateResponse wrapper injecting the current user."""
    base_ctx = {"current_user": getattr(request.state, "user", None), "error": "", "notice": ""}
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


def _clear_cookie(request: Request, resp):
    resp.delete_cookie(request.app.state.settings.cookie_name)
    return resp


def create_app(board: Board, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI()
    app.state.board = board
    app.state.settings = settings
    app.state.token_cookie = TokenCookie(
        settings.secret_key,
        max_age=settings.session_max_age or None,
    )

    @app.middleware("http")
    async def _request_log(request: Request, call_next):
        t0 = time.perf_counter()
        request.state.user = None
        resp = await call_next(request)
        dt = (time.perf_counter() - t0) * 1000.0
        logger.info(f"{request.method} {request.url.path} -> {resp.status_code} in {dt:.1f} ms")
        return resp

    @app.exception_handler(Unauthenticated)
    async def _unauthenticated(request: Request, exc: Unauthenticated):
        resp = _render(request, "login.html", {"notice": str(exc)})
        return _clear_cookie(request, resp)

    @app.exception_handler(Unauthorized)
    async def _unauthorized(request: Request, exc: Unauthorized):
        return _render(request, "login.html", {"error": str(exc)}, status_code=int(exc.status))

    @app.exception_handler(BoardError)
    async def _board_error(request: Request, exc: BoardError):
        logger.warning(f"Handled board error {exc.code} on {request.method} {request.url.path}")
        return JSONResponse(exc.to_dict(), status_code=int(exc.status))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return PlainTextResponse("Internal Server Error", status_code=500)

    # ------------------ Routes ------------------

    @app.get("/")
    def home():
        return RedirectResponse(url="/comments", status_code=303)

    @app.get("/login")
    def login_get(request: Request):
        token = token_from_request(request)
        if token and get_board(request).sessions.resolve(token):
            return RedirectResponse(url="/comments", status_code=303)
        return _render(request, "login.html")

    @app.post("/login")
    def login_post(
        request: Request,
        username: str = Form(""),
        password: str = Form(""),
    ):
        token = get_board(request).login(username, password)
        resp = RedirectResponse(url="/comments", status_code=303)
        resp.set_cookie(
            settings.cookie_name,
            request.app.state.token_cookie.dumps(token),
            max_age=settings.session_max_age or None,
            **settings.cookie_settings(),
        )
        return resp

    @app.get("/comments")
    def comments_get(request: Request, user: str = Depends(require_user)):
        request.state.user = user
        comments = get_board(request).get_comments(token_from_request(request))
        return _render(request, "comments.html", {"comments": comments})

    @app.post("/comments")
    def comments_post(request: Request, message: str = Form(""), user: str = Depends(require_user)):
        request.state.user = user
        b = get_board(request)
        token = token_from_request(request)
        try:
            comments = b.post_comment(token, message)
        except ValueError as e:
            return _render(
                request,
                "comments.html",
                {"comments": b.get_comments(token), "error": str(e)},
                status_code=400,
            )
        return _render(request, "comments.html", {"comments": comments})

    @app.api_route("/logout", methods=["GET", "POST"])
    def logout(request: Request):
        get_board(request).logout(token_from_request(request))
        return _clear_cookie(request, _render(request, "login.html"))

    return app


def build_app() -> FastAPI:
    """uvicorn factory: settings from env, state from the seed file."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    seed = load_seed(settings.seed_path)
    logger.info(f"Seeded {len(seed.users)} users and {len(seed.comments)} comments from {settings.seed_path}")
    return create_app(Board.build(seed, settings=settings), settings)
