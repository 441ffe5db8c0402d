import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from datetime import datetime, timedelta, timezone

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from cboard.app import create_app
from cboard.auth.session import SessionRegistry
from cboard.auth.users import CredentialStore
from cboard.board import Board
from cboard.comments import CommentLog
from cboard.settings import Settings


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2023, 8, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def hasher() -> PasswordHasher:
    # Cheap parameters; the production hasher uses argon2-cffi defaults.
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def credentials(hasher) -> CredentialStore:
    store = CredentialStore(hasher=hasher)
    store.register("alice", "s3cret")
    return store


@pytest.fixture()
def board(credentials, clock) -> Board:
    return Board(
        credentials,
        SessionRegistry(max_age=timedelta(hours=8), clock=clock),
        CommentLog(),
        clock=clock,
    )


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(secret_key="test-secret", seed_path=tmp_path / "board.yml")


@pytest.fixture()
def client(board, settings) -> TestClient:
    return TestClient(create_app(board, settings))
