import threading
from datetime import timedelta

import pytest

from cboard.auth.session import SessionRegistry, TokenCookie


def test_create_then_resolve(clock):
    reg = SessionRegistry(clock=clock)
    token = reg.create("alice")
    assert reg.resolve(token) == "alice"
    s = reg.get(token)
    assert s.created_at == clock.now
    assert s.expires_at is None


def test_tokens_are_random_and_not_derived_from_username(clock):
    reg = SessionRegistry(clock=clock)
    tokens = {reg.create("alice") for _ in range(50)}
    assert len(tokens) == 50
    assert all("alice" not in t and len(t) >= 40 for t in tokens)


def test_destroy_is_terminal_and_idempotent(clock):
    reg = SessionRegistry(clock=clock)
    token = reg.create("alice")
    reg.destroy(token)
    assert reg.resolve(token) is None
    reg.destroy(token)
    reg.destroy("unknown")
    reg.destroy("")
    assert reg.resolve(token) is None
    assert len(reg) == 0


def test_unknown_token_is_unauthenticated(clock):
    reg = SessionRegistry(clock=clock)
    assert reg.resolve("nope") is None
    assert reg.resolve("") is None


def test_expiry_checked_on_resolve(clock):
    reg = SessionRegistry(max_age=timedelta(minutes=30), clock=clock)
    token = reg.create("alice")
    clock.advance(minutes=29)
    assert reg.resolve(token) == "alice"
    clock.advance(minutes=1)
    assert reg.resolve(token) is None
    assert len(reg) == 0


def test_purge_expired(clock):
    reg = SessionRegistry(max_age=timedelta(minutes=5), clock=clock)
    reg.create("alice")
    clock.advance(minutes=3)
    fresh = reg.create("bob")
    clock.advance(minutes=3)
    assert reg.purge_expired() == 1
    assert reg.resolve(fresh) == "bob"


def test_token_cookie_round_trip_and_tamper():
    tc = TokenCookie("secret")
    signed = tc.dumps("abc")
    assert tc.loads(signed) == "abc"
    assert tc.loads(signed + "x") == ""
    assert TokenCookie("other").loads(signed) == ""
    assert tc.loads("") == ""


def test_token_cookie_requires_secret():
    with pytest.raises(RuntimeError):
        TokenCookie("")


def test_concurrent_create_resolve_destroy(clock):
    reg = SessionRegistry(max_age=timedelta(hours=1), clock=clock)
    n_threads, rounds = 8, 200
    barrier = threading.Barrier(n_threads)
    failures = []

    def worker(i):
        user = f"user{i}"
        barrier.wait()
        for _ in range(rounds):
            token = reg.create(user)
            if reg.resolve(token) != user:
                failures.append(("resolve", user))
            reg.destroy(token)
            if reg.resolve(token) is not None:
                failures.append(("destroyed", user))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert failures == []
    assert len(reg) == 0
