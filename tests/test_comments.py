import threading
from datetime import datetime, timedelta, timezone

from cboard.comments import Comment, CommentLog

T0 = datetime(2023, 8, 1, 10, 24, 59, tzinfo=timezone.utc)


def test_append_goes_to_end_exactly_once():
    log = CommentLog([Comment(T0, "こんにちは")])
    before = log.list()
    c = log.append("hi", T0 + timedelta(minutes=1))
    after = log.list()
    assert after[:-1] == before
    assert after[-1] == c
    assert [x.message for x in after].count("hi") == 1


def test_list_is_a_snapshot():
    log = CommentLog()
    snap = log.list()
    log.append("a", T0)
    assert snap == ()
    assert len(log.list()) == 1


def test_log_order_wins_over_timestamps():
    log = CommentLog()
    log.append("later", T0 + timedelta(days=1))
    log.append("earlier", T0)
    assert [c.message for c in log.list()] == ["later", "earlier"]
    assert log.latest().message == "earlier"


def test_latest_on_empty_log():
    assert CommentLog().latest() is None


def test_concurrent_appends_lose_nothing():
    log = CommentLog()
    n_threads, per_thread = 8, 250
    barrier = threading.Barrier(n_threads)

    def worker(i):
        barrier.wait()
        for j in range(per_thread):
            log.append(f"{i}-{j}", T0)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    messages = [c.message for c in log.list()]
    assert len(messages) == n_threads * per_thread
    assert len(set(messages)) == len(messages)
    # each writer's own comments keep their relative order
    for i in range(n_threads):
        mine = [m for m in messages if m.startswith(f"{i}-")]
        assert mine == [f"{i}-{j}" for j in range(per_thread)]


def test_list_during_appends_sees_whole_prefixes():
    log = CommentLog()
    n_writers, per_writer = 4, 300
    barrier = threading.Barrier(n_writers + 1)
    done = threading.Event()
    snapshots = []

    def writer(i):
        barrier.wait()
        for j in range(per_writer):
            log.append(f"{i}-{j}", T0)

    def reader():
        barrier.wait()
        while True:
            snapshots.append(log.list())
            if done.is_set():
                break

    writers = [threading.Thread(target=writer, args=(i,)) for i in range(n_writers)]
    r = threading.Thread(target=reader)
    r.start()
    for t in writers:
        t.start()
    for t in writers:
        t.join()
    done.set()
    r.join()

    final = log.list()
    assert len(final) == n_writers * per_writer
    assert snapshots
    for snap in snapshots:
        assert final[: len(snap)] == snap
        assert all(isinstance(c, Comment) for c in snap)
