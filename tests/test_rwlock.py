# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
import threading
import time

from core.rwlock import RWLock


def test_readers_run_in_parallel():
    lock = RWLock()
    inside = threading.Barrier(3, timeout=5)

    def reader():
        with lock.read():
            # All three must be inside at once or the barrier times out
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not inside.broken


def test_writer_excludes_readers_and_writers():
    lock = RWLock()
    active = []
    overlaps = []
    guard = threading.Lock()

    def enter(kind):
        with guard:
            if "w" in active or (kind == "w" and active):
                overlaps.append((kind, list(active)))
            active.append(kind)

    def leave(kind):
        with guard:
            active.remove(kind)

    def writer():
        for _ in range(20):
            with lock.write():
                enter("w")
                time.sleep(0.001)
                leave("w")

    def reader():
        for _ in range(20):
            with lock.read():
                enter("r")
                time.sleep(0.001)
                leave("r")

    threads = [threading.Thread(target=writer) for _ in range(3)]
    threads += [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert overlaps == []


def test_waiting_writer_blocks_new_readers():
    lock = RWLock()
    order = []
    reader_in = threading.Event()
    release_first = threading.Event()

    def first_reader():
        with lock.read():
            reader_in.set()
            release_first.wait(5)

    def writer():
        with lock.write():
            order.append("writer")

    def late_reader():
        with lock.read():
            order.append("late_reader")

    r1 = threading.Thread(target=first_reader)
    r1.start()
    reader_in.wait(5)

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)  # let the writer queue up
    r2 = threading.Thread(target=late_reader)
    r2.start()
    time.sleep(0.05)

    assert order == []
    release_first.set()
    for t in (r1, w, r2):
        t.join(timeout=5)
    assert order == ["writer", "late_reader"]
