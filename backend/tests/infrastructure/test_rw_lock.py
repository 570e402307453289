"""Reader/Writer Lock — shared readers, exclusive writer, writer preference.

Tests cover:
    - Two readers hold the lock at the same time
    - A writer waits for active readers to leave
    - A waiting writer blocks newly arriving readers
    - Lock is released when the guarded block raises
"""

import threading

import pytest

from tasktrack.infrastructure.rw_lock import ReadWriteLock

TIMEOUT = 2.0


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=TIMEOUT)

    def reader():
        with lock.read_locked():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(TIMEOUT)
    assert not any(t.is_alive() for t in threads)


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    writer_done = threading.Event()

    lock.acquire_read()

    def writer():
        with lock.write_locked():
            writer_done.set()

    t = threading.Thread(target=writer)
    t.start()
    assert not writer_done.wait(0.1)
    lock.release_read()
    assert writer_done.wait(TIMEOUT)
    t.join(TIMEOUT)


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order: list[str] = []
    lock.acquire_read()

    def writer():
        with lock.write_locked():
            order.append("writer")

    def late_reader():
        with lock.read_locked():
            order.append("reader")

    w = threading.Thread(target=writer)
    w.start()
    # Give the writer time to register as waiting
    for _ in range(100):
        if lock._writers_waiting:
            break
        threading.Event().wait(0.01)
    r = threading.Thread(target=late_reader)
    r.start()
    threading.Event().wait(0.05)
    assert order == []
    lock.release_read()
    w.join(TIMEOUT)
    r.join(TIMEOUT)
    assert order == ["writer", "reader"]


def test_write_lock_released_after_exception():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        with lock.write_locked():
            raise RuntimeError("boom")
    acquired = threading.Event()

    def reader():
        with lock.read_locked():
            acquired.set()

    threading.Thread(target=reader).start()
    assert acquired.wait(TIMEOUT)
