"""Unit tests for src/services/locks.py"""

import threading
import time

from src.services.locks import SessionLocks


def test_same_key_is_serialised() -> None:
    locks = SessionLocks()
    inside = 0
    max_inside = 0
    counter_lock = threading.Lock()

    def work() -> None:
        nonlocal inside, max_inside
        with locks.hold("U1 vs U2"):
            with counter_lock:
                inside += 1
                max_inside = max(max_inside, inside)
            time.sleep(0.01)
            with counter_lock:
                inside -= 1

    threads = [threading.Thread(target=work) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert max_inside == 1


def test_different_keys_do_not_block_each_other() -> None:
    locks = SessionLocks()
    with locks.hold("A vs B"):
        acquired = threading.Event()

        def other() -> None:
            with locks.hold("C vs D"):
                acquired.set()

        thread = threading.Thread(target=other)
        thread.start()
        assert acquired.wait(timeout=1)
        thread.join()
        assert len(locks) == 1

    assert len(locks) == 0


def test_waiting_keeps_the_lock() -> None:
    locks = SessionLocks()
    entered = threading.Event()

    def waiter() -> None:
        with locks.hold("U1 vs U2"):
            entered.set()

    with locks.hold("U1 vs U2"):
        thread = threading.Thread(target=waiter)
        thread.start()
        assert not entered.wait(timeout=0.05)
        assert len(locks) == 1

    assert entered.wait(timeout=1)
    thread.join()
    assert len(locks) == 0
