import threading
import time
from typing import List

import pytest

from app.db import postgres


class SlowEngine:
    """Stands in for a real engine; creation is slow enough to overlap threads."""

    def __init__(self) -> None:
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


@pytest.fixture
def engine_calls(monkeypatch) -> List[SlowEngine]:
    created: List[SlowEngine] = []

    def fake_create_engine(url, **kwargs):
        time.sleep(0.05)
        engine = SlowEngine()
        created.append(engine)
        return engine

    postgres.dispose_engine()
    monkeypatch.setattr(postgres, "create_engine", fake_create_engine)
    yield created
    postgres.dispose_engine()


def run_concurrently(target, count: int = 8) -> List[Exception]:
    barrier = threading.Barrier(count)
    errors: List[Exception] = []

    def worker() -> None:
        barrier.wait()
        try:
            target()
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return errors


def test_engine_is_created_once_under_concurrent_first_use(engine_calls: List[SlowEngine]) -> None:
    engines = []

    errors = run_concurrently(lambda: engines.append(postgres.get_engine()))

    assert errors == []
    assert len(engine_calls) == 1
    assert all(engine is engine_calls[0] for engine in engines)


def test_session_factory_is_ready_whenever_engine_is(engine_calls: List[SlowEngine]) -> None:
    factories = []

    def first_use() -> None:
        postgres.get_engine()
        factories.append(postgres._session_factory)

    errors = run_concurrently(first_use)

    assert errors == []
    assert len(engine_calls) == 1
    assert factories and all(factory is not None for factory in factories)


def test_dispose_drains_and_allows_recreation(engine_calls: List[SlowEngine]) -> None:
    first = postgres.get_engine()

    postgres.dispose_engine()

    assert first.disposed
    assert postgres.get_engine() is not first
    assert len(engine_calls) == 2
