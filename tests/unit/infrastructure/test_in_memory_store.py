"""
Unit tests for the in-memory execution store.
"""
from datetime import datetime, timedelta, timezone

from core.domain.entities import Execution
from core.domain.enums import ExecutionStatus
from core.infrastructure.stores import InMemoryExecutionStore

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


def _finished(execution_id, user_id="user-1", ended_at=NOW):
    execution = Execution(id=execution_id, agent_id="blog-publisher", user_id=user_id)
    execution.status = ExecutionStatus.COMPLETED
    execution.ended_at = ended_at
    return execution


def _running(execution_id, user_id="user-1"):
    return Execution(id=execution_id, agent_id="blog-publisher", user_id=user_id)


def test_put_get_and_list_by_owner():
    store = InMemoryExecutionStore()
    store.put(_running("a", "alice"))
    store.put(_running("b", "bob"))

    assert store.get("a").user_id == "alice"
    assert store.get("missing") is None
    assert [execution.id for execution in store.list_by_owner("bob")] == ["b"]
    assert [execution.id for execution in store.values()] == ["a", "b"]


def test_terminal_records_expire_after_ttl():
    clock = FakeClock()
    store = InMemoryExecutionStore(ttl_seconds=60, clock=clock)
    store.put(_finished("old"))
    store.put(_running("live"))

    clock.now = NOW + timedelta(seconds=61)

    assert store.get("old") is None
    assert store.get("live") is not None
    assert len(store) == 1


def test_records_within_ttl_are_kept():
    clock = FakeClock()
    store = InMemoryExecutionStore(ttl_seconds=60, clock=clock)
    store.put(_finished("recent"))

    clock.now = NOW + timedelta(seconds=30)

    assert store.get("recent") is not None


def test_cap_evicts_oldest_terminal_records_first():
    store = InMemoryExecutionStore(ttl_seconds=None, max_entries=2)
    store.put(_finished("first"))
    store.put(_finished("second"))
    store.put(_finished("third"))

    assert [execution.id for execution in store.values()] == ["second", "third"]


def test_running_records_are_never_evicted():
    store = InMemoryExecutionStore(ttl_seconds=None, max_entries=1)
    store.put(_running("r1"))
    store.put(_running("r2"))
    store.put(_finished("done"))

    assert [execution.id for execution in store.values()] == ["r1", "r2"]
