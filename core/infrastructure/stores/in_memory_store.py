"""
In-memory execution store.

Holds agent and workflow run records for the lifetime of the process.
Terminal records expire after a TTL and the oldest terminal records are
evicted once the store exceeds its cap. Running records are never evicted.
"""
import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Callable, List, Optional, TypeVar

from core.application.interfaces import IExecutionStore
from core.domain.clock import utc_now


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class InMemoryExecutionStore(IExecutionStore[RecordT]):
    """
    Dict-backed store keyed by record id.

    Records must expose ``id``, ``owner_id``, ``status`` (with
    ``is_terminal``), ``started_at`` and ``ended_at``.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = 86_400,
        max_entries: Optional[int] = 10_000,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._records: "OrderedDict[str, RecordT]" = OrderedDict()
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self._max_entries = max_entries
        self._clock = clock

    def put(self, record: RecordT) -> None:
        self._records[record.id] = record
        self._records.move_to_end(record.id)
        self._evict()

    def get(self, record_id: str) -> Optional[RecordT]:
        self._evict()
        return self._records.get(record_id)

    def list_by_owner(self, owner_id: str) -> List[RecordT]:
        self._evict()
        return [record for record in self._records.values() if record.owner_id == owner_id]

    def values(self) -> List[RecordT]:
        self._evict()
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def _evict(self) -> None:
        if self._ttl is not None:
            cutoff = self._clock() - self._ttl
            expired = [
                record_id
                for record_id, record in self._records.items()
                if record.status.is_terminal and record.ended_at is not None and record.ended_at < cutoff
            ]
            for record_id in expired:
                del self._records[record_id]
            if expired:
                logger.info(f"Evicted {len(expired)} expired executions")

        if self._max_entries is None or len(self._records) <= self._max_entries:
            return

        overflow = len(self._records) - self._max_entries
        # Oldest insertions first; running records stay put
        for record_id in [rid for rid, rec in self._records.items() if rec.status.is_terminal][:overflow]:
            del self._records[record_id]
