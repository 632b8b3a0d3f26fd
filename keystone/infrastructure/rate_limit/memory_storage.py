"""In-process storage for login attempt counters.

Process-local and shared by every request in the process. One asyncio.Lock
serialises all reads and writes, so a ``delete`` (reset) for an identifier
is linearised against concurrent ``increment`` calls for it.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

from keystone.domain.protocols import AttemptRecord


class InMemoryAttemptStorage:
    """Dictionary-backed attempt storage.

    Implements AttemptStorageProtocol (structural typing).
    """

    def __init__(self) -> None:
        self._records: dict[str, AttemptRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    async def get(self, identifier: str) -> AttemptRecord | None:
        async with self._lock:
            record = self._records.get(identifier)
            if record is None:
                return None
            return AttemptRecord(count=record.count, last_attempt_at=record.last_attempt_at)

    async def increment(
        self, identifier: str, now: datetime, window_start: datetime
    ) -> int:
        async with self._lock:
            record = self._records.get(identifier)
            if record is None or record.last_attempt_at < window_start:
                record = AttemptRecord(count=0, last_attempt_at=now)
                self._records[identifier] = record
            record.count += 1
            record.last_attempt_at = now
            return record.count

    async def delete(self, identifier: str) -> None:
        async with self._lock:
            self._records.pop(identifier, None)

    async def purge_older_than(self, cutoff: datetime) -> int:
        async with self._lock:
            stale = [
                identifier
                for identifier, record in self._records.items()
                if record.last_attempt_at < cutoff
            ]
            for identifier in stale:
                del self._records[identifier]
            return len(stale)
