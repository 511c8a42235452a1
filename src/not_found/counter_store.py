from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class NotFoundEntry:
    url: str
    count: int
    last_seen: str
    suggested: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "count": self.count,
            "last_seen": self.last_seen,
            "suggested": self.suggested,
        }


class NotFoundCounterStore:
    """Hit counters for paths that returned 404.

    Lives as long as the process that created it. When full, the entry seen
    least recently is evicted.
    """

    def __init__(self, capacity: int = 500, clock: Callable[[], datetime] | None = None) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: OrderedDict[str, NotFoundEntry] = OrderedDict()
        self.evicted_total = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pathname: object) -> bool:
        return pathname in self._entries

    def get(self, pathname: str) -> NotFoundEntry | None:
        return self._entries.get(pathname)

    def record(self, pathname: str, suggested: str) -> NotFoundEntry:
        existing = self._entries.pop(pathname, None)
        entry = NotFoundEntry(
            url=pathname,
            count=existing.count + 1 if existing else 1,
            last_seen=self._clock().isoformat(),
            suggested=suggested,
        )
        self._entries[pathname] = entry
        while len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
            self.evicted_total += 1
        return entry

    def entries(self) -> list[NotFoundEntry]:
        return list(self._entries.values())

    def top(self, limit: int = 50) -> list[NotFoundEntry]:
        ranked = sorted(self._entries.values(), key=lambda entry: entry.count, reverse=True)
        return ranked[:limit]

    def total_hits(self) -> int:
        return sum(entry.count for entry in self._entries.values())

    def reset(self) -> None:
        self._entries.clear()
        self.evicted_total = 0
