"""Bounded record of recent publish attempts plus the last-run timestamp."""

import threading
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional, Set

from global_news_bot.domain.models import CycleReport, PublishAttempt


class PublishHistory:
    """
    Ring buffer of the most recent attempts (oldest evicted first).
    Written only by the cycle controller; the lock keeps readers on other
    threads (HTTP handlers) from seeing a half-applied update.
    """

    def __init__(self, capacity: int = 20):
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self._attempts: Deque[PublishAttempt] = deque(maxlen=capacity)
        self._last_run: Optional[datetime] = None
        self._last_report: Optional[CycleReport] = None
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._attempts.maxlen

    @property
    def last_run(self) -> Optional[datetime]:
        return self._last_run

    @property
    def last_report(self) -> Optional[CycleReport]:
        return self._last_report

    def record(self, attempt: PublishAttempt) -> None:
        if not attempt.finalized:
            raise ValueError("Only finalized attempts can be recorded")
        with self._lock:
            self._attempts.append(attempt)

    def mark_run(self, finished_at: datetime, report: Optional[CycleReport] = None) -> None:
        with self._lock:
            self._last_run = finished_at
            self._last_report = report

    def recent(self) -> List[PublishAttempt]:
        with self._lock:
            return list(self._attempts)

    def published_keys(self) -> Set[str]:
        """Keys of stories published successfully and still remembered."""
        with self._lock:
            return {a.story.key for a in self._attempts if a.success}

    def __len__(self) -> int:
        return len(self._attempts)
