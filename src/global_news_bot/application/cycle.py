"""
Cycle controller – one full pass: fetch → score → select → publish each selection.
Single entry point for every trigger (manual, scheduled). Exactly one cycle
runs at a time; a trigger that arrives mid-cycle is rejected with a BUSY report.
"""

import threading
from datetime import datetime
from typing import Callable

from global_news_bot.application.history import PublishHistory
from global_news_bot.application.ingestion import SourceFetcher
from global_news_bot.application.publisher import PublishOrchestrator
from global_news_bot.application.scoring import score_candidates
from global_news_bot.application.selection import select_diverse
from global_news_bot.domain.models import CycleReport, CycleStatus, utc_now


class CycleController:
    """Orchestrates the whole pipeline. Per-source and per-story failures never abort a cycle."""

    def __init__(
        self,
        *,
        fetcher: SourceFetcher,
        orchestrator: PublishOrchestrator,
        history: PublishHistory,
        stories_per_cycle: int = 3,
        skip_published: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._fetcher = fetcher
        self._orchestrator = orchestrator
        self._history = history
        self._stories_per_cycle = stories_per_cycle
        self._skip_published = skip_published
        self._clock = clock
        self._running = threading.Lock()

    @property
    def history(self) -> PublishHistory:
        return self._history

    @property
    def orchestrator(self) -> PublishOrchestrator:
        return self._orchestrator

    @property
    def busy(self) -> bool:
        return self._running.locked()

    def run_cycle(self) -> CycleReport:
        if not self._running.acquire(blocking=False):
            print("⚠️  A cycle is already in progress, trigger rejected")
            return CycleReport(
                status=CycleStatus.BUSY,
                started_at=self._clock(),
                message="A cycle is already in progress",
            )
        try:
            return self._run()
        finally:
            self._running.release()

    def _run(self) -> CycleReport:
        report = CycleReport(status=CycleStatus.COMPLETED, started_at=self._clock())
        print("=" * 60)
        print("🌍 Starting global news automation cycle...")
        print("=" * 60)

        print("\n[1/4] Fetching global news...")
        stories, report.sources = self._fetcher.fetch_all()
        report.candidates = len(stories)
        failed_sources = sum(1 for s in report.sources if not s.ok)
        print(f"📰 Found {len(stories)} news stories ({failed_sources} source(s) unavailable)")

        if not stories:
            print("⚠️  No news found")
            return self._finish(report, CycleStatus.NO_STORIES, "No stories found")

        print("\n[2/4] Scoring stories...")
        scored = score_candidates(stories, now=report.started_at)

        print("\n[3/4] Selecting top stories across regions...")
        exclude = self._history.published_keys() if self._skip_published else set()
        report.selected = select_diverse(scored, self._stories_per_cycle, exclude_keys=exclude)
        if not report.selected:
            print("⚠️  Every candidate was already published")
            return self._finish(report, CycleStatus.NO_STORIES, "No new stories to publish")
        print(f"🔥 Selected {len(report.selected)} top stories:")
        for i, story in enumerate(report.selected, 1):
            print(f"  {i}. [{(story.region or '').upper()}] ({story.viral_score}) {story.title[:50]}...")

        print("\n[4/4] Creating and publishing posts...")
        report.attempts = self._orchestrator.publish_selection(report.selected, on_attempt=self._history.record)

        message = f"Processed {report.processed} stories, {report.succeeded} published"
        return self._finish(report, CycleStatus.COMPLETED, message)

    def _finish(self, report: CycleReport, status: CycleStatus, message: str) -> CycleReport:
        report.status = status
        report.message = message
        report.finished_at = self._clock()
        self._history.mark_run(report.finished_at, report)
        print(f"\n🎉 Automation cycle completed: {message}")
        return report
