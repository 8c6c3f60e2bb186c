"""Recurring trigger: invokes the cycle controller's single entry point on a fixed interval."""

import threading
from datetime import datetime
from typing import Callable, Optional

import schedule

from global_news_bot.application.cycle import CycleController


class CycleScheduler:
    """Wraps a schedule.Scheduler; knows nothing about the pipeline beyond run_cycle()."""

    def __init__(
        self,
        controller: CycleController,
        *,
        interval_hours: int = 2,
        scheduler: Optional[schedule.Scheduler] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self._controller = controller
        self._interval_hours = interval_hours
        self._scheduler = scheduler or schedule.Scheduler()
        self._job: Optional[schedule.Job] = None
        self._stop = threading.Event()
        self._sleep = sleep or self._stop.wait

    def start(self) -> schedule.Job:
        if self._job is None:
            self._job = self._scheduler.every(self._interval_hours).hours.do(self.trigger)
            print(f"📅 Scheduled automation every {self._interval_hours} hour(s), next run at {self.next_run}")
        return self._job

    @property
    def next_run(self) -> Optional[datetime]:
        return self._job.next_run if self._job else None

    def trigger(self) -> None:
        print("⏰ Scheduled automation triggered")
        try:
            report = self._controller.run_cycle()
            print(f"⏰ Scheduled cycle finished: {report.status.value} ({report.processed} stories processed)")
        except Exception as e:
            print(f"💥 Critical error in scheduled cycle: {e}")

    def run_pending(self) -> None:
        self._scheduler.run_pending()

    def run_forever(self, poll_seconds: float = 60, run_immediately: bool = False) -> None:
        self.start()
        if run_immediately:
            self.trigger()
        while not self._stop.is_set():
            self.run_pending()
            self._sleep(poll_seconds)
        print("👋 Scheduler stopped")

    def stop(self) -> None:
        self._stop.set()
