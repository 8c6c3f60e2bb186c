"""
CLI entrypoint. Use from project root:
  global-news-bot --mode once        run one cycle and exit
  global-news-bot --mode schedule    run a cycle every SCHEDULE_INTERVAL_HOURS
  global-news-bot --mode serve       HTTP surface plus the background scheduler
"""

import argparse
import sys
import threading
from typing import Any, Dict, Optional

from global_news_bot import config
from global_news_bot.application import (
    ContentSynthesizer,
    CycleController,
    CycleScheduler,
    PublishHistory,
    PublishOrchestrator,
    SourceFetcher,
)
from global_news_bot.domain.models import CycleStatus, PublishCredentials


def build_controller(adapters: Dict[str, Any]) -> CycleController:
    """Wire the pipeline from adapter instances and package config."""
    fetcher = SourceFetcher(
        headline_source=adapters["headline_source"],
        feed_source=adapters["feed_source"],
        countries=config.COUNTRIES,
        feeds=config.RSS_SOURCES,
        countries_per_cycle=config.COUNTRIES_PER_CYCLE,
        feeds_per_cycle=config.FEEDS_PER_CYCLE,
        items_per_source=config.ITEMS_PER_SOURCE,
        min_title_length=config.MIN_TITLE_LENGTH,
        api_call_delay=config.API_CALL_DELAY_SECONDS,
    )
    synthesizer = ContentSynthesizer(
        script_model=adapters["script_model"],
        voice=adapters["voice"],
        encoder=adapters["encoder"],
        audio_dir=config.AUDIO_DIR,
        video_duration=config.VIDEO_DURATION,
    )
    orchestrator = PublishOrchestrator(
        synthesizer=synthesizer,
        driver_factory=adapters["driver_factory"],
        credentials=PublishCredentials.from_values(config.TIKTOK_EMAIL, config.TIKTOK_PASSWORD),
        caption_limit=config.CAPTION_LIMIT,
        post_delay=config.POST_DELAY_SECONDS,
    )
    return CycleController(
        fetcher=fetcher,
        orchestrator=orchestrator,
        history=PublishHistory(config.HISTORY_CAPACITY),
        stories_per_cycle=config.STORIES_PER_CYCLE,
    )


def readiness(adapters: Dict[str, Any]) -> Dict[str, bool]:
    return {
        "newsAPI": adapters["headline_source"] is not None,
        "scriptModel": adapters["script_model"] is not None,
        "voice": adapters["voice"] is not None,
        "video": adapters["encoder"] is not None,
        "tiktokReady": bool(config.TIKTOK_EMAIL and config.TIKTOK_PASSWORD),
    }


def main(argv: Optional[list] = None) -> int:
    from global_news_bot.adapters import default_adapters

    parser = argparse.ArgumentParser(
        description="Global news → region-diverse short videos → TikTok, on a schedule"
    )
    parser.add_argument(
        "--mode",
        choices=["once", "schedule", "serve"],
        default="once",
        help="'once' runs a single cycle, 'schedule' repeats it, 'serve' adds the HTTP surface",
    )
    parser.add_argument("--run-now", action="store_true", help="With schedule/serve: run a cycle immediately")
    parser.add_argument("--port", type=int, default=config.PORT, help="HTTP port for --mode serve")
    args = parser.parse_args(argv)

    adapters = default_adapters()
    controller = build_controller(adapters)
    status = readiness(adapters)
    print("🌍 Global News Bot")
    for name, ready in status.items():
        print(f"  {'✅' if ready else '⚠️ '} {name}")

    if args.mode == "once":
        report = controller.run_cycle()
        for title, ok in report.breakdown():
            print(f"  {'✅' if ok else '❌'} {title[:60]}")
        return 0 if report.status is not CycleStatus.BUSY else 1

    scheduler = CycleScheduler(controller, interval_hours=config.SCHEDULE_INTERVAL_HOURS)
    if args.mode == "schedule":
        try:
            scheduler.run_forever(run_immediately=args.run_now)
        except KeyboardInterrupt:
            scheduler.stop()
        return 0

    from global_news_bot.web import create_app

    worker = threading.Thread(
        target=scheduler.run_forever,
        kwargs={"run_immediately": args.run_now},
        name="cycle-scheduler",
        daemon=True,
    )
    worker.start()
    app = create_app(controller, headline_source=adapters["headline_source"], readiness=status)
    print(f"🚀 Global News Bot running on port {args.port}")
    print(f"📅 Automated posting every {config.SCHEDULE_INTERVAL_HOURS} hour(s)")
    app.run(host="0.0.0.0", port=args.port)
    scheduler.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
