"""
HTTP surface (Flask): health/status, connectivity probe, recent posts, manual trigger
and a single test post through the publish driver.
Routes stay thin; every decision lives in the cycle controller.
"""

from typing import Dict, Optional

from flask import Flask, jsonify

from global_news_bot.application.cycle import CycleController
from global_news_bot.application.synthesis import SynthesizedContent
from global_news_bot.domain.models import CycleStatus, StageResult, StoryCandidate, utc_now
from global_news_bot.ports.interfaces import IHeadlineSource

POST_TITLE_CHARS = 60

TEST_STORY = StoryCandidate(
    title="Global News Bot Test - Successfully Automated",
    description="",
    source="NewsBot",
    country="international",
    kind="test",
    region="international",
)
TEST_CAPTION = "🚨 TEST: Your Global News Bot is LIVE and posting automatically every 2 hours!"
TEST_HASHTAGS = "#worldnews #automation #test #fyp"


def create_app(
    controller: CycleController,
    *,
    headline_source: Optional[IHeadlineSource] = None,
    readiness: Optional[Dict[str, bool]] = None,
    probe_country: str = "us",
) -> Flask:
    app = Flask(__name__)
    history = controller.history
    readiness = dict(readiness or {})

    @app.route("/", methods=["GET"])
    def health():
        return jsonify({
            "status": "Global News TikTok Bot - ACTIVE",
            "timestamp": utc_now().isoformat(),
            "lastRun": history.last_run.isoformat() if history.last_run else "Not run yet",
            "postsGenerated": len(history),
            "busy": controller.busy,
            "environment": readiness,
        })

    @app.route("/test", methods=["GET"])
    def connectivity():
        results = {"newsTest": False, "tiktokReady": bool(readiness.get("tiktokReady")), "errors": []}
        if headline_source is None:
            results["errors"].append("NewsAPI: not configured")
        else:
            try:
                results["newsTest"] = len(headline_source.fetch_headlines(probe_country, page_size=1)) > 0
            except Exception as e:
                results["errors"].append(f"NewsAPI: {e}")
        return jsonify({
            "success": True,
            "results": results,
            "readyForAutomation": results["newsTest"] and results["tiktokReady"],
        })

    @app.route("/posts", methods=["GET"])
    def posts():
        recent = history.recent()
        return jsonify({
            "success": True,
            "total": len(recent),
            "posts": [
                {
                    "id": index,
                    "title": attempt.story.title[:POST_TITLE_CHARS] + "...",
                    "region": attempt.story.region,
                    "source": attempt.story.source,
                    "success": bool(attempt.success),
                    "error": attempt.reason,
                    "postedAt": (attempt.finished_at or attempt.started_at).isoformat(),
                }
                for index, attempt in enumerate(recent)
            ],
        })

    @app.route("/trigger", methods=["POST"])
    def trigger():
        try:
            report = controller.run_cycle()
        except Exception as e:
            print(f"💥 Manual trigger failed: {e}")
            return jsonify({"success": False, "error": str(e)}), 500
        if report.status is CycleStatus.BUSY:
            return jsonify({"success": False, "error": report.message}), 409
        return jsonify({
            "success": True,
            "message": "Automation completed",
            "postsGenerated": report.processed,
            "report": report.to_dict(),
        })

    @app.route("/test-tiktok", methods=["POST"])
    def test_post():
        if controller.busy:
            return jsonify({"success": False, "error": "A cycle is already in progress"}), 409
        print("🧪 Sending test post through the publish driver...")
        content = SynthesizedContent(TEST_STORY, StageResult.ok(TEST_CAPTION), TEST_HASHTAGS)
        try:
            with content:
                attempt = controller.orchestrator.publish_content(content)
        except Exception as e:
            print(f"💥 Test post failed: {e}")
            return jsonify({"success": False, "error": str(e)}), 500
        return jsonify({"success": bool(attempt.success), "result": attempt.to_dict()})

    return app
