import random
import unittest

from global_news_bot.application.cycle import CycleController
from global_news_bot.application.history import PublishHistory
from global_news_bot.application.ingestion import SourceFetcher
from global_news_bot.application.publisher import PublishOrchestrator
from global_news_bot.application.synthesis import ContentSynthesizer
from global_news_bot.domain.models import CycleReport, CycleStatus, PublishCredentials
from global_news_bot.web import TEST_CAPTION, TEST_HASHTAGS, create_app
from tests.fakes import DriverFactory, FakeHeadlineSource, headline

HEADLINES = {
    "us": [headline("Senate passes new budget deal tonight")],
    "de": [headline("Berlin hosts international climate talks")],
}


def build_controller(headlines, factory=None):
    return CycleController(
        fetcher=SourceFetcher(
            headline_source=headlines,
            feed_source=None,
            countries=list(HEADLINES),
            feeds={},
            api_call_delay=0,
            rng=random.Random(0),
        ),
        orchestrator=PublishOrchestrator(
            synthesizer=ContentSynthesizer(rng=random.Random(0)),
            driver_factory=factory or DriverFactory(),
            credentials=PublishCredentials("bot@example.com", "secret"),
            post_delay=0,
        ),
        history=PublishHistory(20),
    )


class BusyController:
    busy = True

    def __init__(self):
        self.history = PublishHistory()

    def run_cycle(self):
        return CycleReport(status=CycleStatus.BUSY, message="A cycle is already in progress")


class BrokenController(BusyController):
    busy = False

    def run_cycle(self):
        raise RuntimeError("history store corrupted")


class TestRoutes(unittest.TestCase):
    def setUp(self):
        self.headlines = FakeHeadlineSource(HEADLINES)
        self.factory = DriverFactory()
        self.controller = build_controller(self.headlines, self.factory)
        app = create_app(
            self.controller,
            headline_source=self.headlines,
            readiness={"newsAPI": True, "tiktokReady": True},
        )
        app.testing = True
        self.client = app.test_client()

    def test_health_before_first_run(self):
        data = self.client.get("/").get_json()
        self.assertEqual(data["status"], "Global News TikTok Bot - ACTIVE")
        self.assertEqual(data["lastRun"], "Not run yet")
        self.assertEqual(data["postsGenerated"], 0)
        self.assertEqual(data["environment"], {"newsAPI": True, "tiktokReady": True})

    def test_trigger_then_posts(self):
        response = self.client.post("/trigger")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["success"])
        self.assertEqual(data["postsGenerated"], 2)
        self.assertEqual(len(data["report"]["stories"]), 2)
        self.assertTrue(all(s["success"] for s in data["report"]["stories"]))

        posts = self.client.get("/posts").get_json()
        self.assertEqual(posts["total"], 2)
        self.assertTrue(posts["posts"][0]["title"].endswith("..."))
        self.assertNotEqual(self.client.get("/").get_json()["lastRun"], "Not run yet")

    def test_connectivity_probe(self):
        data = self.client.get("/test").get_json()
        self.assertTrue(data["results"]["newsTest"])
        self.assertTrue(data["readyForAutomation"])
        self.assertEqual(self.headlines.calls[-1], ("us", 1))

    def test_connectivity_probe_reports_errors(self):
        self.headlines.failing.add("us")
        data = self.client.get("/test").get_json()
        self.assertFalse(data["results"]["newsTest"])
        self.assertFalse(data["readyForAutomation"])
        self.assertTrue(data["results"]["errors"][0].startswith("NewsAPI:"))

    def test_trigger_while_busy_is_409(self):
        client = create_app(BusyController()).test_client()
        response = client.post("/trigger")
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.get_json()["success"])

    def test_trigger_error_is_500(self):
        client = create_app(BrokenController()).test_client()
        response = client.post("/trigger")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json()["error"], "history store corrupted")

    def test_test_post_goes_through_the_driver(self):
        response = self.client.post("/test-tiktok")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["success"])
        self.assertEqual(data["result"]["state"], "succeeded")
        self.assertEqual(data["result"]["hashtags"], TEST_HASHTAGS)
        driver = self.factory.drivers[0]
        self.assertEqual(driver.steps, ["authenticate", "set_caption", "submit"])
        self.assertEqual(driver.caption, TEST_CAPTION + "\n\n" + TEST_HASHTAGS)
        self.assertTrue(driver.closed)
        self.assertEqual(len(self.controller.history), 0)

    def test_test_post_reports_driver_failure(self):
        factory = DriverFactory([{"fail_at": "submit"}])
        client = create_app(build_controller(self.headlines, factory)).test_client()
        data = client.post("/test-tiktok").get_json()
        self.assertFalse(data["success"])
        self.assertEqual(data["result"]["error"], "submitting failed: driver reported failure")
        self.assertTrue(factory.drivers[0].closed)

    def test_test_post_while_busy_is_409(self):
        client = create_app(BusyController()).test_client()
        response = client.post("/test-tiktok")
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.get_json()["success"])

    def test_probe_without_headline_source(self):
        client = create_app(self.controller).test_client()
        data = client.get("/test").get_json()
        self.assertFalse(data["results"]["newsTest"])
        self.assertEqual(data["results"]["errors"], ["NewsAPI: not configured"])


if __name__ == "__main__":
    unittest.main()
