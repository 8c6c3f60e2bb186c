import os
import random
import tempfile
import unittest

from global_news_bot.application.publisher import MISSING_CREDENTIALS, PublishOrchestrator, build_caption
from global_news_bot.application.synthesis import ContentSynthesizer
from global_news_bot.domain.models import PublishCredentials, PublishState
from tests.fakes import NOW, DriverFactory, FakeEncoder, FakeVoice, SleepRecorder, make_story

CREDENTIALS = PublishCredentials("bot@example.com", "hunter2")

FULL_RUN = [
    PublishState.IDLE,
    PublishState.AUTHENTICATING,
    PublishState.UPLOADING,
    PublishState.CAPTIONING,
    PublishState.SUBMITTING,
    PublishState.SUCCEEDED,
]


class ExplodingSynthesizer:
    def __init__(self, bad_titles):
        self.bad_titles = set(bad_titles)
        self.inner = ContentSynthesizer(rng=random.Random(0))

    def synthesize(self, story):
        if story.title in self.bad_titles:
            raise RuntimeError("disk full")
        return self.inner.synthesize(story)


class TestCaption(unittest.TestCase):
    def test_hashtags_appended_after_truncation(self):
        caption = build_caption("s" * 500, "#worldnews #fyp", limit=280)
        self.assertEqual(caption, "s" * 280 + "\n\n#worldnews #fyp")

    def test_short_script_is_untouched(self):
        self.assertEqual(build_caption("Short.", "#a"), "Short.\n\n#a")


class TestPublishStateMachine(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.encoder = FakeEncoder(self._tmp.name)
        self.story = make_story("Ceasefire agreed after weeks of fighting", 70, "middle_east")

    def _orchestrator(self, factory, credentials=CREDENTIALS, encoder=True, sleep=None, synthesizer=None, voice=None):
        synthesizer = synthesizer or ContentSynthesizer(
            voice=voice,
            encoder=self.encoder if encoder else None,
            audio_dir=os.path.join(self._tmp.name, "audio"),
            rng=random.Random(0),
            clock=lambda: NOW,
        )
        return PublishOrchestrator(
            synthesizer=synthesizer,
            driver_factory=factory,
            credentials=credentials,
            caption_limit=280,
            post_delay=900,
            sleep=sleep or SleepRecorder(),
        )

    def test_success_walks_every_state_and_closes(self):
        factory = DriverFactory()
        attempt = self._orchestrator(factory).publish_story(self.story)
        driver = factory.drivers[0]
        self.assertTrue(attempt.success)
        self.assertEqual(attempt.transitions, FULL_RUN)
        self.assertEqual(driver.steps, ["authenticate", "upload_media", "set_caption", "submit"])
        self.assertTrue(driver.closed)
        self.assertTrue(driver.caption.endswith("\n\n" + self.story.hashtags))
        self.assertIsNotNone(attempt.finished_at)

    def test_video_is_deleted_after_publish(self):
        factory = DriverFactory()
        self._orchestrator(factory).publish_story(self.story)
        uploaded = factory.drivers[0].uploaded
        self.assertTrue(uploaded)
        self.assertFalse(os.path.exists(uploaded))

    def test_media_is_deleted_when_publishing_fails(self):
        cases = [
            ("submit raises", [{"raise_at": "submit"}], CREDENTIALS),
            ("upload rejected", [{"fail_at": "upload_media"}], CREDENTIALS),
            ("login rejected", [{"fail_at": "authenticate"}], CREDENTIALS),
            ("no credentials", [], None),
        ]
        for label, behaviours, credentials in cases:
            with self.subTest(label):
                calls_before = len(self.encoder.calls)
                orchestrator = self._orchestrator(DriverFactory(behaviours), credentials=credentials, voice=FakeVoice())
                attempt = orchestrator.publish_story(self.story)
                self.assertFalse(attempt.success)
                self.assertEqual(len(self.encoder.calls), calls_before + 1)
                self.assertTrue(self.encoder.calls[-1]["audio_existed"])
                self.assertEqual(self._leftover_media(), [])

    def test_missing_credentials_short_circuits(self):
        factory = DriverFactory()
        attempt = self._orchestrator(factory, credentials=None).publish_story(self.story)
        self.assertFalse(attempt.success)
        self.assertEqual(attempt.reason, MISSING_CREDENTIALS)
        self.assertEqual(attempt.transitions, [PublishState.IDLE, PublishState.AUTHENTICATING, PublishState.FAILED])
        self.assertEqual(factory.drivers, [])

    def test_no_media_skips_upload(self):
        factory = DriverFactory()
        attempt = self._orchestrator(factory, encoder=False).publish_story(self.story)
        self.assertTrue(attempt.success)
        self.assertNotIn(PublishState.UPLOADING, attempt.transitions)
        self.assertNotIn("upload_media", factory.drivers[0].steps)

    def test_driver_reported_failure(self):
        factory = DriverFactory([{"fail_at": "set_caption"}])
        attempt = self._orchestrator(factory).publish_story(self.story)
        self.assertFalse(attempt.success)
        self.assertEqual(attempt.state, PublishState.FAILED)
        self.assertEqual(attempt.reason, "captioning failed: driver reported failure")
        self.assertNotIn("submit", factory.drivers[0].steps)
        self.assertTrue(factory.drivers[0].closed)

    def test_unconfirmed_submit_is_failure(self):
        factory = DriverFactory([{"fail_at": "submit"}])
        attempt = self._orchestrator(factory).publish_story(self.story)
        self.assertFalse(attempt.success)
        self.assertEqual(attempt.reason, "submitting failed: driver reported failure")

    def test_driver_exception(self):
        factory = DriverFactory([{"raise_at": "upload_media"}])
        attempt = self._orchestrator(factory).publish_story(self.story)
        self.assertEqual(attempt.reason, "uploading failed: boom")
        self.assertTrue(factory.drivers[0].closed)

    def test_authentication_rejected(self):
        factory = DriverFactory([{"fail_at": "authenticate"}])
        attempt = self._orchestrator(factory).publish_story(self.story)
        self.assertEqual(attempt.reason, "authenticating failed: driver reported failure")
        self.assertEqual(factory.drivers[0].steps, ["authenticate"])
        self.assertTrue(factory.drivers[0].closed)

    def test_factory_error_fails_while_authenticating(self):
        def broken_factory():
            raise RuntimeError("browser not installed")

        attempt = self._orchestrator(broken_factory).publish_story(self.story)
        self.assertEqual(attempt.reason, "authenticating failed: browser not installed")

    def test_close_error_does_not_change_outcome(self):
        factory = DriverFactory([{"close_error": True}])
        attempt = self._orchestrator(factory).publish_story(self.story)
        self.assertTrue(attempt.success)

    def test_attempt_cannot_be_finalized_twice(self):
        attempt = self._orchestrator(DriverFactory()).publish_story(self.story)
        with self.assertRaises(RuntimeError):
            attempt.fail("late error")
        with self.assertRaises(RuntimeError):
            attempt.advance(PublishState.CAPTIONING)

    def _leftover_media(self):
        leftovers = [name for name in os.listdir(self._tmp.name) if name.endswith(".mp4")]
        audio_dir = os.path.join(self._tmp.name, "audio")
        if os.path.isdir(audio_dir):
            leftovers += os.listdir(audio_dir)
        return leftovers


class TestPublishSelection(unittest.TestCase):
    def setUp(self):
        self.stories = [make_story(f"Important story number {i}", 50 - i) for i in range(3)]

    def test_pacing_between_stories_not_after_last(self):
        sleep = SleepRecorder()
        orchestrator = PublishOrchestrator(
            synthesizer=ContentSynthesizer(rng=random.Random(0)),
            driver_factory=DriverFactory(),
            credentials=CREDENTIALS,
            post_delay=900,
            sleep=sleep,
        )
        seen = []
        attempts = orchestrator.publish_selection(self.stories, on_attempt=seen.append)
        self.assertEqual(sleep.delays, [900, 900])
        self.assertEqual(seen, attempts)
        self.assertEqual([a.story.title for a in attempts], [s.title for s in self.stories])

    def test_zero_delay_never_sleeps(self):
        sleep = SleepRecorder()
        orchestrator = PublishOrchestrator(
            synthesizer=ContentSynthesizer(rng=random.Random(0)),
            driver_factory=DriverFactory(),
            credentials=CREDENTIALS,
            post_delay=0,
            sleep=sleep,
        )
        orchestrator.publish_selection(self.stories)
        self.assertEqual(sleep.delays, [])

    def test_failures_are_isolated_per_story(self):
        factory = DriverFactory([{"raise_at": "submit"}, {}])
        orchestrator = PublishOrchestrator(
            synthesizer=ExplodingSynthesizer({self.stories[0].title}),
            driver_factory=factory,
            credentials=CREDENTIALS,
            post_delay=0,
        )
        attempts = orchestrator.publish_selection(self.stories)
        self.assertEqual([a.success for a in attempts], [False, False, True])
        self.assertEqual(attempts[0].reason, "synthesis error: disk full")
        self.assertTrue(all(a.finalized for a in attempts))
        self.assertEqual(len(factory.drivers), 2)
        self.assertTrue(all(d.closed for d in factory.drivers))


if __name__ == "__main__":
    unittest.main()
