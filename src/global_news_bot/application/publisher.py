"""
Publish orchestration – drives one story through
Idle → Authenticating → Uploading → Captioning → Submitting → Succeeded | Failed.

No retry inside an attempt: a failed story is simply eligible again next cycle.
The driver session is closed on every exit path. After each attempt a fixed
pacing delay is observed before the next story (skipped after the last one).
"""

import time
from typing import Callable, List, Optional, Sequence

from global_news_bot.application.synthesis import ContentSynthesizer, SynthesizedContent
from global_news_bot.domain.errors import PublishFailed
from global_news_bot.domain.models import PublishAttempt, PublishCredentials, PublishState, StoryCandidate
from global_news_bot.ports.interfaces import IPublishDriver

MISSING_CREDENTIALS = "missing credentials"


def build_caption(script: str, hashtags: str, limit: int = 280) -> str:
    """Script truncated to the platform limit; hashtags always appended after truncation."""
    caption = script[:limit]
    return f"{caption}\n\n{hashtags}" if hashtags else caption


class PublishOrchestrator:
    """
    Publishes selected stories one at a time through a single exclusive driver session per story.
    All dependencies are injected; driver_factory opens a fresh session for each attempt.
    """

    def __init__(
        self,
        *,
        synthesizer: ContentSynthesizer,
        driver_factory: Callable[[], IPublishDriver],
        credentials: Optional[PublishCredentials],
        caption_limit: int = 280,
        post_delay: float = 900,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._synthesizer = synthesizer
        self._driver_factory = driver_factory
        self._credentials = credentials
        self._caption_limit = caption_limit
        self._post_delay = post_delay
        self._sleep = sleep

    def publish_selection(
        self,
        selection: Sequence[StoryCandidate],
        on_attempt: Optional[Callable[[PublishAttempt], None]] = None,
    ) -> List[PublishAttempt]:
        """Publish stories strictly in selection order, pacing between them."""
        attempts = []
        total = len(selection)
        for i, story in enumerate(selection, 1):
            print(f"\n📱 Creating post {i}/{total}: {story.title[:50]}...")
            attempt = self.publish_story(story)
            attempts.append(attempt)
            if attempt.success:
                print(f"✅ Post {i} result: SUCCESS")
            else:
                print(f"❌ Post {i} result: FAILED ({attempt.reason})")
            if on_attempt is not None:
                on_attempt(attempt)
            if i < total:
                self.pace()
        return attempts

    def publish_story(self, story: StoryCandidate) -> PublishAttempt:
        attempt = PublishAttempt(story=story)
        try:
            content = self._synthesizer.synthesize(story)
        except Exception as e:
            attempt.fail(f"synthesis error: {e}")
            return attempt
        with content:
            return self.publish_content(content, attempt)

    def publish_content(
        self,
        content: SynthesizedContent,
        attempt: Optional[PublishAttempt] = None,
    ) -> PublishAttempt:
        """Run the state machine for already-synthesized content. Always finalizes the attempt."""
        attempt = attempt or PublishAttempt(story=content.story)
        attempt.script = content.script_text
        attempt.hashtags = content.hashtags
        attempt.media_path = content.media_path

        if self._credentials is None:
            print("  ⚠️  Publish credentials not configured, skipping platform post")
            attempt.advance(PublishState.AUTHENTICATING)
            attempt.fail(MISSING_CREDENTIALS)
            return attempt

        driver = None
        try:
            attempt.advance(PublishState.AUTHENTICATING)
            driver = self._driver_factory()
            if not driver.authenticate(self._credentials):
                raise PublishFailed("driver reported failure")
            if content.media_path:
                self._step(attempt, PublishState.UPLOADING, lambda: driver.upload_media(content.media_path))
            else:
                print("  📝 No media for this story, posting text-only")
            caption = build_caption(content.script_text, content.hashtags, self._caption_limit)
            self._step(attempt, PublishState.CAPTIONING, lambda: driver.set_caption(caption))
            self._step(attempt, PublishState.SUBMITTING, driver.submit)
            attempt.succeed()
        except Exception as e:
            print(f"  ❌ Publishing failed while {attempt.state.value}: {e}")
            attempt.fail(f"{attempt.state.value} failed: {e}")
        finally:
            if driver is not None:
                self._close(driver)
        return attempt

    def pace(self) -> None:
        if self._post_delay <= 0:
            return
        print(f"⏱️  Waiting {self._post_delay:g} seconds before next post...")
        self._sleep(self._post_delay)

    @staticmethod
    def _step(attempt: PublishAttempt, state: PublishState, action: Callable[[], bool]) -> None:
        attempt.advance(state)
        if not action():
            raise PublishFailed("driver reported failure")

    @staticmethod
    def _close(driver: IPublishDriver) -> None:
        try:
            driver.close()
        except Exception as e:
            print(f"  ⚠️  Could not close publish session cleanly: {e}")
