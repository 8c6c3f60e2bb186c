"""
Content synthesis – single responsibility: turn one story into
(script text, hashtag string, optional video).

Each stage returns a StageResult so fallbacks are explicit:
  script  Ok(model text) | Degraded(templated script)
  audio   Ok(path) | Failed(reason)   – optional
  video   Ok(path) | Failed(reason)   – optional, text-only publish when absent
Intermediate audio is deleted as soon as rendering is done with it; the video
is deleted by SynthesizedContent.release() once the publish step is over.
"""

import os
import random
import re
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from global_news_bot.application.hashtags import build_hashtags
from global_news_bot.domain.models import OverlayText, StageResult, StoryCandidate, utc_now
from global_news_bot.domain.regions import INTERNATIONAL, background_for
from global_news_bot.ports.interfaces import IMediaEncoder, IScriptModel, IVoiceSynthesizer

SCRIPT_PROMPT = """Create a viral 60-second TikTok script for this global news story:

TITLE: {title}
DESCRIPTION: {description}
REGION: {region}
SOURCE: {source}

Requirements:
- Start with an urgent hook in first 3 seconds
- Explain WHY this matters globally
- Keep conversational and engaging
- Under 150 words total
- Include emotional connection
- End with question to boost comments

Make it sound like a real person talking, not robotic."""

HOOK_PHRASES = ("🚨 BREAKING:", "⚡ URGENT:", "🔥 MAJOR:", "🌍 GLOBAL:")

REACTION_PHRASES = (
    "This just happened and it's affecting millions worldwide.",
    "This major story from {region} is developing right now.",
    "Everyone is talking about this one.",
    "This could change a lot, fast.",
)

CTA_PHRASES = (
    "What's your take on this? Drop your thoughts below! 👇",
    "What's your take? Share your thoughts! 👇",
    "Would this change your mind? Tell us in the comments 👇",
    "Follow for more global news. What do you think? 👇",
)

DESCRIPTION_EXCERPT = 100
HEADLINE_OVERLAY_CHARS = 60
SOURCE_OVERLAY_CHARS = 20
HASHTAG_PREVIEW = "#WorldNews #Global #Breaking"

# Pictographs, dingbats, flags, variation selectors and joiners; speech engines read them aloud or choke
_EMOJI_RE = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "\U00002600-\U000027BF"
    "\U0001F1E6-\U0001F1FF"
    "\U00002B00-\U00002BFF"
    "\U0000FE0F"
    "\U0000200D"
    "]+"
)


def region_label(region: Optional[str]) -> str:
    return (region or INTERNATIONAL).replace("_", " ")


def build_prompt(story: StoryCandidate) -> str:
    return SCRIPT_PROMPT.format(
        title=story.title,
        description=story.description,
        region=region_label(story.region),
        source=story.source,
    )


def fallback_script(story: StoryCandidate, rng: random.Random) -> str:
    """Templated script from fixed phrase pools. Never empty."""
    hook = rng.choice(HOOK_PHRASES)
    reaction = rng.choice(REACTION_PHRASES).format(region=region_label(story.region))
    cta = rng.choice(CTA_PHRASES)
    excerpt = story.description[:DESCRIPTION_EXCERPT]
    if len(story.description) > DESCRIPTION_EXCERPT:
        excerpt += "..."
    return (
        f"{hook} {story.title}\n\n"
        f"{reaction}\n\n"
        f"Here's what we know: {excerpt}\n\n"
        f"This could impact millions globally.\n\n"
        f"{cta}\n\n"
        f"Source: {story.source}"
    )


def speakable(text: str) -> str:
    """Strip emoji so speech synthesis only gets pronounceable text."""
    return " ".join(_EMOJI_RE.sub("", text).split())


def build_overlays(story: StoryCandidate, now: datetime) -> List[OverlayText]:
    """Banner, region tag, headline, source attribution, timestamp and hashtag preview."""
    headline = re.sub(r"['\"]", "", story.title)[:HEADLINE_OVERLAY_CHARS]
    return [
        OverlayText("BREAKING NEWS", y=80, font_size=36, color="white", box_opacity=0.9),
        OverlayText(region_label(story.region).upper(), y=160, font_size=24, color="yellow", box_opacity=0.7),
        OverlayText(headline, y=300, font_size=28, color="white", box_opacity=0.8, align="left"),
        OverlayText(f"Source: {story.source[:SOURCE_OVERLAY_CHARS]}", y=1150, font_size=18,
                    color="lightgray", box_opacity=0.6, align="left"),
        OverlayText(now.strftime("%Y-%m-%d %H:%M UTC"), y=1200, font_size=16, color="gray", align="right"),
        OverlayText(HASHTAG_PREVIEW, y=1200, font_size=16, color="cyan", align="left"),
    ]


def _remove(path: Optional[str], label: str) -> None:
    if path and os.path.exists(path):
        try:
            os.remove(path)
            print(f"  🗑️  Cleaned up {label} file")
        except OSError as e:
            print(f"  ⚠️  Could not clean up {label} file {path}: {e}")


class SynthesizedContent:
    """
    Script, hashtags and optional video for one story.
    Owns the video file: release() (or leaving the with-block) deletes it.
    """

    def __init__(
        self,
        story: StoryCandidate,
        script: StageResult,
        hashtags: str,
        audio: Optional[StageResult] = None,
        video: Optional[StageResult] = None,
    ):
        self.story = story
        self.script = script
        self.hashtags = hashtags
        self.audio = audio or StageResult.failed("not attempted")
        self.video = video or StageResult.failed("not attempted")

    @property
    def script_text(self) -> str:
        return self.script.value or ""

    @property
    def media_path(self) -> Optional[str]:
        return self.video.value if self.video.usable else None

    def release(self) -> None:
        _remove(self.media_path, "video")

    def __enter__(self) -> "SynthesizedContent":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()


class ContentSynthesizer:
    """Script generation with templated fallback, hashtags, best-effort voice and video."""

    def __init__(
        self,
        *,
        script_model: Optional[IScriptModel] = None,
        voice: Optional[IVoiceSynthesizer] = None,
        encoder: Optional[IMediaEncoder] = None,
        audio_dir: str = "temp/audio",
        video_duration: int = 60,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._model = script_model
        self._voice = voice
        self._encoder = encoder
        self._audio_dir = audio_dir
        self._video_duration = video_duration
        self._rng = rng or random.Random()
        self._clock = clock

    def generate_script(self, story: StoryCandidate) -> StageResult:
        if self._model is None:
            return StageResult.degraded(fallback_script(story, self._rng), "no script model configured")
        try:
            text = (self._model.complete(build_prompt(story)) or "").strip()
            if not text:
                raise ValueError("script model returned empty text")
            return StageResult.ok(text)
        except Exception as e:
            print(f"  ⚠️  Script generation failed: {e}, using templated script")
            return StageResult.degraded(fallback_script(story, self._rng), str(e) or type(e).__name__)

    def hashtags_for(self, story: StoryCandidate) -> str:
        return story.hashtags or build_hashtags(story.region, story.country, story.category)

    def synthesize_audio(self, script: str) -> StageResult:
        if self._voice is None:
            return StageResult.failed("no voice synthesizer configured")
        text = speakable(script)
        if not text:
            return StageResult.failed("nothing speakable in script")
        path = None
        try:
            audio = self._voice.synthesize(text)
            if not audio:
                raise ValueError("voice synthesizer returned no audio")
            os.makedirs(self._audio_dir, exist_ok=True)
            path = os.path.join(self._audio_dir, f"voice_{uuid.uuid4().hex}.mp3")
            with open(path, "wb") as f:
                f.write(audio)
            print(f"  🎙️  Generated voice-over: {path}")
            return StageResult.ok(path)
        except Exception as e:
            _remove(path, "audio")
            print(f"  ⚠️  Voice generation failed: {e}")
            return StageResult.failed(str(e) or type(e).__name__)

    def render_video(self, story: StoryCandidate, audio_path: Optional[str]) -> StageResult:
        if self._encoder is None:
            return StageResult.failed("no media encoder configured")
        try:
            path = self._encoder.render(
                background_for(story.region, story.category),
                build_overlays(story, self._clock()),
                audio_path,
                self._video_duration,
            )
            if not path or not os.path.exists(path):
                raise FileNotFoundError(f"encoder produced no file: {path}")
            print(f"  🎬 Video created: {path}")
            return StageResult.ok(path)
        except Exception as e:
            print(f"  ⚠️  Video generation failed: {e}, continuing text-only")
            return StageResult.failed(str(e) or type(e).__name__)

    def synthesize(self, story: StoryCandidate) -> SynthesizedContent:
        """Run every stage for one story. The returned content owns its video file."""
        content = SynthesizedContent(story, self.generate_script(story), self.hashtags_for(story))
        content.audio = self.synthesize_audio(content.script_text)
        audio_path = content.audio.value if content.audio.usable else None
        try:
            content.video = self.render_video(story, audio_path)
        finally:
            _remove(audio_path, "audio")
        return content
