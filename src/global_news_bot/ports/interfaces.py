"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the application layer depends only on these abstractions.
A new headline provider or posting platform is one more adapter, nothing else changes.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from global_news_bot.domain.models import FeedItem, HeadlineItem, OverlayText, PublishCredentials


class IHeadlineSource(ABC):
    """Headline API queried per country (e.g. NewsAPI top-headlines)."""

    @abstractmethod
    def fetch_headlines(self, country: str, page_size: int = 5) -> List[HeadlineItem]:
        """Return raw headline items for one country; raise SourceUnavailable on failure."""
        pass


class IFeedSource(ABC):
    """Syndication feed reader (RSS/Atom)."""

    @abstractmethod
    def fetch_feed(self, feed_url: str, limit: int = 5) -> List[FeedItem]:
        """Return raw feed items; raise SourceUnavailable for unreachable or malformed feeds."""
        pass


class IScriptModel(ABC):
    """Large-language-model text completion used for short video scripts."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return generated text; raise on timeout, HTTP error or malformed response."""
        pass


class IVoiceSynthesizer(ABC):
    """Text-to-speech. Callers strip non-speakable symbols before sending."""

    @abstractmethod
    def synthesize(self, text: str) -> bytes:
        """Return encoded audio bytes (mp3)."""
        pass


class IMediaEncoder(ABC):
    """Renders a solid-background vertical video with text overlays and optional audio."""

    @abstractmethod
    def render(
        self,
        background: str,
        overlays: List[OverlayText],
        audio_path: Optional[str],
        duration_seconds: int,
    ) -> str:
        """Return the path of the rendered video file."""
        pass


class IPublishDriver(ABC):
    """
    One exclusive posting session on the social platform.
    Each step returns True on success, False (or raises) on failure.
    close() must be safe to call whatever happened before.
    """

    @abstractmethod
    def authenticate(self, credentials: PublishCredentials) -> bool:
        pass

    @abstractmethod
    def upload_media(self, path: Optional[str]) -> bool:
        pass

    @abstractmethod
    def set_caption(self, text: str) -> bool:
        pass

    @abstractmethod
    def submit(self) -> bool:
        """True only when the platform confirmed the post, not merely navigated."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass
