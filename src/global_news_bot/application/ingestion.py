"""
Source fetching and normalization.

Raw items from headline APIs and syndication feeds become StoryCandidate records.
Each source is queried independently; a failing source is reported, never fatal.
"""

import email.utils
import random
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from global_news_bot.domain.models import FeedItem, HeadlineItem, SourceReport, StoryCandidate
from global_news_bot.domain.regions import country_for_source
from global_news_bot.ports.interfaces import IFeedSource, IHeadlineSource

HEADLINE = "api"
FEED = "rss"


@dataclass(frozen=True)
class SourceDescriptor:
    kind: str  # HEADLINE | FEED
    name: str
    target: str  # country code for HEADLINE, feed URL for FEED


def clean_text(text: Optional[str]) -> str:
    """Remove HTML tags, URLs and entities; collapse whitespace."""
    if not text:
        return ""
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"https?://[^\s]+", "", text)
    text = re.sub(r"www\.[^\s]+", "", text)
    text = text.replace("&nbsp;", " ").replace("&amp;", "&").replace("&lt;", "<").replace("&gt;", ">")
    text = text.replace("&quot;", '"').replace("&#39;", "'").replace("&apos;", "'")
    return " ".join(text.split()).strip()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO-8601 (headline APIs) or RFC 822 (feeds). Unparseable → None."""
    if not value:
        return None
    value = value.strip()
    parsed = None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = email.utils.parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _eligible(title: str, description: str, min_title_length: int) -> bool:
    return bool(title) and len(title) >= min_title_length and bool(description)


def normalize_headline(
    item: HeadlineItem,
    country: str,
    min_title_length: int = 20,
) -> Optional[StoryCandidate]:
    """Headline item → StoryCandidate, or None when it fails the ingestion filter."""
    title = clean_text(item.get("title"))
    description = clean_text(item.get("description"))
    if not _eligible(title, description, min_title_length):
        return None
    return StoryCandidate(
        title=title,
        description=description,
        source=item.get("sourceName") or "Unknown",
        country=country,
        url=item.get("url") or None,
        published_at=parse_timestamp(item.get("publishedAt")),
        kind=HEADLINE,
    )


def normalize_feed_item(
    item: FeedItem,
    source_name: str,
    min_title_length: int = 20,
) -> Optional[StoryCandidate]:
    """Feed item → StoryCandidate; origin country comes from the source table."""
    title = clean_text(item.get("title"))
    description = clean_text(item.get("snippetOrSummary"))
    if not _eligible(title, description, min_title_length):
        return None
    return StoryCandidate(
        title=title,
        description=description,
        source=source_name.replace("_", " ").upper(),
        country=country_for_source(source_name),
        url=item.get("link") or None,
        published_at=parse_timestamp(item.get("publishDate")),
        kind=FEED,
    )


def deduplicate(stories: Sequence[StoryCandidate]) -> List[StoryCandidate]:
    """Drop repeats by normalized title or URL; first occurrence wins."""
    seen_titles = set()
    seen_urls = set()
    unique = []
    for story in stories:
        title_key = " ".join(story.title.lower().split())
        url_key = (story.url or "").strip().lower()
        if title_key in seen_titles or (url_key and url_key in seen_urls):
            continue
        seen_titles.add(title_key)
        if url_key:
            seen_urls.add(url_key)
        unique.append(story)
    return unique


def rotate(sources: Sequence[SourceDescriptor], count: int, rng: random.Random) -> List[SourceDescriptor]:
    """Fixed-size random sample without replacement."""
    if count <= 0:
        return []
    return rng.sample(list(sources), min(count, len(sources)))


class SourceFetcher:
    """
    Queries a rotating subset of headline countries and feeds, normalizes and
    de-duplicates the results. Returns the candidates plus one report per source.
    """

    def __init__(
        self,
        *,
        headline_source: Optional[IHeadlineSource],
        feed_source: Optional[IFeedSource],
        countries: Sequence[str],
        feeds: Dict[str, str],
        countries_per_cycle: int = 5,
        feeds_per_cycle: Optional[int] = None,
        items_per_source: int = 5,
        min_title_length: int = 20,
        api_call_delay: float = 2.0,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._headlines = headline_source
        self._feeds = feed_source
        self._country_sources = [SourceDescriptor(HEADLINE, c, c) for c in countries]
        self._feed_sources = [SourceDescriptor(FEED, name, url) for name, url in feeds.items()]
        self._countries_per_cycle = countries_per_cycle
        self._feeds_per_cycle = len(self._feed_sources) if feeds_per_cycle is None else feeds_per_cycle
        self._items_per_source = items_per_source
        self._min_title_length = min_title_length
        self._api_call_delay = api_call_delay
        self._rng = rng or random.Random()
        self._sleep = sleep

    def plan(self) -> List[SourceDescriptor]:
        """Sources to query this cycle: sampled countries first, then sampled feeds."""
        planned = []
        if self._headlines is not None:
            planned.extend(rotate(self._country_sources, self._countries_per_cycle, self._rng))
        else:
            print("  ⚠️  No headline API configured, skipping country headlines")
        if self._feeds is not None:
            planned.extend(rotate(self._feed_sources, self._feeds_per_cycle, self._rng))
        return planned

    def fetch_all(self) -> Tuple[List[StoryCandidate], List[SourceReport]]:
        stories: List[StoryCandidate] = []
        reports: List[SourceReport] = []
        planned = self.plan()
        headline_count = sum(1 for s in planned if s.kind == HEADLINE)
        headline_seen = 0

        for source in planned:
            accepted, report = self._fetch_one(source)
            stories.extend(accepted)
            reports.append(report)
            if source.kind == HEADLINE:
                headline_seen += 1
                # Rate-limit spacing between headline API calls
                if headline_seen < headline_count and self._api_call_delay > 0:
                    self._sleep(self._api_call_delay)

        unique = deduplicate(stories)
        if len(unique) < len(stories):
            print(f"  🧹 Removed {len(stories) - len(unique)} duplicate stories")
        return unique, reports

    def _fetch_one(self, source: SourceDescriptor) -> Tuple[List[StoryCandidate], SourceReport]:
        try:
            if source.kind == HEADLINE:
                print(f"  🔑 Fetching headlines from {source.name.upper()}...")
                raw = self._headlines.fetch_headlines(source.target, page_size=self._items_per_source)
                normalized = [normalize_headline(i, source.target, self._min_title_length) for i in raw]
            else:
                print(f"  📡 Fetching from {source.name}...")
                raw = self._feeds.fetch_feed(source.target, limit=self._items_per_source)
                normalized = [normalize_feed_item(i, source.name, self._min_title_length) for i in raw[: self._items_per_source]]
        except Exception as e:
            print(f"  ❌ Error fetching from {source.name}: {e}")
            return [], SourceReport(name=source.name, kind=source.kind, error=str(e) or type(e).__name__)

        accepted = [s for s in normalized if s is not None]
        return accepted, SourceReport(
            name=source.name,
            kind=source.kind,
            accepted=len(accepted),
            dropped=len(normalized) - len(accepted),
        )
