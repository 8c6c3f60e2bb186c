"""
Viral-potential scoring.

Additive point system; every rule is independent and cumulative:
  recency          <1h +50, <6h +30, <12h +15 (missing timestamp counts as 24h old)
  global impact    +15 per distinct term present
  regional salience +10 per distinct term present
  wire service     +20 when the source is a recognized wire service
Pure functions: the wall clock is read once per scoring pass and passed in.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from global_news_bot.application.hashtags import build_hashtags
from global_news_bot.domain.models import StoryCandidate, utc_now
from global_news_bot.domain.regions import region_for, source_key

GLOBAL_KEYWORDS = (
    "breaking", "urgent", "crisis", "war", "conflict", "economy", "market",
    "international", "global", "world", "historic", "unprecedented",
)
GLOBAL_POINTS = 15

MIDDLE_EAST_KEYWORDS = ("israel", "palestine", "saudi", "iran", "syria", "iraq", "yemen")
REGIONAL_POINTS = 10

CREDIBLE_SOURCES = frozenset({
    "reuters",
    "ap_news",
    "associated_press",
    "al_arabiya",
    "al_jazeera",
    "al_jazeera_english",
})
CREDIBILITY_POINTS = 20

MISSING_TIMESTAMP_AGE_HOURS = 24.0

# First matching group wins; order matters
CATEGORY_KEYWORDS = (
    ("conflict", ("war", "conflict", "military")),
    ("economy", ("economy", "market", "financial")),
    ("politics", ("election", "political", "government")),
    ("environment", ("climate", "environment")),
    ("technology", ("technology", "ai", "tech")),
    ("health", ("health", "medical")),
)


def _text(story: StoryCandidate) -> str:
    return f"{story.title} {story.description}".lower()


def age_hours(story: StoryCandidate, now: datetime) -> float:
    if story.published_at is None:
        return MISSING_TIMESTAMP_AGE_HOURS
    return max(0.0, (now - story.published_at).total_seconds() / 3600)


def recency_points(hours_old: float) -> int:
    if hours_old < 1:
        return 50
    if hours_old < 6:
        return 30
    if hours_old < 12:
        return 15
    return 0


def keyword_points(text: str, keywords: Iterable[str], points: int) -> int:
    """Case-insensitive substring match, counted once per distinct term."""
    return sum(points for keyword in set(keywords) if keyword in text)


def credibility_points(source: str) -> int:
    return CREDIBILITY_POINTS if source_key(source) in CREDIBLE_SOURCES else 0


def viral_score(story: StoryCandidate, now: datetime) -> int:
    text = _text(story)
    score = recency_points(age_hours(story, now))
    score += keyword_points(text, GLOBAL_KEYWORDS, GLOBAL_POINTS)
    score += keyword_points(text, MIDDLE_EAST_KEYWORDS, REGIONAL_POINTS)
    score += credibility_points(story.source)
    return score


def detect_category(story: StoryCandidate) -> str:
    text = _text(story)
    for category, words in CATEGORY_KEYWORDS:
        if any(re.search(rf"\b{re.escape(w)}\b", text) for w in words):
            return category
    return "general"


def score_story(story: StoryCandidate, now: datetime) -> StoryCandidate:
    """Single scoring pass: returns a new candidate with all derived fields set."""
    category = detect_category(story)
    region = region_for(story.country)
    return story.with_derived(
        viral_score=viral_score(story, now),
        category=category,
        region=region,
        hashtags=build_hashtags(region, story.country, category),
    )


def score_candidates(stories: Sequence[StoryCandidate], now: Optional[datetime] = None) -> List[StoryCandidate]:
    """Score every candidate against one shared clock reading. Input order is kept."""
    now = now or utc_now()
    return [score_story(s, now) for s in stories]
