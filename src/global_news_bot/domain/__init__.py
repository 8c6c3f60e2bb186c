"""Domain models, static taxonomies and the error hierarchy."""

from global_news_bot.domain.errors import (
    ConfigurationMissing,
    GenerationDegraded,
    NewsBotError,
    PublishFailed,
    SourceUnavailable,
)
from global_news_bot.domain.models import (
    CycleReport,
    CycleStatus,
    FeedItem,
    HeadlineItem,
    OverlayText,
    PublishAttempt,
    PublishCredentials,
    PublishState,
    SelectionResult,
    SourceReport,
    StageResult,
    StageStatus,
    StoryCandidate,
)

__all__ = [
    "ConfigurationMissing",
    "CycleReport",
    "CycleStatus",
    "FeedItem",
    "GenerationDegraded",
    "HeadlineItem",
    "NewsBotError",
    "OverlayText",
    "PublishAttempt",
    "PublishCredentials",
    "PublishFailed",
    "PublishState",
    "SelectionResult",
    "SourceReport",
    "SourceUnavailable",
    "StageResult",
    "StageStatus",
    "StoryCandidate",
]
