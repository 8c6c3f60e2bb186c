"""Application layer – orchestrates the news → score → select → synthesize → publish cycle using ports only."""

from global_news_bot.application.cycle import CycleController
from global_news_bot.application.history import PublishHistory
from global_news_bot.application.ingestion import SourceFetcher
from global_news_bot.application.publisher import PublishOrchestrator
from global_news_bot.application.scheduler import CycleScheduler
from global_news_bot.application.scoring import score_candidates
from global_news_bot.application.selection import select_diverse
from global_news_bot.application.synthesis import ContentSynthesizer, SynthesizedContent

__all__ = [
    "ContentSynthesizer",
    "CycleController",
    "CycleScheduler",
    "PublishHistory",
    "PublishOrchestrator",
    "SourceFetcher",
    "SynthesizedContent",
    "score_candidates",
    "select_diverse",
]
