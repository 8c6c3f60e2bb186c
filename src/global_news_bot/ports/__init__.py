"""Ports (interfaces) – depend on these, implement in adapters."""

from global_news_bot.ports.interfaces import (
    IFeedSource,
    IHeadlineSource,
    IMediaEncoder,
    IPublishDriver,
    IScriptModel,
    IVoiceSynthesizer,
)

__all__ = [
    "IFeedSource",
    "IHeadlineSource",
    "IMediaEncoder",
    "IPublishDriver",
    "IScriptModel",
    "IVoiceSynthesizer",
]
