"""
Adapters – concrete implementations of ports, configured from global_news_bot.config.
An unconfigured collaborator is None; the application layer then takes its fallback path.
"""

from global_news_bot.adapters.llm import LLMScriptModel
from global_news_bot.adapters.news import FeedparserFeedSource, NewsApiHeadlineSource
from global_news_bot.adapters.tiktok import PlaywrightTikTokDriver
from global_news_bot.adapters.tts import EdgeTTSVoice, ElevenLabsVoice
from global_news_bot.adapters.video import MoviePyEncoder


def default_adapters(**overrides):
    """
    Build default adapter instances (use package config).
    Overrides: headline_source=..., script_model=..., driver_factory=..., etc. for testing.
    """
    from global_news_bot import config

    headline_source = None
    if config.NEWSAPI_KEY:
        headline_source = NewsApiHeadlineSource(
            config.NEWSAPI_KEY,
            base_url=config.NEWSAPI_URL,
            timeout=config.REQUEST_TIMEOUT,
            max_attempts=config.FETCH_MAX_ATTEMPTS,
            retry_delay=config.API_CALL_DELAY_SECONDS,
        )

    script_model = LLMScriptModel(
        groq_api_key=config.GROQ_API_KEY,
        groq_model=config.GROQ_MODEL,
        groq_base_url=config.GROQ_BASE_URL,
        openrouter_api_key=config.OPENROUTER_API_KEY,
        openrouter_model=config.OPENROUTER_MODEL,
        openrouter_base_url=config.OPENROUTER_BASE_URL,
        use_ollama=config.SCRIPT_USE_OLLAMA,
        ollama_base_url=config.OLLAMA_BASE_URL,
        ollama_model=config.OLLAMA_MODEL,
        timeout=config.MODEL_TIMEOUT,
        max_tokens=config.SCRIPT_MAX_TOKENS,
        temperature=config.SCRIPT_TEMPERATURE,
    )

    voice = None
    if config.ELEVENLABS_API_KEY:
        voice = ElevenLabsVoice(
            config.ELEVENLABS_API_KEY,
            voice_id=config.ELEVENLABS_VOICE_ID,
            model_id=config.ELEVENLABS_MODEL_ID,
        )
    elif config.TTS_USE_EDGE_TTS:
        voice = EdgeTTSVoice(config.TTS_EDGE_VOICE)

    encoder = None
    if config.VIDEO_ENABLED:
        encoder = MoviePyEncoder(
            output_dir=config.OUTPUT_DIR,
            width=config.VIDEO_WIDTH,
            height=config.VIDEO_HEIGHT,
            fps=config.FPS,
        )

    def driver_factory():
        return PlaywrightTikTokDriver(
            login_url=config.TIKTOK_LOGIN_URL,
            upload_url=config.TIKTOK_UPLOAD_URL,
            headless=config.PUBLISH_HEADLESS,
        )

    defaults = {
        "headline_source": headline_source,
        "feed_source": FeedparserFeedSource(
            timeout=config.REQUEST_TIMEOUT,
            user_agent=config.USER_AGENT,
            max_attempts=config.FETCH_MAX_ATTEMPTS,
            retry_delay=config.API_CALL_DELAY_SECONDS,
        ),
        "script_model": script_model if script_model.configured else None,
        "voice": voice,
        "encoder": encoder,
        "driver_factory": driver_factory,
    }
    defaults.update(overrides)
    return defaults


__all__ = [
    "EdgeTTSVoice",
    "ElevenLabsVoice",
    "FeedparserFeedSource",
    "LLMScriptModel",
    "MoviePyEncoder",
    "NewsApiHeadlineSource",
    "PlaywrightTikTokDriver",
    "default_adapters",
]
