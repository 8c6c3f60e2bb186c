import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


# News API Configuration
NEWSAPI_KEY = os.getenv("NEWSAPI_KEY", "")
NEWSAPI_URL = "https://newsapi.org/v2/top-headlines"

# Countries rotated through the headline API (a random sample is used each cycle)
COUNTRIES = ["us", "gb", "ca", "au", "in", "de", "fr", "jp", "br", "mx", "sa", "ae", "eg", "tr", "il"]

# Syndication feeds, including Middle East coverage
RSS_SOURCES = {
    "reuters": "http://feeds.reuters.com/reuters/topNews",
    "ap_news": "https://feeds.apnews.com/rss/apf-topnews",
    "al_arabiya": "https://english.alarabiya.net/rss.xml",
    "al_jazeera": "https://www.aljazeera.com/xml/rss/all.xml",
    "dw_news": "https://rss.dw.com/rdf/rss-en-all",
    "france24": "https://www.france24.com/en/rss",
}

COUNTRIES_PER_CYCLE = int(os.getenv("COUNTRIES_PER_CYCLE", "5"))
FEEDS_PER_CYCLE = int(os.getenv("FEEDS_PER_CYCLE", str(len(RSS_SOURCES))))
ITEMS_PER_SOURCE = int(os.getenv("ITEMS_PER_SOURCE", "5"))
API_CALL_DELAY_SECONDS = float(os.getenv("API_CALL_DELAY_SECONDS", "2"))
MIN_TITLE_LENGTH = int(os.getenv("MIN_TITLE_LENGTH", "20"))
FETCH_MAX_ATTEMPTS = int(os.getenv("FETCH_MAX_ATTEMPTS", "2"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))
USER_AGENT = "Mozilla/5.0 (compatible; NewsBot/1.0)"

# Script model Configuration
# Priority: Groq > OpenRouter > Ollama. No provider configured -> templated scripts.
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "meta-llama/llama-3.1-8b-instruct:free")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
SCRIPT_USE_OLLAMA = _flag("SCRIPT_USE_OLLAMA")
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
MODEL_TIMEOUT = int(os.getenv("MODEL_TIMEOUT", "30"))
SCRIPT_MAX_TOKENS = 350
SCRIPT_TEMPERATURE = 0.8

# TTS Configuration
# Priority order: ElevenLabs > Edge-TTS. Neither configured -> silent video.
ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
ELEVENLABS_VOICE_ID = os.getenv("ELEVENLABS_VOICE_ID", "21m00Tcm4TlvDq8ikWAM")  # Rachel - professional, clear
ELEVENLABS_MODEL_ID = os.getenv("ELEVENLABS_MODEL_ID", "eleven_turbo_v2_5")
TTS_USE_EDGE_TTS = _flag("TTS_USE_EDGE_TTS")
TTS_EDGE_VOICE = os.getenv("TTS_EDGE_VOICE", "en-US-AriaNeural")

# Video Configuration
VIDEO_ENABLED = _flag("VIDEO_ENABLED", "true")
VIDEO_DURATION = int(os.getenv("VIDEO_DURATION", "60"))  # seconds
FPS = 30
VIDEO_WIDTH = 720
VIDEO_HEIGHT = 1280  # Vertical format (9:16)

# TikTok Publish Configuration
TIKTOK_EMAIL = os.getenv("TIKTOK_EMAIL", "")
TIKTOK_PASSWORD = os.getenv("TIKTOK_PASSWORD", "")
TIKTOK_LOGIN_URL = "https://www.tiktok.com/login/phone-or-email/email"
TIKTOK_UPLOAD_URL = "https://www.tiktok.com/creator-center/upload"
PUBLISH_HEADLESS = _flag("PUBLISH_HEADLESS", "true")
CAPTION_LIMIT = int(os.getenv("CAPTION_LIMIT", "280"))

# Cycle Configuration
STORIES_PER_CYCLE = int(os.getenv("STORIES_PER_CYCLE", "3"))
POST_DELAY_SECONDS = float(os.getenv("POST_DELAY_SECONDS", "900"))  # 15 minutes between posts
SCHEDULE_INTERVAL_HOURS = int(os.getenv("SCHEDULE_INTERVAL_HOURS", "2"))
HISTORY_CAPACITY = int(os.getenv("HISTORY_CAPACITY", "20"))

# HTTP surface
PORT = int(os.getenv("PORT", "3000"))

# Output directories
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")
TEMP_DIR = os.getenv("TEMP_DIR", "temp")
AUDIO_DIR = os.path.join(TEMP_DIR, "audio")

# Create directories if they don't exist
os.makedirs(OUTPUT_DIR, exist_ok=True)
os.makedirs(AUDIO_DIR, exist_ok=True)
