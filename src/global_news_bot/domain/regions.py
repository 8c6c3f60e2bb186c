"""
Static taxonomies: country → region, feed source → origin country, hashtag and
background lookup tables. Configuration data, not runtime state.
"""

from typing import Dict, Optional

AMERICAS = "americas"
EUROPE = "europe"
ASIA = "asia"
MIDDLE_EAST = "middle_east"
AFRICA = "africa"
INTERNATIONAL = "international"

REGIONS = (AMERICAS, EUROPE, ASIA, MIDDLE_EAST, AFRICA, INTERNATIONAL)

COUNTRY_REGIONS: Dict[str, str] = {
    "us": AMERICAS, "ca": AMERICAS, "br": AMERICAS, "mx": AMERICAS,
    "gb": EUROPE, "de": EUROPE, "fr": EUROPE, "tr": EUROPE,
    "jp": ASIA, "in": ASIA, "au": ASIA,
    "sa": MIDDLE_EAST, "ae": MIDDLE_EAST, "eg": MIDDLE_EAST, "il": MIDDLE_EAST, "qa": MIDDLE_EAST,
    "za": AFRICA, "ng": AFRICA,
}

# Feed sources carry no country of their own
SOURCE_COUNTRIES: Dict[str, str] = {
    "reuters": "global",
    "ap_news": "us",
    "al_arabiya": "ae",
    "al_jazeera": "qa",
    "dw_news": "de",
    "france24": "fr",
}

COUNTRY_TAGS: Dict[str, str] = {
    "us": "#USA", "gb": "#UK", "ca": "#Canada", "au": "#Australia",
    "de": "#Germany", "fr": "#France", "jp": "#Japan", "in": "#India",
    "br": "#Brazil", "mx": "#Mexico", "sa": "#SaudiArabia", "ae": "#UAE",
    "eg": "#Egypt", "tr": "#Turkey", "il": "#Israel", "qa": "#Qatar",
}

REGION_TAGS: Dict[str, str] = {
    AMERICAS: "#Americas",
    EUROPE: "#Europe",
    ASIA: "#Asia",
    MIDDLE_EAST: "#MiddleEast",
    AFRICA: "#Africa",
}

CATEGORY_TAGS: Dict[str, str] = {
    "conflict": "#conflict #war",
    "economy": "#economy #market",
    "politics": "#politics #government",
    "technology": "#tech #innovation",
}

BASE_HASHTAGS = "#worldnews #global #breaking #fyp #viral #trending"

REGION_BACKGROUNDS: Dict[str, str] = {
    MIDDLE_EAST: "#8B0000",
}

CATEGORY_BACKGROUNDS: Dict[str, str] = {
    "conflict": "#B22222",
    "economy": "#2E8B57",
    "politics": "#4682B4",
}

DEFAULT_BACKGROUND = "#DC143C"


def region_for(country: Optional[str]) -> str:
    """Every code not explicitly mapped resolves to 'international'."""
    return COUNTRY_REGIONS.get((country or "").lower(), INTERNATIONAL)


def source_key(source_name: str) -> str:
    """'AP NEWS' / 'ap news' / 'ap_news' → 'ap_news'."""
    return "_".join((source_name or "").lower().replace("-", " ").split())


def country_for_source(source_name: str) -> str:
    return SOURCE_COUNTRIES.get(source_key(source_name), "global")


def background_for(region: Optional[str], category: Optional[str]) -> str:
    return (
        REGION_BACKGROUNDS.get(region or "")
        or CATEGORY_BACKGROUNDS.get(category or "")
        or DEFAULT_BACKGROUND
    )
