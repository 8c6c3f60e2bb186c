"""Hashtag string for a story: base tags, then country, region and category tags."""

from typing import Optional

from global_news_bot.domain.regions import BASE_HASHTAGS, CATEGORY_TAGS, COUNTRY_TAGS, REGION_TAGS


def build_hashtags(region: Optional[str], country: Optional[str], category: Optional[str]) -> str:
    tags = [BASE_HASHTAGS]
    for table, key in ((COUNTRY_TAGS, country), (REGION_TAGS, region), (CATEGORY_TAGS, category)):
        tag = table.get((key or "").lower())
        if tag:
            tags.append(tag)
    return " ".join(tags)
