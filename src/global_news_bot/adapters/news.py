"""News adapters: NewsAPI top-headlines over requests, RSS/Atom feeds over feedparser."""

from typing import List, Optional

import feedparser
import requests

from global_news_bot.domain.errors import ConfigurationMissing, SourceUnavailable
from global_news_bot.domain.models import FeedItem, HeadlineItem
from global_news_bot.ports.interfaces import IFeedSource, IHeadlineSource
from global_news_bot.retry import call_with_retry


class NewsApiHeadlineSource(IHeadlineSource):
    """Per-country top headlines from newsapi.org."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://newsapi.org/v2/top-headlines",
        timeout: int = 10,
        max_attempts: int = 2,
        retry_delay: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigurationMissing("NEWSAPI_KEY is not set")
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._session = session or requests.Session()

    def fetch_headlines(self, country: str, page_size: int = 5) -> List[HeadlineItem]:
        try:
            payload = call_with_retry(
                lambda: self._request(country, page_size),
                max_attempts=self._max_attempts,
                delay=self._retry_delay,
                context=f"NewsAPI {country}",
                retry_on=(requests.RequestException,),
            )
        except requests.RequestException as e:
            raise SourceUnavailable(country, str(e)) from e

        if payload.get("status") != "ok":
            raise SourceUnavailable(country, payload.get("message") or "unexpected response")

        items: List[HeadlineItem] = []
        for article in payload.get("articles") or []:
            items.append({
                "title": article.get("title") or "",
                "description": article.get("description") or "",
                "url": article.get("url") or "",
                "sourceName": (article.get("source") or {}).get("name") or "Unknown",
                "publishedAt": article.get("publishedAt") or "",
            })
        return items

    def _request(self, country: str, page_size: int) -> dict:
        response = self._session.get(
            self._base_url,
            params={"country": country, "pageSize": page_size},
            headers={"X-Api-Key": self._api_key},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()


class FeedparserFeedSource(IFeedSource):
    """RSS/Atom feeds, fetched with requests (for the timeout) and parsed by feedparser."""

    def __init__(
        self,
        *,
        timeout: int = 10,
        user_agent: str = "Mozilla/5.0 (compatible; NewsBot/1.0)",
        max_attempts: int = 2,
        retry_delay: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        self._timeout = timeout
        self._user_agent = user_agent
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._session = session or requests.Session()

    def fetch_feed(self, feed_url: str, limit: int = 5) -> List[FeedItem]:
        try:
            body = call_with_retry(
                lambda: self._download(feed_url),
                max_attempts=self._max_attempts,
                delay=self._retry_delay,
                context=f"Feed {feed_url}",
                retry_on=(requests.RequestException,),
            )
        except requests.RequestException as e:
            raise SourceUnavailable(feed_url, str(e)) from e

        feed = feedparser.parse(body)
        if feed.bozo and not feed.entries:
            raise SourceUnavailable(feed_url, f"malformed feed: {feed.get('bozo_exception')}")

        items: List[FeedItem] = []
        for entry in feed.entries[:limit]:
            items.append({
                "title": entry.get("title", ""),
                "snippetOrSummary": entry.get("summary") or entry.get("description") or "",
                "link": entry.get("link", ""),
                "publishDate": entry.get("published") or entry.get("updated") or "",
            })
        return items

    def _download(self, feed_url: str) -> bytes:
        response = self._session.get(feed_url, headers={"User-Agent": self._user_agent}, timeout=self._timeout)
        response.raise_for_status()
        return response.content
