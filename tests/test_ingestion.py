import random
import unittest
from datetime import datetime, timezone

from global_news_bot.application.ingestion import (
    FEED,
    HEADLINE,
    SourceDescriptor,
    SourceFetcher,
    clean_text,
    deduplicate,
    normalize_feed_item,
    normalize_headline,
    parse_timestamp,
    rotate,
)
from tests.fakes import FakeFeedSource, FakeHeadlineSource, SleepRecorder, headline, make_story


class TestNormalization(unittest.TestCase):
    def test_headline_is_normalized(self):
        story = normalize_headline(headline("Global markets rally as inflation cools"), "gb")
        self.assertEqual(story.title, "Global markets rally as inflation cools")
        self.assertEqual(story.country, "gb")
        self.assertEqual(story.source, "Reuters")
        self.assertEqual(story.kind, HEADLINE)
        self.assertEqual(story.published_at, datetime(2024, 5, 1, 11, 30, tzinfo=timezone.utc))
        self.assertFalse(story.scored)

    def test_short_title_is_dropped(self):
        self.assertIsNone(normalize_headline(headline("Too short"), "us"))

    def test_title_of_exactly_min_length_is_kept(self):
        self.assertIsNotNone(normalize_headline(headline("x" * 20), "us", min_title_length=20))

    def test_missing_description_is_dropped(self):
        self.assertIsNone(normalize_headline(headline("A perfectly long enough headline", description=""), "us"))
        self.assertIsNone(normalize_headline(headline("A perfectly long enough headline", description=None), "us"))

    def test_missing_source_name_becomes_unknown(self):
        story = normalize_headline(headline("A perfectly long enough headline", sourceName=None), "us")
        self.assertEqual(story.source, "Unknown")

    def test_feed_item_gets_origin_country_from_source_table(self):
        item = {
            "title": "Ceasefire talks resume in the region",
            "snippetOrSummary": "<p>Negotiators met <b>again</b> today.</p>",
            "link": "https://apnews.example/1",
            "publishDate": "Wed, 01 May 2024 09:00:00 GMT",
        }
        story = normalize_feed_item(item, "ap_news")
        self.assertEqual(story.source, "AP NEWS")
        self.assertEqual(story.country, "us")
        self.assertEqual(story.description, "Negotiators met again today.")
        self.assertEqual(story.kind, FEED)
        self.assertEqual(story.published_at, datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))

    def test_unknown_feed_is_global(self):
        item = {"title": "Ceasefire talks resume in the region", "snippetOrSummary": "Details."}
        self.assertEqual(normalize_feed_item(item, "reuters").country, "global")
        self.assertEqual(normalize_feed_item(item, "some_blog").country, "global")

    def test_clean_text(self):
        self.assertEqual(clean_text("<b>Hello</b> &amp; see https://x.example/a  world"), "Hello & see world")
        self.assertEqual(clean_text(None), "")


class TestParseTimestamp(unittest.TestCase):
    def test_iso_with_z(self):
        self.assertEqual(parse_timestamp("2024-05-01T10:00:00Z"), datetime(2024, 5, 1, 10, tzinfo=timezone.utc))

    def test_rfc822(self):
        self.assertEqual(
            parse_timestamp("Wed, 01 May 2024 10:00:00 +0000"),
            datetime(2024, 5, 1, 10, tzinfo=timezone.utc),
        )

    def test_naive_is_utc(self):
        self.assertEqual(parse_timestamp("2024-05-01T10:00:00").tzinfo, timezone.utc)

    def test_garbage_and_empty(self):
        self.assertIsNone(parse_timestamp("yesterday-ish"))
        self.assertIsNone(parse_timestamp(""))
        self.assertIsNone(parse_timestamp(None))


class TestDeduplicate(unittest.TestCase):
    def test_same_title_different_case_and_spacing(self):
        a = make_story("Oil prices jump after supply cut", url="https://a.example/1")
        b = make_story("oil  prices jump after SUPPLY cut", url="https://b.example/2")
        self.assertEqual(deduplicate([a, b]), [a])

    def test_same_url_different_title(self):
        a = make_story("Oil prices jump after supply cut", url="https://a.example/1")
        b = make_story("Crude surges on output decision", url="HTTPS://A.EXAMPLE/1")
        self.assertEqual(deduplicate([a, b]), [a])

    def test_distinct_stories_are_kept_in_order(self):
        stories = [make_story(f"Distinct headline number {i}") for i in range(3)]
        self.assertEqual(deduplicate(stories), stories)


class TestRotate(unittest.TestCase):
    def setUp(self):
        self.sources = [SourceDescriptor(HEADLINE, c, c) for c in ("us", "gb", "de", "jp", "br")]

    def test_sample_without_replacement(self):
        picked = rotate(self.sources, 3, random.Random(7))
        self.assertEqual(len(picked), 3)
        self.assertEqual(len({s.name for s in picked}), 3)

    def test_count_larger_than_pool(self):
        self.assertEqual(len(rotate(self.sources, 10, random.Random(7))), 5)

    def test_zero(self):
        self.assertEqual(rotate(self.sources, 0, random.Random(7)), [])


class TestSourceFetcher(unittest.TestCase):
    def _fetcher(self, headlines, feed_src, **overrides):
        kwargs = dict(
            headline_source=headlines,
            feed_source=feed_src,
            countries=["us", "gb", "sa"],
            feeds={"al_jazeera": "https://feeds.example/aj"},
            countries_per_cycle=3,
            items_per_source=5,
            api_call_delay=2.0,
            rng=random.Random(3),
            sleep=SleepRecorder(),
        )
        kwargs.update(overrides)
        return SourceFetcher(**kwargs)

    def test_collects_from_every_source(self):
        headlines = FakeHeadlineSource({
            "us": [headline("Senate passes new budget deal tonight")],
            "gb": [headline("London transport strike ends after talks")],
            "sa": [headline("Saudi Arabia unveils new tourism plan")],
        })
        feeds = FakeFeedSource({"https://feeds.example/aj": [
            {"title": "Regional summit opens in Doha today", "snippetOrSummary": "Leaders arrive."},
        ]})
        stories, reports = self._fetcher(headlines, feeds).fetch_all()
        self.assertEqual(len(stories), 4)
        self.assertEqual(len(reports), 4)
        self.assertTrue(all(r.ok for r in reports))
        self.assertEqual({c for c, _ in headlines.calls}, {"us", "gb", "sa"})
        self.assertTrue(all(size == 5 for _, size in headlines.calls))

    def test_failing_source_is_reported_not_fatal(self):
        headlines = FakeHeadlineSource(
            {"us": [headline("Senate passes new budget deal tonight")]},
            failing={"gb"},
        )
        feeds = FakeFeedSource(failing={"https://feeds.example/aj"})
        stories, reports = self._fetcher(headlines, feeds).fetch_all()
        self.assertEqual([s.title for s in stories], ["Senate passes new budget deal tonight"])
        errors = {r.name: r.error for r in reports if not r.ok}
        self.assertIn("gb", errors)
        self.assertIn("al_jazeera", errors)

    def test_all_sources_failing_gives_empty_list(self):
        headlines = FakeHeadlineSource(failing={"us", "gb", "sa"})
        feeds = FakeFeedSource(failing={"https://feeds.example/aj"})
        stories, reports = self._fetcher(headlines, feeds).fetch_all()
        self.assertEqual(stories, [])
        self.assertEqual(len(reports), 4)
        self.assertFalse(any(r.ok for r in reports))

    def test_delay_between_headline_calls_not_after_last(self):
        sleep = SleepRecorder()
        self._fetcher(FakeHeadlineSource(), FakeFeedSource(), sleep=sleep).fetch_all()
        self.assertEqual(sleep.delays, [2.0, 2.0])

    def test_dropped_items_are_counted(self):
        headlines = FakeHeadlineSource({"us": [
            headline("Senate passes new budget deal tonight"),
            headline("Too short"),
            headline("Another long enough headline here", description=""),
        ]})
        stories, reports = self._fetcher(headlines, None, countries=["us"], feeds={}).fetch_all()
        self.assertEqual(len(stories), 1)
        self.assertEqual((reports[0].accepted, reports[0].dropped), (1, 2))

    def test_no_headline_source_uses_feeds_only(self):
        feeds = FakeFeedSource({"https://feeds.example/aj": [
            {"title": "Regional summit opens in Doha today", "snippetOrSummary": "Leaders arrive."},
        ]})
        stories, reports = self._fetcher(None, feeds).fetch_all()
        self.assertEqual(len(stories), 1)
        self.assertEqual(stories[0].country, "qa")
        self.assertEqual([r.kind for r in reports], [FEED])

    def test_duplicates_across_sources_are_removed(self):
        dup = headline("Senate passes new budget deal tonight")
        headlines = FakeHeadlineSource({"us": [dup], "gb": [dup]})
        stories, _ = self._fetcher(headlines, None, feeds={}).fetch_all()
        self.assertEqual(len(stories), 1)


if __name__ == "__main__":
    unittest.main()
