"""Tests for the arXiv Atom feed parser."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ArxivQuery.core.errors import MalformedFeedError
from ArxivQuery.core.models import Paper
from ArxivQuery.sources.arxiv.parser import parse_feed, parse_feed_page

_FEED_HEAD = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/"
      xmlns:arxiv="http://arxiv.org/schemas/atom">
  <link href="http://arxiv.org/api/query?search_query=ti:test" rel="self" type="application/atom+xml"/>
  <title type="html">ArXiv Query: search_query=ti:test</title>
  <id>http://arxiv.org/api/feed-id</id>
  <updated>2024-12-02T00:00:00-05:00</updated>
  <opensearch:totalResults>{total}</opensearch:totalResults>
  <opensearch:startIndex>0</opensearch:startIndex>
  <opensearch:itemsPerPage>10</opensearch:itemsPerPage>
"""
_FEED_TAIL = "</feed>\n"


def _feed(*entries: str, total: int = 1) -> str:
    return _FEED_HEAD.format(total=total) + "".join(entries) + _FEED_TAIL


ENTRY_FULL = """  <entry>
    <id>http://arxiv.org/abs/2412.00001v2</id>
    <updated>2024-12-03T10:00:00Z</updated>
    <published>2024-12-01T09:30:00Z</published>
    <title>Attention Is All You Need &amp; More</title>
    <summary>  We propose a new architecture.
It relies on attention &lt;only&gt;.
  </summary>
    <author>
      <name>Ashish Vaswani</name>
      <arxiv:affiliation>Google Brain</arxiv:affiliation>
    </author>
    <author>
      <name>Noam Shazeer</name>
    </author>
    <arxiv:doi>10.1000/xyz</arxiv:doi>
    <link title="doi" href="http://dx.doi.org/10.1000/xyz" rel="related"/>
    <arxiv:comment>15 pages, 5 figures</arxiv:comment>
    <arxiv:journal_ref>NeurIPS 2017</arxiv:journal_ref>
    <link href="http://arxiv.org/abs/2412.00001v2" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2412.00001v2" rel="related" type="application/pdf"/>
    <arxiv:primary_category term="cs.CL" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.CL" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
"""

ENTRY_MINIMAL = """  <entry>
    <id>http://arxiv.org/abs/2412.00002v1</id>
    <updated>2024-12-02T00:00:00Z</updated>
    <published>2024-12-02T00:00:00Z</published>
    <title>Second Paper</title>
    <summary>Short.</summary>
    <author>
      <name>Jane Doe</name>
    </author>
    <link title="pdf" href="http://arxiv.org/pdf/2412.00002v1" rel="related" type="application/pdf"/>
    <arxiv:primary_category term="math.CO" scheme="http://arxiv.org/schemas/atom"/>
    <category term="math.CO" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
"""


class TestParseFeed(unittest.TestCase):
    def test_single_entry_minimal_fields(self) -> None:
        papers = parse_feed(_feed(ENTRY_MINIMAL))

        self.assertEqual(len(papers), 1)
        paper = papers[0]
        self.assertEqual(len(paper.authors), 1)
        self.assertEqual(len(paper.categories), 1)
        self.assertEqual(paper.pdf_url, "http://arxiv.org/pdf/2412.00002v1")
        self.assertEqual(paper.doi, "")
        self.assertEqual(paper.journal_ref, "")
        self.assertEqual(paper.comments, ())

    def test_full_entry(self) -> None:
        paper = parse_feed(_feed(ENTRY_FULL))[0]

        self.assertEqual(paper.id, "http://arxiv.org/abs/2412.00001v2")
        self.assertEqual(paper.title, "Attention Is All You Need & More")
        self.assertEqual(paper.authors, ("Ashish Vaswani", "Noam Shazeer"))
        self.assertEqual(paper.published, "2024-12-01T09:30:00Z")
        self.assertEqual(paper.updated, "2024-12-03T10:00:00Z")
        self.assertEqual(paper.doi, "http://dx.doi.org/10.1000/xyz")
        self.assertEqual(paper.comments, ("15 pages, 5 figures",))
        self.assertEqual(paper.journal_ref, "NeurIPS 2017")
        self.assertEqual(paper.pdf_url, "http://arxiv.org/pdf/2412.00001v2")
        self.assertEqual(paper.primary_category, "cs.CL")
        self.assertEqual(paper.categories, ("cs.CL", "cs.LG"))

    def test_abstract_is_trimmed_and_newlines_removed(self) -> None:
        paper = parse_feed(_feed(ENTRY_FULL))[0]
        self.assertEqual(paper.abstract, "We propose a new architecture.It relies on attention <only>.")

    def test_no_entries_yields_empty_list(self) -> None:
        self.assertEqual(parse_feed(_feed(total=0)), [])

    def test_entries_keep_document_order_without_leakage(self) -> None:
        papers = parse_feed(_feed(ENTRY_FULL, ENTRY_MINIMAL, total=2))

        self.assertEqual([p.title for p in papers], ["Attention Is All You Need & More", "Second Paper"])
        second = papers[1]
        self.assertEqual(second.authors, ("Jane Doe",))
        self.assertEqual(second.categories, ("math.CO",))
        self.assertEqual(second.primary_category, "math.CO")
        self.assertEqual(second.doi, "")
        self.assertEqual(second.journal_ref, "")
        self.assertEqual(second.comments, ())

    def test_feed_level_elements_are_ignored(self) -> None:
        paper = parse_feed(_feed(ENTRY_MINIMAL))[0]
        self.assertNotIn("ArXiv Query", paper.title)
        self.assertEqual(paper.id, "http://arxiv.org/abs/2412.00002v1")

    def test_name_outside_author_is_ignored(self) -> None:
        entry = """  <entry>
    <id>http://arxiv.org/abs/1</id>
    <name>Not An Author</name>
    <author><name>Real Author</name></author>
  </entry>
"""
        paper = parse_feed(_feed(entry))[0]
        self.assertEqual(paper.authors, ("Real Author",))

    def test_unknown_link_titles_are_ignored_and_later_match_wins(self) -> None:
        entry = """  <entry>
    <link title="html" href="http://example.test/html"/>
    <link title="pdf" href="http://example.test/first.pdf"/>
    <link title="pdf" href="http://example.test/second.pdf"></link>
    <link title="doi"/>
  </entry>
"""
        paper = parse_feed(_feed(entry))[0]
        self.assertEqual(paper.pdf_url, "http://example.test/second.pdf")
        self.assertEqual(paper.doi, "")

    def test_duplicate_categories_and_authors_are_kept(self) -> None:
        entry = """  <entry>
    <author><name>Same</name></author>
    <author><name>Same</name></author>
    <category term="cs.AI"/>
    <category term="cs.AI"/>
    <category scheme="no-term"/>
  </entry>
"""
        paper = parse_feed(_feed(entry))[0]
        self.assertEqual(paper.authors, ("Same", "Same"))
        self.assertEqual(paper.categories, ("cs.AI", "cs.AI"))

    def test_multiple_comments_append(self) -> None:
        entry = """  <entry>
    <arxiv:comment>first</arxiv:comment>
    <arxiv:comment>second</arxiv:comment>
  </entry>
"""
        self.assertEqual(parse_feed(_feed(entry))[0].comments, ("first", "second"))

    def test_categories_outside_entry_are_ignored(self) -> None:
        feed = _feed(ENTRY_MINIMAL).replace(
            "<opensearch:startIndex>", '<category term="feed.level"/><opensearch:startIndex>', 1
        )
        paper = parse_feed(feed)[0]
        self.assertEqual(paper.categories, ("math.CO",))

    def test_cdata_text_is_routed(self) -> None:
        entry = """  <entry>
    <title><![CDATA[A <b>bold</b> title]]></title>
  </entry>
"""
        self.assertEqual(parse_feed(_feed(entry))[0].title, "A <b>bold</b> title")

    def test_bytes_input(self) -> None:
        papers = parse_feed(_feed(ENTRY_MINIMAL).encode("utf-8"))
        self.assertEqual(papers[0].title, "Second Paper")

    def test_nested_entry_starts_fresh_draft(self) -> None:
        feed = (
            '<feed xmlns="http://www.w3.org/2005/Atom">'
            "<entry><title>A</title><id>outer</id>"
            "<entry><title>B</title></entry>"
            "</entry></feed>"
        )
        papers = parse_feed(feed)

        self.assertEqual([p.title for p in papers], ["B", ""])
        self.assertEqual(papers[0].id, "")
        self.assertEqual(papers[1], Paper())

    def test_str_input_ignores_declared_encoding(self) -> None:
        feed = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom">'
            "<entry><author><name>Gödel</name></author></entry></feed>"
        )
        self.assertEqual(parse_feed(feed)[0].authors, ("Gödel",))

    def test_bytes_input_follows_declared_encoding(self) -> None:
        feed = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom">'
            "<entry><author><name>Gödel</name></author></entry></feed>"
        ).encode("latin-1")
        self.assertEqual(parse_feed(feed)[0].authors, ("Gödel",))

    def test_results_are_paper_records(self) -> None:
        papers = parse_feed(_feed(ENTRY_MINIMAL))
        self.assertIsInstance(papers[0], Paper)
        self.assertIsInstance(papers[0].authors, tuple)


class TestParseFeedPage(unittest.TestCase):
    def test_total_results_is_read(self) -> None:
        page = parse_feed_page(_feed(ENTRY_FULL, ENTRY_MINIMAL, total=42))
        self.assertEqual(page.total_results, 42)
        self.assertEqual(len(page.papers), 2)

    def test_total_results_missing(self) -> None:
        feed = '<feed xmlns="http://www.w3.org/2005/Atom"></feed>'
        page = parse_feed_page(feed)
        self.assertIsNone(page.total_results)
        self.assertEqual(page.papers, ())


class TestMalformedFeed(unittest.TestCase):
    def test_unclosed_element_raises(self) -> None:
        broken = _feed(ENTRY_MINIMAL).replace("</entry>", "", 1)
        with self.assertRaises(MalformedFeedError) as ctx:
            parse_feed(broken)
        self.assertIsNotNone(ctx.exception.line)

    def test_empty_body_raises(self) -> None:
        with self.assertRaises(MalformedFeedError):
            parse_feed("")

    def test_non_xml_body_raises(self) -> None:
        with self.assertRaises(MalformedFeedError):
            parse_feed("Rate exceeded.")


class TestPaperTimestamps(unittest.TestCase):
    def test_timestamps_parse_to_aware_datetimes(self) -> None:
        paper = parse_feed(_feed(ENTRY_FULL))[0]
        self.assertEqual(paper.published_at(), datetime(2024, 12, 1, 9, 30, tzinfo=timezone.utc))
        self.assertEqual(paper.updated_at(), datetime(2024, 12, 3, 10, 0, tzinfo=timezone.utc))

    def test_missing_timestamp_is_none(self) -> None:
        self.assertIsNone(Paper().published_at())


if __name__ == "__main__":
    unittest.main()
