"""arXiv Atom feed parser.

Maps the feed to `Paper` records in a single SAX pass. Instead of building a
tree, the handler keeps one "currently inside element X" flag per
field-bearing element and routes text and attributes by those flags. This
keeps same-named elements apart: for example an `id` or `title` at feed level
is ignored outside `entry`, and `name` only counts inside `author`.

Elements are matched by qualified name as the arXiv feed writes them
(``arxiv:comment``, ``arxiv:primary_category`` ...), so namespace processing
stays off.
"""

from __future__ import annotations

from typing import Optional
import xml.sax
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl

from ArxivQuery.core.errors import MalformedFeedError
from ArxivQuery.core.models import FeedPage, Paper, PaperDraft
from ArxivQuery.utils.log import log

ENTRY = "entry"
AUTHOR = "author"
NAME = "name"
LINK = "link"
CATEGORY = "category"
PRIMARY_CATEGORY = "arxiv:primary_category"
TOTAL_RESULTS = "opensearch:totalResults"

# Element name -> draft attribute for single-text fields.
_TEXT_FIELDS = {
    "id": "id",
    "title": "title",
    "summary": "abstract",
    "published": "published",
    "updated": "updated",
    "arxiv:comment": "comments",
    "arxiv:journal_ref": "journal_ref",
}
_LIST_FIELDS = frozenset({"authors", "comments"})
_ATTRIBUTE_ELEMENTS = frozenset({LINK, CATEGORY, PRIMARY_CATEGORY})


def _normalize_abstract(text: str) -> str:
    return text.strip().replace("\n", "")


class _FeedState(ContentHandler):
    """Per-parse routing state; one instance per `parse_feed_page` call."""

    def __init__(self) -> None:
        super().__init__()
        self.papers: list[Paper] = []
        self.total_results: Optional[int] = None
        self._draft = PaperDraft()
        self._in_entry = False
        self._in_author = False
        self._in_name = False
        self._in_total = False
        self._open = {element: False for element in _TEXT_FIELDS}
        self._text: list[str] = []

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802 - SAX API
        self._flush_text()
        if name == ENTRY:
            if self._in_entry:
                log.debug("Discarding unsealed entry draft: id=%s", self._draft.id)
            self._in_entry = True
            self._draft = PaperDraft()
        elif name in self._open:
            self._open[name] = True
        elif name == AUTHOR:
            self._in_author = True
        elif name == NAME:
            if self._in_author:
                self._in_name = True
        elif name == TOTAL_RESULTS:
            self._in_total = True

        if self._in_entry and name in _ATTRIBUTE_ELEMENTS:
            self._handle_attributes(name, attrs)

    def endElement(self, name: str) -> None:  # noqa: N802 - SAX API
        self._flush_text()
        if name == ENTRY:
            self._in_entry = False
            self.papers.append(self._draft.seal())
            self._draft = PaperDraft()
        elif name in self._open:
            self._open[name] = False
        elif name == AUTHOR:
            self._in_author = False
            self._in_name = False
        elif name == NAME:
            self._in_name = False
        elif name == TOTAL_RESULTS:
            self._in_total = False

    def characters(self, content: str) -> None:
        self._text.append(content)

    def _flush_text(self) -> None:
        """Route the text collected since the last element boundary.

        SAX may split one text node across several `characters` calls (e.g.
        around entity references), so routing waits for the next tag.
        """
        if not self._text:
            return
        text = "".join(self._text)
        self._text.clear()

        if self._in_total and not self._in_entry:
            try:
                self.total_results = int(text.strip())
            except ValueError:
                log.debug("Ignoring non-numeric totalResults: %r", text)
            return

        if not self._in_entry:
            return

        active = [_TEXT_FIELDS[element] for element, is_open in self._open.items() if is_open]
        if self._in_author and self._in_name:
            active.append("authors")
        if len(active) != 1:
            return
        self._assign(active[0], text)

    def _assign(self, field: str, text: str) -> None:
        if field == "abstract":
            text = _normalize_abstract(text)
        if field in _LIST_FIELDS:
            getattr(self._draft, field).append(text)
        else:
            setattr(self._draft, field, text)

    def _handle_attributes(self, name: str, attrs: AttributesImpl) -> None:
        """Read attribute-valued fields from `link`, `category` and the primary category.

        SAX reports self-closing elements as a start/end pair, so this single
        routine covers both forms.
        """
        if name == LINK:
            kind = attrs.get("title")
            href = attrs.get("href")
            if href is None:
                return
            if kind == "pdf":
                self._draft.pdf_url = href
            elif kind == "doi":
                self._draft.doi = href
        elif name == PRIMARY_CATEGORY:
            term = attrs.get("term")
            if term is not None:
                self._draft.primary_category = term
        elif name == CATEGORY:
            term = attrs.get("term")
            if term is not None:
                self._draft.categories.append(term)


def parse_feed_page(xml_text: str | bytes) -> FeedPage:
    """Parse an arXiv Atom feed into papers plus the total result count.

    Args:
        xml_text: Complete feed document. Bytes are decoded per the XML
            declaration; str is taken as already decoded and any declared
            encoding is ignored.

    Returns:
        FeedPage with one Paper per `entry`, in document order.

    Raises:
        MalformedFeedError: If the document is not well-formed XML.
    """
    state = _FeedState()
    try:
        xml.sax.parseString(xml_text, state)
    except xml.sax.SAXParseException as e:
        line, column = e.getLineNumber(), e.getColumnNumber()
        raise MalformedFeedError(
            f"Malformed arXiv feed at line {line}, column {column}: {e.getMessage()}",
            line=line,
            column=column,
        ) from e

    log.debug("Parsed arXiv feed: entries=%d total_results=%s", len(state.papers), state.total_results)
    return FeedPage(papers=tuple(state.papers), total_results=state.total_results)


def parse_feed(xml_text: str | bytes) -> list[Paper]:
    """Parse an arXiv Atom feed into Paper records.

    Args:
        xml_text: Complete feed document.

    Returns:
        Papers in document order; empty when the feed has no entries.

    Raises:
        MalformedFeedError: If the document is not well-formed XML.
    """
    return list(parse_feed_page(xml_text).papers)
