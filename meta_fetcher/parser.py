import logging
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetaTag:
    property: Optional[str]     # lowercased, e.g. "og:title"
    name: Optional[str]         # lowercased, e.g. "description"
    content: Optional[str]


@dataclass
class ParsedDocument:
    """The parts of a page the extractor reads: <meta> tags in document order and the <title>."""

    meta: list[MetaTag] = field(default_factory=list)
    title: Optional[str] = None

    def _first(self, attr: str, key: str) -> Optional[str]:
        key = key.lower()
        for tag in self.meta:
            if getattr(tag, attr) == key:
                return (tag.content or "").strip() or None
        return None

    def meta_property(self, key: str) -> Optional[str]:
        """Content of the first <meta property=key>, trimmed; None if missing or empty."""
        return self._first("property", key)

    def meta_name(self, key: str) -> Optional[str]:
        return self._first("name", key)


def _attr(tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if isinstance(value, list):  # multi-valued attributes come back as lists
        value = " ".join(value)
    return value.strip().lower() if value else None


def parse_html(html: str) -> ParsedDocument:
    """
    Parse raw HTML once and collect the metadata signals.
    Tolerant of broken or empty markup.
    """
    try:
        soup = BeautifulSoup(html or "", "lxml")
    except ParserRejectedMarkup as exc:
        logger.warning("Unparseable markup, treating as empty: %s", exc)
        return ParsedDocument()

    meta = [
        MetaTag(
            property=_attr(tag, "property"),
            name=_attr(tag, "name"),
            content=tag.get("content"),
        )
        for tag in soup.find_all("meta")
    ]

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else None

    return ParsedDocument(meta=meta, title=title or None)
