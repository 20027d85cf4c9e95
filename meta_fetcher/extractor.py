import logging
from typing import Callable, Optional

from .models import Metadata
from .parser import ParsedDocument, parse_html

logger = logging.getLogger(__name__)

Lookup = Callable[[ParsedDocument], Optional[str]]

# candidate sources per field, highest priority first: open graph, then standard html
_TITLE_SOURCES: tuple[Lookup, ...] = (
    lambda doc: doc.meta_property("og:title"),
    lambda doc: doc.title,
)
_DESCRIPTION_SOURCES: tuple[Lookup, ...] = (
    lambda doc: doc.meta_property("og:description"),
    lambda doc: doc.meta_name("description"),
)
# no standard html tag carries a preview image
_IMAGE_SOURCES: tuple[Lookup, ...] = (
    lambda doc: doc.meta_property("og:image"),
)


def first_non_empty(doc: ParsedDocument, sources: tuple[Lookup, ...]) -> Optional[str]:
    """Value of the first source that yields a non-blank string, trimmed."""
    for source in sources:
        value = source(doc)
        if value and value.strip():
            return value.strip()
    return None


def extract(html: str) -> Metadata:
    """
    Build a Metadata record from raw HTML. Never raises: a page with no usable
    tags produces a record with every field set to None.
    """
    doc = parse_html(html)

    metadata = Metadata(
        title=first_non_empty(doc, _TITLE_SOURCES),
        description=first_non_empty(doc, _DESCRIPTION_SOURCES),
        image=first_non_empty(doc, _IMAGE_SOURCES),
    )
    logger.debug("Extracted %s", metadata)
    return metadata
