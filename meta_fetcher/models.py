from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Metadata:
    # each field is filled from og:* first, then the standard html tag
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None         # og:image only, no html equivalent

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FetchedPage:
    url: str
    final_url: str                      # may differ from input after redirects
    status_code: int
    content_type: Optional[str]         # mime type only, charset etc. stripped
    text: str
