"""Positioned text models supplied by the document-layout extractor."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Fragment:
    """
    A single positioned text token from one page.

    Attributes:
        text: Token text as emitted by the extractor
        x: Horizontal position (left edge)
        y: Vertical position (top edge, grows downwards)
    """
    text: str
    x: float
    y: float

    @classmethod
    def from_dict(cls, item: dict) -> "Fragment":
        """
        Build from an extractor item (``str`` or ``text`` key).

        Numeric text (``{"str": 981}``) is kept as its string form.

        Raises:
            ValueError: If the text is neither a string nor a number
            KeyError: If a coordinate is missing
        """
        text = item.get('str', item.get('text', ''))
        if text is None:
            text = ''
        elif isinstance(text, (int, float)) and not isinstance(text, bool):
            text = str(text)
        elif not isinstance(text, str):
            raise ValueError(f"Fragment text must be a string, got {type(text).__name__}")
        return cls(text=text, x=float(item['x']), y=float(item['y']))

    def to_dict(self) -> dict:
        """Convert fragment to the extractor item shape."""
        return {'str': self.text, 'x': self.x, 'y': self.y}


# A row is an x-ordered list of fragments sharing a y-band
Row = List[Fragment]


@dataclass
class Page:
    """One page of positioned text."""
    content: List[Fragment] = field(default_factory=list)
    page_number: int = 1

    @property
    def text(self) -> str:
        """Page text in extractor order (used for profile detection)."""
        return " ".join(f.text for f in self.content)


@dataclass
class Document:
    """A document as produced by the upstream extractor."""
    pages: List[Page] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def page_count(self) -> int:
        """Get number of pages."""
        return len(self.pages)

    @classmethod
    def from_dict(cls, data: dict, source: Optional[str] = None) -> "Document":
        """Build from ``{"pages": [{"content": [...]}, ...]}``."""
        pages = []
        for page_num, page in enumerate(data['pages'], start=1):
            content = [Fragment.from_dict(item) for item in page.get('content', [])]
            pages.append(Page(content=content, page_number=page_num))
        return cls(pages=pages, source=source)
