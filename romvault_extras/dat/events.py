"""
XML event model.

A dat file is processed as a flat stream of these events, one at a time,
so that documents of any size can be rewritten without holding them in
memory.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

Attributes = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class _Tag:
    """Tag carrying a name and its attributes in document order."""
    name: str
    attributes: Attributes = ()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get an attribute value by name."""
        for attr_name, value in self.attributes:
            if attr_name == key:
                return value
        return default


@dataclass(frozen=True)
class StartTag(_Tag):
    """Opening tag of an element that has content."""
    pass


@dataclass(frozen=True)
class EmptyTag(_Tag):
    """Element without text or children (e.g. <rom .../>)."""
    pass


@dataclass(frozen=True)
class EndTag:
    """Closing tag of an element."""
    name: str


@dataclass(frozen=True)
class Text:
    """Character data, already unescaped."""
    content: str


@dataclass(frozen=True)
class EndOfInput:
    """Marks the end of a source document."""
    pass


XmlEvent = Union[StartTag, EmptyTag, EndTag, Text, EndOfInput]


def tag_name(event: XmlEvent) -> Optional[str]:
    """Return the tag name of an event, or None for text and end of input."""
    return getattr(event, 'name', None)
