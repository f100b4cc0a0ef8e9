"""
Output sink for rewritten dat content.

FragmentBuilder receives the rewritten event stream of one source dat and
builds the corresponding lxml elements, ready to be written into the final
document.
"""

from dataclasses import dataclass, field
from typing import List

from lxml import etree

from .events import EmptyTag, EndOfInput, EndTag, StartTag, Text, XmlEvent


@dataclass
class DatFragment:
    """Top-level <game> and <dir> elements converted from one source dat."""
    elements: List[etree._Element] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DatFragment":
        return cls()

    @property
    def game_count(self) -> int:
        """Number of <game> elements, including those nested in <dir>."""
        return sum(1 for elem in self.elements for _ in elem.iter("game"))

    def __len__(self) -> int:
        return len(self.elements)


class FragmentBuilder:
    """
    Event sink that assembles a DatFragment.

    Events are fed to an lxml TreeBuilder under a synthetic container
    element, whose children become the fragment once the builder is closed.
    """

    CONTAINER = "fragment"

    def __init__(self):
        self._builder = etree.TreeBuilder()
        self._builder.start(self.CONTAINER, {})
        self._closed = False

    def write(self, event: XmlEvent) -> None:
        """
        Append one event to the fragment.

        Args:
            event: Event to write; attributes are copied in order
        """
        if isinstance(event, (StartTag, EmptyTag)):
            self._builder.start(event.name, dict(event.attributes))
            if isinstance(event, EmptyTag):
                self._builder.end(event.name)
        elif isinstance(event, EndTag):
            self._builder.end(event.name)
        elif isinstance(event, Text):
            self._builder.data(event.content)
        elif isinstance(event, EndOfInput):
            pass
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def close(self) -> DatFragment:
        """Finish the fragment and return its elements."""
        if self._closed:
            raise RuntimeError("FragmentBuilder already closed")
        self._closed = True
        self._builder.end(self.CONTAINER)
        container = self._builder.close()
        return DatFragment(elements=list(container))
