"""
Streaming reader for Logiqx dat files.

Turns a binary XML stream into a sequence of XmlEvent objects using lxml's
iterparse. Elements are released as soon as their events have been produced,
so memory use does not grow with the size of the dat.
"""

import logging
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Iterator

from lxml import etree

from romvault_extras.errors import EntryReadError, MalformedXmlError
from .events import EmptyTag, EndOfInput, EndTag, StartTag, Text, XmlEvent

logger = logging.getLogger(__name__)


def _attributes(elem) -> tuple:
    """Copy element attributes as (name, value) pairs in document order."""
    return tuple(elem.attrib.items())


def _release(elem) -> None:
    """Free a fully processed element and the siblings parsed before it."""
    elem.clear(keep_tail=True)
    parent = elem.getparent()
    if parent is not None:
        while elem.getprevious() is not None:
            del parent[0]


def iter_events(source: BinaryIO) -> Iterator[XmlEvent]:
    """
    Read XML events from a binary stream.

    An element that closes without text or children is reported as a single
    EmptyTag; other elements produce StartTag, Text and EndTag events.
    The sequence always ends with EndOfInput.

    Args:
        source: Readable binary stream containing an XML document

    Yields:
        XmlEvent objects in document order

    Raises:
        MalformedXmlError: If the stream is not well-formed XML
    """
    context = etree.iterparse(
        source,
        events=("start", "end"),
        load_dtd=False,
        no_network=True,
        resolve_entities=False,
        remove_comments=True,
        remove_pis=True,
    )

    # Start tag not emitted yet: it may turn out to be an empty element
    pending = None
    # Closed element whose tail text is not parsed yet
    closed = None

    try:
        for event, elem in context:
            if closed is not None:
                if closed.tail:
                    yield Text(closed.tail)
                _release(closed)
                closed = None

            if event == "start":
                if pending is not None:
                    yield StartTag(pending.tag, _attributes(pending))
                    if pending.text:
                        yield Text(pending.text)
                pending = elem
                continue

            if pending is elem:
                pending = None
                if elem.text is None:
                    yield EmptyTag(elem.tag, _attributes(elem))
                else:
                    yield StartTag(elem.tag, _attributes(elem))
                    yield Text(elem.text)
                    yield EndTag(elem.tag)
            else:
                yield EndTag(elem.tag)
            closed = elem
    except etree.XMLSyntaxError as e:
        raise MalformedXmlError(f"malformed XML: {e.msg}", getattr(e, 'position', None)) from e

    if closed is not None:
        if closed.tail:
            yield Text(closed.tail)
        _release(closed)

    yield EndOfInput()


def open_entry_events(archive_path: Path, entry: str) -> Iterator[XmlEvent]:
    """
    Read XML events from one entry of a Zip archive.

    Each call opens its own archive handle, so several entries can be read
    from different threads at the same time.

    Args:
        archive_path: Path to the Zip archive
        entry: Name of the entry inside the archive

    Yields:
        XmlEvent objects of the entry, in document order

    Raises:
        KeyError: If the entry does not exist
        zipfile.BadZipFile: If the archive is corrupt
        EntryReadError: If the entry data cannot be decompressed
        MalformedXmlError: If the entry is not well-formed XML
    """
    with zipfile.ZipFile(archive_path, "r") as archive:
        with archive.open(entry, "r") as stream:
            logger.debug(f"Reading {entry} from {Path(archive_path).name}")
            try:
                yield from iter_events(stream)
            except (zlib.error, EOFError) as e:
                raise EntryReadError(f"{entry}: corrupt compressed data: {e}") from e
