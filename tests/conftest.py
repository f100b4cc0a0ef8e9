"""
Shared pytest fixtures and utilities for the romvault-extras test suite.
"""

import struct
import zipfile
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from romvault_extras.archive.entries import ALL_NON_ZIPPED_CONTENT, ARTWORK, SAMPLES

DAT_PROLOG = (
    '<?xml version="1.0"?>\n'
    '<!DOCTYPE datafile PUBLIC "-//Logiqx//DTD ROM Management Datafile//EN" '
    '"http://www.logiqx.com/Dats/datafile.dtd">\n'
)

ALL_CONTENT_DAT = DAT_PROLOG + """<datafile>
\t<header>
\t\t<name>MAME EXTRAs</name>
\t\t<description>MAME 0.264 EXTRAs (all non-zipped content)</description>
\t\t<version>0.264</version>
\t</header>
\t<machine name="dats">
\t\t<description>Dats</description>
\t\t<year>2024</year>
\t\t<rom name="history.xml" size="10" crc="0123abcd" sha1="a94a8fe5ccb19ba61c4c0873d391e987982fbbd3"/>
\t</machine>
\t<machine name="folders">
\t\t<description>Folders</description>
\t\t<rom name="folders/Genre.ini" size="20" crc="4567ef01"/>
\t</machine>
\t<machine name="icons">
\t\t<description>Icons &amp; Cursors</description>
\t\t<manufacturer>Various</manufacturer>
\t\t<rom name="icons/pacman.ico" size="30" crc="89abcdef"/>
\t\t<rom name="icons/galaga.ico" size="40" crc="fedcba98"/>
\t</machine>
</datafile>
"""

ARTWORK_DAT = DAT_PROLOG + """<datafile>
\t<header>
\t\t<name>artwork</name>
\t</header>
\t<machine name="pacman">
\t\t<description>Pac-Man artwork</description>
\t\t<rom name="pacman.zip" size="100" crc="11111111"/>
\t</machine>
\t<machine name="galaga">
\t\t<description>Galaga artwork</description>
\t\t<rom name="galaga.zip" size="200" crc="22222222"/>
\t</machine>
</datafile>
"""

SAMPLES_DAT = DAT_PROLOG + """<datafile>
\t<header>
\t\t<name>samples</name>
\t</header>
\t<machine name="invaders">
\t\t<description>Space Invaders samples</description>
\t\t<sample name="1"/>
\t\t<rom name="invaders.zip" size="300" crc="33333333"/>
\t</machine>
</datafile>
"""

DEFAULT_ENTRIES = {
    ALL_NON_ZIPPED_CONTENT: ALL_CONTENT_DAT,
    ARTWORK: ARTWORK_DAT,
    SAMPLES: SAMPLES_DAT,
}


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """
    Create an EXTRAs Zip archive in the temp workspace.

    Usage:
        path = make_archive()  # three sample dats
        path = make_archive(entries={ARTWORK: "<broken"})  # override one entry
        path = make_archive(omit=[SAMPLES])  # drop an entry
    """

    def _builder(
        name: str = "MAME 0.264 EXTRAs.zip",
        entries: Optional[Dict[str, str]] = None,
        omit=(),
    ) -> Path:
        content = dict(DEFAULT_ENTRIES)
        if entries:
            content.update(entries)
        for entry in omit:
            content.pop(entry, None)

        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry, data in content.items():
                zf.writestr(entry, data)
        return archive_path

    return _builder


@pytest.fixture
def extras_archive(make_archive) -> Path:
    """EXTRAs archive holding the three sample dats."""
    return make_archive()


@pytest.fixture
def corrupt_entry() -> Callable[[Path, str], None]:
    """
    Overwrite the start of an entry's deflate stream with an invalid block.

    Usage:
        corrupt_entry(archive_path, ARTWORK)
    """

    def _corrupt(archive_path: Path, entry: str) -> None:
        with zipfile.ZipFile(archive_path) as zf:
            info = zf.getinfo(entry)
        with open(archive_path, "r+b") as fh:
            # Local file header: name and extra lengths sit at offset 26
            fh.seek(info.header_offset + 26)
            name_len, extra_len = struct.unpack("<HH", fh.read(4))
            fh.seek(info.header_offset + 30 + name_len + extra_len)
            fh.write(b"\xff" * min(8, info.compress_size))

    return _corrupt
