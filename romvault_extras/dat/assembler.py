"""
RomVault dat assembly.

Drives one rewriter pass per source dat, optionally in parallel, and writes
the merged document: XML declaration, Logiqx doctype, <datafile> root with a
<header> followed by the all-content, artwork and samples fragments in that
order.
"""

import logging
import time
import zipfile
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from lxml import etree

from romvault_extras.archive.version import format_version
from romvault_extras.config.conversion import ConversionConfig
from romvault_extras.errors import ConversionError
from .fragment import DatFragment, FragmentBuilder
from .output import write_datfile
from .reader import open_entry_events
from .rewriter import GameRewriter
from .sources import SourceDatSpec, default_source_specs

logger = logging.getLogger(__name__)

# TODO: publish a DTD derived from Logiqx that declares the dir element
DOCTYPE = (
    '<!DOCTYPE datafile PUBLIC "-//Logiqx//DTD ROM Management Datafile//EN" '
    '"http://www.logiqx.com/Dats/datafile.dtd">'
)

XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'

HOMEPAGE = "https://github.com/fragoulin/convert-mame-extras-romvault"
EXTRAS_URL = "https://pleasuredome.miraheze.org/wiki/MAME_EXTRAs"


def create_header_element(version: float) -> etree._Element:
    """
    Create the <header> element.

    Args:
        version: MAME version of the EXTRAs archive

    Returns:
        <header> element with its fields in Logiqx order
    """
    version_text = format_version(version)
    fields = [
        ("name", "Extras"),
        ("description", f"MAME {version_text} Extras (all content)"),
        ("category", "Standard DatFile"),
        ("version", version_text),
        ("author", "Pleasuredome"),
        ("homepage", HOMEPAGE),
        ("url", EXTRAS_URL),
        ("comment", "Compatible with RomVault"),
    ]

    header = etree.Element("header")
    for tag, text in fields:
        elem = etree.SubElement(header, tag)
        elem.text = text
    return header


class DatAssembler:
    """
    Builds the RomVault dat for one EXTRAs archive.

    Each source dat is converted by its own worker with its own archive
    handle; fragments are joined in source order, not completion order.
    A source dat that cannot be read or rewritten contributes an empty
    fragment instead of failing the run.
    """

    def __init__(self, config: ConversionConfig, specs: Optional[List[SourceDatSpec]] = None):
        """
        Initialize assembler.

        Args:
            config: Conversion run configuration
            specs: Source dats in output order (default: the three EXTRAs dats)
        """
        self.config = config
        self.specs = specs if specs is not None else default_source_specs()

    def generate(self) -> Path:
        """
        Build the dat and write it to the configured output path.

        Returns:
            Path of the written dat

        Raises:
            DestinationExistsError: If the output file already exists
            WriteError: If the output file cannot be written
        """
        start = time.monotonic()
        logger.info(
            f"Generating {self.config.output_file_path} "
            f"for version {format_version(self.config.version)}"
        )

        data = self.build_document()
        path = write_datfile(data, self.config.output_file_path)

        logger.info(f"Elapsed: {time.monotonic() - start:.2f}s")
        return path

    def build_document(self) -> bytes:
        """
        Build the complete dat document.

        Returns:
            UTF-8 encoded XML document
        """
        fragments = self.convert_all()

        buffer = BytesIO()
        buffer.write(XML_DECLARATION)
        with etree.xmlfile(buffer, encoding="UTF-8") as xf:
            xf.write_doctype(DOCTYPE)
            with xf.element("datafile"):
                xf.write(create_header_element(self.config.version))
                for fragment in fragments:
                    for elem in fragment.elements:
                        xf.write(elem)

        return buffer.getvalue()

    def convert_all(self) -> List[DatFragment]:
        """
        Convert every source dat.

        Returns:
            Fragments in the order of self.specs
        """
        if not self.config.parallel:
            return [self.convert_source(spec) for spec in self.specs]

        with ThreadPoolExecutor(max_workers=len(self.specs) or 1) as executor:
            futures = [executor.submit(self.convert_source, spec) for spec in self.specs]
            return [future.result() for future in futures]

    def convert_source(self, spec: SourceDatSpec) -> DatFragment:
        """
        Convert one source dat into a fragment.

        Args:
            spec: Source dat and its grouping policy

        Returns:
            Converted fragment, empty if the dat could not be converted
        """
        builder = FragmentBuilder()
        rewriter = GameRewriter(spec)

        try:
            events = open_entry_events(self.config.input_file_path, spec.entry)
            games = rewriter.rewrite(events, builder)
        except (ConversionError, KeyError, zipfile.BadZipFile, OSError) as e:
            logger.warning(f"Skipping {spec.entry}: {e}")
            return DatFragment.empty()

        fragment = builder.close()
        logger.info(f"{spec.entry}: {games} games")
        return fragment
