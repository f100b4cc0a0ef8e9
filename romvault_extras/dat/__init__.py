"""
Dat conversion package for romvault-extras.

Streams Logiqx dat files out of the EXTRAs archive, rewrites machines into
RomVault games grouped in dirs, and assembles the merged dat.
"""

from .events import StartTag, EmptyTag, EndTag, Text, EndOfInput, XmlEvent
from .reader import iter_events, open_entry_events
from .sources import SourceDatSpec, default_source_specs
from .rewriter import GameRewriter, RewriteState, RewritePosition
from .fragment import DatFragment, FragmentBuilder
from .output import write_datfile
from .assembler import DatAssembler, DOCTYPE, create_header_element

__all__ = [
    'StartTag',
    'EmptyTag',
    'EndTag',
    'Text',
    'EndOfInput',
    'XmlEvent',
    'iter_events',
    'open_entry_events',
    'SourceDatSpec',
    'default_source_specs',
    'GameRewriter',
    'RewriteState',
    'RewritePosition',
    'DatFragment',
    'FragmentBuilder',
    'write_datfile',
    'DatAssembler',
    'DOCTYPE',
    'create_header_element',
]
