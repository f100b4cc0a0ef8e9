"""Source dat definitions for a MAME EXTRAs archive."""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from romvault_extras.archive.entries import ALL_NON_ZIPPED_CONTENT, ARTWORK, SAMPLES


@dataclass(frozen=True)
class SourceDatSpec:
    """How the games of one source dat are grouped into dirs."""
    entry: str  # Entry name inside the archive
    root_dir: Optional[str] = None  # Dir enclosing every game (artwork, samples)
    group_triggers: FrozenSet[str] = field(default_factory=frozenset)  # Machines wrapped in their own dir


def default_source_specs() -> List[SourceDatSpec]:
    """Return the three source dats in output order."""
    return [
        SourceDatSpec(entry=ALL_NON_ZIPPED_CONTENT, group_triggers=frozenset({"dats", "folders"})),
        SourceDatSpec(entry=ARTWORK, root_dir="artwork"),
        SourceDatSpec(entry=SAMPLES, root_dir="samples"),
    ]
