"""
Game rewriter for Logiqx dat files.

Converts the <machine> elements of a source dat into RomVault <game>
elements, keeping only <description> and <rom> children and grouping games
into <dir> elements:

- with a root dir, every game of the dat is enclosed in one <dir>
- with group triggers, a machine whose name is a trigger gets its own <dir>

The rewriter is a small state machine driven by a transition table keyed on
(state, event type, tag name). Events without a transition are ignored.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Protocol, Union

from romvault_extras.errors import MissingAttributeError, UnterminatedMachineError
from .events import EmptyTag, EndOfInput, EndTag, StartTag, Text, XmlEvent, tag_name
from .sources import SourceDatSpec

logger = logging.getLogger(__name__)

DIR = "dir"
GAME = "game"


class EventSink(Protocol):
    """Anything accepting rewritten events (see FragmentBuilder)."""

    def write(self, event: XmlEvent) -> None:
        ...


class RewriteState(Enum):
    """Position of the rewriter in the Logiqx hierarchy."""
    AWAITING_MACHINE = "awaiting_machine"
    INSIDE_MACHINE = "inside_machine"
    INSIDE_DESCRIPTION = "inside_description"


@dataclass(frozen=True)
class RewritePosition:
    """Current state, plus whether the open game sits in its own dir."""
    state: RewriteState = RewriteState.AWAITING_MACHINE
    wrapped: bool = False


def _dir_start(name: str) -> StartTag:
    return StartTag(DIR, (("name", name),))


class GameRewriter:
    """
    Rewrites the event stream of one source dat.

    Example:
        rewriter = GameRewriter(SourceDatSpec(entry="artwork.dat", root_dir="artwork"))
        builder = FragmentBuilder()
        rewriter.rewrite(iter_events(stream), builder)
        fragment = builder.close()
    """

    def __init__(self, spec: SourceDatSpec):
        """
        Initialize rewriter.

        Args:
            spec: Grouping policy of the source dat
        """
        self.spec = spec
        self.games_written = 0
        self._transitions = {
            (RewriteState.AWAITING_MACHINE, StartTag, "machine"): self._open_game,
            (RewriteState.AWAITING_MACHINE, EmptyTag, "machine"): self._empty_game,
            (RewriteState.INSIDE_MACHINE, StartTag, "description"): self._open_description,
            (RewriteState.INSIDE_MACHINE, EmptyTag, "description"): self._forward,
            (RewriteState.INSIDE_MACHINE, EmptyTag, "rom"): self._forward,
            (RewriteState.INSIDE_MACHINE, EndTag, "machine"): self._close_game,
            (RewriteState.INSIDE_DESCRIPTION, Text, None): self._forward,
            (RewriteState.INSIDE_DESCRIPTION, EndTag, "description"): self._close_description,
        }

    def rewrite(self, events: Iterable[XmlEvent], sink: EventSink) -> int:
        """
        Rewrite source events into the sink.

        Args:
            events: Events of the source dat
            sink: Destination of the rewritten events

        Returns:
            Number of games written

        Raises:
            UnterminatedMachineError: If input ends inside a machine
            MissingAttributeError: If a machine has no name
        """
        self.games_written = 0
        position = RewritePosition()

        if self.spec.root_dir:
            sink.write(_dir_start(self.spec.root_dir))

        for event in events:
            if isinstance(event, EndOfInput):
                break
            handler = self._transitions.get((position.state, type(event), tag_name(event)))
            if handler is not None:
                position = handler(event, position, sink)

        if position.state is not RewriteState.AWAITING_MACHINE:
            raise UnterminatedMachineError(
                f"{self.spec.entry}: input ended inside a machine ({position.state.value})"
            )

        if self.spec.root_dir:
            sink.write(EndTag(DIR))

        logger.debug(f"{self.spec.entry}: {self.games_written} games rewritten")
        return self.games_written

    def _open_game(self, event: Union[StartTag, EmptyTag], position: RewritePosition, sink: EventSink) -> RewritePosition:
        name = event.get("name")
        if name is None:
            raise MissingAttributeError(f"{self.spec.entry}: machine without a name attribute")

        wrapped = name in self.spec.group_triggers
        if wrapped:
            sink.write(_dir_start(name))
        sink.write(StartTag(GAME, (("name", name),)))
        return RewritePosition(RewriteState.INSIDE_MACHINE, wrapped)

    def _empty_game(self, event: EmptyTag, position: RewritePosition, sink: EventSink) -> RewritePosition:
        # A machine without children is still a game
        return self._close_game(event, self._open_game(event, position, sink), sink)

    def _open_description(self, event: StartTag, position: RewritePosition, sink: EventSink) -> RewritePosition:
        sink.write(event)
        return replace(position, state=RewriteState.INSIDE_DESCRIPTION)

    def _close_description(self, event: EndTag, position: RewritePosition, sink: EventSink) -> RewritePosition:
        sink.write(event)
        return replace(position, state=RewriteState.INSIDE_MACHINE)

    def _forward(self, event: XmlEvent, position: RewritePosition, sink: EventSink) -> RewritePosition:
        sink.write(event)
        return position

    def _close_game(self, event: Union[EndTag, EmptyTag], position: RewritePosition, sink: EventSink) -> RewritePosition:
        sink.write(EndTag(GAME))
        if position.wrapped:
            sink.write(EndTag(DIR))
        self.games_written += 1
        return RewritePosition()
