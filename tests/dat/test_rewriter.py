from io import BytesIO

import pytest
from lxml import etree

from romvault_extras.dat.events import EmptyTag, EndOfInput, EndTag, StartTag, Text
from romvault_extras.dat.fragment import FragmentBuilder
from romvault_extras.dat.reader import iter_events
from romvault_extras.dat.rewriter import GameRewriter, RewritePosition, RewriteState
from romvault_extras.dat.sources import SourceDatSpec
from romvault_extras.errors import MissingAttributeError, UnterminatedMachineError

ALL_CONTENT_SPEC = SourceDatSpec(entry="all_non-zipped_content.dat", group_triggers=frozenset({"dats", "folders"}))
ARTWORK_SPEC = SourceDatSpec(entry="artwork.dat", root_dir="artwork")


class ListSink:
    """Collects rewritten events."""

    def __init__(self):
        self.events = []

    def write(self, event):
        self.events.append(event)


def _rewrite(spec: SourceDatSpec, xml: str) -> bytes:
    builder = FragmentBuilder()
    GameRewriter(spec).rewrite(iter_events(BytesIO(xml.encode("utf-8"))), builder)
    fragment = builder.close()
    return b"".join(etree.tostring(elem) for elem in fragment.elements)


@pytest.mark.unit
def test_trigger_machine_is_wrapped_in_own_dir():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile><machine name="dats"><description>Foo</description>'
        '<rom name="a.bin" size="10"/></machine></datafile>',
    )

    assert output == (
        b'<dir name="dats"><game name="dats"><description>Foo</description>'
        b'<rom name="a.bin" size="10"/></game></dir>'
    )


@pytest.mark.unit
def test_other_machines_are_not_wrapped():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile>'
        '<machine name="folders"><description>F</description></machine>'
        '<machine name="icons"><description>I</description></machine>'
        '</datafile>',
    )

    assert output == (
        b'<dir name="folders"><game name="folders"><description>F</description></game></dir>'
        b'<game name="icons"><description>I</description></game>'
    )


@pytest.mark.unit
def test_root_dir_encloses_all_games():
    output = _rewrite(
        ARTWORK_SPEC,
        '<datafile>'
        '<machine name="pacman"><rom name="pacman.zip" size="1"/></machine>'
        '<machine name="galaga"><rom name="galaga.zip" size="2"/></machine>'
        '</datafile>',
    )

    root = etree.fromstring(output)
    assert root.tag == "dir"
    assert root.get("name") == "artwork"
    assert [game.get("name") for game in root] == ["pacman", "galaga"]


@pytest.mark.unit
def test_root_dir_without_games_is_still_emitted():
    output = _rewrite(ARTWORK_SPEC, "<datafile></datafile>")

    root = etree.fromstring(output)
    assert root.tag == "dir"
    assert len(root) == 0


@pytest.mark.unit
def test_only_description_and_rom_children_survive():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile><machine name="invaders" cloneof="x">'
        '<description>Space Invaders</description>'
        '<year>1978</year><manufacturer>Taito</manufacturer>'
        '<sample name="1"/><disk name="d" sha1="00"/>'
        '<rom name="invaders.zip" size="300" crc="33333333"/>'
        '</machine></datafile>',
    )

    game = etree.fromstring(output)
    assert game.tag == "game"
    assert dict(game.attrib) == {"name": "invaders"}
    assert [child.tag for child in game] == ["description", "rom"]


@pytest.mark.unit
def test_rom_attributes_are_copied_in_order():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile><machine name="m">'
        '<rom name="r.bin" size="10" crc="0123abcd" sha1="a94a8fe5" status="baddump"/>'
        '</machine></datafile>',
    )

    rom = etree.fromstring(output).find("rom")
    assert list(rom.attrib.items()) == [
        ("name", "r.bin"),
        ("size", "10"),
        ("crc", "0123abcd"),
        ("sha1", "a94a8fe5"),
        ("status", "baddump"),
    ]


@pytest.mark.unit
def test_source_header_does_not_leak():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile><header><name>MAME EXTRAs</name><description>all</description></header>'
        '<machine name="m"><description>M</description></machine></datafile>',
    )

    assert output == b'<game name="m"><description>M</description></game>'


@pytest.mark.unit
def test_description_entities_are_reescaped():
    output = _rewrite(
        ALL_CONTENT_SPEC,
        '<datafile><machine name="m"><description>Icons &amp; Cursors</description></machine></datafile>',
    )

    assert output == b'<game name="m"><description>Icons &amp; Cursors</description></game>'


@pytest.mark.unit
def test_text_outside_description_is_dropped():
    sink = ListSink()
    events = [
        StartTag("datafile"),
        Text("\n"),
        StartTag("machine", (("name", "m"),)),
        Text("stray"),
        EndTag("machine"),
        EndTag("datafile"),
        EndOfInput(),
    ]

    GameRewriter(ALL_CONTENT_SPEC).rewrite(events, sink)

    assert sink.events == [StartTag("game", (("name", "m"),)), EndTag("game")]


@pytest.mark.unit
def test_nested_machine_is_ignored():
    sink = ListSink()
    events = [
        StartTag("machine", (("name", "outer"),)),
        StartTag("machine", (("name", "inner"),)),
        EndTag("machine"),
        EndTag("machine"),
        EndOfInput(),
    ]

    rewriter = GameRewriter(ALL_CONTENT_SPEC)
    games = rewriter.rewrite(events, sink)

    # The first </machine> closes the outer game, the second has nothing to close
    assert games == 1
    assert sink.events == [StartTag("game", (("name", "outer"),)), EndTag("game")]


@pytest.mark.unit
def test_rom_start_tag_with_content_is_dropped():
    sink = ListSink()
    events = [
        StartTag("machine", (("name", "m"),)),
        StartTag("rom", (("name", "x"),)),
        Text(" "),
        EndTag("rom"),
        EmptyTag("rom", (("name", "y"),)),
        EndTag("machine"),
        EndOfInput(),
    ]

    GameRewriter(ALL_CONTENT_SPEC).rewrite(events, sink)

    assert sink.events == [
        StartTag("game", (("name", "m"),)),
        EmptyTag("rom", (("name", "y"),)),
        EndTag("game"),
    ]


@pytest.mark.unit
def test_unterminated_machine_raises():
    events = [
        StartTag("datafile"),
        StartTag("machine", (("name", "m"),)),
        StartTag("description"),
        Text("M"),
        EndOfInput(),
    ]

    with pytest.raises(UnterminatedMachineError):
        GameRewriter(ALL_CONTENT_SPEC).rewrite(events, ListSink())


@pytest.mark.unit
def test_input_without_end_of_input_marker_is_accepted():
    sink = ListSink()
    events = [StartTag("machine", (("name", "m"),)), EndTag("machine")]

    assert GameRewriter(ARTWORK_SPEC).rewrite(events, sink) == 1
    assert sink.events[0] == StartTag("dir", (("name", "artwork"),))
    assert sink.events[-1] == EndTag("dir")


@pytest.mark.unit
def test_machine_without_name_raises():
    events = [StartTag("machine", (("sourcefile", "x.cpp"),)), EndTag("machine"), EndOfInput()]

    with pytest.raises(MissingAttributeError):
        GameRewriter(ALL_CONTENT_SPEC).rewrite(events, ListSink())


@pytest.mark.unit
def test_rewrite_counts_games():
    rewriter = GameRewriter(ARTWORK_SPEC)
    events = [
        StartTag("machine", (("name", "a"),)),
        EndTag("machine"),
        StartTag("machine", (("name", "b"),)),
        EndTag("machine"),
        EndOfInput(),
    ]

    assert rewriter.rewrite(events, ListSink()) == 2
    assert rewriter.games_written == 2


@pytest.mark.unit
def test_rewrite_position_defaults_to_awaiting_machine():
    position = RewritePosition()

    assert position.state is RewriteState.AWAITING_MACHINE
    assert position.wrapped is False


@pytest.mark.unit
def test_machine_without_children_is_still_a_game():
    output = _rewrite(ARTWORK_SPEC, '<datafile><machine name="m"></machine></datafile>')

    assert output == b'<dir name="artwork"><game name="m"/></dir>'


@pytest.mark.unit
def test_trigger_machine_without_children_is_wrapped():
    builder = FragmentBuilder()
    rewriter = GameRewriter(ALL_CONTENT_SPEC)

    games = rewriter.rewrite(iter_events(BytesIO(b'<datafile><machine name="dats"/></datafile>')), builder)

    fragment = builder.close()
    assert games == 1
    assert [etree.tostring(elem) for elem in fragment.elements] == [
        b'<dir name="dats"><game name="dats"/></dir>'
    ]


@pytest.mark.unit
def test_empty_description_is_kept():
    output = _rewrite(
        ARTWORK_SPEC,
        '<datafile><machine name="m"><description></description>'
        '<rom name="m.zip"/></machine></datafile>',
    )

    assert output == b'<dir name="artwork"><game name="m"><description/><rom name="m.zip"/></game></dir>'
