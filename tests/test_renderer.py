import pytest

from chordsheet.models import Chord, ChordOverLyrics, ChordsOnly, ChordToken, LyricsOnly, Quality, Section, Song
from chordsheet.parser import parse_text
from chordsheet.renderer import SongRenderer, layout_chords, render_song


def _tok(text: str, start: int) -> ChordToken:
    root, rest = text[0], text[1:]
    return ChordToken(Chord(root, quality=Quality(rest) if rest else None), start)


# ---------------------------------------------------------------------------
# layout_chords
# ---------------------------------------------------------------------------


def test_layout_pads_to_columns():
    assert layout_chords([_tok("G", 2), _tok("D", 8)]) == "  G     D"


def test_layout_adjacent_tokens_get_one_space():
    assert layout_chords([_tok("G", 0), _tok("Am", 1)]) == "G Am"


def test_layout_overlap_shifts_right():
    assert layout_chords([_tok("Amaj", 0), _tok("D", 2)]) == "Amaj D"


def test_layout_empty():
    assert layout_chords([]) == ""


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def test_render_header_and_lines():
    song = Song(sections=(
        Section(name="Verse", lines=(
            ChordOverLyrics("Hello world", (_tok("C", 0), _tok("G", 6))),
            LyricsOnly("no chords"),
        )),
    ))
    assert render_song(song) == "[Verse]\nC     G\nHello world\nno chords"


def test_render_unnamed_section_has_no_header():
    song = Song(sections=(Section(name=None, lines=(LyricsOnly("words"),)),))
    assert render_song(song) == "words"


def test_render_chords_only_line():
    song = Song(sections=(Section(name="Intro", lines=(ChordsOnly((_tok("G", 0), _tok("D", 3))),)),))
    assert render_song(song) == "[Intro]\nG  D"


def test_render_chord_past_lyric_end():
    song = Song(sections=(Section(name=None, lines=(ChordOverLyrics("Hi", (_tok("D", 6),)),)),))
    assert render_song(song) == "      D\nHi"


def test_sections_separated_by_blank_line():
    song = Song(sections=(
        Section(name="A", lines=(LyricsOnly("one"),)),
        Section(name="B", lines=(LyricsOnly("two"),)),
    ))
    assert render_song(song) == "[A]\none\n\n[B]\ntwo"


def test_no_double_blank_line_when_section_ends_blank():
    song = Song(sections=(
        Section(name="A", lines=(LyricsOnly("one"), LyricsOnly(""))),
        Section(name="B", lines=(LyricsOnly("two"),)),
    ))
    assert render_song(song) == "[A]\none\n\n[B]\ntwo"


def test_header_without_preceding_blank_line_gains_one():
    text = "[Verse]\nhello\n[Chorus]\nworld"
    assert render_song(parse_text(text)) == "[Verse]\nhello\n\n[Chorus]\nworld"


def test_indented_bracket_line_round_trips_verbatim():
    text = "[Verse]\nhello\n  [Chorus]\nworld"
    assert render_song(parse_text(text)) == text


def test_empty_section_followed_directly():
    song = Song(sections=(Section(name="A"), Section(name="B", lines=(LyricsOnly("x"),))))
    assert render_song(song) == "[A]\n[B]\nx"


def test_renderer_class_matches_function():
    song = parse_text("[Intro]\nG  D")
    assert SongRenderer().render(song) == render_song(song)


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


SHEETS = [
    "[Intro]\nG  D  Em  C\n\n[Verse 1]\n      D              G\nI pulled into Nazareth, was feelin' about\n"
    "       A          D\nHalf past dead\n\n[Chorus]\nC         G\nTake a load off Fanny\nD\n",
    "Untitled passage\n   Am    F\n   words over here\n\n\n[Outro]\nC/G  G7  C\n",
    "[Verse]\nA song about love\n   Bb        F#m7/C#\nDécembre à Paris\n",
    "",
    "just one lyric line",
    "  G\n\n\n\n  D",
]


def _normalise(text: str) -> list[str]:
    return [line.rstrip() for line in text.split("\n")]


@pytest.mark.parametrize("text", SHEETS)
def test_round_trip(text):
    assert _normalise(render_song(parse_text(text))) == _normalise(text)


def test_round_trip_chord_past_lyric_end():
    text = "G            D\nShort\n"
    assert _normalise(render_song(parse_text(text))) == _normalise(text)


def test_concatenated_chord_line_rendered_with_separator():
    assert render_song(parse_text("GAm")) == "G Am"
