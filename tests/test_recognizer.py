import pytest

from chordsheet.models import Accidental, Chord, Quality
from chordsheet.recognizer import (
    DEFAULT_SHORT_WORDS,
    is_chord_line,
    parse_chord,
    recognize,
    recognize_chords,
    scan_words,
    tokenize_chord_line,
)

# ---------------------------------------------------------------------------
# parse_chord
# ---------------------------------------------------------------------------


def test_parse_plain_root():
    assert parse_chord("G") == Chord("G")


def test_parse_full_chord():
    assert parse_chord("C#m7/G#") == Chord(
        root="C",
        accidental=Accidental.SHARP,
        quality=Quality.MINOR,
        extension="7",
        alternate=Chord("G", Accidental.SHARP),
    )


@pytest.mark.parametrize(
    "text, quality",
    [
        ("Cmaj7", Quality.MAJ),
        ("Cmin", Quality.MIN),
        ("Bdim", Quality.DIM),
        ("Eaug", Quality.AUG),
        ("Dsus4", Quality.SUS),
        ("Cadd9", Quality.ADD),
        ("Am", Quality.MINOR),
    ],
)
def test_parse_quality_markers(text, quality):
    assert parse_chord(text).quality is quality


def test_parse_maj_is_not_minor():
    chord = parse_chord("Amaj7")
    assert chord.quality is Quality.MAJ
    assert chord.extension == "7"


def test_parse_flat_root():
    assert parse_chord("Bb").accidental is Accidental.FLAT


def test_parse_rejects_non_chords():
    assert parse_chord("Hm") is None
    assert parse_chord("love") is None
    assert parse_chord("Gx") is None
    assert parse_chord("") is None


def test_parse_multi_digit_extension_kept_verbatim():
    assert parse_chord("C13").extension == "13"


# ---------------------------------------------------------------------------
# Chord-line mode
# ---------------------------------------------------------------------------


def test_tokenize_spaced_chord_line_offsets():
    tokens = tokenize_chord_line("  D    G  Am7")
    assert [(t.text, t.start) for t in tokens] == [("D", 2), ("G", 7), ("Am7", 10)]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("GAm", ["G", "Am"]),
        ("DEm", ["D", "Em"]),
        ("DG", ["D", "G"]),
        ("GGG", ["G", "G", "G"]),
        ("CmajDm", ["Cmaj", "Dm"]),
        ("G#C#D#", ["G#", "C#", "D#"]),
    ],
)
def test_tokenize_concatenated_chords(line, expected):
    assert [t.text for t in tokenize_chord_line(line)] == expected


def test_tokenize_concatenated_offsets():
    tokens = tokenize_chord_line("DEm")
    assert [t.start for t in tokens] == [0, 1]


def test_tokenize_slash_chords():
    assert [t.text for t in tokenize_chord_line("D/F# G/B")] == ["D/F#", "G/B"]


def test_tokenize_rejects_residue():
    assert tokenize_chord_line("A song about love") is None
    assert tokenize_chord_line("G D x") is None
    assert tokenize_chord_line("G/") is None
    assert tokenize_chord_line("|G D|") is None


def test_tokenize_blank_line_is_not_a_chord_line():
    assert tokenize_chord_line("") is None
    assert tokenize_chord_line("    ") is None


def test_is_chord_line():
    assert is_chord_line("G  D  Em")
    assert is_chord_line("GAm")
    assert not is_chord_line("Dark star crashes")


# ---------------------------------------------------------------------------
# Word-context mode
# ---------------------------------------------------------------------------


def test_scan_ignores_chord_shapes_inside_words():
    assert scan_words("Dancing Ebony Got Beautiful Amber") == []


def test_scan_no_shorter_prefix_fallback():
    # "Am7b" touches a letter; "Am" is not taken instead.
    assert scan_words("Am7b here") == []


def test_scan_finds_standalone_chords_in_text():
    tokens = scan_words("Intro: G D Em (x2)")
    assert [(t.text, t.start) for t in tokens] == [("G", 7), ("D", 9), ("Em", 11)]


def test_scan_keeps_short_word_chords_on_labelled_lines():
    tokens = scan_words("Intro: Am G C")
    assert [(t.text, t.start) for t in tokens] == [("Am", 7), ("G", 10), ("C", 12)]
    tokens = scan_words("Verse: A D E")
    assert [(t.text, t.start) for t in tokens] == [("A", 7), ("D", 9), ("E", 11)]


def test_scan_short_word_next_to_punctuated_chord_kept():
    assert [t.text for t in scan_words("Play (Am, G) twice")] == ["Am", "G"]


def test_scan_suppresses_short_words_in_lyrics():
    assert scan_words("A song about love") == []
    assert scan_words("Here Am I") == []
    assert [t.text for t in scan_words("Sing A song in G")] == ["G"]


def test_scan_keeps_short_word_without_other_letters():
    assert [t.text for t in scan_words("A -- 2")] == ["A"]


def test_scan_short_words_are_configurable():
    tokens = scan_words("A song", short_words=[])
    assert [t.text for t in tokens] == ["A"]


def test_scan_accented_letters_count_as_word_letters():
    assert scan_words("Décembre à Édimbourg") == []


def test_scan_brackets_are_boundaries():
    assert [(t.text, t.start) for t in scan_words("sing [G] along")] == [("G", 6)]


def test_default_short_words_are_lowercase():
    assert all(w == w.lower() for w in DEFAULT_SHORT_WORDS)


# ---------------------------------------------------------------------------
# Mode selection
# ---------------------------------------------------------------------------


def test_recognize_uses_chord_line_mode_for_full_chord_lines():
    assert [t.text for t in recognize("GAm")] == ["G", "Am"]


def test_recognize_uses_word_mode_otherwise():
    assert [t.text for t in recognize("Play G then Am7 softly")] == ["G", "Am7"]


def test_recognize_chords_labelled_line():
    assert recognize_chords("Intro: Am G C") == [("Am", 7), ("G", 10), ("C", 12)]


def test_recognize_chords_pairs():
    assert recognize_chords("GAm") == [("G", 0), ("Am", 1)]
    assert recognize_chords("DEm") == [("D", 0), ("Em", 1)]
    assert recognize_chords("DG") == [("D", 0), ("G", 1)]


def test_recognize_chords_word_suppression():
    pairs = recognize_chords("A song about love")
    about = range(7, 12)
    love = range(13, 17)
    for chord, offset in pairs:
        span = range(offset, offset + len(chord))
        assert not set(span) & set(about)
        assert not set(span) & set(love)
