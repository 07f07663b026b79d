"""Chromatic transposition of chords, raw chord-sheet text and structured songs.

Pitch arithmetic is done on the 12-tone chromatic table spelled with sharps,
so transposed chords always come out sharp-spelled: ``G`` down one semitone is
``F#``, never ``Gb``.  Quality and extension are copied verbatim.

Usage::

    from chordsheet.transpose import transpose_text
    print(transpose_text(Path("song.txt").read_text(), 2))
"""

import dataclasses
from typing import Iterable

from loguru import logger

from .models import Accidental, Chord, ChordOverLyrics, ChordsOnly, ChordToken, Line, Song
from .parser import is_header
from .recognizer import DEFAULT_SHORT_WORDS, scan_words, tokenize_chord_line

SHARP_NOTES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

_NATURALS = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_SHIFT = {None: 0, Accidental.SHARP: 1, Accidental.FLAT: -1}


# ---------------------------------------------------------------------------
# Single chords
# ---------------------------------------------------------------------------


def pitch_class(root: str, accidental: Accidental | None = None) -> int | None:
    """Return the 0–11 chromatic index of a spelled note (C = 0), or None."""
    if root not in _NATURALS:
        return None
    return (_NATURALS[root] + _SHIFT[accidental]) % 12


def transpose_chord(chord: Chord, semitones: int) -> Chord:
    """Return *chord* moved by *semitones* (any integer, negative included).

    A move by a multiple of 12 returns *chord* itself, keeping flat spellings.
    A root outside the table is returned unchanged.
    """
    if semitones % 12 == 0:
        return chord
    index = pitch_class(chord.root, chord.accidental)
    if index is None:
        return chord

    note = SHARP_NOTES[((index + semitones) % 12 + 12) % 12]
    alternate = transpose_chord(chord.alternate, semitones) if chord.alternate else None
    return dataclasses.replace(
        chord,
        root=note[0],
        accidental=Accidental.SHARP if len(note) > 1 else None,
        alternate=alternate,
    )


# ---------------------------------------------------------------------------
# Raw text
# ---------------------------------------------------------------------------


def transpose_text(
    text: str, semitones: int, short_words: Iterable[str] = DEFAULT_SHORT_WORDS
) -> str:
    """Transpose every chord in raw chord-sheet *text*.

    Only the chord tokens are rewritten; every other character stays as it
    was.  On chord lines a chord that changes width is balanced in the run
    of spaces after it, so later chords keep their columns (``A   D`` up one
    is ``A#  D#``).  Tabs and other separators are never touched.  Section
    headers are left alone.
    """
    if semitones % 12 == 0:
        return text

    logger.debug("Transposing text by {} semitone(s)", semitones)
    out = []
    for line in text.split("\n"):
        if is_header(line):
            out.append(line)
            continue
        tokens = tokenize_chord_line(line)
        if tokens is not None:
            out.append(_replace_keeping_columns(line, tokens, semitones))
            continue
        out.append(_replace_in_place(line, scan_words(line, short_words), semitones))
    return "\n".join(out)


def _moved(tokens: Iterable[ChordToken], semitones: int) -> tuple[ChordToken, ...]:
    return tuple(
        dataclasses.replace(t, chord=transpose_chord(t.chord, semitones)) for t in tokens
    )


def _replace_in_place(line: str, tokens: list[ChordToken], semitones: int) -> str:
    # Right to left so earlier offsets stay valid.
    for token in reversed(tokens):
        new = str(transpose_chord(token.chord, semitones))
        line = line[: token.start] + new + line[token.end:]
    return line


def _replace_keeping_columns(line: str, tokens: list[ChordToken], semitones: int) -> str:
    parts: list[str] = []
    pos = 0
    drift = 0  # output columns ahead (+) or behind (-) the input
    for token in tokens:
        gap = line[pos:token.start]
        if gap and drift and gap.strip(" ") == "":
            width = max(len(gap) - drift, 1)
            drift -= len(gap) - width
            gap = " " * width
        new = str(transpose_chord(token.chord, semitones))
        parts.append(gap + new)
        drift += len(new) - token.length
        pos = token.end
    parts.append(line[pos:])
    return "".join(parts)


# ---------------------------------------------------------------------------
# Structured songs
# ---------------------------------------------------------------------------


def transpose_song(song: Song, semitones: int) -> Song:
    """Return a copy of *song* with every chord token transposed.

    Token positions, lyric text and section structure are unchanged.
    """
    if semitones % 12 == 0:
        return song
    logger.debug("Transposing song ({} sections) by {} semitone(s)", len(song.sections), semitones)
    return dataclasses.replace(
        song,
        sections=tuple(
            dataclasses.replace(
                section, lines=tuple(_transpose_line(line, semitones) for line in section.lines)
            )
            for section in song.sections
        ),
    )


def _transpose_line(line: Line, semitones: int) -> Line:
    if isinstance(line, (ChordsOnly, ChordOverLyrics)):
        return dataclasses.replace(line, chords=_moved(line.chords, semitones))
    return line
