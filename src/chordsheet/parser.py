"""Raw chord-sheet text → structured :class:`~chordsheet.models.Song`.

Input convention::

    [Verse 1]
          D              G
    I pulled into Nazareth, was feelin' about

    [Chorus]
    GAm

A ``[Name]`` line in the first column opens a section.  A chord line directly above a lyric line
becomes one :class:`ChordOverLyrics` line whose chord columns index into the
lyric.  Blank lines are kept as empty lyric lines so section spacing
survives a render.
"""

import re

from loguru import logger

from .models import ChordOverLyrics, ChordsOnly, Line, LyricsOnly, Section, Song
from .recognizer import tokenize_chord_line

HEADER_RE = re.compile(r"^\[([^\]]*\S[^\]]*)\]$")


def is_header(line: str) -> bool:
    """True for a ``[Name]`` line starting in the first column.

    Trailing whitespace is ignored.  An indented bracket line is text, so it
    renders back with its indentation.
    """
    return HEADER_RE.match(line.rstrip()) is not None


def header_name(line: str) -> str:
    """Return the section name of a header line: ``[Verse 1]`` → ``Verse 1``."""
    return HEADER_RE.match(line.rstrip()).group(1).strip()


def parse_text(text: str) -> Song:
    """Parse raw chord-sheet *text* into a :class:`Song`.

    Algorithm
    ---------
    1. Normalise line endings and split on ``\\n`` (a final newline yields a
       trailing blank line).
    2. A header line closes the current section and opens a named one.
    3. A chord line followed by a non-blank line that is neither a header nor
       another chord line is merged with it into :class:`ChordOverLyrics`.
    4. A chord line with no such follower stays :class:`ChordsOnly`.
    5. Every other line, blank or partially chord-like, is :class:`LyricsOnly`.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    sections: list[Section] = []
    name: str | None = None
    current: list[Line] = []
    opened = False  # a header has been seen for the current section

    i = 0
    while i < len(lines):
        raw = lines[i]

        if is_header(raw):
            if opened or current:
                sections.append(Section(name=name, lines=tuple(current)))
            name, current, opened = header_name(raw), [], True
            i += 1
            continue

        tokens = tokenize_chord_line(raw)
        if tokens is None:
            current.append(LyricsOnly(text=raw))
            i += 1
            continue

        follower = lines[i + 1] if i + 1 < len(lines) else None
        if follower is not None and _is_lyric(follower):
            current.append(chord_over_lyrics(tokens, follower))
            i += 2
        else:
            current.append(ChordsOnly(chords=tuple(tokens)))
            i += 1

    if opened or current:
        sections.append(Section(name=name, lines=tuple(current)))

    logger.debug("Parsed {} line(s) into {} section(s)", len(lines), len(sections))
    return Song(sections=tuple(sections))


def _is_lyric(line: str) -> bool:
    return bool(line.strip()) and not is_header(line) and tokenize_chord_line(line) is None


def chord_over_lyrics(tokens, lyrics: str) -> ChordOverLyrics:
    """Attach chord *tokens* to *lyrics*, padding the lyric so no column exceeds it."""
    last = max((t.start for t in tokens), default=0)
    if last > len(lyrics):
        lyrics = lyrics.ljust(last)
    return ChordOverLyrics(lyrics=lyrics, chords=tuple(tokens))
