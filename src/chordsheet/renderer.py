"""Structured :class:`~chordsheet.models.Song` → raw chord-sheet text.

Chord lines are rebuilt from token columns, so a song parsed from text and
rendered again comes back with its chords in the same places:

+-----------------------+---------------------------------------------+
| Line                  | Output                                      |
+=======================+=============================================+
| ``LyricsOnly``        | the text, verbatim                          |
+-----------------------+---------------------------------------------+
| ``ChordsOnly``        | a chord line laid out from token columns    |
+-----------------------+---------------------------------------------+
| ``ChordOverLyrics``   | a chord line, then the lyric line           |
+-----------------------+---------------------------------------------+

Usage::

    from chordsheet.renderer import SongRenderer
    text = SongRenderer().render(song)
"""

from typing import Iterable

from .models import ChordOverLyrics, ChordsOnly, ChordToken, Line, LyricsOnly, Section, Song


def layout_chords(tokens: Iterable[ChordToken]) -> str:
    """Return a chord line with each chord at its token's column.

    Adjacent chords always get at least one space between them so they are
    not fused on re-reading; a chord that would overlap its predecessor is
    pushed right rather than cut.
    """
    line = ""
    for token in tokens:
        column = token.start
        if line:
            column = max(column, len(line) + 1)
        line = line.ljust(column) + token.text
    return line


class SongRenderer:
    """Render a :class:`~chordsheet.models.Song` to plain chord-sheet text."""

    def render(self, song: Song) -> str:
        """Return the text for *song*, lines joined with ``\\n``.

        Sections are separated by one blank line unless the previous section
        is empty or already ends with one.
        """
        parts: list[str] = []
        previous: Section | None = None

        for section in song.sections:
            if previous is not None and previous.lines and not _ends_blank(previous):
                parts.append("")
            if section.name is not None:
                parts.append(f"[{section.name}]")
            for line in section.lines:
                parts.extend(_render_line(line))
            previous = section

        return "\n".join(parts)


def render_song(song: Song) -> str:
    return SongRenderer().render(song)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _render_line(line: Line) -> list[str]:
    if isinstance(line, ChordsOnly):
        return [layout_chords(line.chords)]
    if isinstance(line, ChordOverLyrics):
        return [layout_chords(line.chords), line.lyrics]
    return [line.text]


def _ends_blank(section: Section) -> bool:
    last = section.lines[-1]
    return isinstance(last, LyricsOnly) and not last.text.strip()
