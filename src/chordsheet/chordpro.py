"""ChordPro export.

Renders a :class:`~chordsheet.models.Song` to ChordPro (``.cho``) text with
chords inlined at their lyric columns: ``I [D]pulled into [G]Nazareth``.

Section name → ChordPro directive mapping
-----------------------------------------

+--------------------------------------+------------------------------------+
| Name (case-insensitive first word)   | Directive pair                     |
+======================================+====================================+
| ``Verse``, ``Verse N``               | ``{start_of_verse: Verse N}`` /    |
|                                      | ``{end_of_verse}``                 |
+--------------------------------------+------------------------------------+
| ``Chorus``, ``Refrain``              | ``{start_of_chorus}`` /            |
|                                      | ``{end_of_chorus}``                |
+--------------------------------------+------------------------------------+
| ``Bridge``                           | ``{start_of_bridge}`` /            |
|                                      | ``{end_of_bridge}``                |
+--------------------------------------+------------------------------------+
| anything else (``Intro``, ``Solo``)  | ``{comment: <name>}``              |
+--------------------------------------+------------------------------------+
| ``None`` / unnamed                   | no wrapper directive               |
+--------------------------------------+------------------------------------+
"""

from .models import ChordsOnly, Line, LyricsOnly, Section, Song
from .summary import guess_key

_STRUCTURED = {
    "verse": ("start_of_verse", "end_of_verse"),
    "chorus": ("start_of_chorus", "end_of_chorus"),
    "refrain": ("start_of_chorus", "end_of_chorus"),
    "bridge": ("start_of_bridge", "end_of_bridge"),
}


class ChordProFormatter:
    """Render a :class:`~chordsheet.models.Song` to ChordPro text."""

    def render(self, song: Song, title: str | None = None, artist: str | None = None) -> str:
        """Return ChordPro text for *song*, ending with a single newline.

        The ``{key}`` directive is filled from the song's opening chord.
        """
        parts: list[str] = []

        if title:
            parts.append(f"{{title: {title}}}")
        if artist:
            parts.append(f"{{artist: {artist}}}")
        key = guess_key(song)
        if key:
            parts.append(f"{{key: {key}}}")

        for section in song.sections:
            lines = _render_section(section)
            if not lines:
                continue
            if parts:
                parts.append("")
            parts.extend(lines)

        return "\n".join(parts) + "\n"


def inline_chords(line: Line) -> str:
    """Return *line* with its chords inserted as ``[X]`` at their columns.

    A chord past the end of the lyric is appended rather than dropped.
    """
    if isinstance(line, LyricsOnly):
        return line.text
    if isinstance(line, ChordsOnly):
        return " ".join(f"[{t.text}]" for t in line.chords)

    result = line.lyrics
    inserted = 0  # characters inserted so far (shifts later columns)
    for token in line.chords:
        bracket = f"[{token.text}]"
        pos = min(token.start + inserted, len(result))
        result = result[:pos] + bracket + result[pos:]
        inserted += len(bracket)
    return result.rstrip()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _render_section(section: Section) -> list[str]:
    """Return the lines for one section, trailing blank lines dropped."""
    lines = [inline_chords(line) for line in section.lines]
    while lines and not lines[-1].strip():
        lines.pop()

    name = section.name
    if not name:
        return lines

    first_word = name.lower().split()[0]
    if first_word in _STRUCTURED:
        start_dir, end_dir = _STRUCTURED[first_word]
        start_line = f"{{{start_dir}: {name}}}" if first_word == "verse" else f"{{{start_dir}}}"
        return [start_line, *lines, f"{{{end_dir}}}"]

    return [f"{{comment: {name}}}", *lines]
