"""Structured song interchange format shared with persistence and display.

Shape (JSON)::

    [
      {
        "name": "Verse 1",            # or null
        "lines": [
          {"type": "chord_over_lyrics",
           "lyrics": "I pulled into Nazareth",
           "chordLine": "  D              G",
           "chords": [{"chord": "D", "position": 2},
                      {"chord": "G", "position": 17}]},
          {"type": "lyrics_only", "lyrics": ""},
          {"type": "chords_only", "chordLine": "G  D", "chords": [...]}
        ]
      }
    ]

``chordLine`` is informational on output.  On input it is only read when a
line has no ``chords`` list, in which case the chord line is tokenised.
"""

import json
from typing import Any

from .exceptions import InterchangeError
from .models import ChordOverLyrics, ChordsOnly, ChordToken, Line, LineKind, LyricsOnly, Section, Song
from .parser import chord_over_lyrics
from .recognizer import parse_chord, tokenize_chord_line
from .renderer import layout_chords


# ---------------------------------------------------------------------------
# Song → payload
# ---------------------------------------------------------------------------


def song_to_dict(song: Song) -> list[dict[str, Any]]:
    return [
        {"name": section.name, "lines": [_line_to_dict(line) for line in section.lines]}
        for section in song.sections
    ]


def _line_to_dict(line: Line) -> dict[str, Any]:
    data: dict[str, Any] = {"type": line.kind.value}
    if isinstance(line, LyricsOnly):
        data["lyrics"] = line.text
        return data
    if isinstance(line, ChordOverLyrics):
        data["lyrics"] = line.lyrics
    data["chordLine"] = layout_chords(line.chords)
    data["chords"] = [{"chord": t.text, "position": t.start} for t in line.chords]
    return data


def dumps_song(song: Song, indent: int | None = 2) -> str:
    return json.dumps(song_to_dict(song), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Payload → Song
# ---------------------------------------------------------------------------


def song_from_dict(data: Any) -> Song:
    """Build a :class:`Song` from an interchange payload.

    Raises InterchangeError if the payload does not have the documented shape
    or names a chord the grammar does not accept.
    """
    if not isinstance(data, list):
        raise InterchangeError("top level must be a list of sections")
    return Song(sections=tuple(_section_from_dict(s, i) for i, s in enumerate(data)))


def loads_song(text: str) -> Song:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InterchangeError(f"not valid JSON ({exc.msg})") from exc
    return song_from_dict(data)


def _section_from_dict(data: Any, index: int) -> Section:
    where = f"section {index}"
    if not isinstance(data, dict):
        raise InterchangeError(f"{where} must be an object")
    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise InterchangeError(f"{where}: name must be a string or null")
    lines = data.get("lines", [])
    if not isinstance(lines, list):
        raise InterchangeError(f"{where}: lines must be a list")
    return Section(
        name=name,
        lines=tuple(_line_from_dict(line, f"{where}, line {j}") for j, line in enumerate(lines)),
    )


def _line_from_dict(data: Any, where: str) -> Line:
    if not isinstance(data, dict):
        raise InterchangeError(f"{where} must be an object")
    try:
        kind = LineKind(data.get("type"))
    except ValueError:
        raise InterchangeError(f"{where}: unknown line type {data.get('type')!r}") from None

    if kind is LineKind.LYRICS_ONLY:
        return LyricsOnly(text=_string(data, "lyrics", where))

    tokens = _tokens_from_dict(data, where)
    if kind is LineKind.CHORDS_ONLY:
        return ChordsOnly(chords=tokens)
    return chord_over_lyrics(tokens, _string(data, "lyrics", where))


def _string(data: dict, key: str, where: str) -> str:
    value = data.get(key) or ""
    if not isinstance(value, str):
        raise InterchangeError(f"{where}: {key} must be a string")
    return value


def _tokens_from_dict(data: dict, where: str) -> tuple[ChordToken, ...]:
    chords = data.get("chords")
    if chords is None:
        chord_line = _string(data, "chordLine", where)
        if not chord_line.strip():
            return ()
        tokens = tokenize_chord_line(chord_line)
        if tokens is None:
            raise InterchangeError(f"{where}: chordLine {chord_line!r} is not a chord line")
        return tuple(tokens)

    if not isinstance(chords, list):
        raise InterchangeError(f"{where}: chords must be a list")
    tokens = []
    for entry in chords:
        if not isinstance(entry, dict):
            raise InterchangeError(f"{where}: chord entries must be objects")
        text = entry.get("chord")
        chord = parse_chord(text) if isinstance(text, str) else None
        if chord is None:
            raise InterchangeError(f"{where}: unrecognised chord {entry.get('chord')!r}")
        position = entry.get("position")
        if isinstance(position, bool) or not isinstance(position, int) or position < 0:
            raise InterchangeError(f"{where}: position must be a non-negative integer")
        tokens.append(ChordToken(chord=chord, start=position))
    return tuple(sorted(tokens, key=lambda t: t.start))
