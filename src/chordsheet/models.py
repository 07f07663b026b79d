from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


class Accidental(Enum):
    SHARP = "#"
    FLAT = "b"


class Quality(Enum):
    """Quality marker at the head of a chord suffix.

    Declaration order is the matching priority: ``maj`` is tried before the
    bare minor marker so that ``m`` never matches inside ``maj``.
    """

    MAJ = "maj"
    MIN = "min"
    DIM = "dim"
    AUG = "aug"
    SUS = "sus"
    ADD = "add"
    MINOR = "m"


class LineKind(Enum):
    CHORDS_ONLY = "chords_only"
    LYRICS_ONLY = "lyrics_only"
    CHORD_OVER_LYRICS = "chord_over_lyrics"


@dataclass(frozen=True)
class Chord:
    """A Latin letter-name chord symbol.

    Example: ``C#m7/G#`` is ``Chord("C", SHARP, MINOR, "7", Chord("G", SHARP))``.
    The ``alternate`` chord (slash/bass note) only ever carries a root and an
    accidental.
    """

    root: str  # "A".."G"
    accidental: Accidental | None = None
    quality: Quality | None = None
    extension: str | None = None  # digits, kept verbatim ("7", "13", "09")
    alternate: "Chord | None" = None

    def __str__(self) -> str:
        parts = [self.root]
        if self.accidental:
            parts.append(self.accidental.value)
        if self.quality:
            parts.append(self.quality.value)
        if self.extension:
            parts.append(self.extension)
        if self.alternate:
            parts.append(f"/{self.alternate}")
        return "".join(parts)


@dataclass(frozen=True)
class ChordToken:
    """A chord occurrence at a column of a source line."""

    chord: Chord
    start: int

    @property
    def text(self) -> str:
        return str(self.chord)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class ChordsOnly:
    """A line holding nothing but chords, e.g. an intro riff ``G  D  Em``."""

    chords: tuple[ChordToken, ...] = ()
    kind = LineKind.CHORDS_ONLY


@dataclass(frozen=True)
class LyricsOnly:
    text: str = ""
    kind = LineKind.LYRICS_ONLY


@dataclass(frozen=True)
class ChordOverLyrics:
    """A lyric line with chords positioned over its columns.

    Token offsets index into ``lyrics``; they never exceed its length.
    """

    lyrics: str
    chords: tuple[ChordToken, ...] = ()
    kind = LineKind.CHORD_OVER_LYRICS


Line = Union[ChordsOnly, LyricsOnly, ChordOverLyrics]


@dataclass(frozen=True)
class Section:
    """A named part of a song (Intro, Verse 1, Chorus, ...)."""

    name: str | None  # None for the passage before the first header
    lines: tuple[Line, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Song:
    """Structured song: sections in reading order."""

    sections: tuple[Section, ...] = field(default_factory=tuple)

    def lines(self) -> Iterator[Line]:
        for section in self.sections:
            yield from section.lines

    def tokens(self) -> Iterator[ChordToken]:
        """Yield every chord token in reading order."""
        for line in self.lines():
            if isinstance(line, (ChordsOnly, ChordOverLyrics)):
                yield from line.chords
