"""Chord statistics for a structured song (progression, distinct chords, key guess, difficulty)."""

from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger

from .models import Chord, Quality, Song
from .recognizer import parse_chord
from .transpose import transpose_chord


@dataclass(frozen=True)
class ChordSummary:
    progression: tuple[str, ...] = field(default_factory=tuple)  # every chord, reading order
    unique: tuple[str, ...] = field(default_factory=tuple)  # distinct chords, first-seen order

    @property
    def first(self) -> str | None:
        return self.progression[0] if self.progression else None

    @property
    def last(self) -> str | None:
        return self.progression[-1] if self.progression else None


def summarize(song: Song) -> ChordSummary:
    progression = tuple(token.text for token in song.tokens())
    return ChordSummary(progression=progression, unique=tuple(dict.fromkeys(progression)))


def guess_key(song: Song) -> str | None:
    """Return the song's opening chord as a key guess, or None if it has no chords.

    A chord sheet usually opens on its tonic, so ``Am`` → ``Am``; there is no
    harmonic analysis beyond that.
    """
    return summarize(song).first


# ---------------------------------------------------------------------------
# Beginner-friendly chords
# ---------------------------------------------------------------------------

# (quality, extension) → roots that make an open, barre-free shape.
_EASY_SHAPES = {
    (None, None): "CDEGA",
    (None, "7"): "CDEGA",
    (Quality.MAJ, "7"): "CDEGA",
    (Quality.SUS, "4"): "CDEGA",
    (Quality.ADD, "9"): "CDEGA",
    (Quality.MINOR, None): "ADE",
    (Quality.MINOR, "7"): "ADE",
}


@dataclass(frozen=True)
class EasyTransposition:
    semitones: int = 0
    easy_count: int = 0


def is_easy_chord(chord: str | Chord) -> bool:
    """True for open shapes a beginner can play: ``C``, ``Am7``, ``Gsus4``, ``Cadd9``.

    Sharps, flats, slash basses and the ``F``/``B`` barre roots are never easy.
    """
    if isinstance(chord, str):
        chord = parse_chord(chord)
        if chord is None:
            return False
    if chord.accidental is not None or chord.alternate is not None:
        return False
    return chord.root in _EASY_SHAPES.get((chord.quality, chord.extension), "")


def has_only_easy_chords(chords: Iterable[str]) -> bool:
    """True when every chord is easy.  A song with no chords is not."""
    chords = list(chords)
    return bool(chords) and all(is_easy_chord(c) for c in chords)


def best_easy_transposition(chords: Iterable[str]) -> EasyTransposition:
    """Find the shift in -11..+11 that makes the most of *chords* easy.

    *chords* is normally :attr:`ChordSummary.unique`.  Ties go to the smaller
    absolute shift, then to the first one tried (downwards before upwards).
    Unparseable chord names never count as easy.
    """
    parsed = [parse_chord(c) for c in chords]
    if not parsed:
        return EasyTransposition()

    best = EasyTransposition(0, _easy_count(parsed, 0))
    if best.easy_count == len(parsed):
        return best
    for semitones in range(-11, 12):
        count = _easy_count(parsed, semitones)
        if count > best.easy_count or (
            count == best.easy_count and abs(semitones) < abs(best.semitones)
        ):
            best = EasyTransposition(semitones, count)
    logger.debug("Best easy transposition for {} chord(s): {}", len(parsed), best)
    return best


def _easy_count(chords: list[Chord | None], semitones: int) -> int:
    return sum(
        1 for c in chords if c is not None and is_easy_chord(transpose_chord(c, semitones))
    )
