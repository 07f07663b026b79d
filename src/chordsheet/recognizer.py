"""Chord token recognition for free-form lyric/tab lines.

Two scanning modes share one chord grammar:

  chord-line mode    : the whole line decomposes into chord tokens with no
                       residue.  Word boundaries are ignored and tokens are
                       split by maximal munch, so ``GAm`` reads as G, Am.
  word-context mode  : everything else.  A candidate touching a letter on
                       either side is part of a word and is rejected, and a
                       configurable list of short words (``A``, ``Am``) is
                       suppressed when its neighbours are lyric words.

:func:`recognize` picks the mode per line.
"""

import re
from typing import Iterable

from .models import Accidental, Chord, ChordToken, Quality

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

# Root, accidental, quality, extension, slash bass.
# Quality alternatives follow Quality's declaration order; a bare "m" is
# refused in front of "aj" so it never matches inside "maj".
CHORD_RE = re.compile(
    r"(?P<root>[A-G])"
    r"(?P<accidental>[#b])?"
    r"(?P<quality>maj|min|dim|aug|sus|add|m(?!aj))?"
    r"(?P<extension>\d+)?"
    r"(?:/(?P<alt_root>[A-G])(?P<alt_accidental>[#b])?)?"
)

# Common short words that are also valid chord spellings (English "A",
# "Am") plus the French function words the chord sheets were written in.
# Matched case-insensitively.  This is policy, not grammar: override it per
# call or with CHORDSHEET_SHORT_WORDS.
DEFAULT_SHORT_WORDS = frozenset({
    "a", "am",
    "de", "la", "le", "du", "des", "un", "une", "et", "ou", "on", "en",
    "me", "te", "se", "ce", "ma", "ta", "sa",
})


def _chord_from_match(m: re.Match) -> Chord:
    alternate = None
    if m.group("alt_root"):
        alternate = Chord(
            root=m.group("alt_root"),
            accidental=_accidental(m.group("alt_accidental")),
        )
    quality = m.group("quality")
    return Chord(
        root=m.group("root"),
        accidental=_accidental(m.group("accidental")),
        quality=Quality(quality) if quality else None,
        extension=m.group("extension"),
        alternate=alternate,
    )


def _accidental(symbol: str | None) -> Accidental | None:
    return Accidental(symbol) if symbol else None


def parse_chord(text: str) -> Chord | None:
    """Return the :class:`Chord` spelled by *text*, or None if it is not one."""
    m = CHORD_RE.fullmatch(text.strip())
    return _chord_from_match(m) if m else None


# ---------------------------------------------------------------------------
# Chord-line mode
# ---------------------------------------------------------------------------


def tokenize_chord_line(line: str) -> list[ChordToken] | None:
    """Split a chord-only line into tokens by maximal munch.

    Whitespace separates tokens but is not required between them: ``DEm``
    yields D at 0 and Em at 1.  Offsets are columns of the untrimmed *line*.

    Returns:
        The tokens, or ``None`` if any non-whitespace character is left over
        (or the line is blank), meaning the line is not a chord line.
    """
    tokens: list[ChordToken] = []
    pos = 0
    while pos < len(line):
        if line[pos].isspace():
            pos += 1
            continue
        m = CHORD_RE.match(line, pos)
        if not m:
            return None
        tokens.append(ChordToken(chord=_chord_from_match(m), start=pos))
        pos = m.end()
    return tokens or None


def is_chord_line(line: str) -> bool:
    return tokenize_chord_line(line) is not None


# ---------------------------------------------------------------------------
# Word-context mode
# ---------------------------------------------------------------------------


def scan_words(line: str, short_words: Iterable[str] = DEFAULT_SHORT_WORDS) -> list[ChordToken]:
    """Return chord tokens standing on their own inside free text.

    A candidate is the longest grammar match starting at an ``A``–``G``.  It
    is dropped when a letter touches it on either side; the scan never falls
    back to a shorter prefix, so ``Am7b`` yields nothing rather than ``Am``.
    A token equal to one of *short_words* is dropped when it sits among words:
    a neighbouring word has letters and neither neighbour is a chord.  So
    ``A song about love`` drops ``A`` while ``Intro: Am G C`` keeps ``Am``.
    """
    words = {w.lower() for w in short_words}
    tokens: list[ChordToken] = []
    pos = 0
    while pos < len(line):
        if pos > 0 and line[pos - 1].isalpha():
            pos += 1
            continue
        m = CHORD_RE.match(line, pos)
        if not m:
            pos += 1
            continue
        end = m.end()
        if end < len(line) and line[end].isalpha():
            pos += 1
            continue
        if m.group().lower() in words and _among_words(line, pos, end, words):
            pos = end
            continue
        tokens.append(ChordToken(chord=_chord_from_match(m), start=pos))
        pos = end
    return tokens


# Punctuation stripped from a word before asking whether it is a chord.
_WORD_PUNCTUATION = "()[]{}<>.,:;!?|-*'\""


def _neighbours(line: str, start: int, end: int) -> list[str]:
    """Return the whitespace-separated words either side of ``line[start:end]``."""
    before = line[:start].split()
    if before and not line[start - 1].isspace():
        before.pop()  # glued to the token, e.g. "(" in "(Am"
    after = line[end:].split()
    if after and not line[end].isspace():
        after.pop(0)
    return before[-1:] + after[:1]


def _is_chord_word(word: str, short_words: set[str]) -> bool:
    core = word.strip(_WORD_PUNCTUATION)
    return core.lower() not in short_words and parse_chord(core) is not None


def _among_words(line: str, start: int, end: int, short_words: set[str]) -> bool:
    neighbours = _neighbours(line, start, end)
    if any(_is_chord_word(w, short_words) for w in neighbours):
        return False
    return any(c.isalpha() for w in neighbours for c in w)


# ---------------------------------------------------------------------------
# Mode selection
# ---------------------------------------------------------------------------


def recognize(line: str, short_words: Iterable[str] = DEFAULT_SHORT_WORDS) -> list[ChordToken]:
    """Return the chord tokens of *line*, choosing the scanning mode for it."""
    tokens = tokenize_chord_line(line)
    if tokens is not None:
        return tokens
    return scan_words(line, short_words)


def recognize_chords(line: str, short_words: Iterable[str] = DEFAULT_SHORT_WORDS) -> list[tuple[str, int]]:
    """Return ``(chord, offset)`` pairs for *line*, left to right."""
    return [(t.text, t.start) for t in recognize(line, short_words)]
