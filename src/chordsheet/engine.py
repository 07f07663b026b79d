"""The chord-sheet engine as used by collaborators (persistence, display, import).

Every function here is pure: no I/O, no shared state, safe to call
concurrently on independent songs.
"""

from .parser import parse_text
from .recognizer import recognize_chords
from .renderer import render_song
from .transpose import transpose_chord, transpose_song, transpose_text

__all__ = [
    "parse_text",
    "recognize_chords",
    "render_song",
    "transpose_chord",
    "transpose_song",
    "transpose_text",
]
