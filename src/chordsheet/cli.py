import sys
from pathlib import Path
from typing import NoReturn

import click
from loguru import logger

from .chordpro import ChordProFormatter
from .config import Settings, get_settings
from .exceptions import ChordsheetError, FetchError
from .interchange import dumps_song, loads_song
from .parser import parse_text
from .recognizer import recognize_chords
from .renderer import render_song
from .sources import load_text
from .summary import best_easy_transposition, summarize
from .transpose import transpose_song, transpose_text


def _setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format="{level: <8} | {name}:{line} | {message}")


def _fail(exc: ChordsheetError) -> NoReturn:
    if isinstance(exc, FetchError):
        msg = f"Error: Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
    else:
        msg = f"Error: {exc}"
    click.echo(msg, err=True)
    sys.exit(1)


def _load(settings: Settings, source: str) -> str:
    try:
        return load_text(source, timeout=settings.fetch_timeout)
    except ChordsheetError as exc:
        _fail(exc)


def _emit(text: str, output_path: str | None) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if output_path is None:
        click.echo(text, nl=False)
        return
    dest = Path(output_path)
    dest.write_text(text, encoding="utf-8")
    click.echo(f"Written to {dest}")


_output_option = click.option(
    "-o", "--output", "output_path", default=None, metavar="PATH",
    help="Write to PATH instead of stdout.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Parse, render and transpose chord sheets.

    \b
    SOURCE arguments take a local file path or an http(s) URL.
    Section headers are lines like [Verse 1]; chord lines sit above lyrics.
    """
    settings = get_settings()
    _setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@main.command()
@click.argument("line")
@click.pass_obj
def chords(settings: Settings, line: str) -> None:
    """List the chords recognised in LINE with their columns."""
    for chord, offset in recognize_chords(line, settings.short_words):
        click.echo(f"{offset}\t{chord}")


@main.command()
@click.argument("source")
@_output_option
@click.pass_obj
def parse(settings: Settings, source: str, output_path: str | None) -> None:
    """Parse the chord sheet at SOURCE into structured JSON."""
    song = parse_text(_load(settings, source))
    _emit(dumps_song(song), output_path)


@main.command()
@click.argument("source")
@_output_option
@click.pass_obj
def render(settings: Settings, source: str, output_path: str | None) -> None:
    """Render structured JSON at SOURCE back to a chord sheet."""
    try:
        song = loads_song(_load(settings, source))
    except ChordsheetError as exc:
        _fail(exc)
    _emit(render_song(song), output_path)


@main.command()
@click.argument("source")
@click.option("-s", "--semitones", type=int, default=None,
              help="Semitones to move every chord by (negative for down).")
@click.option("--easy", is_flag=True, default=False,
              help="Pick the shift that leaves the most beginner-friendly chords.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Treat SOURCE as structured JSON and write JSON.")
@_output_option
@click.pass_obj
def transpose(settings: Settings, source: str, semitones: int | None, easy: bool,
              as_json: bool, output_path: str | None) -> None:
    """Transpose every chord in SOURCE by SEMITONES, or into an easy key with --easy."""
    if (semitones is None) == (not easy):
        raise click.UsageError("Pass exactly one of --semitones or --easy.")
    text = _load(settings, source)
    try:
        song = loads_song(text) if as_json else parse_text(text)
    except ChordsheetError as exc:
        _fail(exc)
    if easy:
        semitones = best_easy_transposition(summarize(song).unique).semitones
        logger.info("Transposing by {} semitone(s) for easy chords", semitones)
    if as_json:
        _emit(dumps_song(transpose_song(song, semitones)), output_path)
    else:
        _emit(transpose_text(text, semitones, settings.short_words), output_path)


@main.command()
@click.argument("source")
@click.option("--title", default=None, help="Song title for the {title} directive.")
@click.option("--artist", default=None, help="Artist for the {artist} directive.")
@_output_option
@click.pass_obj
def chordpro(settings: Settings, source: str, title: str | None, artist: str | None,
             output_path: str | None) -> None:
    """Convert the chord sheet at SOURCE to ChordPro."""
    song = parse_text(_load(settings, source))
    _emit(ChordProFormatter().render(song, title=title, artist=artist), output_path)
