import re
import sys
from pathlib import Path

import click

from . import config
from .exceptions import ConfigError, ReadError
from .log import get_logger, setup_logging
from .sources import STDIN, normalize_item, read_item

logger = get_logger(__name__)


def _slugify(text: str) -> str:
    """Convert a string to a lowercase hyphenated slug suitable for filenames."""
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)   # drop punctuation
    text = re.sub(r"[\s_]+", "-", text)     # spaces/underscores → hyphens
    text = re.sub(r"-{2,}", "-", text)      # collapse multiple hyphens
    return text.strip("-")


def _default_filename(title: str) -> str:
    return f"{_slugify(title) or 'untitled'}{config.OUTPUT_SUFFIX}"


@click.command()
@click.argument("input_path", metavar="INPUT")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: <title>.txt)")
@click.option("--stdout", is_flag=True, default=False,
              help="Print to stdout instead of writing a file.")
@click.option("--title", default=None,
              help="Song title used for the default output filename.")
@click.option("--html/--text", "html", default=None,
              help="Treat the input as HTML or plain text (default: auto-detect).")
@click.option("--newline", type=click.Choice(sorted(config.NEWLINES), case_sensitive=False),
              default=None, help="Line separator for the output (default: lf).")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.option("--log-file", default=None, metavar="PATH",
              help="Also write log messages to PATH.")
def main(
    input_path: str,
    output_path: str | None,
    stdout: bool,
    title: str | None,
    html: bool | None,
    newline: str | None,
    verbose: bool,
    log_file: str | None,
) -> None:
    """Normalize exported song lyrics into section-labelled slide text.

    Chords and repeat directives are removed and every section gets a
    "(Label)" header, e.g. "C1" becomes "(Chorus 1)".  Use "-" as INPUT to
    read from stdin.
    """
    # --- Settings ---
    try:
        config.validate_config()
        separator = config.get_newline(newline)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    setup_logging(level="DEBUG" if verbose else config.LOG_LEVEL,
                  log_file=Path(log_file) if log_file else None,
                  verbose=verbose)

    # --- Read ---
    try:
        item = read_item(input_path, html=html, title=title)
    except ReadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    logger.info("Read %s (%s)", item.source, "html" if item.html else "text")

    # --- Normalize ---
    text = normalize_item(item, newline=separator)
    if not text:
        source = "stdin" if input_path == STDIN else input_path
        click.echo(f"Error: No lyric content found in {source}", err=True)
        sys.exit(1)
    if "(Unknown)" in text:
        logger.warning("%s has unlabelled sections; check the (Unknown) blocks", item.title)

    # --- Output ---
    if stdout:
        click.echo(text + separator, nl=False)
        return

    dest = Path(output_path) if output_path else Path(_default_filename(item.title))
    with dest.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text + separator)
    click.echo(f"Written to {dest}")
