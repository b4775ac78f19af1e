"""Local lyric sources.

A source provider hands the normalizer a :class:`~lyricnorm.models.LyricItem`:
a title plus the lyric body exactly as exported by the planning service.

Planning services export lyrics either as plain text or as an HTML fragment::

    <p>(Verse 1)<br>G&nbsp;&nbsp;D<br>Amazing grace</p>
    <p>(Chorus)<br>How sweet the sound</p>

HTML bodies are flattened to text here so that the normalizer only ever sees
plain lines.
"""

import re
import sys
from pathlib import Path

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

from .exceptions import ReadError
from .models import LyricItem
from .normalizer import normalize

STDIN = "-"

_HTML_SUFFIXES = {".htm", ".html"}

# Tags whose content ends with a line break
_BLOCK_TAGS = {"p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "pre"}

# Tags whose content is never lyric text
_SKIPPED_TAGS = {"script", "style", "head", "title"}

_HTML_SNIFF_RE = re.compile(r"<\s*(?:br|p|div|span)\b[^>]*>", re.IGNORECASE)


def looks_like_html(text: str) -> bool:
    """Return True if *text* contains line-level HTML markup."""
    return bool(_HTML_SNIFF_RE.search(text))


def html_to_text(html: str) -> str:
    """Flatten an HTML lyric body to plain text.

    ``<br>`` becomes a line break and every block element (``<p>``,
    ``<div>``, …) ends its line.  All other tags contribute only their text.
    Non-breaking spaces are turned into ordinary spaces so that chord spacing
    survives for the chord stripper, and every line is trimmed so that
    markup indentation cannot hide a section header.
    """
    soup = BeautifulSoup(html, "html.parser")
    parts: list[str] = []
    _collect_text(soup, parts, preformatted=False)
    text = "".join(parts).replace("\xa0", " ")
    text = "\n".join(line.strip() for line in text.split("\n"))
    # Collapse runs of empty lines left by nested blocks
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _collect_text(element: Tag, parts: list[str], preformatted: bool) -> None:
    for child in element.children:
        if isinstance(child, (Comment, Doctype)):
            continue
        if isinstance(child, NavigableString):
            text = str(child).replace("\r", "")
            # Outside <pre>, source newlines are markup formatting, not lyric breaks
            parts.append(text if preformatted else text.replace("\n", " "))
        elif isinstance(child, Tag):
            if child.name == "br":
                parts.append("\n")
                continue
            if child.name in _SKIPPED_TAGS:
                continue
            _collect_text(child, parts, preformatted or child.name == "pre")
            if child.name in _BLOCK_TAGS:
                parts.append("\n")


def title_from_path(path: str) -> str:
    """Derive a song title from a file name as a last-resort fallback."""
    if path == STDIN:
        return "Untitled"
    stem = Path(path).stem
    return re.sub(r"[-_]+", " ", stem).strip().title() or "Untitled"


def read_item(path: str, html: bool | None = None, title: str | None = None) -> LyricItem:
    """Read a lyric file (or stdin for ``"-"``) and return a LyricItem.

    Args:
        path:  File path, or ``"-"`` for standard input.
        html:  True/False to force the body format; None to auto-detect from
               the file suffix or the content.
        title: Item title; derived from *path* when not given.

    Raises:
        ReadError: the file is missing, unreadable or not valid UTF-8.
    """
    try:
        if path == STDIN:
            raw = sys.stdin.read()
        else:
            raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ReadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ReadError(path, "not valid UTF-8 text") from exc

    raw = raw.removeprefix("\ufeff")

    if html is None:
        html = Path(path).suffix.lower() in _HTML_SUFFIXES or looks_like_html(raw)

    body = html_to_text(raw) if html else raw
    return LyricItem(title=title or title_from_path(path), body=body, html=html, source=path)


def normalize_item(item: LyricItem, newline: str = "\n") -> str:
    """Return the normalized slide text for *item*."""
    return normalize(item.body, newline)
