"""Lyric normalization: raw planning-service lyrics → section-labelled slide text.

Implements the normalization pipeline:

  1. strip_directives() — delete repeat directives: (3X), (REPEAT)
  2. strip_chords()     — delete inline chord tokens: G, Am, [D], D/F#
  3. segment()          — split the text at section headers into TitledBlocks
  4. render()           — join the blocks as "(<label>)" + body, blank-line separated

:func:`normalize` runs all four stages and never raises for any string input.
Text with no recognisable section header comes back as a single ``(Unknown)``
section so that nothing the source provided is silently dropped.

Section headers come in two shapes:

  "word"         — (Verse 1)  Chorus  Pre-Chorus 2  (Bridge)   (start of line)
  "abbreviation" — C1  (V2)  PC1  B3                           (whole line)

Abbreviations are expanded through :data:`ABBREVIATIONS`; an abbreviation that
is not in the table is kept literally (``X1`` → ``X 1``).
"""

import logging
import re
from types import MappingProxyType

from .models import UNKNOWN, Anchor, AnchorKind, SectionLabel, TitledBlock
from .render import render

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Abbreviated section names (keys are uppercase).
ABBREVIATIONS = MappingProxyType(
    {
        "C": "Chorus",
        "PC": "Pre-Chorus",
        "V": "Verse",
        "T": "Tag",
        "O": "Outro",
        "B": "Bridge",
        "M": "Misc",
        "E": "Ending",
        "I": "Interlude",
    }
)

SECTION_WORDS = (
    "Verse",
    "Chorus",
    "Pre-Chorus",
    "Pre Chorus",
    "Tag",
    "Outro",
    "Bridge",
    "Misc",
    "Interlude",
    "Ending",
)

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# Performance directives that the audience should never see: (5X), (REPEAT)
DIRECTIVE_RE = re.compile(r"\(\d+X\)|\(REPEAT\)", re.IGNORECASE)

# A chord token standing on its own.
# Handles:
#   Plain / accidentals:  G, C#, Bb, F##
#   Qualities:            Am, Dsus4, Gmaj7, Cdim, Eaug
#   Slash chords:         D/F#, G/B
# The token must be preceded by line start, whitespace or "[" and followed by
# "]", a space that does not lead into a word, or line end.  A preceding space
# or "[" is deleted with the token; tabs are kept.  Digits are only
# accepted after a quality so that abbreviated headers (C1, B2, E1) survive.
CHORD_TOKEN_RE = re.compile(
    r"(?:^|[ \[]|(?<=[^\S \n]))"
    r"[A-G](?:##?|bb?)?"
    r"(?:(?:sus|maj|min|aug|dim|m)\d?)?"
    r"(?:/[A-G](?:##?|bb?)?)?"
    r"(?:\]| (?!\w)|$)",
    re.MULTILINE,
)

# Section header, either arm anchored at a line start.
ANCHOR_RE = re.compile(
    r"^\(?(?P<word>" + "|".join(re.escape(w) for w in SECTION_WORDS) + r")"
    r"\)? ?(?P<word_number>\d*)\)?"
    r"|"
    r"^\(?(?P<abbrev>PC|\S)(?P<abbrev_number>\d+)\)?$",
    re.MULTILINE | re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Stage 1: directives
# ---------------------------------------------------------------------------


def strip_directives(text: str) -> str:
    """Delete every repeat directive from *text* and trim the result.

    Only the directive span itself is removed; whitespace around it is left
    alone apart from the final trim of the whole text.
    """
    return DIRECTIVE_RE.sub("", text).strip()


# ---------------------------------------------------------------------------
# Stage 2: chords
# ---------------------------------------------------------------------------


def strip_chords(text: str) -> str:
    """Delete chord tokens from every line of *text*.

    Example::

        "G  D\\nAmazing grace"  →  "\\nAmazing grace"
        "[G]Amazing [D]grace"  →  "Amazing grace"

    A chord-only line becomes an empty line; no whitespace is repaired.
    """
    return CHORD_TOKEN_RE.sub("", text)


# ---------------------------------------------------------------------------
# Stage 3: segmentation
# ---------------------------------------------------------------------------


def find_anchors(text: str) -> list[Anchor]:
    """Return every section header in *text*, in order of appearance."""
    anchors = []
    for m in ANCHOR_RE.finditer(text):
        if m.group("word") is not None:
            kind, label, number = AnchorKind.WORD, m.group("word"), m.group("word_number")
        else:
            kind, label, number = AnchorKind.ABBREVIATION, m.group("abbrev"), m.group("abbrev_number")
        anchors.append(Anchor(kind, label, number, m.start(), m.end()))
    return anchors


def resolve_label(anchor: Anchor) -> SectionLabel:
    """Return the section label an anchor stands for.

    Word anchors keep the word as written.  Abbreviations are expanded
    case-insensitively; unknown abbreviations are kept as they are.
    """
    if anchor.kind is AnchorKind.WORD:
        return SectionLabel(anchor.text, anchor.number)
    return SectionLabel(ABBREVIATIONS.get(anchor.text.upper(), anchor.text), anchor.number)


def segment(text: str) -> list[TitledBlock]:
    """Split *text* into :class:`~lyricnorm.models.TitledBlock` objects.

    Algorithm
    ---------
    Walk the anchors left to right carrying the end offset and the label of
    the previous anchor:

    1. The first anchor, if it does not start at offset 0, closes an
       ``Unknown`` block holding the leading text.
    2. Every later anchor closes the previous block: the text between the
       previous anchor and this one, under the previous label.
    3. The anchor's own label becomes the pending label.

    The text after the last anchor forms the final block.  Without any
    anchor the whole text becomes one ``Unknown`` block.

    Bodies are trimmed; empty ones are kept here and dropped by
    :func:`~lyricnorm.render.render`.
    """
    anchors = find_anchors(text)
    if not anchors:
        return [TitledBlock(UNKNOWN, text.strip())]

    blocks: list[TitledBlock] = []
    previous_end: int | None = None
    previous_label = UNKNOWN

    for anchor in anchors:
        if previous_end is not None:
            blocks.append(TitledBlock(previous_label, text[previous_end : anchor.start].strip()))
        elif anchor.start != 0:
            blocks.append(TitledBlock(UNKNOWN, text[: anchor.start].strip()))

        try:
            previous_label = resolve_label(anchor).display
        except (AttributeError, KeyError, TypeError, ValueError):
            # Keep the label of the previous section and carry on scanning.
            logger.warning(
                "Could not resolve section header %r at offset %d; keeping label %r",
                text[anchor.start : anchor.end],
                anchor.start,
                previous_label,
                exc_info=True,
            )
        previous_end = anchor.end

    blocks.append(TitledBlock(previous_label, text[previous_end:].strip()))
    return blocks


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------


def normalize(raw: str, newline: str = "\n") -> str:
    """Normalize raw lyric text into section-labelled slide text.

    Example::

        (Verse 1)              (Verse 1)
        G  D                   Amazing grace
        Amazing grace    →
        C1                     (Chorus 1)
        How sweet (2X)         How sweet

    Args:
        raw:     Lyric text exactly as the source provided it.
        newline: Line separator for the rendered output.

    Returns:
        The normalized text, or ``""`` if nothing but headers, chords and
        directives remained.
    """
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_chords(strip_directives(text))
    blocks = segment(text)
    result = render(blocks, newline)
    logger.debug(
        "Normalized %d characters into %d sections (%d empty dropped)",
        len(raw),
        len(blocks),
        sum(1 for b in blocks if not b.body.strip()),
    )
    return result
