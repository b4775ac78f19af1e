from dataclasses import dataclass
from enum import Enum, auto

UNKNOWN = "Unknown"


class AnchorKind(Enum):
    WORD = auto()  # full-word label: (Verse 1), Chorus, Pre-Chorus 2
    ABBREVIATION = auto()  # abbreviated label on its own line: C1, (V2), PC1


@dataclass(frozen=True)
class SectionLabel:
    """The semantic name of a song section, e.g. ``("Chorus", "2")``."""

    name: str
    number: str = ""

    @property
    def display(self) -> str:
        """Label as shown in the slide header: ``"Chorus 2"``, ``"Bridge"``."""
        return f"{self.name} {self.number}".strip()


@dataclass(frozen=True)
class Anchor:
    """A position in the lyric text where a new named section begins.

    ``start``/``end`` are offsets of the whole header match; ``text`` is the
    label word or abbreviation exactly as it appeared.
    """

    kind: AnchorKind
    text: str
    number: str
    start: int
    end: int


@dataclass(frozen=True)
class TitledBlock:
    """A contiguous span of lyric text under one section label.

    Example: ``TitledBlock(label="Verse 1", body="Amazing grace")``.
    The body may be empty; such blocks are dropped when rendering.
    """

    label: str
    body: str


@dataclass(frozen=True)
class LyricItem:
    """One lyric item as handed over by a source provider."""

    title: str
    body: str
    html: bool = False  # body was flattened from HTML markup
    source: str = ""  # path the body was read from, "-" for stdin
