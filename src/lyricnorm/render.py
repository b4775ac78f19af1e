"""Slide-text renderer.

Renders a sequence of :class:`~lyricnorm.models.TitledBlock` objects to the
plain-text format the presentation engine splits into slides::

    (Verse 1)
    Amazing grace, how sweet the sound

    (Chorus)
    My chains are gone

Each block is a ``(<label>)`` header line followed by its body.  Blocks are
separated by exactly one blank line; there is no trailing blank line.  Blocks
whose body is empty after trimming are skipped entirely, so an empty header
such as ``"(Bridge)\\n\\n"`` never reaches the output.

Usage::

    from lyricnorm.render import render
    text = render(blocks)
"""

from collections.abc import Iterable

from .models import TitledBlock


def render(blocks: Iterable[TitledBlock], newline: str = "\n") -> str:
    """Return slide text for *blocks*, in the order given.

    Args:
        blocks:  Blocks in discovery order.
        newline: Line separator used between header and body and, doubled,
                 between blocks.

    Returns:
        The rendered text, or ``""`` if no block has a non-empty body.
    """
    parts = [_render_block(block, newline) for block in blocks if block.body.strip()]
    return (newline * 2).join(parts)


def _render_block(block: TitledBlock, newline: str) -> str:
    # Bodies always carry "\n" internally; re-join them with the requested separator.
    body = newline.join(block.body.split("\n"))
    return f"({block.label}){newline}{body}"
