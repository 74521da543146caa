"""Removal of bidi formatting marks."""

from typing import List, NamedTuple, Optional, Sequence

from unibidi.utils.exceptions import check_lengths

from .char_types import CodePoint, classify
from .flags import ReorderFlag
from .reorder import REMOVED, invert_positions

LRM = "\u200e"
RLM = "\u200f"

# Joiners, removed by ReorderFlag.REMOVE_JOINING
JOINING_MARKS = frozenset({"\u200c", "\u200d"})

# Zero width no-break space and word joiner, removed by REMOVE_SPECIALS
SPECIAL_MARKS = frozenset({"\ufeff", "\u2060"})


class StrippedText(NamedTuple):
    """Output of strip_marks()."""

    text: str
    positions_to_this: List[int]  # other string index -> index here
    positions_from_this: List[int]  # index here -> other string index
    levels: Optional[List[int]]


def _as_char(ch: CodePoint) -> str:
    return chr(ch) if isinstance(ch, int) else ch


def is_bidi_mark(ch: CodePoint) -> bool:
    """
    Check whether a character only carries bidi formatting.

    True for explicit embeddings and overrides, PDF, boundary neutrals and
    the LRM and RLM marks. Isolate formatting characters are not marks.
    """
    ch = _as_char(ch)
    return ch in (LRM, RLM) or classify(ch).is_explicit_or_bn


def is_removed_by_flags(ch: CodePoint, flags: ReorderFlag) -> bool:
    """Check whether the REMOVE_* options in ``flags`` drop a character."""
    ch = _as_char(ch)
    if ch in JOINING_MARKS:
        return bool(flags & ReorderFlag.REMOVE_JOINING)
    if ch in SPECIAL_MARKS:
        return bool(flags & ReorderFlag.REMOVE_SPECIALS)
    return bool(flags & ReorderFlag.REMOVE_BIDI) and is_bidi_mark(ch)


def strip_marks(
    text: str,
    levels: Optional[Sequence[int]] = None,
    positions_to_this: Optional[Sequence[int]] = None,
    positions_from_this: Optional[Sequence[int]] = None,
) -> StrippedText:
    """
    Remove bidi marks from text, keeping position maps and levels aligned.

    Meant for logical order text. On visually reordered text the marks are
    still removed, but their levels no longer describe their surroundings.

    Args:
        text: Text to strip
        levels: Per-character levels, compacted along with the text
        positions_to_this: Map from another string's indices to ``text``;
            identity when omitted
        positions_from_this: Map from ``text``'s indices to another string;
            derived from positions_to_this when omitted

    Returns:
        The stripped text, both maps rewritten for it, and the compacted
        levels (None when no levels were given)

    Raises:
        LengthMismatchException: if the inputs differ in length
    """
    check_lengths(
        text=text,
        levels=levels,
        positions_to_this=positions_to_this,
        positions_from_this=positions_from_this,
    )

    length = len(text)
    other_size = len(positions_to_this) if positions_to_this is not None else length

    if positions_from_this is not None:
        from_this = list(positions_from_this)
    elif positions_to_this is not None:
        from_this = invert_positions(positions_to_this, length)
    else:
        from_this = list(range(length))

    kept_chars = []
    kept_levels = []
    kept_from = []
    for index, ch in enumerate(text):
        if is_bidi_mark(ch):
            continue
        kept_chars.append(ch)
        kept_from.append(from_this[index])
        if levels is not None:
            kept_levels.append(levels[index])

    to_this = [REMOVED] * other_size
    for index, source in enumerate(kept_from):
        if source != REMOVED:
            to_this[source] = index

    return StrippedText(
        text="".join(kept_chars),
        positions_to_this=to_this,
        positions_from_this=kept_from,
        levels=kept_levels if levels is not None else None,
    )
