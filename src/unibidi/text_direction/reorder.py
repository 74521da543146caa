"""
Line reordering (L1 part 4, L2 and L3).

Reordering works on one line at a time: the levels of a paragraph are
resolved once with resolve_levels(), then each line of it is passed here
with its slice of the levels.
"""

from typing import List, NamedTuple, Optional, Sequence

from unibidi.utils.exceptions import check_lengths
from unibidi.utils.logging import get_logger

from .char_types import CharType
from .flags import ReorderFlag
from .levels import EmbeddingLevel
from .paragraph import ParagraphType

logger = get_logger(__name__)

# Position map entry for a character that has no counterpart
REMOVED = -1


class ReorderedLine(NamedTuple):
    """Output of reorder_line()."""

    max_level: int  # highest level of the line plus one
    text: str  # visual order
    positions: List[int]  # visual index -> logical index
    levels: List[EmbeddingLevel]  # logical order, after L1 part 4


def _reverse(items: list, start: int, end: int) -> None:
    items[start:end] = items[start:end][::-1]


def reorder_line(
    flags: ReorderFlag,
    char_types: Sequence[CharType],
    direction: ParagraphType,
    levels: Sequence[int],
    text: str,
) -> ReorderedLine:
    """
    Reorder a line of text from logical to visual order.

    Args:
        flags: Reorder options; only REORDER_NSM changes the result here
        char_types: Original bidi types of the line's characters
        direction: Paragraph direction, as returned by resolve_levels()
        levels: Embedding levels of the line's characters
        text: The line, in logical order

    Returns:
        The maximum level plus one, the visual text, the visual to logical
        position map and the adjusted levels

    Raises:
        LengthMismatchException: if the inputs differ in length
    """
    check_lengths(char_types=char_types, levels=levels, text=text)

    base_level = 1 if direction.is_rtl else 0
    line_levels = [int(level) for level in levels]
    length = len(line_levels)

    # L1 part 4. Trailing whitespace, isolate formatting characters and
    # characters removed by X9 take the paragraph level.
    index = length - 1
    while index >= 0 and char_types[index].is_trailing_whitespace:
        line_levels[index] = base_level
        index -= 1

    visual = list(text)
    positions = list(range(length))

    if flags & ReorderFlag.REORDER_NSM:
        _reorder_nsm(char_types, line_levels, visual, positions)

    # L2
    max_level = max(line_levels, default=0)
    for level in range(max_level, 0, -1):
        end = length
        while end > 0:
            if line_levels[end - 1] < level:
                end -= 1
                continue
            start = end - 1
            while start > 0 and line_levels[start - 1] >= level:
                start -= 1
            _reverse(visual, start, end)
            _reverse(positions, start, end)
            end = start

    logger.debug(
        f"Reordered line of {length} characters, max level {max_level}"
    )

    return ReorderedLine(
        max_level=max_level + 1,
        text="".join(visual),
        positions=positions,
        levels=[EmbeddingLevel(level) for level in line_levels],
    )


def _reorder_nsm(
    char_types: Sequence[CharType],
    levels: List[int],
    visual: list,
    positions: List[int],
) -> None:
    """
    L3. In right-to-left runs, reverse each group of combining marks
    together with its base character, so the marks still follow the base
    once L2 has reversed the run.
    """
    index = len(levels) - 1
    while index >= 0:
        if not (levels[index] % 2 and char_types[index] is CharType.NSM):
            index -= 1
            continue

        group_end = index
        level = levels[index]
        index -= 1
        while (
            index >= 0
            and char_types[index].is_explicit_or_bn_or_nsm
            and levels[index] == level
        ):
            index -= 1

        if index < 0 or levels[index] != level:
            index += 1
            logger.warning(f"Combining marks at the start of a level run at {index}")

        _reverse(visual, index, group_end + 1)
        _reverse(positions, index, group_end + 1)
        index -= 1


def invert_positions(positions: Sequence[int], size: Optional[int] = None) -> List[int]:
    """
    Invert a position map.

    Args:
        positions: Map from one string's indices to another's, with REMOVED
            for characters absent from the other string
        size: Length of the other string; defaults to len(positions)

    Returns:
        The map from the other string's indices back to this one's, with
        REMOVED where nothing maps
    """
    if size is None:
        size = len(positions)

    inverse = [REMOVED] * size
    for index, position in enumerate(positions):
        if position == REMOVED:
            continue
        if not 0 <= position < size:
            raise ValueError(f"Position {position} at {index} is out of range for size {size}")
        inverse[position] = index
    return inverse
