"""Unicode Bidirectional Algorithm pipeline."""

from typing import List, NamedTuple, Optional, Sequence

from unibidi.config import Settings, get_settings
from unibidi.utils.exceptions import AllocationFailureException, check_lengths
from unibidi.utils.logging import get_logger

from .brackets import bracket_pairs
from .char_types import classify_sequence
from .embedding_levels import resolve_levels
from .flags import ReorderFlag
from .levels import EmbeddingLevel
from .marks import is_removed_by_flags
from .paragraph import ParagraphType, split_paragraphs, trailing_separator
from .reorder import invert_positions, reorder_line

logger = get_logger(__name__)

_REMOVE_FLAGS = (
    ReorderFlag.REMOVE_BIDI | ReorderFlag.REMOVE_JOINING | ReorderFlag.REMOVE_SPECIALS
)


class VisualText(NamedTuple):
    """Output of BidiAlgorithm.logical_to_visual()."""

    text: str
    positions_l_to_v: List[int]  # logical index -> visual index, or -1
    positions_v_to_l: List[int]  # visual index -> logical index
    levels: List[EmbeddingLevel]  # logical order
    max_level: int  # highest level plus one
    direction: ParagraphType  # LTR or RTL


class BidiAlgorithm:
    """
    Implementation of the Unicode Bidirectional Algorithm (UBA).

    Runs the full pipeline over single lines or multi-paragraph text:
    classification, bracket pairing, level resolution and reordering.
    Directions and flags left as None come from the package settings.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize BidiAlgorithm."""
        self.settings = settings or get_settings()

    @property
    def default_direction(self) -> ParagraphType:
        return ParagraphType(self.settings.default_direction)

    @property
    def default_flags(self) -> ReorderFlag:
        return ReorderFlag(self.settings.default_flags)

    def logical_to_visual(
        self,
        text: str,
        direction: Optional[ParagraphType] = None,
        flags: Optional[ReorderFlag] = None,
    ) -> VisualText:
        """
        Reorder one line of a paragraph into visual order.

        Args:
            text: Input text, in logical order
            direction: Paragraph direction; ON, WLTR and WRTL let the text
                decide
            flags: Reorder options

        Returns:
            The visual text with both position maps, the logical order
            levels, the maximum level plus one and the resolved direction

        Raises:
            AllocationFailureException: if the per-character arrays cannot
                be allocated
        """
        if direction is None:
            direction = self.default_direction
        if flags is None:
            flags = self.default_flags

        try:
            # Step 1: Classify characters and find bracket pairs
            char_types = classify_sequence(text)
            bracket_types = bracket_pairs(text, char_types)

            # Step 2: Resolve paragraph direction and embedding levels
            resolved = resolve_levels(char_types, bracket_types, direction)

            # Step 3: Reorder the line
            line = reorder_line(
                flags, char_types, resolved.direction, resolved.levels, text
            )

            # Step 4: Drop the characters the REMOVE_* flags name
            positions_v_to_l = line.positions
            visual = line.text
            if flags & _REMOVE_FLAGS:
                positions_v_to_l = [
                    position
                    for position in line.positions
                    if not is_removed_by_flags(text[position], flags)
                ]
                visual = "".join(text[position] for position in positions_v_to_l)

            positions_l_to_v = invert_positions(positions_v_to_l, len(text))
        except MemoryError as e:
            logger.error(f"Failed to allocate arrays for {len(text)} characters")
            raise AllocationFailureException(
                f"Memory allocation failed for text of length {len(text)}"
            ) from e

        logger.debug(
            f"Paragraph of {len(text)} characters resolved as "
            f"{resolved.direction.value}, max level {line.max_level}"
        )

        return VisualText(
            text=visual,
            positions_l_to_v=positions_l_to_v,
            positions_v_to_l=positions_v_to_l,
            levels=line.levels,
            max_level=line.max_level,
            direction=resolved.direction,
        )

    def get_display(
        self,
        text: str,
        direction: Optional[ParagraphType] = None,
        flags: Optional[ReorderFlag] = None,
    ) -> str:
        """
        Get the visual form of text that may span several paragraphs.

        Each paragraph is reordered on its own and its separator is kept in
        place at its end. When the direction lets the text decide and
        carry_paragraph_direction is set, a paragraph without strong
        characters follows the direction of the one before it.

        Args:
            text: Input text, in logical order
            direction: Direction of the first paragraph
            flags: Reorder options

        Returns:
            Text in visual order
        """
        if direction is None:
            direction = self.default_direction
        carry = self.settings.carry_paragraph_direction and not direction.is_strong

        output = []
        for paragraph in split_paragraphs(text):
            separator = trailing_separator(paragraph)
            if separator:
                paragraph = paragraph[: -len(separator)]

            result = self.logical_to_visual(paragraph, direction, flags)
            output.append(result.text + separator)

            if carry:
                direction = result.direction.weaken()

        return "".join(output)

    def visual_to_logical(self, visual: str, positions_v_to_l: Sequence[int]) -> str:
        """
        Restore the logical order of reordered text.

        Args:
            visual: Text in visual order
            positions_v_to_l: Visual to logical map from logical_to_visual()

        Returns:
            The text in logical order, without any characters that were
            removed from the visual text

        Raises:
            LengthMismatchException: if visual and positions_v_to_l differ in
                length
        """
        check_lengths(visual=visual, positions_v_to_l=positions_v_to_l)
        order = sorted(range(len(visual)), key=lambda index: positions_v_to_l[index])
        return "".join(visual[index] for index in order)
