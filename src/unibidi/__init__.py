"""unibidi: the Unicode Bidirectional Algorithm for Python text."""

from unibidi.text_direction import (
    MAX_DEPTH,
    NO_BRACKET,
    REMOVED,
    BidiAlgorithm,
    BracketType,
    CharType,
    DirectionalStatusStack,
    EmbeddingLevel,
    ParagraphType,
    ReorderedLine,
    ReorderFlag,
    ResolvedLevels,
    StrippedText,
    VisualText,
    bracket_pairs,
    classify,
    classify_sequence,
    get_bracket,
    invert_positions,
    is_bidi_mark,
    paragraph_direction,
    reorder_line,
    resolve_levels,
    split_paragraphs,
    strip_marks,
)
from unibidi.utils.exceptions import (
    AllocationFailureException,
    LengthMismatchException,
    UnibidiException,
)

__version__ = "1.0.0"

__all__ = [
    "CharType",
    "BracketType",
    "EmbeddingLevel",
    "ParagraphType",
    "ReorderFlag",
    "ResolvedLevels",
    "ReorderedLine",
    "StrippedText",
    "VisualText",
    "DirectionalStatusStack",
    "BidiAlgorithm",
    "MAX_DEPTH",
    "NO_BRACKET",
    "REMOVED",
    "classify",
    "classify_sequence",
    "get_bracket",
    "bracket_pairs",
    "paragraph_direction",
    "split_paragraphs",
    "resolve_levels",
    "reorder_line",
    "invert_positions",
    "is_bidi_mark",
    "strip_marks",
    "UnibidiException",
    "LengthMismatchException",
    "AllocationFailureException",
]
