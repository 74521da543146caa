"""
Text Direction Module.

This module implements the Unicode Bidirectional Algorithm: character
classification, bracket pairing, paragraph direction, embedding level
resolution, line reordering and bidi mark removal.
"""

from .bidi_algorithm import BidiAlgorithm, VisualText
from .brackets import NO_BRACKET, BracketType, bracket_pairs, get_bracket
from .char_types import CharType, classify, classify_sequence
from .embedding_levels import DirectionalStatusStack, ResolvedLevels, resolve_levels
from .flags import ReorderFlag
from .levels import MAX_DEPTH, EmbeddingLevel
from .marks import StrippedText, is_bidi_mark, strip_marks
from .paragraph import ParagraphType, paragraph_direction, split_paragraphs
from .reorder import REMOVED, ReorderedLine, invert_positions, reorder_line

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
]
