"""Paragraph direction (P1-P3)."""

from enum import Enum
from typing import List, Optional, Sequence

from .char_types import CharType, classify

CRLF = "\r\n"


class ParagraphType(Enum):
    """Paragraph base directions."""

    LTR = "ltr"
    RTL = "rtl"
    ON = "on"  # let the text decide
    WLTR = "wltr"  # let the text decide, left-to-right if it cannot
    WRTL = "wrtl"  # let the text decide, right-to-left if it cannot

    @property
    def is_weak(self) -> bool:
        return self in (ParagraphType.WLTR, ParagraphType.WRTL)

    @property
    def is_strong(self) -> bool:
        return self in (ParagraphType.LTR, ParagraphType.RTL)

    @property
    def is_rtl(self) -> bool:
        return self in (ParagraphType.RTL, ParagraphType.WRTL)

    def weaken(self) -> "ParagraphType":
        """Weaken a direction for paragraph fallback: LTR->WLTR, RTL->WRTL."""
        if self is ParagraphType.LTR:
            return ParagraphType.WLTR
        if self is ParagraphType.RTL:
            return ParagraphType.WRTL
        return self

    @classmethod
    def from_level(cls, level: int) -> "ParagraphType":
        return cls.RTL if level % 2 else cls.LTR


def first_strong_direction(
    char_types: Sequence[CharType], start: int = 0, end: Optional[int] = None
) -> Optional[ParagraphType]:
    """
    Find the direction of the first strong character (P2).

    Characters between an isolate initiator and its matching PDI, or the end
    of the range if it has none, are skipped. The scan stops at a paragraph
    separator.

    Returns:
        LTR or RTL, or None when no strong character is found
    """
    if end is None:
        end = len(char_types)

    isolate_depth = 0
    for index in range(start, end):
        char_type = char_types[index]
        if char_type.is_isolate_initiator:
            isolate_depth += 1
        elif char_type is CharType.PDI:
            if isolate_depth > 0:
                isolate_depth -= 1
        elif char_type is CharType.B:
            break
        elif isolate_depth == 0 and char_type.is_strong:
            return ParagraphType.RTL if char_type.is_rtl else ParagraphType.LTR

    return None


def paragraph_direction(char_types: Sequence[CharType]) -> ParagraphType:
    """
    Determine the base direction of a paragraph (P2-P3).

    Returns:
        LTR or RTL from the first strong character outside isolates, or ON
        when there is none and the caller must pick a fallback
    """
    direction = first_strong_direction(char_types)
    return direction if direction is not None else ParagraphType.ON


def split_paragraphs(text: str) -> List[str]:
    """
    Split text into paragraphs (P1).

    Each paragraph separator is kept at the end of the paragraph it closes.
    CR followed by LF is a single separator.
    """
    paragraphs = []
    start = 0
    index = 0
    while index < len(text):
        if classify(text[index]) is CharType.B:
            if text[index : index + 2] == CRLF:
                index += 1
            paragraphs.append(text[start : index + 1])
            start = index + 1
        index += 1

    if start < len(text):
        paragraphs.append(text[start:])

    return paragraphs


def trailing_separator(paragraph: str) -> str:
    """Get the separator ending a paragraph from split_paragraphs(), or ""."""
    if paragraph.endswith(CRLF):
        return CRLF
    if paragraph and classify(paragraph[-1]) is CharType.B:
        return paragraph[-1]
    return ""
