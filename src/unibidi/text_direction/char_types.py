"""Bidirectional character types and classification.

Character types follow Table 4 of UAX #9. Classification is driven by the
Unicode Character Database shipped with the interpreter.
"""

import unicodedata
from enum import Enum
from typing import List, Sequence, Union

CodePoint = Union[str, int]


class CharType(Enum):
    """Unicode Bidirectional Character Types."""

    # Strong types
    L = "Left-to-Right"  # Latin letters
    R = "Right-to-Left"  # Hebrew letters
    AL = "Arabic Letter"  # Arabic, Syriac, Thaana letters

    # Weak types
    EN = "European Number"  # European digits 0-9
    ES = "European Separator"  # Plus/minus signs
    ET = "European Terminator"  # Currency symbols, percent
    AN = "Arabic Number"  # Arabic-Indic digits
    CS = "Common Separator"  # Colon, comma, full stop
    NSM = "Non-Spacing Mark"  # Combining marks
    BN = "Boundary Neutral"  # Control characters, ZWJ

    # Neutral types
    B = "Paragraph Separator"  # Line/paragraph separators
    S = "Segment Separator"  # Tab
    WS = "Whitespace"  # Space, etc.
    ON = "Other Neutral"  # Other punctuation

    # Explicit formatting
    LRE = "Left-to-Right Embedding"
    RLE = "Right-to-Left Embedding"
    LRO = "Left-to-Right Override"
    RLO = "Right-to-Left Override"
    PDF = "Pop Directional Format"
    LRI = "Left-to-Right Isolate"
    RLI = "Right-to-Left Isolate"
    FSI = "First Strong Isolate"
    PDI = "Pop Directional Isolate"

    @property
    def is_strong(self) -> bool:
        """L, R or AL."""
        return self in _STRONG

    @property
    def is_weak(self) -> bool:
        """EN, AN, ES, ET, CS, NSM or BN."""
        return self in _WEAK

    @property
    def is_neutral(self) -> bool:
        """B, S, WS, ON and the isolate formatting characters."""
        return self in _NEUTRAL

    @property
    def is_letter(self) -> bool:
        return self in _STRONG

    @property
    def is_number(self) -> bool:
        """EN or AN."""
        return self in (CharType.EN, CharType.AN)

    @property
    def is_number_separator_or_terminator(self) -> bool:
        """ES, ET or CS."""
        return self in (CharType.ES, CharType.ET, CharType.CS)

    @property
    def is_space(self) -> bool:
        """BN, B, S or WS."""
        return self in (CharType.BN, CharType.B, CharType.S, CharType.WS)

    @property
    def is_explicit(self) -> bool:
        """LRE, RLE, LRO, RLO or PDF."""
        return self in _EXPLICIT

    @property
    def is_isolate(self) -> bool:
        """LRI, RLI, FSI or PDI."""
        return self in _ISOLATE

    @property
    def is_isolate_initiator(self) -> bool:
        return self in (CharType.LRI, CharType.RLI, CharType.FSI)

    @property
    def is_separator(self) -> bool:
        """B or S."""
        return self in (CharType.B, CharType.S)

    @property
    def is_override(self) -> bool:
        return self in (CharType.LRO, CharType.RLO)

    @property
    def is_rtl(self) -> bool:
        """R, AL, RLE, RLO or RLI."""
        return self in _RTL

    @property
    def is_arabic(self) -> bool:
        return self in (CharType.AL, CharType.AN)

    @property
    def is_ltr_letter(self) -> bool:
        return self is CharType.L

    @property
    def is_rtl_letter(self) -> bool:
        return self in (CharType.R, CharType.AL)

    @property
    def is_es_or_cs(self) -> bool:
        return self in (CharType.ES, CharType.CS)

    @property
    def is_explicit_or_bn(self) -> bool:
        return self.is_explicit or self is CharType.BN

    @property
    def is_explicit_or_bn_or_nsm(self) -> bool:
        return self.is_explicit_or_bn or self is CharType.NSM

    @property
    def is_explicit_or_isolate_or_bn_or_nsm(self) -> bool:
        return self.is_explicit_or_bn_or_nsm or self.is_isolate

    @property
    def is_explicit_or_bn_or_ws(self) -> bool:
        return self.is_explicit_or_bn or self is CharType.WS

    @property
    def is_explicit_or_separator_or_bn_or_ws(self) -> bool:
        return self.is_explicit_or_bn_or_ws or self.is_separator

    @property
    def is_removed_by_x9(self) -> bool:
        """Characters rule X9 takes out of the resolution rules."""
        return self.is_explicit_or_bn

    @property
    def is_trailing_whitespace(self) -> bool:
        """Characters rule L1 resets together with trailing whitespace."""
        return self is CharType.WS or self.is_isolate or self.is_explicit_or_bn


_STRONG = frozenset({CharType.L, CharType.R, CharType.AL})
_WEAK = frozenset(
    {
        CharType.EN,
        CharType.AN,
        CharType.ES,
        CharType.ET,
        CharType.CS,
        CharType.NSM,
        CharType.BN,
    }
)
_EXPLICIT = frozenset(
    {CharType.LRE, CharType.RLE, CharType.LRO, CharType.RLO, CharType.PDF}
)
_ISOLATE = frozenset({CharType.LRI, CharType.RLI, CharType.FSI, CharType.PDI})
_NEUTRAL = frozenset({CharType.B, CharType.S, CharType.WS, CharType.ON}) | _ISOLATE
_RTL = frozenset(
    {CharType.R, CharType.AL, CharType.RLE, CharType.RLO, CharType.RLI}
)


def _code_point_to_char(ch: CodePoint) -> str:
    if isinstance(ch, int):
        return chr(ch)
    if len(ch) != 1:
        raise ValueError(f"Expected a single character, got {len(ch)}")
    return ch


def classify(ch: CodePoint) -> CharType:
    """
    Get the bidi type of a character.

    Unassigned code points, for which the character database has no
    bidirectional class, are classified as Other Neutral.

    Args:
        ch: A one-character string or an integer code point

    Returns:
        The character's bidirectional type
    """
    bidi_class = unicodedata.bidirectional(_code_point_to_char(ch))
    if not bidi_class:
        return CharType.ON
    return CharType[bidi_class]


def classify_sequence(text: Sequence[CodePoint]) -> List[CharType]:
    """Get the bidi types of every character of ``text``, in order."""
    return [classify(ch) for ch in text]
