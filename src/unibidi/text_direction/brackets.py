"""Paired bracket identification (BD14-BD16)."""

from typing import Dict, List, NamedTuple, Sequence

from unibidi.utils.exceptions import check_lengths

from .char_types import CharType, CodePoint

# Opening bracket -> closing bracket, from BidiBrackets.txt (Unicode 15.0)
BIDI_BRACKET_PAIRS: Dict[int, int] = {
    0x0028: 0x0029,  # ( )
    0x005B: 0x005D,  # [ ]
    0x007B: 0x007D,  # { }
    0x0F3A: 0x0F3B,  # Tibetan gug rtags
    0x0F3C: 0x0F3D,  # Tibetan ang khang
    0x169B: 0x169C,  # Ogham feather marks
    0x2045: 0x2046,  # square brackets with quill
    0x207D: 0x207E,  # superscript parentheses
    0x208D: 0x208E,  # subscript parentheses
    0x2308: 0x2309,  # ceiling
    0x230A: 0x230B,  # floor
    0x2329: 0x232A,  # pointing angle brackets
    0x2768: 0x2769,
    0x276A: 0x276B,
    0x276C: 0x276D,
    0x276E: 0x276F,
    0x2770: 0x2771,
    0x2772: 0x2773,
    0x2774: 0x2775,
    0x27C5: 0x27C6,  # s-shaped bag delimiters
    0x27E6: 0x27E7,  # mathematical brackets
    0x27E8: 0x27E9,
    0x27EA: 0x27EB,
    0x27EC: 0x27ED,
    0x27EE: 0x27EF,
    0x2983: 0x2984,
    0x2985: 0x2986,
    0x2987: 0x2988,
    0x2989: 0x298A,
    0x298B: 0x298C,
    0x298D: 0x2990,  # tick in top corner
    0x298F: 0x298E,  # tick in bottom corner
    0x2991: 0x2992,
    0x2993: 0x2994,
    0x2995: 0x2996,
    0x2997: 0x2998,
    0x29D8: 0x29D9,  # wiggly fences
    0x29DA: 0x29DB,
    0x29FC: 0x29FD,
    0x2E22: 0x2E23,  # half brackets
    0x2E24: 0x2E25,
    0x2E26: 0x2E27,
    0x2E28: 0x2E29,
    0x2E55: 0x2E56,
    0x2E57: 0x2E58,
    0x2E59: 0x2E5A,
    0x2E5B: 0x2E5C,
    0x3008: 0x3009,  # CJK angle brackets
    0x300A: 0x300B,
    0x300C: 0x300D,
    0x300E: 0x300F,
    0x3010: 0x3011,
    0x3014: 0x3015,
    0x3016: 0x3017,
    0x3018: 0x3019,
    0x301A: 0x301B,
    0xFE59: 0xFE5A,  # small forms
    0xFE5B: 0xFE5C,
    0xFE5D: 0xFE5E,
    0xFF08: 0xFF09,  # fullwidth forms
    0xFF3B: 0xFF3D,
    0xFF5B: 0xFF5D,
    0xFF5F: 0xFF60,
    0xFF62: 0xFF63,
}

_CLOSING_TO_OPENING: Dict[int, int] = {
    closing: opening for opening, closing in BIDI_BRACKET_PAIRS.items()
}

# U+2329/U+232A decompose canonically to U+3008/U+3009, so N0 pairs them
CANONICAL_BRACKET_IDS: Dict[int, int] = {0x2329: 0x3008}


class BracketType(NamedTuple):
    """Pairing id (the opening bracket's code point) and open/close flag."""

    bracket_id: int
    is_open: bool

    @property
    def is_bracket(self) -> bool:
        return self.bracket_id != 0

    @property
    def canonical_id(self) -> int:
        """Pairing id with canonically equivalent brackets folded together."""
        return CANONICAL_BRACKET_IDS.get(self.bracket_id, self.bracket_id)


NO_BRACKET = BracketType(0, False)


def get_bracket(ch: CodePoint) -> BracketType:
    """
    Get the bracket type of a character.

    Args:
        ch: A one-character string or an integer code point

    Returns:
        The character's pairing id and whether it opens the pair, or
        NO_BRACKET for characters outside the bracket table
    """
    code_point = ch if isinstance(ch, int) else ord(ch)
    if code_point in BIDI_BRACKET_PAIRS:
        return BracketType(code_point, True)
    opening = _CLOSING_TO_OPENING.get(code_point)
    if opening is not None:
        return BracketType(opening, False)
    return NO_BRACKET


def bracket_pairs(
    text: Sequence[CodePoint], char_types: Sequence[CharType]
) -> List[BracketType]:
    """
    Get bracket types for a string of characters.

    Only characters classified as Other Neutral take part in pairing; any
    other character gets NO_BRACKET.

    Raises:
        LengthMismatchException: if text and char_types differ in length
    """
    check_lengths(text=text, char_types=char_types)
    return [
        get_bracket(ch) if char_type is CharType.ON else NO_BRACKET
        for ch, char_type in zip(text, char_types)
    ]
