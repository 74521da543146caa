"""Embedding levels."""

from .char_types import CharType

# Deepest explicit embedding level (BD2)
MAX_DEPTH = 125

# Implicit resolution (I1/I2) may raise a level-125 character by one and a
# level-124 number by two.
MAX_RESOLVED_LEVEL = MAX_DEPTH + 1


class EmbeddingLevel(int):
    """An embedding level; even levels are left-to-right, odd right-to-left."""

    def __new__(cls, value: int = 0) -> "EmbeddingLevel":
        """Create a level, rejecting values outside the valid range."""
        if not 0 <= int(value) <= MAX_RESOLVED_LEVEL:
            raise ValueError(
                f"Embedding level must be between 0 and {MAX_RESOLVED_LEVEL}, "
                f"got {value}"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"EmbeddingLevel({int(self)})"

    @property
    def is_rtl(self) -> bool:
        return bool(self % 2)

    @property
    def direction(self) -> CharType:
        """L for even levels, R for odd levels."""
        return CharType.R if self.is_rtl else CharType.L

    @classmethod
    def from_char_type(cls, char_type: CharType) -> "EmbeddingLevel":
        """Lowest level of a direction: 1 for R/AL/RLE/RLO/RLI, else 0."""
        return cls(1 if char_type.is_rtl else 0)


def least_odd_greater_than(level: int) -> int:
    """Next odd level above ``level``."""
    return (level + 1) | 1


def least_even_greater_than(level: int) -> int:
    """Next even level above ``level``."""
    return (level + 2) & ~1
