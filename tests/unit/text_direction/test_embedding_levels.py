"""Test embedding level resolution.

Covers explicit embeddings and isolates, weak and neutral type resolution,
bracket pairs and the whitespace rules.
"""

import pytest

from unibidi.text_direction import (
    DirectionalStatusStack,
    ParagraphType,
    bracket_pairs,
    classify_sequence,
    resolve_levels,
)
from unibidi.text_direction.levels import MAX_DEPTH
from unibidi.utils.exceptions import LengthMismatchException

LRE = "\u202a"
RLE = "\u202b"
PDF = "\u202c"
RLO = "\u202e"
LRI = "\u2066"
RLI = "\u2067"
FSI = "\u2068"
PDI = "\u2069"
NSM = "\u0301"


def levels_of(text, direction=ParagraphType.ON, brackets=True):
    """Resolve ``text`` and return its levels as plain integers."""
    char_types = classify_sequence(text)
    bracket_types = bracket_pairs(text, char_types) if brackets else None
    result = resolve_levels(char_types, bracket_types, direction)
    return [int(level) for level in result.levels]


class TestResolveLevels:
    """Test resolve_levels() on mixed text."""

    def test_documented_mixed_paragraph(self):
        """Test the Arabic, CJK and Latin paragraph with brackets."""
        text = "(أحمد خالد 比 توفـــــيق boieng 1997)"
        char_types = classify_sequence(text)

        result = resolve_levels(char_types, bracket_pairs(text, char_types))

        assert [int(level) for level in result.levels] == (
            [1] * 11 + [2] + [1] * 12 + [2] * 11 + [1]
        )
        assert result.max_level == 3
        assert result.direction is ParagraphType.RTL

    def test_ltr_text(self):
        """Test plain Latin text stays at level 0."""
        result = resolve_levels(classify_sequence("hello world"))

        assert all(level == 0 for level in result.levels)
        assert result.max_level == 1
        assert result.direction is ParagraphType.LTR

    def test_rtl_run_in_ltr_paragraph(self):
        """Test a Hebrew word inside Latin text."""
        assert levels_of("abc אבג def") == [0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 0]

    def test_empty_text(self):
        """Test empty input resolves to no levels."""
        result = resolve_levels([], direction=ParagraphType.RTL)

        assert result.levels == []
        assert result.max_level == 2
        assert result.direction is ParagraphType.RTL

    def test_levels_are_embedding_levels(self):
        """Test levels are returned as EmbeddingLevel instances."""
        result = resolve_levels(classify_sequence("a"))
        assert repr(result.levels[0]) == "EmbeddingLevel(0)"


class TestParagraphLevel:
    """Test the choice of paragraph level."""

    def direction_of(self, text, direction):
        return resolve_levels(classify_sequence(text), direction=direction).direction

    def test_strong_direction_forced(self):
        """Test LTR and RTL ignore the text."""
        assert self.direction_of("א", ParagraphType.LTR) is ParagraphType.LTR
        assert self.direction_of("a", ParagraphType.RTL) is ParagraphType.RTL

    def test_weak_direction_defers_to_text(self):
        """Test weak directions only apply without strong characters."""
        assert self.direction_of("a", ParagraphType.WRTL) is ParagraphType.LTR
        assert self.direction_of("א", ParagraphType.WLTR) is ParagraphType.RTL

    def test_weak_direction_fallback(self):
        """Test the fallback when no strong character is found."""
        assert self.direction_of("!?", ParagraphType.WRTL) is ParagraphType.RTL
        assert self.direction_of("!?", ParagraphType.WLTR) is ParagraphType.LTR
        assert self.direction_of("!?", ParagraphType.ON) is ParagraphType.LTR


class TestExplicitLevels:
    """Test rules X1-X10."""

    def test_override(self):
        """Test RLO forces right-to-left and trailing PDF resets."""
        assert levels_of(RLO + "ab" + PDF, ParagraphType.LTR) == [0, 1, 1, 0]

    def test_embedding(self):
        """Test LTR text embedded at an odd level is raised to even."""
        assert levels_of("a" + RLE + "b" + PDF + "c", ParagraphType.LTR) == [0, 0, 2, 2, 0]

    def test_embedding_overflow(self):
        """Test embeddings past the maximum depth are ignored."""
        levels = levels_of(LRE * 200 + "a", ParagraphType.LTR)

        assert levels[-1] == 124
        assert max(levels) <= MAX_DEPTH

    def test_implicit_level_above_maximum_depth(self):
        """Test I2 may raise a level-125 character to 126."""
        char_types = classify_sequence(RLE * 200 + "a")
        result = resolve_levels(char_types, direction=ParagraphType.LTR)

        assert result.levels[-1] == 126
        assert result.max_level == 127

    def test_isolate_overflow_at_maximum_depth(self):
        """Test an FSI past the maximum depth stays at the current level."""
        result = resolve_levels(
            classify_sequence(RLE * 70 + FSI + "a" + PDI + "b"),
            direction=ParagraphType.LTR,
        )

        assert [int(level) for level in result.levels[-4:]] == [125, 126, 126, 126]

    def test_deep_isolates_unwind_to_base_level(self):
        """Test overflowed and valid isolates are all closed by their PDIs."""
        levels = levels_of(RLI * 130 + "a" + PDI * 130 + "b", ParagraphType.LTR)

        assert levels[130] == 126
        assert levels[-1] == 0
        assert max(levels) == 126

    def test_pdf_inside_overflowed_isolate_ignored(self):
        """Test a PDF cannot pop embeddings from inside an overflowed isolate."""
        levels = levels_of(LRE * 62 + LRI + PDF + "a" + PDI + "b", ParagraphType.LTR)

        assert levels[62:] == [124, 124, 124, 124, 124]

    def test_valid_pdi_resets_embedding_overflow(self):
        """Test a PDF after a valid PDI pops a real embedding."""
        levels = levels_of(RLE + LRI + RLE * 70 + PDI + PDF + "b", ParagraphType.LTR)

        assert levels[-1] == 0

    def test_unbalanced_pdf_ignored(self):
        """Test PDFs without an embedding change nothing."""
        assert levels_of(PDF + PDF + "ab", ParagraphType.LTR) == [0, 0, 0, 0]

    def test_isolate(self):
        """Test an RLI isolate in LTR text."""
        assert levels_of("a" + RLI + "ב" + PDI + "c", ParagraphType.LTR) == [0, 0, 1, 0, 0]

    def test_unmatched_pdi(self):
        """Test a PDI without an initiator is a no-op."""
        assert levels_of("a" + PDI + "b", ParagraphType.LTR) == [0, 0, 0]

    def test_first_strong_isolate(self):
        """Test FSI takes the direction of its content."""
        assert levels_of(FSI + "אב" + PDI) == [0, 1, 1, 0]
        assert levels_of("א " + FSI + "ab" + PDI) == [1, 1, 1, 2, 2, 1]

    def test_isolate_content_does_not_affect_surroundings(self):
        """Test neutrals around an isolate see through it."""
        # The space between the letters resolves as if the isolate were ON
        levels = levels_of("א " + RLI + "a" + PDI + " ב", ParagraphType.LTR)
        assert levels == [1, 1, 1, 2, 1, 1, 1]


class TestWeakTypes:
    """Test rules W1-W7."""

    def test_european_digits_after_arabic_letter(self):
        """Test W2 turns EN after AL into AN."""
        assert levels_of("ب12") == [1, 2, 2]

    def test_european_digits_after_latin(self):
        """Test W7 turns EN after L into L."""
        assert levels_of("א abc 12", ParagraphType.RTL) == [1, 1, 2, 2, 2, 2, 2, 2]

    def test_number_separator(self):
        """Test W4 joins numbers through a single separator."""
        assert levels_of("א 1,2") == [1, 1, 2, 2, 2]

    def test_terminator(self):
        """Test W5 joins a currency sign to its number."""
        assert levels_of("א $12") == [1, 1, 2, 2, 2]

    def test_nsm_after_isolate(self):
        """Test a mark after a PDI does not take the isolate's direction."""
        levels = levels_of("a" + RLI + "ב" + PDI + NSM, ParagraphType.LTR)
        assert levels == [0, 0, 1, 0, 0]

    def test_nsm_takes_previous_type(self):
        """Test a mark on a Hebrew letter in LTR text stays right-to-left."""
        assert levels_of("aב" + NSM, ParagraphType.LTR) == [0, 1, 1]


class TestBracketPairs:
    """Test rule N0."""

    def test_pair_follows_enclosed_direction(self):
        """Test brackets enclosing the opposite direction follow it."""
        assert levels_of("a(b)", ParagraphType.RTL) == [2, 2, 2, 2]

    def test_without_bracket_types(self):
        """Test N0 is skipped when no bracket types are given."""
        assert levels_of("a(b)", ParagraphType.RTL, brackets=False) == [2, 2, 2, 1]

    def test_canonical_equivalents_pair(self):
        """Test U+2329 pairs with U+3009."""
        assert levels_of("a\u2329b\u3009", ParagraphType.RTL) == [2, 2, 2, 2]

    def test_mismatched_brackets_do_not_pair(self):
        """Test a closing bracket of another kind is not a pair."""
        assert levels_of("a(b]", ParagraphType.RTL) == [2, 2, 2, 1]

    def test_bracket_stack_overflow(self):
        """Test pairing stops once 63 brackets are open."""
        text = "a" + "(" * 64 + "b" + ")"
        levels = levels_of(text, ParagraphType.RTL)
        assert levels[-1] == 1

    def test_length_mismatch(self):
        """Test bracket types must match the character types."""
        char_types = classify_sequence("a(b)")
        with pytest.raises(LengthMismatchException):
            resolve_levels(char_types, bracket_pairs("a(", classify_sequence("a(")))


class TestWhitespaceLevels:
    """Test parts 1-3 of rule L1."""

    def test_trailing_whitespace_reset(self):
        """Test trailing spaces take the paragraph level."""
        assert levels_of("abc  ", ParagraphType.RTL) == [2, 2, 2, 1, 1]

    def test_whitespace_before_segment_separator(self):
        """Test whitespace before a tab and the tab itself are reset."""
        assert levels_of("ab \tcd", ParagraphType.RTL) == [2, 2, 1, 1, 2, 2]


class TestDirectionalStatusStack:
    """Test DirectionalStatusStack."""

    def test_push_and_pop(self):
        """Test entries are pushed and popped in order."""
        stack = DirectionalStatusStack(0)
        stack.push(1, None, True)

        assert len(stack) == 2
        assert stack.last.level == 1
        assert stack.last.isolate

        stack.pop()
        assert stack.last.level == 0
        assert stack.last.override is None
