"""Test paragraph direction and splitting."""

from unibidi.text_direction import (
    CharType,
    ParagraphType,
    classify_sequence,
    paragraph_direction,
    split_paragraphs,
)
from unibidi.text_direction.paragraph import trailing_separator


class TestParagraphDirection:
    """Test paragraph_direction()."""

    def test_first_strong_character(self):
        """Test the first strong character decides."""
        assert paragraph_direction(classify_sequence("abc א")) is ParagraphType.LTR
        assert paragraph_direction(classify_sequence("123 אbc")) is ParagraphType.RTL
        assert paragraph_direction(classify_sequence("ا")) is ParagraphType.RTL

    def test_no_strong_character(self):
        """Test ON is returned when nothing decides."""
        assert paragraph_direction(classify_sequence("123 !?")) is ParagraphType.ON
        assert paragraph_direction([]) is ParagraphType.ON

    def test_isolates_are_skipped(self):
        """Test characters inside an isolate do not count."""
        char_types = [CharType.FSI, CharType.R, CharType.PDI, CharType.L]
        assert paragraph_direction(char_types) is ParagraphType.LTR

    def test_nested_isolates(self):
        """Test nesting depth is tracked."""
        char_types = [
            CharType.RLI,
            CharType.LRI,
            CharType.L,
            CharType.PDI,
            CharType.R,
            CharType.PDI,
            CharType.AL,
        ]
        assert paragraph_direction(char_types) is ParagraphType.RTL

    def test_unterminated_isolate(self):
        """Test an isolate without PDI hides the rest of the text."""
        char_types = [CharType.LRI, CharType.R]
        assert paragraph_direction(char_types) is ParagraphType.ON

    def test_stops_at_paragraph_separator(self):
        """Test the scan ends at a paragraph separator."""
        char_types = [CharType.WS, CharType.B, CharType.R]
        assert paragraph_direction(char_types) is ParagraphType.ON


class TestParagraphType:
    """Test ParagraphType helpers."""

    def test_weaken(self):
        """Test strong directions weaken, others are unchanged."""
        assert ParagraphType.LTR.weaken() is ParagraphType.WLTR
        assert ParagraphType.RTL.weaken() is ParagraphType.WRTL
        assert ParagraphType.ON.weaken() is ParagraphType.ON

    def test_from_level(self):
        """Test odd levels are right-to-left."""
        assert ParagraphType.from_level(0) is ParagraphType.LTR
        assert ParagraphType.from_level(1) is ParagraphType.RTL

    def test_predicates(self):
        """Test weak and strong predicates."""
        assert ParagraphType.WRTL.is_weak
        assert ParagraphType.WRTL.is_rtl
        assert ParagraphType.LTR.is_strong
        assert not ParagraphType.ON.is_strong


class TestSplitParagraphs:
    """Test split_paragraphs()."""

    def test_separator_kept_with_paragraph(self):
        """Test each separator stays with the paragraph it ends."""
        assert split_paragraphs("ab\ncd") == ["ab\n", "cd"]
        assert split_paragraphs("ab\u2029") == ["ab\u2029"]

    def test_empty_text(self):
        """Test empty text has no paragraphs."""
        assert split_paragraphs("") == []

    def test_segment_separator_does_not_split(self):
        """Test tabs stay inside a paragraph."""
        assert split_paragraphs("a\tb") == ["a\tb"]

    def test_crlf_is_one_separator(self):
        """Test CR LF closes a single paragraph."""
        assert split_paragraphs("ab\r\ncd") == ["ab\r\n", "cd"]
        assert split_paragraphs("ab\r\n") == ["ab\r\n"]

    def test_lone_carriage_returns_split(self):
        """Test CR without LF is a separator of its own."""
        assert split_paragraphs("a\r\rb") == ["a\r", "\r", "b"]
        assert split_paragraphs("ab\r") == ["ab\r"]
        assert split_paragraphs("a\n\r\nb") == ["a\n", "\r\n", "b"]


class TestTrailingSeparator:
    """Test trailing_separator()."""

    def test_separators(self):
        """Test the separator at the end of each paragraph is found."""
        assert trailing_separator("ab\r\n") == "\r\n"
        assert trailing_separator("ab\n") == "\n"
        assert trailing_separator("\r") == "\r"
        assert trailing_separator("ab\u2029") == "\u2029"

    def test_no_separator(self):
        """Test the last paragraph of a text may have none."""
        assert trailing_separator("ab") == ""
        assert trailing_separator("") == ""
