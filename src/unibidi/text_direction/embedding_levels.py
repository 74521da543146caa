"""
Embedding level resolution.

Implements rules P2 to I2 of the Unicode Bidirectional Algorithm, and parts
1 to 3 of L1 (http://www.unicode.org/reports/tr9/). Rule X9 is applied by
skipping the removed characters rather than deleting them; strip_marks()
deletes them from the text. Part 4 of L1 depends on line breaks and is left
to reorder_line().
"""

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from unibidi.utils.exceptions import check_lengths
from unibidi.utils.logging import get_logger

from .brackets import BracketType
from .char_types import CharType
from .levels import (
    MAX_DEPTH,
    EmbeddingLevel,
    least_even_greater_than,
    least_odd_greater_than,
)
from .paragraph import ParagraphType, first_strong_direction

logger = get_logger(__name__)

# BD16: at most 63 unmatched opening brackets are tracked
MAX_BRACKET_STACK_DEPTH = 63

_EMBEDDINGS = {
    CharType.LRE: (False, None),
    CharType.RLE: (True, None),
    CharType.LRO: (False, CharType.L),
    CharType.RLO: (True, CharType.R),
}

_NEUTRAL_OR_ISOLATE = frozenset(
    {
        CharType.B,
        CharType.S,
        CharType.WS,
        CharType.ON,
        CharType.LRI,
        CharType.RLI,
        CharType.FSI,
        CharType.PDI,
    }
)


def _direction_of_level(level: int) -> CharType:
    return CharType.R if level % 2 else CharType.L


def _strong_direction(char_type: CharType) -> Optional[CharType]:
    """L or R as seen by N0/N1, where numbers count as R."""
    if char_type is CharType.L:
        return CharType.L
    if char_type in (CharType.R, CharType.AL, CharType.EN, CharType.AN):
        return CharType.R
    return None


class ResolvedLevels(NamedTuple):
    """Output of resolve_levels()."""

    levels: List[EmbeddingLevel]
    max_level: int  # highest level found plus one
    direction: ParagraphType  # LTR or RTL


class DirectionalStatus(NamedTuple):
    """An entry of the directional status stack."""

    level: int
    override: Optional[CharType]  # None, L or R
    isolate: bool


class DirectionalStatusStack:
    """
    The directional status stack of rules X1-X8.

    Every entry holds a greater level than the one below it, and pushes are
    only made for levels up to MAX_DEPTH, so the stack never holds more than
    MAX_DEPTH + 1 entries.
    """

    def __init__(self, base_level: int) -> None:
        """Initialize the stack with the paragraph entry (X1)."""
        self._entries: List[DirectionalStatus] = [
            DirectionalStatus(base_level, None, False)
        ]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def last(self) -> DirectionalStatus:
        return self._entries[-1]

    def push(self, level: int, override: Optional[CharType], isolate: bool) -> None:
        self._entries.append(DirectionalStatus(level, override, isolate))

    def pop(self) -> DirectionalStatus:
        return self._entries.pop()


class IsolatingRunSequence:
    """
    A chain of level runs connected by matching isolate initiators and PDIs
    (BD13). Weak, neutral and implicit rules are applied to each sequence
    independently.
    """

    def __init__(self, paragraph: "EmbeddingLevelResolver", indexes: List[int]):
        """Initialize the sequence and compute its sos and eos (X10)."""
        self.paragraph = paragraph
        self.indexes = indexes
        self.types = [paragraph.types[index] for index in indexes]
        self.level = paragraph.levels[indexes[0]]

        initial_types = paragraph.initial_types

        previous = indexes[0] - 1
        while previous >= 0 and initial_types[previous].is_removed_by_x9:
            previous -= 1
        previous_level = (
            paragraph.levels[previous] if previous >= 0 else paragraph.base_level
        )
        self.sos = _direction_of_level(max(previous_level, self.level))

        last = indexes[-1]
        if initial_types[last].is_isolate_initiator:
            next_level = paragraph.base_level
        else:
            following = last + 1
            while (
                following < paragraph.length
                and initial_types[following].is_removed_by_x9
            ):
                following += 1
            next_level = (
                paragraph.levels[following]
                if following < paragraph.length
                else paragraph.base_level
            )
        self.eos = _direction_of_level(max(next_level, self.level))

    def resolve(self) -> None:
        self.resolve_weak_types()
        self.resolve_paired_brackets()
        self.resolve_neutral_types()
        self.resolve_implicit_levels()

    def resolve_weak_types(self) -> None:
        """Apply rules W1-W7, each as a left to right pass."""
        types = self.types
        length = len(types)

        # W1. Change each NSM to the type of the previous character, to ON
        # after an isolate initiator or PDI, or to sos at the start.
        for i in range(length):
            if types[i] is CharType.NSM:
                if i == 0:
                    types[i] = self.sos
                elif types[i - 1].is_isolate:
                    types[i] = CharType.ON
                else:
                    types[i] = types[i - 1]

        # W2. EN preceded by AL as the last strong type becomes AN.
        last_strong = self.sos
        for i in range(length):
            if types[i] is CharType.EN:
                if last_strong is CharType.AL:
                    types[i] = CharType.AN
            elif types[i].is_strong:
                last_strong = types[i]

        # W3. AL becomes R.
        for i in range(length):
            if types[i] is CharType.AL:
                types[i] = CharType.R

        # W4. A single ES between two ENs becomes EN; a single CS between
        # two numbers of the same type becomes that type.
        for i in range(1, length - 1):
            before, after = types[i - 1], types[i + 1]
            if types[i] is CharType.ES:
                if before is CharType.EN and after is CharType.EN:
                    types[i] = CharType.EN
            elif types[i] is CharType.CS:
                if before is after and before.is_number:
                    types[i] = before

        # W5. A sequence of ETs adjacent to an EN becomes EN.
        i = 0
        while i < length:
            if types[i] is not CharType.ET:
                i += 1
                continue
            end = i
            while end < length and types[end] is CharType.ET:
                end += 1
            if (i > 0 and types[i - 1] is CharType.EN) or (
                end < length and types[end] is CharType.EN
            ):
                types[i:end] = [CharType.EN] * (end - i)
            i = end

        # W6. Remaining separators and terminators become ON.
        for i in range(length):
            if types[i].is_number_separator_or_terminator:
                types[i] = CharType.ON

        # W7. EN preceded by L as the last strong type becomes L.
        last_strong = self.sos
        for i in range(length):
            if types[i] is CharType.EN:
                if last_strong is CharType.L:
                    types[i] = CharType.L
            elif types[i] in (CharType.L, CharType.R):
                last_strong = types[i]

    def locate_bracket_pairs(self) -> List[Tuple[int, int]]:
        """
        Find bracket pairs in the sequence (BD16).

        Returns:
            (opening, closing) positions within the sequence, sorted by the
            opening position
        """
        bracket_types = self.paragraph.bracket_types
        if bracket_types is None:
            return []

        openers: List[Tuple[int, int]] = []
        pairs: List[Tuple[int, int]] = []

        for position, index in enumerate(self.indexes):
            bracket: BracketType = bracket_types[index]
            if not bracket.is_bracket or self.types[position] is not CharType.ON:
                continue

            if bracket.is_open:
                if len(openers) == MAX_BRACKET_STACK_DEPTH:
                    logger.warning(
                        f"Bracket stack overflow at index {index}, "
                        f"pairing stopped for the rest of the run sequence"
                    )
                    break
                openers.append((bracket.canonical_id, position))
                continue

            for depth in range(len(openers) - 1, -1, -1):
                if openers[depth][0] == bracket.canonical_id:
                    pairs.append((openers[depth][1], position))
                    del openers[depth:]
                    break

        pairs.sort()
        return pairs

    def resolve_paired_brackets(self) -> None:
        """
        Apply rule N0.

        A pair enclosing strong text of the embedding direction takes that
        direction. A pair enclosing only the opposite direction takes it when
        the preceding context agrees, otherwise the embedding direction.
        Pairs enclosing no strong text are left to N1 and N2.
        """
        embedding_direction = _direction_of_level(self.level)

        for opening, closing in self.locate_bracket_pairs():
            found = {
                _strong_direction(char_type)
                for char_type in self.types[opening + 1 : closing]
            }
            found.discard(None)

            if not found:
                continue
            if embedding_direction in found:
                resolved = embedding_direction
            else:
                opposite = found.pop()
                resolved = (
                    opposite
                    if self._preceding_strong_direction(opening) is opposite
                    else embedding_direction
                )

            self._set_bracket_type(opening, resolved)
            self._set_bracket_type(closing, resolved)

    def _preceding_strong_direction(self, position: int) -> CharType:
        for char_type in reversed(self.types[:position]):
            direction = _strong_direction(char_type)
            if direction is not None:
                return direction
        return self.sos

    def _set_bracket_type(self, position: int, char_type: CharType) -> None:
        # NSMs following a bracket follow its new type
        self.types[position] = char_type
        initial_types = self.paragraph.initial_types
        for following in range(position + 1, len(self.indexes)):
            if initial_types[self.indexes[following]] is not CharType.NSM:
                break
            self.types[following] = char_type

    def resolve_neutral_types(self) -> None:
        """Apply rules N1 and N2 to each run of neutrals and isolates."""
        types = self.types
        length = len(types)
        embedding_direction = _direction_of_level(self.level)

        i = 0
        while i < length:
            if types[i] not in _NEUTRAL_OR_ISOLATE:
                i += 1
                continue

            end = i
            while end < length and types[end] in _NEUTRAL_OR_ISOLATE:
                end += 1

            leading = self.sos if i == 0 else _strong_direction(types[i - 1])
            trailing = self.eos if end == length else _strong_direction(types[end])

            # N1. Neutrals between two strong types of the same direction
            # take it. N2. Others take the embedding direction.
            resolved = leading if leading is trailing else embedding_direction
            types[i:end] = [resolved] * (end - i)
            i = end

    def resolve_implicit_levels(self) -> None:
        """Apply rules I1 and I2 and write the results to the paragraph."""
        levels = self.paragraph.levels
        resolved_types = self.paragraph.types

        for char_type, index in zip(self.types, self.indexes):
            level = self.level
            if level % 2 == 0:
                # I1
                if char_type is CharType.R:
                    level += 1
                elif char_type.is_number:
                    level += 2
            elif char_type is CharType.L or char_type.is_number:
                # I2
                level += 1

            levels[index] = level
            resolved_types[index] = char_type


class EmbeddingLevelResolver:
    """
    Resolves the embedding levels of one paragraph.

    An instance holds the working state of a single resolution and is not
    reused.
    """

    def __init__(
        self,
        char_types: Sequence[CharType],
        bracket_types: Optional[Sequence[BracketType]] = None,
        direction: ParagraphType = ParagraphType.ON,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            char_types: Bidi types of the paragraph's characters
            bracket_types: Bracket types from bracket_pairs(), enabling N0
            direction: Requested paragraph direction

        Raises:
            LengthMismatchException: if bracket_types and char_types differ
                in length
        """
        check_lengths(char_types=char_types, bracket_types=bracket_types)

        self.initial_types: List[CharType] = list(char_types)
        self.bracket_types: Optional[List[BracketType]] = (
            list(bracket_types) if bracket_types is not None else None
        )
        self.direction = direction
        self.length = len(self.initial_types)

        self.types: List[CharType] = list(self.initial_types)
        self.base_level = 0
        self.levels: List[int] = []
        self.matching_pdi: List[int] = []
        self.matching_initiator: List[int] = []

    def resolve(self) -> ResolvedLevels:
        """Run the resolution rules and return the levels."""
        # P2, P3
        self.base_level = self._determine_paragraph_level()
        self.levels = [self.base_level] * self.length

        # BD9
        self._match_isolates()

        # X1-X8
        self._compute_explicit_levels()

        # X9, X10. Sequences are all built before any is resolved, since
        # sos and eos depend on the explicit levels of their neighbours.
        sequences = self._isolating_run_sequences()
        for sequence in sequences:
            sequence.resolve()

        self._assign_levels_to_removed_characters()

        # L1, parts 1-3
        self._reset_whitespace_levels()

        max_level = max([self.base_level, *self.levels]) + 1
        direction = ParagraphType.from_level(self.base_level)

        logger.debug(
            f"Resolved {self.length} embedding levels in {len(sequences)} "
            f"run sequences, paragraph level {self.base_level}, "
            f"max level {max_level}"
        )

        return ResolvedLevels(
            levels=[EmbeddingLevel(level) for level in self.levels],
            max_level=max_level,
            direction=direction,
        )

    def _determine_paragraph_level(self) -> int:
        if self.direction is ParagraphType.LTR:
            return 0
        if self.direction is ParagraphType.RTL:
            return 1

        found = first_strong_direction(self.initial_types)
        if found is not None:
            return 1 if found is ParagraphType.RTL else 0

        # No strong character: fall back to the weak hint, else LTR
        return 1 if self.direction is ParagraphType.WRTL else 0

    def _match_isolates(self) -> None:
        """Pair each isolate initiator with its matching PDI (BD9)."""
        self.matching_pdi = [-1] * self.length
        self.matching_initiator = [-1] * self.length

        open_initiators: List[int] = []
        for index, char_type in enumerate(self.initial_types):
            if char_type.is_isolate_initiator:
                open_initiators.append(index)
            elif char_type is CharType.PDI and open_initiators:
                initiator = open_initiators.pop()
                self.matching_pdi[initiator] = index
                self.matching_initiator[index] = initiator
            elif char_type is CharType.B:
                open_initiators.clear()

    def _apply_status(self, index: int, status: DirectionalStatus) -> None:
        # X6: take the current level, and the override direction if any
        self.levels[index] = status.level
        if status.override is not None:
            self.types[index] = status.override

    def _compute_explicit_levels(self) -> None:
        """Apply rules X1-X8."""
        stack = DirectionalStatusStack(self.base_level)
        overflow_isolates = 0
        overflow_embeddings = 0
        valid_isolates = 0

        for index, char_type in enumerate(self.initial_types):
            if char_type in _EMBEDDINGS:
                # X2-X5. Push the next level of the requested parity unless
                # it would exceed MAX_DEPTH or an overflow is pending.
                is_rtl, override = _EMBEDDINGS[char_type]
                current = stack.last.level
                new_level = (
                    least_odd_greater_than(current)
                    if is_rtl
                    else least_even_greater_than(current)
                )
                if (
                    new_level <= MAX_DEPTH
                    and overflow_isolates == 0
                    and overflow_embeddings == 0
                ):
                    stack.push(new_level, override, False)
                elif overflow_isolates == 0:
                    overflow_embeddings += 1
                self.levels[index] = stack.last.level

            elif char_type.is_isolate_initiator:
                # X5a-X5c
                self._apply_status(index, stack.last)
                if char_type is CharType.FSI:
                    end = self.matching_pdi[index]
                    found = first_strong_direction(
                        self.initial_types,
                        index + 1,
                        end if end >= 0 else self.length,
                    )
                    is_rtl = found is ParagraphType.RTL
                else:
                    is_rtl = char_type is CharType.RLI

                current = stack.last.level
                new_level = (
                    least_odd_greater_than(current)
                    if is_rtl
                    else least_even_greater_than(current)
                )
                if (
                    new_level <= MAX_DEPTH
                    and overflow_isolates == 0
                    and overflow_embeddings == 0
                ):
                    valid_isolates += 1
                    stack.push(new_level, None, True)
                else:
                    overflow_isolates += 1

            elif char_type is CharType.PDI:
                # X6a. Close the overflowed isolate, or pop back through the
                # last valid one. A PDI matching nothing changes nothing.
                if overflow_isolates > 0:
                    overflow_isolates -= 1
                elif valid_isolates > 0:
                    overflow_embeddings = 0
                    while not stack.last.isolate:
                        stack.pop()
                    stack.pop()
                    valid_isolates -= 1
                self._apply_status(index, stack.last)

            elif char_type is CharType.PDF:
                # X7
                if overflow_isolates > 0:
                    pass
                elif overflow_embeddings > 0:
                    overflow_embeddings -= 1
                elif not stack.last.isolate and len(stack) >= 2:
                    stack.pop()
                self.levels[index] = stack.last.level

            elif char_type is CharType.B:
                # X8
                self.levels[index] = self.base_level

            elif char_type is CharType.BN:
                self.levels[index] = stack.last.level

            else:
                # X6
                self._apply_status(index, stack.last)

    def _level_runs(self) -> List[List[int]]:
        """Split the characters X9 keeps into runs of equal level (BD7)."""
        runs: List[List[int]] = []
        current: List[int] = []
        current_level = -1

        for index in range(self.length):
            if self.initial_types[index].is_removed_by_x9:
                continue
            if current and self.levels[index] != current_level:
                runs.append(current)
                current = []
            current.append(index)
            current_level = self.levels[index]

        if current:
            runs.append(current)
        return runs

    def _isolating_run_sequences(self) -> List[IsolatingRunSequence]:
        runs = self._level_runs()
        run_starting_at: Dict[int, List[int]] = {run[0]: run for run in runs}

        sequences = []
        for run in runs:
            first = run[0]
            if (
                self.initial_types[first] is CharType.PDI
                and self.matching_initiator[first] >= 0
            ):
                # Continues the sequence of its isolate initiator
                continue

            indexes = list(run)
            while True:
                last = indexes[-1]
                if not self.initial_types[last].is_isolate_initiator:
                    break
                next_run = run_starting_at.get(self.matching_pdi[last])
                if next_run is None:
                    break
                indexes.extend(next_run)

            sequences.append(IsolatingRunSequence(self, indexes))

        return sequences

    def _assign_levels_to_removed_characters(self) -> None:
        # Characters X9 ignored take the level of the preceding character
        for index in range(self.length):
            if self.initial_types[index].is_removed_by_x9:
                self.levels[index] = (
                    self.levels[index - 1] if index > 0 else self.base_level
                )

    def _reset_whitespace_levels(self) -> None:
        """
        L1. Reset to the paragraph level: segment and paragraph separators,
        and any sequence of whitespace, isolate formatting characters and
        characters removed by X9 preceding a separator or the end of the
        paragraph. Original types are used.
        """
        reset = True
        for index in range(self.length - 1, -1, -1):
            char_type = self.initial_types[index]
            if char_type.is_separator:
                self.levels[index] = self.base_level
                reset = True
            elif char_type.is_trailing_whitespace:
                if reset:
                    self.levels[index] = self.base_level
            else:
                reset = False


def resolve_levels(
    char_types: Sequence[CharType],
    bracket_types: Optional[Sequence[BracketType]] = None,
    direction: ParagraphType = ParagraphType.ON,
) -> ResolvedLevels:
    """
    Get the bidi embedding levels of a paragraph.

    Malformed or unbalanced explicit formatting is never an error: it is
    resolved by the overflow and no-op rules of X1-X8.

    Args:
        char_types: Bidi types, as returned by classify_sequence()
        bracket_types: Bracket types, as returned by bracket_pairs(); when
            omitted rule N0 is skipped
        direction: Requested paragraph direction; ON, WLTR and WRTL let the
            text decide

    Returns:
        Levels, maximum level plus one, and the resolved direction (LTR or
        RTL)

    Raises:
        LengthMismatchException: if bracket_types and char_types differ in
            length
    """
    return EmbeddingLevelResolver(char_types, bracket_types, direction).resolve()
