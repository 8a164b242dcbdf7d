"""
Word-level correction of l/I confusions.

OCR tools reading image subtitles regularly confuse lower case "l" with
upper case "I": "Isn't" comes out as "lsn't", "[SINGING]" as "[SlNGlNG]".
This module looks at one word at a time, a maximal run of letters and
embedded apostrophes, and rewrites the confused letters in place.

The rules run in a fixed order, each on the buffer as left by the
previous one:

1. ``'II`` at the end of a word becomes ``'ll`` ("It'II" -> "It'll")
2. ``l'`` at the start of a word becomes ``I'`` ("l'm" -> "I'm")
3. bulk mismatch: a mostly lower case word loses its inner I's, or an
   upper case word with stray l's gets them capitalised
4. initial letter: ``l<consonant>`` -> ``I...``, ``I<vowel>`` -> ``l...``
   on otherwise lower case words
5. dictionary substitution, only when nothing above changed the word

Words registered as exception cases in the dictionary skip all of it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableSequence
from dataclasses import dataclass

from srtcorrect.dictionary import ExceptionDictionary

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

UPPER_I = "I"
LOWER_L = "l"
APOSTROPHE = "'"

VOWELS = frozenset("aeiouAEIOU")
CONSONANTS = frozenset("bcdfghjklmnpqrstvwxyzBCDFGHJKLMNPQRSTVWXYZ")


def is_word_char(ch: str) -> bool:
    """True for characters that belong to a word: letters and apostrophes."""
    return ch.isalpha() or ch == APOSTROPHE


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class WordStatistics:
    """Letter counts for one word, gathered before any rule runs."""

    upper_count: int = 0
    lower_count: int = 0
    apostrophe_count: int = 0
    l_count: int = 0
    I_count: int = 0  # Upper case I's after the first character only

    @property
    def length(self) -> int:
        return self.upper_count + self.lower_count + self.apostrophe_count


@dataclass(frozen=True)
class CorrectionResult:
    """Outcome of processing one word."""

    original_word: str
    corrected_word: str
    corrected: bool

    def __str__(self) -> str:
        return f"{self.original_word}={self.corrected_word}"


@dataclass
class WordContext:
    """
    Mutable state threaded through the rule chain for one word.

    Attributes:
        buffer: The line being corrected, one character per item.
        first: Index of the first character of the word.
        current: Index just past the last character of the word.
        stats: Statistics of the word as originally read.
        corrected: Latches to True on the first character changed.
    """

    buffer: MutableSequence[str]
    first: int
    current: int
    stats: WordStatistics
    corrected: bool = False

    @property
    def length(self) -> int:
        return self.current - self.first

    def char(self, index: int) -> str:
        return self.buffer[index]

    def text(self) -> str:
        return "".join(self.buffer[self.first : self.current])

    def convert(self, index: int, letter: str) -> None:
        """Replace the character at ``index`` and mark the word corrected."""
        before = self.buffer[index]
        self.buffer[index] = letter
        self.corrected = True
        logger.debug("%s->%s @ %d", before, letter, index)


def gather_statistics(buffer: MutableSequence[str], first: int) -> tuple[int, WordStatistics]:
    """
    Scan the word starting at ``first`` and count its letters.

    Returns:
        (current, stats) where ``current`` is the index of the first
        character that is neither a letter nor an apostrophe, or
        ``len(buffer)``.
    """
    upper = lower = apostrophes = ells = eyes = 0
    current = first
    while current < len(buffer) and is_word_char(buffer[current]):
        ch = buffer[current]
        if ch.isupper():
            upper += 1
            # An I in first position may be the pronoun or start a sentence
            if current != first and ch == UPPER_I:
                eyes += 1
        elif ch == APOSTROPHE:
            apostrophes += 1
        else:
            lower += 1
            if ch == LOWER_L:
                ells += 1
        current += 1

    stats = WordStatistics(
        upper_count=upper,
        lower_count=lower,
        apostrophe_count=apostrophes,
        l_count=ells,
        I_count=eyes,
    )
    return current, stats


# =============================================================================
# RULES
# =============================================================================


def fix_apostrophe_double_i(ctx: WordContext) -> bool:
    """Words ending in 'II are almost always contractions ending in 'll."""
    if ctx.length <= 2:
        return False
    end = ctx.current
    if (ctx.char(end - 3), ctx.char(end - 2), ctx.char(end - 1)) != (APOSTROPHE, UPPER_I, UPPER_I):
        return False
    logger.debug("fixing apostrophe II")
    ctx.convert(end - 2, LOWER_L)
    ctx.convert(end - 1, LOWER_L)
    return True


def fix_leading_l_apostrophe(ctx: WordContext) -> bool:
    """A word starting with l' is the pronoun: I'm, I'd, I've."""
    if ctx.length <= 2:
        return False
    if ctx.char(ctx.first) != LOWER_L or ctx.char(ctx.first + 1) != APOSTROPHE:
        return False
    logger.debug("fixing l apostrophe")
    ctx.convert(ctx.first, UPPER_I)
    return True


def fix_case_mismatch(ctx: WordContext) -> bool:
    """
    Rewrite every l or I in the word based on its overall case profile.

    A word that is lower case apart from some I's (the first character
    is allowed to be upper case) has its I's turned into l's. Otherwise
    a word made only of upper case letters and l's has its l's turned
    into I's. The I check wins when both would apply.
    """
    stats = ctx.stats
    changed = False

    if stats.I_count > 0 and (
        stats.I_count + stats.lower_count + stats.apostrophe_count >= ctx.length - 1
    ):
        logger.debug("fixing upper I")
        # The first letter may be the pronoun or the start of a sentence
        for i in range(ctx.first + 1, ctx.current):
            if ctx.char(i) == UPPER_I:
                ctx.convert(i, LOWER_L)
                changed = True

    elif stats.l_count > 0 and stats.l_count + stats.upper_count == ctx.length:
        logger.debug("fixing lower l")
        for i in range(ctx.first, ctx.current):
            if ctx.char(i) == LOWER_L:
                ctx.convert(i, UPPER_I)
                changed = True

    return changed


def fix_initial_letter(ctx: WordContext) -> bool:
    """
    Fix the first letter of an otherwise lower case word.

    ``l<consonant>`` becomes ``I<consonant>`` ("lf" -> "If") and
    ``I<vowel>`` becomes ``l<vowel>`` ("Iast" -> "last"). Must run after
    fix_case_mismatch, which clears out inner I's first.
    """
    initial = ctx.char(ctx.first)
    if ctx.length <= 1 or initial not in (LOWER_L, UPPER_I):
        return False

    for i in range(ctx.first + 1, ctx.current):
        if ctx.char(i).isupper():
            logger.debug("found upper %s@%d", ctx.char(i), i)
            return False

    second = ctx.char(ctx.first + 1)
    if initial == LOWER_L and second in CONSONANTS:
        logger.debug("fixing initial l")
        ctx.convert(ctx.first, UPPER_I)
        return True
    if initial == UPPER_I and second in VOWELS:
        logger.debug("fixing initial I")
        ctx.convert(ctx.first, LOWER_L)
        return True
    return False


Rule = Callable[[WordContext], bool]

RULES: tuple[Rule, ...] = (
    fix_apostrophe_double_i,
    fix_leading_l_apostrophe,
    fix_case_mismatch,
    fix_initial_letter,
)


# =============================================================================
# WORD CORRECTOR
# =============================================================================


class WordCorrector:
    """
    Applies the l/I rule chain to words inside a line buffer.

    The corrector holds no per-word state; one instance can process any
    number of words and lines.

    Attributes:
        dictionary: Exception cases and whole-word substitutions.

    Example:
        >>> corrector = WordCorrector(ExceptionDictionary.load())
        >>> buffer = list("[SlNGlNG]")
        >>> current, result = corrector.process(buffer, 1)
        >>> current, result.corrected_word
        (8, 'SINGING')
        >>> "".join(buffer)
        '[SINGING]'
    """

    def __init__(self, dictionary: ExceptionDictionary | None = None) -> None:
        self.dictionary = dictionary if dictionary is not None else ExceptionDictionary.empty()

    def process(self, buffer: MutableSequence[str], first: int) -> tuple[int, CorrectionResult]:
        """
        Correct the word starting at ``first`` in place.

        Only characters inside the word are ever changed, and only by
        substitution, so the buffer keeps its length.

        Args:
            buffer: The line, one character per item.
            first: Index of the first letter of the word.

        Returns:
            (current, result) where ``current`` is the index just past
            the word.

        Raises:
            ValueError: If ``first`` does not index a letter.
        """
        if not 0 <= first < len(buffer) or not buffer[first].isalpha():
            raise ValueError(f"index {first} does not start a word")

        current, stats = gather_statistics(buffer, first)
        ctx = WordContext(buffer=buffer, first=first, current=current, stats=stats)
        original = ctx.text()
        logger.debug(
            "=> %s (@:%d, X:%d, x:%d, I:%d, l:%d, ':%d)",
            original,
            first,
            stats.upper_count,
            stats.lower_count,
            stats.I_count,
            stats.l_count,
            stats.apostrophe_count,
        )

        if not self.dictionary.is_exception(original):
            for rule in RULES:
                rule(ctx)
            if not ctx.corrected:
                self._substitute(ctx, original)

        corrected_word = ctx.text() if ctx.corrected else original
        if ctx.corrected:
            logger.debug("=> fixed: %s", corrected_word)
        return current, CorrectionResult(original, corrected_word, ctx.corrected)

    def correct_word(self, word: str) -> CorrectionResult:
        """
        Correct a standalone word.

        Example:
            >>> WordCorrector().correct_word("IoveIy").corrected_word
            'lovely'
        """
        buffer = list(word)
        current, result = self.process(buffer, 0)
        if current != len(buffer):
            raise ValueError(f"{word!r} is not a single word")
        return result

    def _substitute(self, ctx: WordContext, original: str) -> None:
        replacement = self.dictionary.lookup(original)
        if replacement is None:
            return
        for offset, letter in enumerate(replacement):
            if ctx.char(ctx.first + offset) != letter:
                ctx.convert(ctx.first + offset, letter)
