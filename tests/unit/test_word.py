"""
Tests for word-level l/I correction.

The phrase below collects OCR mistakes seen in ripped subtitles; each test
corrects one word of it in context.
"""

import pytest

from srtcorrect.dictionary import ExceptionDictionary
from srtcorrect.word import (
    CorrectionResult,
    WordContext,
    WordCorrector,
    fix_apostrophe_double_i,
    fix_case_mismatch,
    fix_initial_letter,
    fix_leading_l_apostrophe,
    gather_statistics,
)

PHRASE = (
    "[SlNGlNG] lsn't it a IoveIy day to get caught in the rain. "
    "NeaI's l'm l'II lt'II Well All Ioad lnitially This'II seIection Iast lf"
)


def make_context(word: str) -> WordContext:
    buffer = list(word)
    current, stats = gather_statistics(buffer, 0)
    return WordContext(buffer=buffer, first=0, current=current, stats=stats)


# =============================================================================
# PHRASE CORPUS
# =============================================================================


class TestPhraseCorpus:
    """Each word corrected in place inside the phrase, with its statistics."""

    @pytest.mark.parametrize(
        "word,expected,lower,upper,ell,eye,apos,corrected",
        [
            ("a", "a", 1, 0, 0, 0, 0, False),
            ("Well", "Well", 3, 1, 2, 0, 0, False),
            ("seIection", "selection", 8, 1, 0, 1, 0, True),
            ("NeaI's", "Neal's", 3, 2, 0, 1, 1, True),
            ("SlNGlNG", "SINGING", 2, 5, 2, 0, 0, True),
            ("lsn't", "Isn't", 4, 0, 1, 0, 1, True),
            ("Iast", "last", 3, 1, 0, 0, 0, True),
            ("IoveIy", "lovely", 4, 2, 0, 1, 0, True),
            ("lnitially", "Initially", 9, 0, 3, 0, 0, True),
            ("lf", "If", 2, 0, 1, 0, 0, True),
            ("lt'II", "It'll", 2, 2, 1, 2, 1, True),
            ("This'II", "This'll", 3, 3, 0, 2, 1, True),
            ("l'm", "I'm", 2, 0, 1, 0, 1, True),
            ("l'II", "I'll", 1, 2, 1, 2, 1, True),
            ("All", "All", 2, 1, 2, 0, 0, False),
        ],
    )
    def test_word_in_phrase(
        self, corrector, word, expected, lower, upper, ell, eye, apos, corrected
    ):
        """The word is corrected in place and nothing around it changes."""
        buffer = list(PHRASE)
        first = PHRASE.index(word)

        current, stats = gather_statistics(list(PHRASE), first)
        assert stats.lower_count == lower, f"Wrong lower count for {word}"
        assert stats.upper_count == upper, f"Wrong upper count for {word}"
        assert stats.l_count == ell, f"Wrong l count for {word}"
        assert stats.I_count == eye, f"Wrong I count for {word}"
        assert stats.apostrophe_count == apos, f"Wrong ' count for {word}"

        beyond, result = corrector.process(buffer, first)
        assert beyond == first + len(word)
        assert result.corrected is corrected
        assert result.original_word == word
        assert result.corrected_word == expected
        assert "".join(buffer[first:beyond]) == expected
        assert buffer[:first] == list(PHRASE[:first])
        assert buffer[beyond:] == list(PHRASE[beyond:])


# =============================================================================
# STATISTICS
# =============================================================================


class TestGatherStatistics:
    """Tests for the statistics pass."""

    def test_counts_add_up_to_length(self):
        """Upper, lower and apostrophe counts cover every character."""
        current, stats = gather_statistics(list("Don't-stop"), 0)
        assert current == 5
        assert stats.length == 5
        assert stats.upper_count + stats.lower_count + stats.apostrophe_count == 5

    def test_leading_I_not_counted(self):
        """An I in first position is neither the pronoun nor a misread l."""
        _, stats = gather_statistics(list("I'II"), 0)
        assert stats.I_count == 2
        assert stats.upper_count == 3

    def test_stops_at_end_of_buffer(self):
        """A word running to the end of the line ends at len(buffer)."""
        current, _ = gather_statistics(list("say hello"), 4)
        assert current == 9

    def test_stops_at_digits_and_punctuation(self):
        """Digits end a word just like punctuation."""
        current, _ = gather_statistics(list("abc1def"), 0)
        assert current == 3

    def test_non_ascii_letters_are_word_characters(self):
        """Letters are classified with str.isalpha, not an ASCII range."""
        current, stats = gather_statistics(list("café au"), 0)
        assert current == 4
        assert stats.lower_count == 4


# =============================================================================
# INDIVIDUAL RULES
# =============================================================================


class TestRules:
    """Each rule in isolation."""

    def test_apostrophe_double_i(self):
        ctx = make_context("We'II")
        assert fix_apostrophe_double_i(ctx)
        assert ctx.text() == "We'll"
        assert ctx.corrected

    def test_apostrophe_double_i_too_short(self):
        """'II needs at least three characters to match."""
        ctx = make_context("II")
        assert not fix_apostrophe_double_i(ctx)
        assert not ctx.corrected

    def test_leading_l_apostrophe(self):
        ctx = make_context("l've")
        assert fix_leading_l_apostrophe(ctx)
        assert ctx.text() == "I've"

    def test_leading_l_apostrophe_needs_three_characters(self):
        ctx = make_context("l'")
        assert not fix_leading_l_apostrophe(ctx)

    def test_mismatch_lowercases_inner_I(self):
        ctx = make_context("heIIo")
        assert fix_case_mismatch(ctx)
        assert ctx.text() == "hello"

    def test_mismatch_keeps_first_I(self):
        """The first letter is never lowered by the bulk fix."""
        ctx = make_context("IsIand")
        assert fix_case_mismatch(ctx)
        assert ctx.text() == "Island"

    def test_mismatch_uppercases_l_in_caps_word(self):
        ctx = make_context("WHlSPERlNG")
        assert fix_case_mismatch(ctx)
        assert ctx.text() == "WHISPERING"

    def test_mismatch_I_branch_takes_precedence(self):
        """A word matching both branches only gets its I's lowered."""
        ctx = make_context("AlI")
        assert ctx.stats.l_count + ctx.stats.upper_count == ctx.length
        assert fix_case_mismatch(ctx)
        assert ctx.text() == "All"

    def test_mismatch_mixed_case_untouched(self):
        """Too many other capitals: no bulk fix."""
        ctx = make_context("McDonaId")
        assert not fix_case_mismatch(ctx)
        assert ctx.text() == "McDonaId"

    def test_initial_l_before_consonant(self):
        ctx = make_context("lt")
        assert fix_initial_letter(ctx)
        assert ctx.text() == "It"

    def test_initial_I_before_vowel(self):
        ctx = make_context("Iook")
        assert fix_initial_letter(ctx)
        assert ctx.text() == "look"

    @pytest.mark.parametrize("word", ["love", "Into", "I", "l", "IT", "lOVE"])
    def test_initial_letter_ambiguous_cases(self, word):
        """l+vowel, I+consonant, single letters and capitalised rests are left alone."""
        ctx = make_context(word)
        assert not fix_initial_letter(ctx)
        assert ctx.text() == word


# =============================================================================
# WORD CORRECTOR
# =============================================================================


class TestWordCorrector:
    """Tests for the full rule chain."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("SlNGlNG", "SINGING"),
            ("IoveIy", "lovely"),
            ("lnitially", "Initially"),
            ("lt'II", "It'll"),
            ("wiII", "will"),
            ("CIub", "Club"),
            ("AIl", "All"),
            ("l'd", "I'd"),
            ("lce", "Ice"),
        ],
    )
    def test_corrections(self, corrector, word, expected):
        result = corrector.correct_word(word)
        assert result.corrected
        assert result.corrected_word == expected

    @pytest.mark.parametrize("word", ["the", "rain", "Sunday", "DON'T", "won't", "x"])
    def test_words_without_l_or_I_unchanged(self, corrector, word):
        """Words with no l, no I and no dictionary entry are never touched."""
        result = corrector.correct_word(word)
        assert not result.corrected
        assert result.corrected_word == word

    @pytest.mark.parametrize(
        "word",
        ["SlNGlNG", "IoveIy", "lnitially", "lt'II", "This'II", "l'II", "NeaI's", "seIection", "lsn't"],
    )
    def test_corrections_are_fixed_points(self, corrector, word):
        """Correcting an already corrected word changes nothing."""
        once = corrector.correct_word(word).corrected_word
        twice = corrector.correct_word(once)
        assert not twice.corrected
        assert twice.corrected_word == once

    def test_length_never_changes(self, corrector):
        """Corrections only substitute letters."""
        for word in PHRASE.replace(".", " ").replace("[", " ").replace("]", " ").split():
            result = corrector.correct_word(word)
            assert len(result.corrected_word) == len(word)

    def test_rules_apply_to_mutated_word(self, corrector):
        """'II is fixed before the initial l is examined."""
        result = corrector.correct_word("lt'II")
        assert result.corrected_word == "It'll"

    def test_exception_blocks_every_rule(self):
        """A registered exception is passed through even if it matches a rule."""
        corrector = WordCorrector(ExceptionDictionary.from_mapping({"SlNGlNG": "", "lf": ""}))
        for word in ("SlNGlNG", "lf"):
            result = corrector.correct_word(word)
            assert not result.corrected
            assert result.corrected_word == word

    def test_exception_blocks_substitution(self):
        """Exception entries never reach the dictionary fallback."""
        corrector = WordCorrector(ExceptionDictionary.from_mapping({"All": ""}))
        assert corrector.correct_word("All") == CorrectionResult("All", "All", False)

    def test_dictionary_substitution(self, corrector):
        """Words no heuristic reaches are fixed from the dictionary."""
        assert corrector.correct_word("lan") == CorrectionResult("lan", "Ian", True)
        assert corrector.correct_word("l'") == CorrectionResult("l'", "I'", True)

    def test_lone_l_fixed_by_heuristics(self):
        """A lone l is all l's and capitals, so the bulk fix raises it."""
        corrector = WordCorrector()
        assert corrector.correct_word("l") == CorrectionResult("l", "I", True)

    def test_dictionary_only_when_no_rule_fired(self):
        """The fallback does not run after a heuristic correction."""
        corrector = WordCorrector(ExceptionDictionary.from_mapping({"lf": "Of"}))
        assert corrector.correct_word("lf").corrected_word == "If"

    def test_dictionary_lookup_is_case_sensitive(self):
        corrector = WordCorrector(ExceptionDictionary.from_mapping({"lan": "Ian"}))
        assert corrector.correct_word("lan").corrected_word == "Ian"
        assert not corrector.correct_word("Lan").corrected

    def test_empty_dictionary_uses_heuristics_only(self):
        corrector = WordCorrector()
        assert corrector.correct_word("All").corrected_word == "AII"
        assert not corrector.correct_word("lan").corrected

    def test_first_must_be_a_letter(self, corrector):
        with pytest.raises(ValueError):
            corrector.process(list(" word"), 0)
        with pytest.raises(ValueError):
            corrector.process(list("'tis"), 0)
        with pytest.raises(ValueError):
            corrector.process(list("word"), 4)

    def test_correct_word_rejects_phrases(self, corrector):
        with pytest.raises(ValueError):
            corrector.correct_word("two words")

    def test_result_str_is_log_format(self, corrector):
        assert str(corrector.correct_word("lf")) == "lf=If"
