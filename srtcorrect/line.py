"""
Line scanning: find the words in a line of subtitle text and correct each.

A word starts at a letter and runs over letters and apostrophes. Anything
else (digits, punctuation, timestamps, a leading apostrophe) is copied
through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from srtcorrect.word import CorrectionResult, WordCorrector


@dataclass
class LineResult:
    """A corrected line and the outcome for every word found in it."""

    original_text: str
    text: str
    words: list[CorrectionResult] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def corrections(self) -> list[CorrectionResult]:
        """Results for the words that were changed, in line order."""
        return [w for w in self.words if w.corrected]

    @property
    def was_modified(self) -> bool:
        return self.text != self.original_text


def correct_line(line: str, corrector: WordCorrector) -> LineResult:
    """
    Correct every word in ``line``.

    Args:
        line: One line of text, without its line terminator.
        corrector: The word corrector to apply.

    Returns:
        LineResult with the corrected text. Its length always equals
        the input's.

    Example:
        >>> correct_line("lt'II be a IoveIy day.", WordCorrector()).text
        "It'll be a lovely day."
    """
    buffer = list(line)
    words: list[CorrectionResult] = []

    i = 0
    while i < len(buffer):
        if buffer[i].isalpha():
            i, result = corrector.process(buffer, i)
            words.append(result)
        else:
            i += 1

    return LineResult(original_text=line, text="".join(buffer), words=words)
