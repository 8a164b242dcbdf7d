"""
Run statistics, the corrections log, and console reporting.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from srtcorrect.line import LineResult

logger = logging.getLogger(__name__)


# =============================================================================
# TALLY
# =============================================================================


@dataclass
class CorrectionTally:
    """
    Counts for one file and the distinct corrections made in it.

    ``corrections`` keeps the first correction seen for each original
    word; later occurrences only add to the counts.
    """

    lines_scanned: int = 0
    words_scanned: int = 0
    words_corrected: int = 0
    corrections: dict[str, str] = field(default_factory=dict)

    def record_line(self, result: LineResult) -> None:
        self.lines_scanned += 1
        self.words_scanned += result.word_count
        for word in result.corrections:
            self.words_corrected += 1
            self.corrections.setdefault(word.original_word, word.corrected_word)

    def record_unprocessed_line(self) -> None:
        """Count a line that was passed through without correction."""
        self.lines_scanned += 1

    def sorted_corrections(self) -> list[tuple[str, str]]:
        return sorted(self.corrections.items())

    def log_lines(self) -> list[str]:
        """Corrections as ``original=corrected``, sorted by original word."""
        return [f"{original}={corrected}" for original, corrected in self.sorted_corrections()]

    def summary_lines(self) -> list[str]:
        return [
            f"# Lines: {self.lines_scanned}",
            f"# Words: {self.words_scanned}",
            f"# Corrections: {self.words_corrected}",
        ]

    def write_log(self, path: Path, encoding: str = "utf-8") -> None:
        """
        Write the corrections log. The format is the dictionary format,
        so the file can be reviewed and merged into a user dictionary.

        Raises:
            OSError: If the file cannot be written.
        """
        with open(path, "w", encoding=encoding) as f:
            for line in self.log_lines():
                f.write(line + "\n")
        logger.info("Wrote %d corrections to %s", len(self.corrections), path)


# =============================================================================
# REPORTER
# =============================================================================


class Reporter:
    """
    All messages meant for the user go through here.

    Every message is logged; console output honours the quiet and
    verbose flags. Quiet suppresses everything, including errors.
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.quiet = quiet
        self.verbose = verbose and not quiet
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def message(self, text: str) -> None:
        logger.info(text)
        if not self.quiet:
            print(text, file=self.out)

    def verbose_message(self, text: str) -> None:
        logger.info(text)
        if self.verbose:
            print(text, file=self.out)

    def error(self, text: str, exc: BaseException | None = None) -> None:
        """
        Report an error as ``ERROR: <text>`` or ``ERROR: <text>: <exc>``.
        """
        if exc is not None:
            logger.error("%s: %s", text, exc)
            line = f"ERROR: {text}: {exc}"
        else:
            logger.error(text)
            line = f"ERROR: {text}"
        if not self.quiet:
            print(line, file=self.err)
