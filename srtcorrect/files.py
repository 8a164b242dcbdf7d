"""
File processing: back up a subtitle file, then rewrite it corrected.

Processing a file:
1. Rename ``movie.srt`` to ``movie.bak`` (an old backup is replaced)
2. Read the backup line by line, writing corrected lines to ``movie.srt``
3. Report line/word/correction counts
4. Optionally write ``movie.log`` listing each distinct correction

A file already named ``movie.bak`` is refused; a file named ``movie.log``
is corrected but gets no corrections log.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from srtcorrect.config import CorrectionConfig
from srtcorrect.dictionary import ExceptionDictionary
from srtcorrect.exceptions import BackupError, SrtCorrectError
from srtcorrect.line import correct_line
from srtcorrect.report import CorrectionTally, Reporter
from srtcorrect.word import WordCorrector

logger = logging.getLogger(__name__)

LINE_TERMINATORS = ("\r\n", "\n", "\r")


def derive_path(path: Path, extension: str) -> Path:
    """
    Build a sibling path of ``path`` with ``extension`` as its suffix.

    The part after the last dot of the name is replaced. Names without a
    dot, or whose only dot is the leading one (``.hidden``), get the
    extension appended.

    Example:
        >>> derive_path(Path("/tmp/movie.en.srt"), ".bak")
        PosixPath('/tmp/movie.en.bak')
        >>> derive_path(Path("/tmp/.hidden"), ".bak")
        PosixPath('/tmp/.hidden.bak')
    """
    name = path.name
    inx = name.rfind(".")
    if inx > 0:
        name = name[:inx]
    return path.with_name(name + extension)


def split_terminator(raw: str) -> tuple[str, str]:
    """Split a line read with ``newline=""`` into (text, terminator)."""
    for terminator in LINE_TERMINATORS:
        if raw.endswith(terminator):
            return raw[: -len(terminator)], terminator
    return raw, ""


class FileProcessor:
    """
    Corrects a single subtitle file in place, keeping a backup.

    Attributes:
        path: The file to correct.
        corrector: Word corrector shared across files.
        config: Run configuration.
        reporter: Destination for user-facing messages.
    """

    def __init__(
        self,
        path: str | Path,
        corrector: WordCorrector,
        config: CorrectionConfig | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.path = Path(path).absolute()
        self.corrector = corrector
        self.config = config or CorrectionConfig()
        self.reporter = reporter or Reporter(self.config.verbose, self.config.quiet)

    @property
    def backup_path(self) -> Path:
        return derive_path(self.path, self.config.backup_extension)

    @property
    def log_path(self) -> Path:
        return derive_path(self.path, self.config.log_extension)

    def process(self) -> CorrectionTally:
        """
        Back up, correct and optionally log the file.

        Returns:
            The tally for this file.

        Raises:
            BackupError: If the file cannot be renamed to its backup name,
                or already carries the backup extension. The file is left
                as it was.
            OSError: If reading the backup or writing the file fails
                part way. The backup remains intact.
            UnicodeDecodeError: If the backup is not in config.encoding.
        """
        backup = self.backup_path
        logger.info("processing file: %s", self.path)
        logger.info("backing up as: %s", backup)

        if backup == self.path:
            self.reporter.error(f"File already has the backup extension, skipping: {self.path}")
            raise BackupError(f"{self.path} is its own backup name")

        try:
            if backup.exists():
                backup.unlink()
            self.path.rename(backup)
        except OSError as e:
            self.reporter.error(f"Unable to rename file {self.path} to {backup}", e)
            raise BackupError(f"Unable to rename {self.path} to {backup}") from e

        self.reporter.message(f"Correcting {self.path}")
        tally = CorrectionTally()
        try:
            self._copy_contents(backup, tally)
        except (OSError, UnicodeDecodeError) as e:
            self.reporter.error(f"Error while processing file {self.path}", e)
            raise
        finally:
            for line in tally.summary_lines():
                self.reporter.message(line)

        if self.config.generate_log:
            self._write_log(tally)
        return tally

    def _copy_contents(self, source: Path, tally: CorrectionTally) -> None:
        encoding = self.config.encoding
        with open(source, encoding=encoding, newline="") as infile, open(
            self.path, "w", encoding=encoding, newline=""
        ) as outfile:
            for raw in infile:
                text, terminator = split_terminator(raw)
                lineno = tally.lines_scanned + 1
                logger.debug("***Line #%d: %s", lineno, text)
                try:
                    result = correct_line(text, self.corrector)
                except Exception:
                    logger.exception("Failed to correct line #%d", lineno)
                    self.reporter.error(
                        f"Error encountered processing line #{lineno}, "
                        f"may be only partially corrected: {text}"
                    )
                    tally.record_unprocessed_line()
                    outfile.write(raw)
                    continue

                tally.record_line(result)
                for word in result.corrections:
                    self.reporter.verbose_message(
                        f"line {lineno}: {word.original_word} -> {word.corrected_word}"
                    )
                outfile.write(result.text + terminator)

    def _write_log(self, tally: CorrectionTally) -> None:
        if self.log_path == self.path:
            self.reporter.error(
                f"Corrections log would overwrite {self.path}, not writing it"
            )
            return
        try:
            tally.write_log(self.log_path, self.config.encoding)
        except OSError as e:
            self.reporter.error("Unable to create corrections log file", e)


def process_files(
    paths: Iterable[str | Path],
    config: CorrectionConfig | None = None,
    reporter: Reporter | None = None,
    corrector: WordCorrector | None = None,
) -> Iterator[tuple[Path, CorrectionTally | Exception]]:
    """
    Correct several files, yielding results as each completes.

    A failure in one file never stops the others; its exception is
    yielded in place of a tally (it has already been reported).

    Args:
        paths: Subtitle files to correct.
        config: Run configuration.
        reporter: Destination for user-facing messages.
        corrector: Word corrector; built from config.dictionary_path
            and the bundled dictionary if omitted.

    Yields:
        (path, result) tuples where result is a CorrectionTally or Exception.
    """
    config = config or CorrectionConfig()
    reporter = reporter or Reporter(config.verbose, config.quiet)
    if corrector is None:
        corrector = WordCorrector(ExceptionDictionary.load(config.dictionary_path))

    for source in paths:
        source = Path(source)
        processor = FileProcessor(source, corrector, config, reporter)
        try:
            yield (source, processor.process())
        except (SrtCorrectError, OSError, UnicodeDecodeError) as e:
            logger.debug("Giving up on %s: %s", source, e)
            yield (source, e)
