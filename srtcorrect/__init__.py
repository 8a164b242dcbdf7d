"""
srtcorrect: Correct l/I OCR confusions in subtitle files.

Subtitle rippers that OCR image subtitles (e.g. SupRip) often read lower
case "l" as upper case "I" and vice versa, producing "lsn't", "IoveIy"
or "[SlNGlNG]". srtcorrect fixes these word by word with an ordered set
of heuristics plus a small dictionary of exceptions and substitutions.

Example:
    >>> import srtcorrect
    >>> corrector = srtcorrect.WordCorrector(srtcorrect.ExceptionDictionary.load())
    >>> srtcorrect.correct_line("lt'II be a IoveIy day.", corrector).text
    "It'll be a lovely day."

    >>> # Correct files in place, keeping .bak backups
    >>> for path, outcome in srtcorrect.process_files(["movie.srt"]):
    ...     print(path, outcome)
"""

__version__ = "0.1.0"

from srtcorrect.config import CorrectionConfig, load_config
from srtcorrect.dictionary import ExceptionDictionary
from srtcorrect.exceptions import (
    BackupError,
    ConfigurationError,
    DictionaryError,
    SrtCorrectError,
)
from srtcorrect.files import FileProcessor, derive_path, process_files
from srtcorrect.line import LineResult, correct_line
from srtcorrect.report import CorrectionTally, Reporter
from srtcorrect.word import CorrectionResult, WordCorrector, WordStatistics

__all__ = [
    # Word correction
    "WordCorrector",
    "WordStatistics",
    "CorrectionResult",
    "ExceptionDictionary",
    # Lines and files
    "correct_line",
    "LineResult",
    "FileProcessor",
    "process_files",
    "derive_path",
    # Reporting
    "CorrectionTally",
    "Reporter",
    # Configuration
    "CorrectionConfig",
    "load_config",
    # Exceptions
    "SrtCorrectError",
    "ConfigurationError",
    "DictionaryError",
    "BackupError",
]
