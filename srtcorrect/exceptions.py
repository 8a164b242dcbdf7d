"""
Errors raised while correcting subtitle files.

Per-line problems never surface here: a line that cannot be corrected
is written through unchanged and reported. These exceptions cover the
run as a whole (bad settings, bad dictionary entries in strict mode)
and a single file that cannot safely be moved aside.

Example:
    >>> try:
    ...     config = srtcorrect.load_config("srtcorrect.yaml")
    ... except srtcorrect.ConfigurationError as e:
    ...     print(f"Bad configuration: {e}")
"""


class SrtCorrectError(Exception):
    """Common base; process_files() yields these in place of a tally."""

    pass


class ConfigurationError(SrtCorrectError):
    """
    Raised for invalid configuration.

    Example:
        >>> CorrectionConfig(backup_extension="bak")
        ConfigurationError: backup_extension must start with '.', got 'bak'
    """

    pass


class DictionaryError(SrtCorrectError):
    """
    Raised when a dictionary entry cannot be used.

    Loading never raises this; bad entries are logged and skipped.
    It is raised by ExceptionDictionary.from_mapping(strict=True).
    """

    pass


class BackupError(SrtCorrectError):
    """
    Raised when a subtitle file cannot be moved aside to its backup name.

    The original file is left untouched when this is raised.
    """

    pass
