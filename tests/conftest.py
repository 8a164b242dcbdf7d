"""
Pytest configuration and fixtures for srtcorrect tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def dictionary():
    """Return the bundled ExceptionDictionary."""
    from srtcorrect import ExceptionDictionary

    return ExceptionDictionary.load()


@pytest.fixture(scope="session")
def corrector(dictionary):
    """Return a WordCorrector using the bundled dictionary."""
    from srtcorrect import WordCorrector

    return WordCorrector(dictionary)


@pytest.fixture
def quiet_config():
    """Return a CorrectionConfig that keeps the console clean."""
    from srtcorrect import CorrectionConfig

    return CorrectionConfig(quiet=True)


@pytest.fixture
def write_srt(tmp_path):
    """Return a helper writing raw subtitle text to a file under tmp_path."""

    def _write(text: str, name: str = "movie.srt") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
