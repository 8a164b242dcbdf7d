"""
Exception/substitution dictionary for the word corrector.

The dictionary maps exact (case-sensitive) words to either:
- a replacement of the same length, applied when no heuristic fired, or
- an empty value, marking a word the heuristics must never touch
  (e.g. "All" looks like an all-caps word with misread l's).

Entries come from the bundled ``autocorrect.properties`` resource and,
optionally, a user file whose entries override the bundled ones.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from srtcorrect.exceptions import DictionaryError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

BUILTIN_RESOURCE = "data/autocorrect.properties"
COMMENT_PREFIXES = ("#", "!")
SEPARATORS = ("=", ":")


# =============================================================================
# PROPERTIES PARSING
# =============================================================================


def parse_properties(lines: Iterable[str], source: str = "<memory>") -> Iterator[tuple[str, str]]:
    """
    Parse ``key=value`` lines in the subset of the properties format we use.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. The
    first ``=`` or ``:`` separates key from value; both are stripped.
    Lines without a separator or with an empty key are logged and skipped.

    Args:
        lines: Raw lines of the resource.
        source: Name used in warnings.

    Yields:
        (key, value) pairs in file order.
    """
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        positions = [line.find(sep) for sep in SEPARATORS if sep in line]
        if not positions:
            logger.warning("%s:%d: no separator, skipping %r", source, lineno, line)
            continue

        split_at = min(positions)
        key = line[:split_at].strip()
        value = line[split_at + 1 :].strip()
        if not key:
            logger.warning("%s:%d: empty key, skipping %r", source, lineno, line)
            continue

        yield key, value


def _entry_problem(key: str, value: str) -> str | None:
    """Return why an entry is unusable, or None if it is fine."""
    if value and len(value) != len(key):
        return f"replacement {value!r} is not the same length as {key!r}"
    return None


# =============================================================================
# EXCEPTION DICTIONARY
# =============================================================================


class ExceptionDictionary:
    """
    Read-only word map consulted by WordCorrector.

    Instances are immutable once built and may be shared between threads.

    Example:
        >>> d = ExceptionDictionary.from_mapping({"All": "", "l": "I"})
        >>> d.is_exception("All")
        True
        >>> d.lookup("l")
        'I'
        >>> d.lookup("all") is None
        True
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __repr__(self) -> str:
        return f"ExceptionDictionary({len(self._entries)} entries)"

    @property
    def entries(self) -> Mapping[str, str]:
        """Read-only view of all entries."""
        return self._entries

    def is_exception(self, word: str) -> bool:
        """
        Check whether ``word`` is a known false positive of the heuristics.

        Exception cases are entries with a key but no value.
        """
        result = self._entries.get(word) == ""
        if result:
            logger.debug("Encountered exception case: %s", word)
        return result

    def lookup(self, word: str) -> str | None:
        """Return the replacement for ``word``, or None if it has none."""
        return self._entries.get(word) or None

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls) -> ExceptionDictionary:
        """Dictionary with no entries; only the heuristics apply."""
        return cls()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str], strict: bool = False) -> ExceptionDictionary:
        """
        Build a dictionary from an in-memory mapping.

        Args:
            mapping: word -> replacement ("" for exception cases).
            strict: Raise instead of skipping unusable entries.

        Raises:
            DictionaryError: If ``strict`` and an entry is unusable.
        """
        return cls(_validated(mapping.items(), "<mapping>", strict))

    @classmethod
    def load(cls, path: str | Path | None = None, include_builtin: bool = True) -> ExceptionDictionary:
        """
        Load the bundled dictionary, optionally overlaid with a user file.

        Load failures are logged as warnings and never raised; the
        affected source simply contributes no entries.

        Args:
            path: Optional user dictionary in properties format.
            include_builtin: Whether to start from the bundled resource.

        Returns:
            The combined dictionary.
        """
        entries: dict[str, str] = {}

        if include_builtin:
            try:
                text = resources.files("srtcorrect").joinpath(BUILTIN_RESOURCE).read_text("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Unable to load built-in autocorrect.properties: %s", e)
            else:
                entries.update(_validated(parse_properties(text.splitlines(), BUILTIN_RESOURCE)))

        if path is not None:
            path = Path(path)
            try:
                with open(path, encoding="utf-8") as f:
                    entries.update(_validated(parse_properties(f, str(path)), str(path)))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Unable to load dictionary %s: %s", path, e)

        logger.info("Loaded %d dictionary entries", len(entries))
        return cls(entries)


def _validated(
    pairs: Iterable[tuple[str, str]], source: str = BUILTIN_RESOURCE, strict: bool = False
) -> dict[str, str]:
    result: dict[str, str] = {}
    for key, value in pairs:
        problem = _entry_problem(key, value)
        if problem is None:
            result[key] = value
        elif strict:
            raise DictionaryError(f"{source}: {problem}")
        else:
            logger.warning("%s: %s, skipping", source, problem)
    return result
