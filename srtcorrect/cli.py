"""
Command-line entry point.

Usage:
    srtcorrect [-aqv] [--config FILE] [--dictionary FILE] srt-file(s)

Examples:
    # Correct one file, keeping movie.bak as the original
    srtcorrect ~/Desktop/movie.srt

    # Correct two files, list each correction and write TopHat.log/Casablanca.log
    srtcorrect -av TopHat.srt Casablanca.srt
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from srtcorrect import __version__
from srtcorrect.config import CorrectionConfig, load_config
from srtcorrect.exceptions import ConfigurationError
from srtcorrect.files import process_files
from srtcorrect.report import Reporter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srtcorrect",
        description="Correct l/I OCR mistakes in subtitle files, keeping a backup of each.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        metavar="srt-file",
        help="One or more subtitle files, space separated",
    )
    parser.add_argument(
        "-a",
        "--log",
        dest="generate_log",
        action="store_true",
        default=None,
        help="Write <name>.log listing every distinct correction",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=None,
        help="Suppress all output, including errors",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Output each correction as it is made (ignored with -q)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with default options",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        help="Extra dictionary entries (word=correction), overriding the built-in ones",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING; DEBUG traces every word)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> CorrectionConfig:
    """Merge the config file (if any) with the command-line flags, flags winning."""
    config = load_config(args.config) if args.config else CorrectionConfig()
    overrides = {
        name: value
        for name, value in (
            ("generate_log", args.generate_log),
            ("quiet", args.quiet),
            ("verbose", args.verbose),
            ("dictionary_path", args.dictionary),
        )
        if value is not None
    }
    return replace(config, **overrides) if overrides else config


def validate_file(path: Path, reporter: Reporter) -> bool:
    """True iff ``path`` is an existing, writable regular file."""
    path = path.absolute()
    if not path.exists():
        reporter.error(f"no such file: {path}")
    elif not path.is_file():
        reporter.error(f"cannot convert a directory: {path}")
    elif not os.access(path, os.W_OK):
        reporter.error(f"file is not writeable: {path}")
    else:
        return True
    return False


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
    except ConfigurationError as e:
        Reporter().error(str(e))
        return EXIT_USAGE

    logger.debug("Resolved config: %s", config)
    reporter = Reporter(config.verbose, config.quiet)
    valid = [validate_file(path, reporter) for path in args.files]
    if not all(valid):
        return EXIT_USAGE

    exit_code = EXIT_OK
    for path, outcome in process_files(args.files, config, reporter):
        if isinstance(outcome, Exception):
            exit_code = EXIT_FAILED
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
