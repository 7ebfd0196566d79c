import argparse
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from . import scan
from .config import ScanConfig, check_for_duplicates
from .constants import APP_NAME, CANDIDATE_PREFIX, CANDIDATE_ROOT, DEFAULT_TARGET
from .errors import ScanError

logger = logging.getLogger(APP_NAME)
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Configures the logging subsystem.

    Diagnostics always go to stderr. Progress lines (INFO) are only emitted
    when `verbose` is set; walk errors are emitted either way.

    Args:
        verbose (bool): True when the -log flag was given.
    """
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", "%Y-%m-%d %H:%M:%S"
    )

    # Drop handlers from a previous call so repeated runs don't double-log.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Creates the argument parser.

    Flags use single-dash long names (`-log`); the double-dash spelling is
    accepted as an alias.
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Find files in candidate directories that contain a data/ "
            "subdirectory, optionally pulling those with matches."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "-log", "--log", action="store_true", help="Enable logging"
    )
    parser.add_argument(
        "-git-pull", "--git-pull", action="store_true", help="Enable git pull"
    )
    parser.add_argument(
        "-file",
        "--file",
        action="append",
        metavar="PATTERN",
        help=(
            "File to search for (this flag can be set multiple times, "
            f"default: {DEFAULT_TARGET})"
        ),
    )
    parser.add_argument(
        "-root",
        "--root",
        metavar="PATH",
        help=f"Parent of the numbered candidate directories (default: {CANDIDATE_ROOT})",
    )
    parser.add_argument(
        "-prefix",
        "--prefix",
        metavar="NAME",
        help=f"Name prefix of candidate directories (default: {CANDIDATE_PREFIX})",
    )
    parser.add_argument(
        "-extra-dir",
        "--extra-dir",
        action="append",
        metavar="PATH",
        help="Additional directory to check (repeatable, replaces the built-in list)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the Data Sweep CLI."""
    args = build_parser().parse_args(argv)
    config = ScanConfig.from_args(args)

    setup_logging(config.log)

    has_duplicate, duplicate = check_for_duplicates(config.files)
    if has_duplicate:
        err_console.print(
            f"[bold yellow]Warning:[/bold yellow] The file '{escape(duplicate)}' "
            "has been specified more than once."
        )

    try:
        scan.run(config)
    except ScanError as e:
        err_console.print(
            f"[bold red]FATAL:[/bold red] Error getting candidate directories: "
            f"{escape(str(e))}"
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
