import argparse
from collections.abc import Sequence
from dataclasses import dataclass, field

from .constants import (
    CANDIDATE_PREFIX,
    CANDIDATE_RANGE,
    CANDIDATE_ROOT,
    DEFAULT_TARGET,
    EXTRA_DIRS,
    MARKER_DIR,
    VCS_BINARY,
)


def resolve_targets(files: Sequence[str] | None) -> tuple[str, ...]:
    """Returns the effective target patterns, defaulting to `summary.txt`.

    Args:
        files (Sequence[str] | None): Patterns collected from repeated -file flags.

    Returns:
        tuple[str, ...]: The patterns in the order given, or the default target.
    """
    if not files:
        return (DEFAULT_TARGET,)
    return tuple(files)


def check_for_duplicates(items: Sequence[str]) -> tuple[bool, str]:
    """Finds the first value that repeats an earlier entry.

    Args:
        items (Sequence[str]): The list to inspect, in caller order.

    Returns:
        tuple[bool, str]: (True, value) for the first repeat encountered,
                          or (False, "") if every entry is unique.
    """
    seen: set[str] = set()
    for item in items:
        if item in seen:
            return True, item
        seen.add(item)
    return False, ""


@dataclass(frozen=True)
class ScanConfig:
    """Settings for a single scan run, built once from the command line.

    Attributes:
        log (bool): Emit progress trace lines to stderr.
        git_pull (bool): Run the VCS pull on directories with matches.
        files (tuple[str, ...]): Target filename patterns.
        candidate_root (str): Parent of the numbered candidate directories.
        candidate_prefix (str): Name prefix of the numbered candidates.
        candidate_range (range): Suffixes used for the synthetic candidates.
        extra_dirs (tuple[str, ...]): Supplementary candidate directories.
        marker (str): Subdirectory name that qualifies a candidate.
        vcs (str): VCS executable used for syncing.
    """

    log: bool = False
    git_pull: bool = False
    files: tuple[str, ...] = (DEFAULT_TARGET,)
    candidate_root: str = CANDIDATE_ROOT
    candidate_prefix: str = CANDIDATE_PREFIX
    candidate_range: range = field(default=CANDIDATE_RANGE)
    extra_dirs: tuple[str, ...] = EXTRA_DIRS
    marker: str = MARKER_DIR
    vcs: str = VCS_BINARY

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ScanConfig":
        """Builds a configuration from parsed CLI arguments.

        Options left unset on the command line keep their defaults.

        Args:
            args (argparse.Namespace): The result of `parser.parse_args()`.

        Returns:
            ScanConfig: The populated configuration.
        """
        overrides = {}
        if args.root:
            overrides["candidate_root"] = args.root
        if args.prefix:
            overrides["candidate_prefix"] = args.prefix
        if args.extra_dir:
            overrides["extra_dirs"] = tuple(args.extra_dir)

        return cls(
            log=args.log,
            git_pull=args.git_pull,
            files=resolve_targets(args.file),
            **overrides,
        )
