import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from .candidates import candidate_dirs
from .config import ScanConfig
from .constants import APP_NAME
from .errors import PatternError, TraversalError
from .git_wrapper import GitClient
from .search import find_matches, has_marker_dir

logger = logging.getLogger(APP_NAME)


class DirState(Enum):
    """Terminal state of a candidate directory after a scan."""

    SKIPPED = "skipped"
    NO_MATCH = "no-match"
    MATCHED = "matched"
    SYNCED = "synced"


@dataclass
class DirResult:
    """Outcome of processing one candidate directory.

    Attributes:
        path (str): The candidate directory.
        state (DirState): Where the directory ended up.
        matches (list[str]): Every path printed for this directory.
    """

    path: str
    state: DirState
    matches: list[str] = field(default_factory=list)


def sync_directory(directory: str, config: ScanConfig, client: GitClient) -> bool:
    """Runs the VCS pull on `directory` if syncing is enabled and it still exists.

    The command's exit status and output are not inspected.

    Args:
        directory (str): A directory in which at least one match was found.
        config (ScanConfig): The scan configuration.
        client (GitClient): The VCS client used for the pull.

    Returns:
        bool: True if the pull was attempted.
    """
    if not config.git_pull:
        return False
    if not os.path.isdir(directory):
        return False

    logger.info(f"Executing {config.vcs} pull in: {directory}")
    client.pull(directory)
    return True


def _search_directory(
    directory: str, config: ScanConfig, out: TextIO
) -> tuple[bool, list[str]]:
    """Searches a qualified directory for every target pattern.

    Returns:
        tuple[bool, list[str]]: Whether a completed walk found a match, and
                                every path printed along the way.
    """
    found = False
    printed: list[str] = []

    for pattern in config.files:
        hits = []
        try:
            for path in find_matches(directory, pattern):
                logger.info(f"Found {pattern} file: {path}")
                out.write(f"{path}\n")
                out.flush()
                hits.append(path)
        except (PatternError, TraversalError) as e:
            # An aborted walk keeps its output but does not qualify for sync.
            logger.error(f"Error walking the path {directory}: {e}")
            printed.extend(hits)
            continue

        printed.extend(hits)
        if hits:
            found = True

    return found, printed


def run(
    config: ScanConfig,
    client: GitClient | None = None,
    out: TextIO | None = None,
) -> list[DirResult]:
    """Scans every candidate directory and optionally syncs those with matches.

    Args:
        config (ScanConfig): The scan configuration.
        client (GitClient | None, optional): VCS client for syncing.
                                             Defaults to one built from `config.vcs`.
        out (TextIO | None, optional): Stream receiving matched paths.
                                       Defaults to stdout.

    Returns:
        list[DirResult]: One result per candidate directory.

    Raises:
        ResolutionError: If a candidate path cannot be home-expanded.
        GlobError: If candidate globbing fails.
    """
    if client is None:
        client = GitClient(config.vcs)
    if out is None:
        out = sys.stdout

    results = []
    for directory in candidate_dirs(config):
        logger.info(f"Checking directory: {directory}")

        marker_path = os.path.join(directory, config.marker)
        if not has_marker_dir(directory, config.marker):
            logger.info(f"Data directory does not exist: {marker_path}")
            results.append(DirResult(directory, DirState.SKIPPED))
            continue
        logger.info(f"Data directory exists: {marker_path}")

        found, printed = _search_directory(directory, config, out)
        if not found:
            state = DirState.NO_MATCH
        elif sync_directory(directory, config, client):
            state = DirState.SYNCED
        else:
            state = DirState.MATCHED
        results.append(DirResult(directory, state, printed))

    return results
