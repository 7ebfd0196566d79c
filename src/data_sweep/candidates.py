import logging
from pathlib import Path

from .config import ScanConfig
from .constants import APP_NAME
from .errors import GlobError
from .paths import expand_all, expand_home

logger = logging.getLogger(APP_NAME)


def synthetic_dirs(config: ScanConfig) -> list[str]:
    """Builds the numbered candidates `<root>/<prefix>N` for each N in the range."""
    root = config.candidate_root.rstrip("/")
    return [f"{root}/{config.candidate_prefix}{n}" for n in config.candidate_range]


def glob_dirs(config: ScanConfig) -> list[str]:
    """Lists every existing path matching `<root>/<prefix>*`.

    Zero matches (including a missing root) is a valid, empty result.

    Args:
        config (ScanConfig): The scan configuration.

    Returns:
        list[str]: The matching paths.

    Raises:
        GlobError: If the filesystem glob itself fails.
        ResolutionError: If the root cannot be home-expanded.
    """
    root = Path(expand_home(config.candidate_root))
    pattern = f"{config.candidate_prefix}*"
    try:
        return [str(p) for p in root.glob(pattern)]
    except (OSError, ValueError) as e:
        raise GlobError(f"Failed to glob {root / pattern}: {e}") from e


def candidate_dirs(config: ScanConfig) -> list[str]:
    """Produces the de-duplicated, home-expanded candidate directories.

    Combines the synthetic numbered paths, the on-disk glob matches and the
    supplementary directories. Duplicates collapse on plain string equality
    after expansion. The result is sorted so output is stable between runs.

    Args:
        config (ScanConfig): The scan configuration.

    Returns:
        list[str]: Unique absolute candidate paths.

    Raises:
        ResolutionError: If a `~` path cannot be expanded.
        GlobError: If the filesystem glob fails.
    """
    dirs = set(expand_all(synthetic_dirs(config)))
    dirs.update(glob_dirs(config))
    dirs.update(expand_all(config.extra_dirs))

    # Entries are expanded again after merging, so collapse once more.
    unique = set(expand_all(dirs))
    logger.debug(f"Enumerated {len(unique)} candidate directories.")
    return sorted(unique)
