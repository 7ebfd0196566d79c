import logging
from collections.abc import Iterable
from pathlib import Path

from .constants import APP_NAME
from .errors import ResolutionError

logger = logging.getLogger(APP_NAME)


def expand_home(path: str) -> str:
    """Resolves a leading `~` (or `~user`) to the matching home directory.

    Paths that do not start with `~` are returned untouched. No other
    normalization happens: `..` segments and symlinks are left alone.

    Args:
        path (str): The path string to expand.

    Returns:
        str: The expanded path.

    Raises:
        ResolutionError: If the home directory cannot be determined.
    """
    if not path.startswith("~"):
        return path
    try:
        return str(Path(path).expanduser())
    except RuntimeError as e:
        raise ResolutionError(f"Cannot expand '{path}': {e}") from e


def expand_all(paths: Iterable[str]) -> list[str]:
    """Applies `expand_home` to every entry, failing on the first error."""
    return [expand_home(p) for p in paths]
