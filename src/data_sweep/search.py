import logging
import os
import re
import stat
from collections.abc import Iterator
from pathlib import Path

from .constants import APP_NAME, MARKER_DIR
from .errors import PatternError, TraversalError

logger = logging.getLogger(APP_NAME)


def has_marker_dir(directory: str, marker: str = MARKER_DIR) -> bool:
    """Checks whether `directory` contains a subdirectory named `marker`.

    A missing marker, a missing parent and any other stat failure all count
    as "not qualified". Nothing is raised.

    Args:
        directory (str): The candidate directory.
        marker (str, optional): The marker subdirectory name. Defaults to "data".

    Returns:
        bool: True if `<directory>/<marker>` exists and is a directory.
    """
    target = Path(directory) / marker
    try:
        return stat.S_ISDIR(target.stat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        logger.debug(f"Could not stat {target}: {e}")
        return False


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Reads one (possibly escaped) character of a `[...]` class at index `i`."""
    n = len(pattern)
    if i >= n or pattern[i] in "-]":
        raise PatternError(f"Malformed character class in pattern '{pattern}'")
    if pattern[i] == "\\":
        i += 1
        if i >= n:
            raise PatternError(f"Malformed character class in pattern '{pattern}'")
    return pattern[i], i + 1


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translates a shell-glob pattern into a regular expression.

    Supports `*`, `?`, `\\` escapes and `[...]` classes with ranges, negated
    by a leading `^` or `!`. Matching is case-sensitive and anchored at both
    ends. A class range whose bounds are reversed matches nothing.

    Args:
        pattern (str): The glob pattern.

    Returns:
        re.Pattern[str]: A compiled regex to use with `fullmatch`.

    Raises:
        PatternError: On a trailing `\\`, an unterminated or empty class, or
                      a class member that is a bare `-` or `]`.
    """
    parts = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "\\":
            if i >= n:
                raise PatternError(f"Trailing backslash in pattern '{pattern}'")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            negated = i < n and pattern[i] in "^!"
            if negated:
                i += 1
            ranges = []
            while not (ranges and i < n and pattern[i] == "]"):
                lo, i = _class_char(pattern, i)
                hi = lo
                if i < n and pattern[i] == "-":
                    hi, i = _class_char(pattern, i + 1)
                if lo <= hi:
                    ranges.append(f"[{re.escape(lo)}-{re.escape(hi)}]")
                else:
                    ranges.append("(?!)")
            i += 1
            alternatives = "|".join(ranges)
            if negated:
                parts.append(f"(?!{alternatives}).")
            else:
                parts.append(f"(?:{alternatives})")
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def walk_files(root: str) -> Iterator[str]:
    """Yields every non-directory entry under `root` in pre-order.

    Siblings are visited in name order. Symlinks are reported as entries and
    never followed, the root included.

    Args:
        root (str): The directory to walk.

    Yields:
        str: Paths of files (and other non-directory entries) under `root`.

    Raises:
        TraversalError: If the root or any directory in the tree can't be read.
    """
    try:
        root_is_dir = stat.S_ISDIR(os.lstat(root).st_mode)
    except OSError as e:
        raise TraversalError(f"Cannot access {root}: {e}") from e

    stack = [(root, root_is_dir)]
    while stack:
        path, is_dir = stack.pop()
        if not is_dir:
            yield path
            continue

        try:
            with os.scandir(path) as it:
                children = [
                    (entry.path, entry.is_dir(follow_symlinks=False))
                    for entry in sorted(it, key=lambda e: e.name)
                ]
        except OSError as e:
            raise TraversalError(f"Cannot read {path}: {e}") from e

        stack.extend(reversed(children))


def find_matches(directory: str, pattern: str) -> Iterator[str]:
    """Lazily yields absolute paths of files whose base name matches `pattern`.

    Args:
        directory (str): The qualified directory to search.
        pattern (str): A shell-glob pattern matched against base names only.

    Yields:
        str: Absolute (symlink-unresolved) paths of matching files.

    Raises:
        PatternError: If the pattern is malformed (raised before any I/O).
        TraversalError: If the walk hits an unreadable entry.
    """
    regex = compile_pattern(pattern)
    for path in walk_files(directory):
        if regex.fullmatch(os.path.basename(path)):
            yield os.path.abspath(path)
