"""Data Sweep: locate files inside marked working directories.

This package scans a set of candidate directories for a `data/` marker
subdirectory, searches each qualifying tree for files matching one or more
glob patterns, and optionally runs `git pull` where matches were found.
"""

from . import (
    candidates,
    cli,
    config,
    constants,
    errors,
    git_wrapper,
    paths,
    scan,
    search,
)

__all__ = [
    "candidates",
    "cli",
    "config",
    "constants",
    "errors",
    "git_wrapper",
    "paths",
    "scan",
    "search",
]
