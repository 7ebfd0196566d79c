"""Application identifiers and the default scan layout for Data Sweep.

Every value here is a default only; the effective values travel through
`ScanConfig` so nothing in the pipeline reads module-level state directly.
"""

# --- Identity ---
APP_NAME = "data-sweep"
"""str: The application name, also used as the logger name."""

# --- Targets ---
DEFAULT_TARGET = "summary.txt"
"""str: The filename pattern searched for when no -file flag is given."""

MARKER_DIR = "data"
"""str: Subdirectory whose presence qualifies a candidate directory."""

# --- Candidates ---
CANDIDATE_ROOT = "~/pdev/tmp"
"""str: Parent directory holding the numbered candidate directories."""

CANDIDATE_PREFIX = "northflier"
"""str: Name prefix shared by candidate directories under CANDIDATE_ROOT."""

CANDIDATE_RANGE = range(1, 11)
"""range: Suffixes of the synthetic candidates (prefix1 .. prefix10)."""

EXTRA_DIRS = ("~/pdev/taylormonacelli/northflier",)
"""tuple[str, ...]: Supplementary directories always included as candidates."""

# --- VCS ---
VCS_BINARY = "git"
"""str: Executable invoked as `<vcs> -C <dir> pull` when syncing."""
