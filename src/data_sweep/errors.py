"""Exception hierarchy for the scan pipeline."""


class ScanError(Exception):
    """Base class for every error raised by Data Sweep."""


class ResolutionError(ScanError):
    """The home directory could not be determined while expanding `~`."""


class GlobError(ScanError):
    """Globbing the candidate directories failed."""


class PatternError(ScanError):
    """A target filename pattern is malformed."""


class TraversalError(ScanError):
    """A directory tree could not be read during a walk."""
