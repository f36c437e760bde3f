"""Baseline Buddy exception hierarchy.

Every public exception inherits from BaselineBuddyError so front-ends can
report any failure of the scanning pipeline without catching unrelated
errors.
"""


class BaselineBuddyError(Exception):
    """Base exception for all Baseline Buddy errors."""


class PathError(BaselineBuddyError):
    """Raised when a scan target is missing or of the wrong kind.

    Fatal to the requested scan: there is nothing to analyze.
    """


class ReadError(BaselineBuddyError):
    """Raised when a single source file cannot be read as text.

    Covers OS-level failures, binary content and undecodable bytes. The
    scan engine recovers from it per file.
    """


class PatternError(BaselineBuddyError, ValueError):
    """Raised when an include/exclude glob uses unsupported syntax."""


class ConfigError(BaselineBuddyError, ValueError):
    """Raised for malformed option files or invalid option values."""


class ScanCancelledError(BaselineBuddyError):
    """Raised when a scan observes its cancellation signal."""
