"""
Custom exceptions for lazydraft.
"""


class LazyDraftError(Exception):
    """Base exception for all lazydraft errors."""
    pass


class ConfigError(LazyDraftError):
    """Raised when a config file is missing, unreadable or malformed."""
    pass


class PathResolutionError(LazyDraftError):
    """Raised when the user's home directory cannot be resolved."""
    pass


class ActiveProjectError(LazyDraftError):
    """Raised when no active project is set or it is not configured."""
    pass


class SelectionError(LazyDraftError):
    """Raised when a user selection is not a valid 1-based list index."""
    pass


class FileSystemError(LazyDraftError):
    """Raised when a read, write, copy or delete fails while staging."""
    pass


class DiscoveryError(FileSystemError):
    """Raised when a draft directory cannot be scanned."""
    pass
