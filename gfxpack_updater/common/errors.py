"""
Custom exception classes for the graphic packs updater.
"""


class UpdaterError(Exception):
    """Base exception class for updater errors."""
    pass


class NetworkError(UpdaterError):
    """Raised when an HTTP request fails or returns a non-success status."""
    pass


class NotFoundError(UpdaterError):
    """Raised when the release page does not link a graphic packs archive."""
    pass


class UpdaterIOError(UpdaterError):
    """Raised when a local file cannot be created, written or read."""
    pass


class PathTraversalError(UpdaterError):
    """Raised when an archive entry would be extracted outside its destination."""

    def __init__(self, entry_name: str) -> None:
        super().__init__(f"{entry_name}: illegal file path")
        self.entry_name = entry_name
