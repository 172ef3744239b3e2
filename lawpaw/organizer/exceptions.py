class ArchiveError(Exception):
    """Raised when a document cannot be placed under the output root."""


class PathCollisionError(ArchiveError):
    """Raised when two documents of one batch resolve to the same target path."""
