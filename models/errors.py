"""Exception types raised by the DIRPLAY core."""


class DirplayError(Exception):
    """Base exception for DIRPLAY."""


class DirectoryUnreadableError(DirplayError):
    """The playlist directory could not be listed."""

    def __init__(self, directory, reason: str = ""):
        self.directory = directory
        self.reason = reason
        message = f"Cannot read playlist directory: {directory}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoTracksAvailableError(DirplayError):
    """An operation needed a track but the track list is empty."""


class EngineDesynchronizedError(DirplayError):
    """The engine's loaded URI does not match any listed track."""

    def __init__(self, uri: str | None):
        self.uri = uri
        super().__init__(f"Loaded URI is not in the track list: {uri}")


class NonUtf8PathError(DirplayError):
    """A listed path cannot be rendered as text."""
