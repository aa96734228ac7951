from typing import Optional


class PlaybackEngine:
    """Capability set the session drives.

    Every call returns promptly; decoding and output happen in the
    backend's own context. Positions and durations are in seconds.
    """

    def load_and_play(self, uri: str) -> None:
        """Replace the loaded stream with ``uri`` and start it."""
        raise NotImplementedError("Subclasses must implement load_and_play()")

    def play(self) -> None:
        """Start or resume the loaded stream. Idempotent."""
        raise NotImplementedError("Subclasses must implement play()")

    def pause(self) -> None:
        """Pause the loaded stream. Idempotent."""
        raise NotImplementedError("Subclasses must implement pause()")

    def seek(self, position: float) -> None:
        raise NotImplementedError("Subclasses must implement seek()")

    def set_volume(self, ratio: float) -> None:
        raise NotImplementedError("Subclasses must implement set_volume()")

    def get_volume(self) -> float:
        raise NotImplementedError("Subclasses must implement get_volume()")

    def get_position(self) -> Optional[float]:
        raise NotImplementedError("Subclasses must implement get_position()")

    def get_duration(self) -> Optional[float]:
        raise NotImplementedError("Subclasses must implement get_duration()")

    def get_current_uri(self) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement get_current_uri()")
