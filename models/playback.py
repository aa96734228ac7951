from enum import Enum


class PlaybackState(Enum):
    """Engine-side transport state."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
