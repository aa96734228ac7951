from .track import Track, TrackList
from .autoplay import AutoplayMode, CompletionRule
from .focus import FocusRegion, FocusState
from .playback import PlaybackState
from .selection import SearchBuffer, SelectionCursor

__all__ = [
    "Track",
    "TrackList",
    "AutoplayMode",
    "CompletionRule",
    "FocusRegion",
    "FocusState",
    "PlaybackState",
    "SearchBuffer",
    "SelectionCursor",
]
