from .engine import PlaybackEngine
from .music_library import MusicLibrary
from .session import PlaybackSession, SessionSnapshot

__all__ = [
    'PlaybackEngine',
    'MusicLibrary',
    'PlaybackSession',
    'SessionSnapshot',
]
