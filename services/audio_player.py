import logging
import time
from typing import Optional

import pygame
from mutagen import File as MutagenFile, MutagenError

from models.playback import PlaybackState
from models.track import URI_SCHEME
from services.engine import PlaybackEngine

logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 1.0


def uri_to_path(uri: str) -> str:
    """Strip the file:// scheme from a track URI."""
    if uri.startswith(URI_SCHEME):
        return uri[len(URI_SCHEME):]
    return uri


class AudioPlayer(PlaybackEngine):
    """Singleton pygame mixer backend for audio playback."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, '_initialized'):
            try:
                pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
            except pygame.error as e:
                raise RuntimeError(f"Cannot open audio output: {e}") from e

            self._uri: Optional[str] = None
            self._duration: Optional[float] = None
            self._volume: float = DEFAULT_VOLUME
            self._state: PlaybackState = PlaybackState.STOPPED
            self._start_time: float = 0
            self._pause_position: float = 0

            pygame.mixer.music.set_volume(self._volume)
            self._initialized = True

    def load_and_play(self, uri: str) -> None:
        """Load an audio file by URI and start it from the beginning."""
        path = uri_to_path(uri)
        self._uri = uri
        self._duration = self._read_duration(path)
        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.set_volume(self._volume)
            pygame.mixer.music.play()
        except pygame.error as e:
            logger.warning(f"Cannot play {path}: {e}")
            self._state = PlaybackState.STOPPED
            self._pause_position = 0
            return

        self._state = PlaybackState.PLAYING
        self._start_time = time.time()
        self._pause_position = 0
        logger.info(f"Started playback: {path}")

    def play(self) -> None:
        """Resume when paused, restart when stopped, otherwise do nothing."""
        self._sync()
        if self._uri is None:
            return
        if self._state == PlaybackState.PAUSED:
            pygame.mixer.music.unpause()
            self._state = PlaybackState.PLAYING
            self._start_time = time.time() - self._pause_position
        elif self._state == PlaybackState.STOPPED:
            try:
                pygame.mixer.music.play()
            except pygame.error as e:
                logger.warning(f"Cannot restart {self._uri}: {e}")
                return
            self._state = PlaybackState.PLAYING
            self._start_time = time.time()
            self._pause_position = 0

    def pause(self) -> None:
        """Pause playback."""
        self._sync()
        if self._state == PlaybackState.PLAYING:
            pygame.mixer.music.pause()
            self._state = PlaybackState.PAUSED
            self._pause_position = time.time() - self._start_time

    def seek(self, position: float) -> None:
        """Restart the loaded stream at ``position`` seconds."""
        self._sync()
        if self._uri is None:
            return
        was_paused = self._state == PlaybackState.PAUSED
        try:
            pygame.mixer.music.play(start=position)
        except pygame.error as e:
            logger.warning(f"Seek to {position:.1f}s failed: {e}")
            return

        if was_paused:
            pygame.mixer.music.pause()
            self._state = PlaybackState.PAUSED
            self._pause_position = position
        else:
            self._state = PlaybackState.PLAYING
            self._start_time = time.time() - position

    def set_volume(self, ratio: float) -> None:
        """Set volume level (0.0 to 1.0)."""
        self._volume = max(0.0, min(1.0, ratio))
        pygame.mixer.music.set_volume(self._volume)

    def get_volume(self) -> float:
        """Return current volume level (0.0 to 1.0)."""
        return self._volume

    def get_position(self) -> Optional[float]:
        """Return current playback position in seconds, None when nothing is loaded."""
        self._sync()
        if self._uri is None:
            return None
        if self._state == PlaybackState.PLAYING:
            return time.time() - self._start_time
        return self._pause_position

    def get_duration(self) -> Optional[float]:
        return self._duration

    def get_current_uri(self) -> Optional[str]:
        return self._uri

    def _sync(self) -> None:
        """Detect a stream that ran to its end.

        A finished stream reports its full duration as position so the
        progress ratio reads exactly 1.0 until something is played again.
        """
        if self._state == PlaybackState.PLAYING and not pygame.mixer.music.get_busy():
            elapsed = time.time() - self._start_time
            self._state = PlaybackState.STOPPED
            self._pause_position = self._duration if self._duration is not None else elapsed
            logger.debug(f"Stream finished: {self._uri}")

    @staticmethod
    def _read_duration(path: str) -> Optional[float]:
        """Read the stream length from the file header.

        Returns:
            Duration in seconds, or None when mutagen cannot read the file.
        """
        try:
            audio = MutagenFile(path)
        except (MutagenError, OSError) as e:
            logger.warning(f"Could not read stream info from {path}: {e}")
            return None

        if audio is None or not audio.info or not hasattr(audio.info, 'length'):
            return None
        return float(audio.info.length)
