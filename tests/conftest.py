import random
import sys
import tempfile
from pathlib import Path
from typing import Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models.options import StartupOptions
from models.track import TrackList
from services.engine import PlaybackEngine
from services.session import PlaybackSession


class FakeEngine(PlaybackEngine):
    """Scripted engine that records every command it receives.

    While ``playing`` is set, each position read advances by one
    millisecond so the two-sample pause check sees movement.
    """

    def __init__(self, volume: float = 1.0):
        self.calls: list[tuple] = []
        self.uri: Optional[str] = None
        self.position: Optional[float] = None
        self.duration: Optional[float] = None
        self.volume = volume
        self.playing = False

    def load_and_play(self, uri: str) -> None:
        self.calls.append(("load_and_play", uri))
        self.uri = uri
        self.position = 0.0
        self.playing = True

    def play(self) -> None:
        self.calls.append(("play",))
        if self.uri is not None:
            self.playing = True

    def pause(self) -> None:
        self.calls.append(("pause",))
        self.playing = False

    def seek(self, position: float) -> None:
        self.calls.append(("seek", position))
        self.position = position

    def set_volume(self, ratio: float) -> None:
        self.calls.append(("set_volume", ratio))
        self.volume = ratio

    def get_volume(self) -> float:
        return self.volume

    def get_position(self) -> Optional[float]:
        if self.playing and self.position is not None:
            self.position += 0.001
        return self.position

    def get_duration(self) -> Optional[float]:
        return self.duration

    def get_current_uri(self) -> Optional[str]:
        return self.uri

    def loaded(self, uri: str, position: float = 0.0, duration: Optional[float] = 180.0) -> None:
        """Put the engine in a stopped, loaded state without recording a call."""
        self.uri = uri
        self.position = position
        self.duration = duration
        self.playing = False

    def finish(self) -> None:
        """Simulate the loaded stream running to its end."""
        self.position = self.duration
        self.playing = False

    def loads(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "load_and_play"]


@pytest.fixture
def temp_music_dir():
    """Create a temporary playlist directory with a few files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        music_dir = Path(tmpdir) / "music"
        music_dir.mkdir()

        (music_dir / "subdir").mkdir()

        (music_dir / "b_track.mp3").touch()
        (music_dir / "a_track.ogg").touch()
        (music_dir / "c_track.flac").touch()
        (music_dir / "subdir" / "nested.mp3").touch()

        yield music_dir


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def abc_tracks():
    return TrackList(["/music/c.mp3", "/music/a.mp3", "/music/b.mp3"])


@pytest.fixture
def make_session(engine):
    """Build a session over ``paths`` with a seeded RNG and no real sleeping."""
    sleeps = []

    def factory(paths=("/music/a.mp3", "/music/b.mp3", "/music/c.mp3"), **option_values):
        session = PlaybackSession(
            TrackList(paths),
            engine,
            StartupOptions(**option_values),
            rng=random.Random(1234),
            sleep=sleeps.append,
        )
        session.sleeps = sleeps
        return session

    return factory
