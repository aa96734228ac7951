import time
import wave

import pygame
import pytest

from models.autoplay import CompletionRule
from models.options import StartupOptions
from models.track import TrackList, track_uri
from services.audio_player import AudioPlayer, uri_to_path
from services.session import PlaybackSession

CLIP_SECONDS = 0.4
SAMPLE_RATE = 44100


def write_clip(path, seconds=CLIP_SECONDS):
    """Write a silent mono 16-bit WAV file."""
    with wave.open(str(path), "wb") as clip:
        clip.setnchannels(1)
        clip.setsampwidth(2)
        clip.setframerate(SAMPLE_RATE)
        clip.writeframes(b"\x00\x00" * int(SAMPLE_RATE * seconds))
    return str(path)


def wait_until_finished(player, timeout=5.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if player.get_position() == player.get_duration():
            return True
        time.sleep(0.05)
    return False


@pytest.fixture
def player(monkeypatch):
    """Fresh AudioPlayer on SDL's dummy audio driver."""
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    AudioPlayer._instance = None
    try:
        instance = AudioPlayer()
    except RuntimeError as e:
        pytest.skip(f"audio mixer unavailable: {e}")

    yield instance

    pygame.mixer.quit()
    AudioPlayer._instance = None


@pytest.fixture
def clips(tmp_path):
    return [write_clip(tmp_path / "a.wav"), write_clip(tmp_path / "b.wav")]


class TestAudioPlayer:
    """Tests for the pygame mixer backend."""

    def test_uri_to_path(self):
        assert uri_to_path("file:///music/a.wav") == "/music/a.wav"
        assert uri_to_path("/music/a.wav") == "/music/a.wav"

    def test_nothing_loaded(self, player):
        assert player.get_position() is None
        assert player.get_duration() is None
        assert player.get_current_uri() is None
        player.play()
        player.seek(1.0)
        assert player.get_position() is None

    def test_duration_from_stream_info(self, player, clips):
        player.load_and_play(track_uri(clips[0]))
        assert player.get_duration() == pytest.approx(CLIP_SECONDS, abs=0.01)
        assert player.get_current_uri() == track_uri(clips[0])

    def test_finished_stream_reports_full_duration(self, player, clips):
        player.load_and_play(track_uri(clips[0]))
        assert wait_until_finished(player)

        position = player.get_position()
        assert position == player.get_duration()
        assert position / player.get_duration() == 1.0

    def test_play_restarts_finished_stream(self, player, clips):
        player.load_and_play(track_uri(clips[0]))
        assert wait_until_finished(player)

        player.play()
        first = player.get_position()
        time.sleep(0.05)
        second = player.get_position()
        assert first < player.get_duration()
        assert second > first

    def test_pause_freezes_position(self, player, tmp_path):
        player.load_and_play(track_uri(write_clip(tmp_path / "long.wav", seconds=5.0)))
        time.sleep(0.05)
        player.pause()
        first = player.get_position()
        time.sleep(0.05)
        assert player.get_position() == first

    def test_seek_keeps_paused_state(self, player, tmp_path):
        player.load_and_play(track_uri(write_clip(tmp_path / "long.wav", seconds=5.0)))
        player.pause()
        player.seek(1.0)

        first = player.get_position()
        time.sleep(0.05)
        assert player.get_position() == first

        player.play()
        time.sleep(0.05)
        assert player.get_position() > first

    def test_volume_clamped(self, player):
        player.set_volume(1.7)
        assert player.get_volume() == 1.0
        player.set_volume(-0.2)
        assert player.get_volume() == 0.0

    def test_unplayable_file(self, player, tmp_path):
        bogus = tmp_path / "notes.wav"
        bogus.write_text("not audio at all")
        uri = track_uri(str(bogus))

        player.load_and_play(uri)
        assert player.get_current_uri() == uri
        assert player.get_duration() is None
        assert player.get_position() == 0.0


class TestSessionOnMixer:
    """Session completion driven by the real backend."""

    def test_sequential_advance(self, player, clips):
        session = PlaybackSession(TrackList(clips), player, StartupOptions(sequential=True))
        session.play_track(session.tracks[0])
        assert wait_until_finished(player)

        assert session.progress() == 1.0
        assert session.check_completion() is CompletionRule.SEQUENTIAL
        assert player.get_current_uri() == track_uri(clips[1])

    def test_repeat_track_restarts(self, player, clips):
        session = PlaybackSession(TrackList(clips), player, StartupOptions(repeat_track=True))
        session.play_track(session.tracks[0])
        assert wait_until_finished(player)

        assert session.check_completion() is CompletionRule.REPEAT_TRACK
        assert player.get_current_uri() == track_uri(clips[0])
        assert session.progress() < 1.0

    def test_space_pauses(self, player, tmp_path):
        path = write_clip(tmp_path / "long.wav", seconds=5.0)
        session = PlaybackSession(TrackList([path]), player, StartupOptions())
        session.play_track(session.tracks[0])
        time.sleep(0.05)

        session.handle_key("space")
        assert session.is_paused()
