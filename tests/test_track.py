import pytest

from models.errors import EngineDesynchronizedError, NoTracksAvailableError
from models.track import PLACEHOLDER_LABEL, Track, TrackList, format_time, track_uri


class TestTrack:
    """Tests for Track identity and display."""

    def test_uri_is_file_scheme_plus_path(self):
        track = Track("/music/My Song.mp3")
        assert track.uri == "file:///music/My Song.mp3"
        assert track.uri == track_uri(track.path)

    def test_display_name_is_base_name(self):
        assert Track("/music/sub/song.ogg").display_name == "song.ogg"

    def test_non_utf8_path_uses_placeholder(self):
        """Undecodable bytes surface as surrogates and must not break display."""
        track = Track("/music/\udcff\udcfe.mp3")
        assert track.display_name == PLACEHOLDER_LABEL

    def test_equal_paths_are_equal_tracks(self):
        assert Track("/a.mp3") == Track("/a.mp3")


class TestTrackList:
    """Tests for TrackList ordering and lookups."""

    def test_sorted_by_full_path(self, abc_tracks):
        assert [t.path for t in abc_tracks] == ["/music/a.mp3", "/music/b.mp3", "/music/c.mp3"]

    def test_empty_list(self):
        tracks = TrackList()
        assert len(tracks) == 0
        assert not tracks
        with pytest.raises(NoTracksAvailableError):
            tracks.require_tracks()

    def test_index_of_uri(self, abc_tracks):
        assert abc_tracks.index_of_uri("file:///music/b.mp3") == 1

    def test_index_of_unknown_uri_raises(self, abc_tracks):
        with pytest.raises(EngineDesynchronizedError):
            abc_tracks.index_of_uri("file:///elsewhere/x.mp3")
        with pytest.raises(EngineDesynchronizedError):
            abc_tracks.index_of_uri(None)

    def test_find_is_case_insensitive(self, abc_tracks):
        assert abc_tracks.find("B.MP3", 0) == 1

    def test_find_wraps_around(self, abc_tracks):
        assert abc_tracks.find("a.mp3", 1) == 0

    def test_find_starts_at_given_index(self, abc_tracks):
        assert abc_tracks.find("/music/", 2) == 2

    def test_find_no_match(self, abc_tracks):
        assert abc_tracks.find("zzz", 0) is None

    def test_find_on_empty_list(self):
        assert TrackList().find("", 0) is None


class TestFormatTime:
    """Tests for the M:SS formatter."""

    def test_format_time(self):
        assert format_time(0) == "0:00"
        assert format_time(65.9) == "1:05"
        assert format_time(600) == "10:00"

    def test_unknown_time(self):
        assert format_time(None) == "-:--"
