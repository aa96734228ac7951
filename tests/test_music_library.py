import pytest

from models.errors import DirectoryUnreadableError
from services.music_library import MusicLibrary


class TestScan:
    """Tests for listing the playlist directory."""

    def test_scan_lists_files_sorted(self, temp_music_dir):
        tracks = MusicLibrary(temp_music_dir).scan()
        names = [track.display_name for track in tracks]
        assert names == ["a_track.ogg", "b_track.mp3", "c_track.flac"]

    def test_scan_returns_absolute_paths(self, temp_music_dir):
        tracks = MusicLibrary(temp_music_dir).scan()
        resolved = str(temp_music_dir.resolve())
        assert all(track.path.startswith(resolved) for track in tracks)

    def test_scan_skips_subdirectories(self, temp_music_dir):
        tracks = MusicLibrary(temp_music_dir).scan()
        assert not any("subdir" in track.path for track in tracks)

    def test_scan_does_not_filter_extensions(self, temp_music_dir):
        (temp_music_dir / "notes.txt").touch()
        tracks = MusicLibrary(temp_music_dir).scan()
        assert any(track.path.endswith("notes.txt") for track in tracks)

    def test_scan_empty_directory(self, tmp_path):
        tracks = MusicLibrary(tmp_path).scan()
        assert len(tracks) == 0

    def test_scan_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryUnreadableError) as excinfo:
            MusicLibrary(tmp_path / "missing").scan()
        assert "missing" in str(excinfo.value)
