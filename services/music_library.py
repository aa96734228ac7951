import logging
from pathlib import Path
from typing import Optional

from models.errors import DirectoryUnreadableError
from models.track import TrackList

logger = logging.getLogger(__name__)


class MusicLibrary:
    """Service for listing the playlist directory."""

    DEFAULT_MUSIC_DIR = Path(".")

    def __init__(self, music_dir: Optional[Path] = None):
        """Initialize MusicLibrary with optional custom playlist directory.

        Args:
            music_dir: Path to playlist directory. Defaults to the current directory.
        """
        self.music_dir = Path(music_dir).expanduser() if music_dir else self.DEFAULT_MUSIC_DIR

    def scan(self) -> TrackList:
        """List regular files in the playlist directory.

        Sub-directories are skipped and no extension filter is applied.

        Returns:
            TrackList sorted lexicographically by full path.

        Raises:
            DirectoryUnreadableError: If the directory cannot be listed.
        """
        try:
            entries = list(self.music_dir.resolve().iterdir())
        except OSError as e:
            logger.error(f"Cannot list {self.music_dir}: {e}")
            raise DirectoryUnreadableError(self.music_dir, e.strerror or str(e)) from e

        paths = []
        for entry in entries:
            try:
                if entry.is_file():
                    paths.append(str(entry))
            except OSError as e:
                logger.warning(f"Skipping unreadable entry {entry!r}: {e}")

        tracks = TrackList(paths)
        logger.info(f"Listed {len(tracks)} tracks in {self.music_dir}")
        return tracks
