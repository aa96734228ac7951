import logging
import os
from dataclasses import dataclass
from typing import Iterator, Optional

from models.errors import EngineDesynchronizedError, NoTracksAvailableError, NonUtf8PathError

logger = logging.getLogger(__name__)

URI_SCHEME = "file://"
PLACEHOLDER_LABEL = "<unreadable file name>"


def track_uri(path: str) -> str:
    """Build the engine URI for a file path."""
    return f"{URI_SCHEME}{path}"


def format_time(seconds: Optional[float]) -> str:
    """Format seconds as M:SS, or -:-- when unknown."""
    if seconds is None:
        return "-:--"
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class Track:
    """One playable file, identified by its path string."""
    path: str

    @property
    def uri(self) -> str:
        return track_uri(self.path)

    def text(self) -> str:
        """Return the path as valid UTF-8 text.

        Raises:
            NonUtf8PathError: If the path holds undecodable bytes.
        """
        try:
            self.path.encode("utf-8")
        except UnicodeEncodeError as e:
            raise NonUtf8PathError(f"Path is not valid UTF-8: {self.path!r}") from e
        return self.path

    @property
    def display_name(self) -> str:
        """Base name for display, or a placeholder label."""
        try:
            return os.path.basename(self.text())
        except NonUtf8PathError as e:
            logger.debug(f"Using placeholder label: {e}")
            return PLACEHOLDER_LABEL


class TrackList:
    """Sorted, session-lifetime-immutable sequence of tracks."""

    def __init__(self, paths=()):
        self._tracks: tuple[Track, ...] = tuple(Track(str(p)) for p in sorted(str(p) for p in paths))

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __getitem__(self, index: int) -> Track:
        return self._tracks[index]

    def __bool__(self) -> bool:
        return bool(self._tracks)

    def require_tracks(self) -> None:
        """Raise NoTracksAvailableError when the list is empty."""
        if not self._tracks:
            raise NoTracksAvailableError("Track list is empty")

    def index_of_uri(self, uri: Optional[str]) -> int:
        """Return the index of the track whose URI equals ``uri``.

        Raises:
            EngineDesynchronizedError: If no listed track has that URI.
        """
        if uri is not None:
            for index, track in enumerate(self._tracks):
                if track.uri == uri:
                    return index
        raise EngineDesynchronizedError(uri)

    def find(self, query: str, start: int) -> Optional[int]:
        """Find the first track containing ``query``, scanning cyclically.

        The scan covers every track once, beginning at ``start``. Matching
        is a case-insensitive substring test on the full path.
        """
        n = len(self._tracks)
        if n == 0:
            return None
        needle = query.lower()
        for offset in range(n):
            index = (start + offset) % n
            if needle in self._tracks[index].path.lower():
                return index
        return None
