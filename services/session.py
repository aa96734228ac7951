"""Playback session: key dispatch, completion handling and track activation.

The session owns every piece of mutable state (cursor, search buffer,
focus, autoplay toggles, volume latch) and is only touched from the UI
loop. One loop iteration renders a ``SessionSnapshot``, calls
``check_completion`` and then feeds at most one key to ``handle_key``.
"""
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from models.autoplay import AutoplayMode, CompletionRule
from models.errors import EngineDesynchronizedError, NoTracksAvailableError
from models.focus import FocusRegion, FocusState
from models.options import StartupOptions
from models.selection import SearchBuffer, SelectionCursor
from models.track import Track, TrackList, track_uri
from services.engine import PlaybackEngine

logger = logging.getLogger(__name__)

SETTLE_DELAY = 0.5
VOLUME_FINE_STEP = 0.01
VOLUME_COARSE_STEP = 0.05
SEEK_FINE_STEP = 1.0
SEEK_COARSE_STEP = 15.0

QUIT_KEYS = {"q", "escape"}
FOCUS_KEY = "tab"
PLAY_PAUSE_KEY = "space"


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the view needs for one frame."""
    focus: FocusRegion
    selected: Optional[int]
    search_text: str
    volume: float
    position: Optional[float]
    duration: Optional[float]
    progress: float
    paused: bool
    current_uri: Optional[str]
    autoplay_flags: list[str] = field(default_factory=list)


class PlaybackSession:
    """State machine behind the terminal player."""

    def __init__(
        self,
        tracks: TrackList,
        engine: PlaybackEngine,
        options: Optional[StartupOptions] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.tracks = tracks
        self.engine = engine
        self.options = options or StartupOptions()
        self.autoplay: AutoplayMode = self.options.autoplay_mode()
        self._rng = rng or random.Random()
        self.cursor = SelectionCursor(len(tracks), self._rng)
        self.search = SearchBuffer()
        self.focus = FocusState()
        self.volume_applied = False
        self.running = True
        self._sleep = sleep

        self._region_handlers: dict[FocusRegion, Callable[[str, Optional[str]], bool]] = {
            FocusRegion.TRACK_LIST: self._handle_track_list_key,
            FocusRegion.VOLUME: self._handle_volume_key,
            FocusRegion.CONTROL: self._handle_control_key,
            FocusRegion.SEARCH: self._handle_search_key,
        }

    # Startup

    def start(self) -> None:
        """Apply the startup play request, if any.

        An explicit file wins over a random pick.
        """
        initial = self.options.play_path()
        if initial is not None:
            logger.info(f"Playing startup file: {initial}")
            self.play_uri(track_uri(initial))
        elif self.options.random_start:
            self._play_random(select=False)

    # Track activation

    def play_track(self, track: Track) -> None:
        self.play_uri(track.uri)

    def play_uri(self, uri: str) -> None:
        """Load and play ``uri``, applying the startup volume once."""
        self.engine.load_and_play(uri)
        logger.info(f"Activated {uri}")

        if self.options.volume is not None and not self.volume_applied:
            # The engine drops volume writes issued right after a new URI.
            self._sleep(SETTLE_DELAY)
            self.engine.set_volume(self.options.volume)
            self.volume_applied = True
            logger.info(f"Applied startup volume {self.options.volume:.2f}")

    def _play_random(self, select: bool) -> Optional[int]:
        try:
            self.tracks.require_tracks()
        except NoTracksAvailableError:
            logger.debug("Random play ignored: no tracks")
            return None

        index = self._rng.randrange(len(self.tracks))
        if select:
            self.cursor.select(index)
        self.play_track(self.tracks[index])
        return index

    # Engine readouts

    def progress(self) -> float:
        """Position over duration, 0.0 when either is unavailable."""
        position = self.engine.get_position()
        duration = self.engine.get_duration()
        if position is None or not duration:
            return 0.0
        return position / duration

    def is_paused(self) -> bool:
        """Guess the transport state from two back-to-back position samples.

        The engine exposes no paused flag. Equal samples read as paused,
        which misfires when a playing stream is sampled twice inside one
        clock tick. Callers only use this to pick between play() and
        pause(), both of which are idempotent on the engine.
        """
        first = self.engine.get_position()
        if first is None:
            return True
        second = self.engine.get_position()
        if second is None:
            return True
        return first == second

    def snapshot(self) -> SessionSnapshot:
        position = self.engine.get_position()
        duration = self.engine.get_duration()
        return SessionSnapshot(
            focus=self.focus.region,
            selected=self.cursor.index,
            search_text=self.search.text,
            volume=self.engine.get_volume(),
            position=position,
            duration=duration,
            progress=self.progress(),
            paused=self.is_paused(),
            current_uri=self.engine.get_current_uri(),
            autoplay_flags=self.autoplay.active_flags(),
        )

    # Completion

    def check_completion(self) -> Optional[CompletionRule]:
        """Fire the completion rules when the loaded track has finished.

        Returns:
            The rule that handled the event, or None when nothing completed.
        """
        if self.progress() != 1.0:
            return None

        rule = self.autoplay.resolve(self.options.exit_when_idle)
        if rule is CompletionRule.REPEAT_TRACK:
            self.engine.play()
        elif rule is CompletionRule.SEQUENTIAL:
            self._advance_sequential()
        elif rule is CompletionRule.SHUFFLE:
            self._play_random(select=False)
        elif rule is CompletionRule.EXIT:
            logger.info("Nothing left to play, exiting")
            self.running = False
        return rule

    def _advance_sequential(self) -> None:
        try:
            index = self.tracks.index_of_uri(self.engine.get_current_uri())
        except EngineDesynchronizedError as e:
            logger.warning(f"Sequential advance skipped: {e}")
            return

        target = index + 1
        if target >= len(self.tracks):
            if not self.autoplay.repeat_list:
                logger.debug("End of list reached")
                return
            target = 0
        self.play_track(self.tracks[target])

    # Key dispatch

    def handle_key(self, key: str, character: Optional[str] = None) -> bool:
        """Dispatch one key press.

        Global keys work in every region; everything else goes to the
        handler of the focused region.

        Returns:
            True if the key was consumed.
        """
        if key in QUIT_KEYS:
            self.quit()
            return True
        if key == FOCUS_KEY:
            region = self.focus.advance()
            logger.debug(f"Focus moved to {region.value}")
            return True
        if key == PLAY_PAUSE_KEY:
            self.toggle_pause()
            return True

        return self._region_handlers[self.focus.region](key, character)

    def quit(self) -> None:
        logger.info("Quit requested")
        self.running = False

    def toggle_pause(self) -> None:
        if self.is_paused():
            self.engine.play()
        else:
            self.engine.pause()

    def _handle_track_list_key(self, key: str, character: Optional[str]) -> bool:
        char = character or key
        if key == "down":
            self.cursor.next()
        elif key == "up":
            self.cursor.prev()
        elif key == "right":
            self.cursor.page_forward()
        elif key == "left":
            self.cursor.page_back()
        elif key == "home":
            self.cursor.first()
        elif key == "end":
            self.cursor.last()
        elif key == "enter":
            self.play_selected()
        elif char == "r":
            self.cursor.random_select()
        elif char == "R":
            self._play_random(select=True)
        else:
            return False
        return True

    def play_selected(self) -> None:
        if self.cursor.index is None:
            logger.debug("Play ignored: nothing selected")
            return
        self.play_track(self.tracks[self.cursor.index])

    def _handle_volume_key(self, key: str, character: Optional[str]) -> bool:
        volume = self.engine.get_volume()
        if key == "left":
            volume -= VOLUME_FINE_STEP
        elif key == "right":
            volume += VOLUME_FINE_STEP
        elif key == "down":
            volume -= VOLUME_COARSE_STEP
        elif key == "up":
            volume += VOLUME_COARSE_STEP
        elif key == "home":
            volume = 0.0
        elif key == "end":
            volume = 1.0
        else:
            return False
        self.engine.set_volume(max(0.0, min(1.0, volume)))
        return True

    def _handle_control_key(self, key: str, character: Optional[str]) -> bool:
        char = character or key
        if key == "left":
            self.seek_by(-SEEK_FINE_STEP)
        elif key == "right":
            self.seek_by(SEEK_FINE_STEP)
        elif key == "down":
            self.seek_by(-SEEK_COARSE_STEP)
        elif key == "up":
            self.seek_by(SEEK_COARSE_STEP)
        elif key == "home":
            self.engine.seek(0.0)
        elif key == "end":
            duration = self.engine.get_duration()
            if duration is not None:
                self.engine.seek(duration)
        elif char == "r":
            logger.info(f"Repeat track: {self.autoplay.toggle_repeat_track()}")
        elif char == "s":
            logger.info(f"Shuffle: {self.autoplay.toggle_shuffle()}")
        elif char == "l":
            logger.info(f"Sequential: {self.autoplay.toggle_sequential()}")
        elif char == "i":
            logger.info(f"Repeat list: {self.autoplay.toggle_repeat_list()}")
        else:
            return False
        return True

    def seek_by(self, delta: float) -> None:
        """Seek relative to the current position, clamped to the stream.

        Forward seeks need a known duration; backward seeks only need a
        position.
        """
        position = self.engine.get_position()
        if position is None:
            return
        duration = self.engine.get_duration()
        if delta > 0 and duration is None:
            return
        target = max(0.0, position + delta)
        if duration is not None:
            target = min(duration, target)
        self.engine.seek(target)

    def _handle_search_key(self, key: str, character: Optional[str]) -> bool:
        if key == "enter":
            self.run_search()
        elif key == "backspace":
            self.search.erase()
        elif key == "delete":
            self.search.clear()
        elif character and character.isprintable():
            self.search.append(character)
        else:
            return False
        return True

    def run_search(self) -> Optional[int]:
        """Move the cursor to the next track matching the search text."""
        if self.cursor.index is None:
            return None
        match = self.tracks.find(self.search.text, self.cursor.search_start())
        if match is None:
            logger.debug(f"No match for {self.search.text!r}")
            return None
        self.cursor.select(match)
        return match
