import argparse
import logging
import sys
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal

from models.errors import DirectoryUnreadableError
from models.options import StartupOptions
from models.track import TrackList
from services.audio_player import AudioPlayer
from services.music_library import MusicLibrary
from services.session import PlaybackSession
from views import LibraryView, NowPlayingView
from widgets import Header, InstructionsPanel

__version__ = "0.1.0"

LOOP_INTERVAL = 1.0

EXIT_OK = 0
EXIT_DIRECTORY_UNREADABLE = 1
EXIT_SETUP_FAILURE = 3
EXIT_INTERRUPTED = 130

log_dir = Path.home() / '.local' / 'share' / 'dirplay'
log_file = log_dir / 'dirplay.log'

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Send all logging to the log file; the terminal belongs to the UI."""
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file)
        ]
    )


class DirplayApp(App):
    """Keyboard-driven terminal player for a directory of audio files."""

    CSS_PATH = "styles/app.tcss"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("tab", "focus_advance", "Next region", show=False, priority=True),
    ]

    def __init__(self, session: PlaybackSession, directory: str = ".", *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.directory = directory

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header(id="header")
        with Horizontal(id="main-container"):
            yield LibraryView(self.session.tracks, id="library")
            yield NowPlayingView(id="now_playing")
        yield InstructionsPanel(id="instructions")

    def on_mount(self) -> None:
        """Start playback requested at startup and the loop timer."""
        header = self.query_one(Header)
        header.directory = self.directory
        header.track_count = len(self.session.tracks)

        try:
            self.session.start()
        except Exception as e:
            logger.error(f"Error starting playback: {e}")
            self.notify("Cannot play startup track", severity="error", timeout=3)

        self._render_session()
        self.set_interval(LOOP_INTERVAL, self._tick)

    def _tick(self) -> None:
        """One loop iteration without input: render, then check completion."""
        self._render_session()
        try:
            self.session.check_completion()
        except Exception as e:
            logger.error(f"Error during completion handling: {e}")
            self.notify("Error advancing to next track", severity="error", timeout=3)
        self._exit_if_stopped()

    def _render_session(self) -> None:
        snapshot = self.session.snapshot()
        self.query_one("#library", LibraryView).render_snapshot(snapshot)
        self.query_one("#now_playing", NowPlayingView).render_snapshot(snapshot)
        self.query_one("#instructions", InstructionsPanel).show_region(snapshot.focus)

    def _dispatch(self, key: str, character: str | None) -> bool:
        try:
            handled = self.session.handle_key(key, character)
        except Exception as e:
            logger.error(f"Error handling key {key!r}: {e}")
            self.notify(f"Error handling {key}", severity="error", timeout=3)
            return False

        self._exit_if_stopped()
        if self.session.running:
            self._render_session()
        return handled

    def _exit_if_stopped(self) -> None:
        if not self.session.running:
            self.exit(return_code=EXIT_OK)

    def on_key(self, event: events.Key) -> None:
        if self._dispatch(event.key, event.character):
            event.stop()
            event.prevent_default()

    def action_focus_advance(self) -> None:
        self._dispatch("tab", None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirplay",
        description="A music player for the command line that plays a directory of files.",
    )
    parser.add_argument("-d", "--dir", help="Playlist directory. Defaults to current directory.")
    parser.add_argument("-p", "--play", help="Play file on startup. Overrides --random.")
    parser.add_argument("-e", "--no-remain", action="store_true",
                        help="Exit when there are no songs left to play.")
    parser.add_argument("-r", "--random", action="store_true",
                        help="Play random file on startup. Overridden by --play.")
    parser.add_argument("-v", "--volume", type=float,
                        help="Initial volume (0.0 to 1.0), applied once to the first played file.")
    parser.add_argument("-i", "--repeat-list", action="store_true",
                        help="Repeat the entire sequential list.")
    parser.add_argument("-R", "--repeat", action="store_true",
                        help="Repeat the current song indefinitely.")
    parser.add_argument("-l", "--sequential", action="store_true",
                        help="Play the list sequentially.")
    parser.add_argument("-s", "--shuffle", action="store_true",
                        help="Play the list randomly and indefinitely.")
    parser.add_argument("-n", "--no-listing", action="store_true",
                        help="Don't create a directory listing.")
    parser.add_argument("--log-level", default="INFO", help="Log level (DEBUG, INFO, WARNING, ERROR).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_options(argv=None) -> StartupOptions:
    """Parse the command line; usage errors exit with status 2."""
    parser = build_parser()
    args = parser.parse_args(argv)
    options = StartupOptions.from_args(args)
    issues = options.validate()
    if issues:
        parser.error("; ".join(issues))
    return options


def load_tracks(options: StartupOptions) -> TrackList:
    if options.no_listing:
        logger.info("Directory listing skipped")
        return TrackList()
    return MusicLibrary(options.directory_path()).scan()


def main(argv=None) -> int:
    """Entry point for DIRPLAY.

    Returns the process exit status: 0 on a clean quit, 1 when the playlist
    directory is unreadable, 2 on a usage error, 3 when the audio output or
    terminal cannot be set up and 130 on Ctrl-C.
    """
    options = parse_options(argv)
    setup_logging(options.log_level)

    try:
        logger.info("=" * 60)
        logger.info("DIRPLAY starting up")
        logger.info("=" * 60)

        tracks = load_tracks(options)
        session = PlaybackSession(tracks, AudioPlayer(), options)
        app = DirplayApp(session, directory=options.directory)
        app.run()

        if app.return_code:
            logger.critical(f"UI terminated abnormally with code {app.return_code}")
            print(f"\nDIRPLAY stopped unexpectedly. Check {log_file} for more details.\n", file=sys.stderr)
            return EXIT_SETUP_FAILURE

        logger.info("DIRPLAY shut down cleanly")
        return EXIT_OK

    except DirectoryUnreadableError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print(f"\nDIRPLAY cannot start: {e}\n", file=sys.stderr)
        return EXIT_DIRECTORY_UNREADABLE
    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\nDIRPLAY cannot start\n", file=sys.stderr)
        print(f"{e}\n", file=sys.stderr)
        print(f"Check {log_file} for more details.\n", file=sys.stderr)
        return EXIT_SETUP_FAILURE
    except KeyboardInterrupt:
        logger.info("DIRPLAY interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\nDIRPLAY encountered an unexpected error\n", file=sys.stderr)
        print(f"{type(e).__name__}: {e}\n", file=sys.stderr)
        print(f"Check {log_file} for more details.\n", file=sys.stderr)
        return EXIT_SETUP_FAILURE


if __name__ == "__main__":
    sys.exit(main())
