from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Static

from styles import COLOR_DIM, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_PRIMARY

DIRPLAY_BANNER = "▌DIRPLAY▐"


class Header(Vertical):
    """One-line banner: app name, playlist directory and track count."""

    directory: reactive[str] = reactive(".")
    track_count: reactive[int] = reactive(0)

    def compose(self) -> ComposeResult:
        yield Static(self._render_banner(), id="header-banner")

    def _render_banner(self) -> Text:
        result = Text()
        result.append(DIRPLAY_BANNER, style=f"{COLOR_PRIMARY} bold")
        result.append("  │  ", style=COLOR_DIM)
        result.append(self.directory, style=COLOR_HIGHLIGHT)
        result.append("  │  ", style=COLOR_DIM)
        noun = "track" if self.track_count == 1 else "tracks"
        result.append(f"{self.track_count} {noun}", style=COLOR_MUTED)
        return result

    def _refresh_banner(self) -> None:
        try:
            self.query_one("#header-banner", Static).update(self._render_banner())
        except NoMatches:
            pass

    def watch_directory(self, new_value: str) -> None:
        self._refresh_banner()

    def watch_track_count(self, new_value: int) -> None:
        self._refresh_banner()
