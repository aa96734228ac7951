from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static

from models.focus import FocusRegion
from models.track import format_time
from services.session import SessionSnapshot
from styles import COLOR_BASS, COLOR_HIGHLIGHT, COLOR_INACTIVE, COLOR_MUTED, COLOR_PRIMARY

GAUGE_WIDTH = 40

PLAY_GLYPH = "▶"
PAUSE_GLYPH = "⏸"
MODE_GLYPHS = {
    "repeat_list": "🔁",
    "repeat_track": "🔂",
    "sequential": "⏬",
    "shuffle": "🔀",
}


def status_title(current_uri: str | None) -> str:
    """Panel title: the loaded file name, or Idle."""
    if current_uri is None:
        return "Idle"
    return "Now playing: " + current_uri.rsplit("/", 1)[-1]


def progress_label(position: float | None, duration: float | None) -> str:
    if position is None or duration is None:
        return "-:-- / -:--"
    return f"{format_time(position)} / {format_time(duration)}"


def control_line(paused: bool, autoplay_flags: list[str]) -> str:
    """Transport buttons plus the glyphs of the active autoplay toggles."""
    toggle = PLAY_GLYPH if paused else PAUSE_GLYPH
    buttons = "   ".join(
        f"[ {glyph} ]"
        for glyph in (
            MODE_GLYPHS["repeat_list"], MODE_GLYPHS["repeat_track"], "⏮", "◀",
            toggle, "▶", "⏭", MODE_GLYPHS["sequential"], MODE_GLYPHS["shuffle"],
        )
    )
    indicators = "".join(f" {MODE_GLYPHS[name]} " for name in autoplay_flags)
    return f"{buttons}\n\n{indicators}"


def render_gauge(ratio: float, label: str = "") -> Text:
    """Horizontal bar filled to ``ratio``, with an optional trailing label."""
    ratio = max(0.0, min(1.0, ratio))
    filled = int(ratio * GAUGE_WIDTH)
    result = Text()
    result.append("│", style=COLOR_MUTED)
    for i in range(GAUGE_WIDTH):
        if i < filled:
            result.append("█", style=COLOR_BASS if i < GAUGE_WIDTH * 0.75 else COLOR_PRIMARY)
        else:
            result.append("─", style=COLOR_INACTIVE)
    result.append("│ ", style=COLOR_MUTED)
    result.append(label or f"{int(round(ratio * 100))}%", style=f"{COLOR_HIGHLIGHT} bold")
    return result


class NowPlayingView(Container):
    """Status panel: volume, progress, controls and search line."""

    def compose(self) -> ComposeResult:
        """Compose the status panel sections."""
        with Vertical():
            yield Static("Idle", id="np-title", classes="track-title", markup=False)
            yield Static(render_gauge(0.0), id="np-volume", classes="region")
            yield Static(render_gauge(0.0, progress_label(None, None)), id="np-progress", classes="region")
            yield Static(control_line(True, []), id="np-controls", classes="region", markup=False)
            yield Static("Search: ", id="np-search", classes="region", markup=False)

    def on_mount(self) -> None:
        self.query_one("#np-volume", Static).border_title = "Volume"

    def render_snapshot(self, snapshot: SessionSnapshot) -> None:
        self.query_one("#np-title", Static).update(status_title(snapshot.current_uri))

        volume = self.query_one("#np-volume", Static)
        volume.update(render_gauge(snapshot.volume))
        volume.set_class(snapshot.focus is FocusRegion.VOLUME, "focused")

        self.query_one("#np-progress", Static).update(
            render_gauge(snapshot.progress, progress_label(snapshot.position, snapshot.duration))
        )

        controls = self.query_one("#np-controls", Static)
        controls.update(control_line(snapshot.paused, snapshot.autoplay_flags))
        controls.set_class(snapshot.focus is FocusRegion.CONTROL, "focused")

        search = self.query_one("#np-search", Static)
        search.update(f"Search: {snapshot.search_text}")
        search.set_class(snapshot.focus is FocusRegion.SEARCH, "focused")
