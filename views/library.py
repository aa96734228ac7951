from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Label, Static

from models.focus import FocusRegion
from models.track import TrackList
from services.session import SessionSnapshot
from styles import COLOR_HIGHLIGHT, COLOR_MUTED

HIGHLIGHT_SYMBOL = "> "


def visible_window(selected: int | None, total: int, height: int, offset: int = 0) -> tuple[int, int]:
    """Return the ``(start, end)`` row range to draw.

    The previous offset is kept while the selected row stays inside it,
    otherwise the window scrolls just far enough to show the selection.
    """
    height = max(1, height)
    if total <= height:
        return 0, total
    offset = max(0, min(offset, total - height))
    if selected is not None:
        if selected < offset:
            offset = selected
        elif selected >= offset + height:
            offset = selected - height + 1
    return offset, offset + height


class LibraryView(Container):
    """Track list region: one row per listed file, cursor row highlighted."""

    def __init__(self, tracks: TrackList, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tracks = tracks
        self._offset = 0

    def compose(self) -> ComposeResult:
        """Compose the library view with a title and the track rows."""
        yield Label("Select music", id="library-title")
        yield Static(self._render_rows(None), id="track-list")

    def render_snapshot(self, snapshot: SessionSnapshot) -> None:
        self.set_class(snapshot.focus is FocusRegion.TRACK_LIST, "focused")
        rows = self.query_one("#track-list", Static)
        rows.update(self._render_rows(snapshot.selected, rows.size.height))

    def _render_rows(self, selected: int | None, height: int = 0) -> Text:
        result = Text()
        if not self.tracks:
            result.append("No files listed", style=COLOR_MUTED)
            return result

        start, end = visible_window(selected, len(self.tracks), height or len(self.tracks), self._offset)
        self._offset = start

        for index in range(start, end):
            name = self.tracks[index].display_name
            if index == selected:
                result.append(f"{HIGHLIGHT_SYMBOL}{name}", style=f"reverse {COLOR_HIGHLIGHT}")
            else:
                result.append(f"{' ' * len(HIGHLIGHT_SYMBOL)}{name}")
            if index < end - 1:
                result.append("\n")
        return result
