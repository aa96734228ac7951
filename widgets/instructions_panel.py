from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Label

from models.focus import FocusRegion

logger = logging.getLogger(__name__)

GLOBAL_HINTS = "Tab next region  •  Space play/pause  •  q/Esc quit"

REGION_HINTS = {
    FocusRegion.TRACK_LIST: "↑↓ move  •  ←→ page  •  Home/End first/last  •  r random  •  R random+play  •  Enter play",
    FocusRegion.VOLUME: "←→ ±1%  •  ↑↓ ±5%  •  Home mute  •  End full",
    FocusRegion.CONTROL: "←→ ±1s  •  ↑↓ ±15s  •  Home/End start/end  •  r repeat  •  i repeat list  •  l sequential  •  s shuffle",
    FocusRegion.SEARCH: "type to search  •  Backspace erase  •  Del clear  •  Enter find next",
}


class InstructionsPanel(Container):
    """Key hints for the focused region."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._region: FocusRegion | None = None

    def compose(self) -> ComposeResult:
        yield Label(self.hint_text(FocusRegion.TRACK_LIST), id="instructions-label")

    @staticmethod
    def hint_text(region: FocusRegion) -> str:
        return f"{REGION_HINTS[region]}     {GLOBAL_HINTS}"

    def show_region(self, region: FocusRegion) -> None:
        """Swap the hint line when focus moves."""
        if region is self._region:
            return
        self._region = region
        self.query_one("#instructions-label", Label).update(self.hint_text(region))
        logger.debug(f"Hints switched to {region.value}")
