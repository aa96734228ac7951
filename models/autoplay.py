from dataclasses import dataclass
from enum import Enum


class CompletionRule(Enum):
    """What the session does when the loaded track completes."""
    REPEAT_TRACK = "repeat_track"
    SEQUENTIAL = "sequential"
    SHUFFLE = "shuffle"
    EXIT = "exit"
    IDLE = "idle"


@dataclass
class AutoplayMode:
    """Four independent completion toggles.

    No combination is invalid. When several are set, ``resolve`` applies
    them by priority: repeat track, then sequential, then shuffle.
    ``repeat_list`` only matters together with ``sequential``.
    """
    repeat_track: bool = False
    repeat_list: bool = False
    sequential: bool = False
    shuffle: bool = False

    def toggle_repeat_track(self) -> bool:
        self.repeat_track = not self.repeat_track
        return self.repeat_track

    def toggle_repeat_list(self) -> bool:
        self.repeat_list = not self.repeat_list
        return self.repeat_list

    def toggle_sequential(self) -> bool:
        self.sequential = not self.sequential
        return self.sequential

    def toggle_shuffle(self) -> bool:
        self.shuffle = not self.shuffle
        return self.shuffle

    def resolve(self, exit_when_idle: bool = False) -> CompletionRule:
        """Pick the single rule that handles a completion event."""
        if self.repeat_track:
            return CompletionRule.REPEAT_TRACK
        if self.sequential:
            return CompletionRule.SEQUENTIAL
        if self.shuffle:
            return CompletionRule.SHUFFLE
        if exit_when_idle:
            return CompletionRule.EXIT
        return CompletionRule.IDLE

    def active_flags(self) -> list[str]:
        """Names of the toggles currently set, in display order."""
        return [
            name for name, active in [
                ("repeat_list", self.repeat_list),
                ("repeat_track", self.repeat_track),
                ("sequential", self.sequential),
                ("shuffle", self.shuffle),
            ] if active
        ]
