from enum import Enum


class FocusRegion(Enum):
    """UI region that receives region-scoped keys."""
    TRACK_LIST = "track_list"
    VOLUME = "volume"
    CONTROL = "control"
    SEARCH = "search"

    def next(self) -> "FocusRegion":
        """Cyclic successor, wrapping back to TRACK_LIST."""
        members = list(FocusRegion)
        return members[(members.index(self) + 1) % len(members)]


class FocusState:
    """Focus state machine: starts on the track list, advances on one key."""

    def __init__(self, initial: FocusRegion = FocusRegion.TRACK_LIST):
        self.region = initial

    def advance(self) -> FocusRegion:
        self.region = self.region.next()
        return self.region
