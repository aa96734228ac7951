import logging
import random
from typing import Optional

logger = logging.getLogger(__name__)

PAGE_STEP = 5


class SelectionCursor:
    """Highlighted index into a track list of fixed length.

    ``index`` is ``None`` only while the list is empty; otherwise it is a
    valid index in ``[0, length)``. Every operation is a no-op on an empty
    list.
    """

    def __init__(self, length: int, rng: Optional[random.Random] = None):
        self.length = length
        self.index: Optional[int] = 0 if length > 0 else None
        self._rng = rng or random.Random()

    def select(self, index: int) -> None:
        if self.length == 0:
            return
        self.index = index % self.length

    def next(self) -> None:
        """Move down one row, wrapping to the top."""
        if self.length == 0:
            return
        if self.index is None:
            self.index = 0
        else:
            self.index = (self.index + 1) % self.length

    def prev(self) -> None:
        """Move up one row, wrapping to the bottom."""
        if self.length == 0:
            return
        if self.index is None:
            self.index = self.length - 1
        else:
            self.index = (self.index - 1 + self.length) % self.length

    def page_forward(self) -> None:
        """Jump PAGE_STEP rows down; only on lists longer than PAGE_STEP."""
        if self.length <= PAGE_STEP:
            return
        if self.index is None:
            self.index = 0
        else:
            self.index = (self.index + PAGE_STEP) % self.length

    def page_back(self) -> None:
        """Jump PAGE_STEP rows up, or to the last row when closer to the top."""
        if self.length <= PAGE_STEP:
            return
        if self.index is None or self.index < PAGE_STEP:
            self.index = self.length - 1
        else:
            self.index = self.index - PAGE_STEP

    def first(self) -> None:
        if self.length == 0:
            return
        self.index = 0

    def last(self) -> None:
        if self.length == 0:
            return
        self.index = self.length - 1

    def random_select(self) -> Optional[int]:
        """Select a uniformly random row and return it."""
        if self.length == 0:
            return None
        self.index = self._rng.randrange(self.length)
        logger.debug(f"Random selection: {self.index}")
        return self.index

    def search_start(self) -> int:
        """Index where a cyclic search begins: the row after the cursor."""
        if self.length == 0 or self.index is None:
            return 0
        return (self.index + 1) % self.length


class SearchBuffer:
    """Editable search text: append, erase last, clear."""

    def __init__(self, text: str = ""):
        self._chars: list[str] = list(text)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def append(self, char: str) -> None:
        self._chars.append(char)

    def erase(self) -> None:
        if self._chars:
            self._chars.pop()

    def clear(self) -> None:
        self._chars.clear()

    def __len__(self) -> int:
        return len(self._chars)
