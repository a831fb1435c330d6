"""Monotonic node id allocation."""

from typing import List


class IdAllocator:
    """Issues node ids that are never reused.

    ``reserve`` hands out a consecutive block and then advances the cursor by
    at least ``stride``, so one append keeps a fixed-size block of ids.
    """

    def __init__(self, start: int = 2, stride: int = 1) -> None:
        if stride < 1:
            raise ValueError(f"Id stride must be positive, got {stride}")
        self._next = start
        self._stride = stride

    @property
    def next_id(self) -> int:
        return self._next

    def next(self) -> int:
        return self.reserve(1)[0]

    def reserve(self, count: int) -> List[int]:
        if count < 1:
            raise ValueError(f"Cannot reserve {count} ids")
        block = list(range(self._next, self._next + count))
        self._next += max(self._stride, count)
        return block
