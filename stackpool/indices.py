"""
Bookkeeping of free and used slot indices.
"""
from typing import List, Set

from .errors import CapacityExhaustedError, InvalidReleaseError


class IndexSets:
    """
    Partition of [0, size) into free and used indices.

    Free indices form a stack: the most recently released index is handed
    out first.
    """

    __slots__ = '_size', '_free', '_used'

    _size: int
    _free: List[int]
    _used: Set[int]

    def __init__(self, size: int):
        self._size = size
        self._free = list(range(size))
        self._used = set()

    def take(self) -> int:
        if len(self._free) == 0:
            raise CapacityExhaustedError(f'all {self._size} slots are in use')

        index = self._free.pop()
        self._used.add(index)
        return index

    def give_back(self, index: int) -> None:
        if index not in self._used:
            raise InvalidReleaseError(f'slot {index} is not in use')

        self._used.remove(index)
        self._free.append(index)

    def is_used(self, index: int) -> bool:
        return index in self._used

    def free_count(self) -> int:
        return len(self._free)

    def used_count(self) -> int:
        return len(self._used)

    def used(self) -> List[int]:
        return sorted(self._used)

    def check(self) -> None:
        """Assert the conservation invariant, mostly for testing purpose."""
        free = set(self._free)
        if len(free) != len(self._free):
            raise AssertionError(f'duplicated free index: {self._free}')
        if free & self._used:
            raise AssertionError(f'index both free and used: {sorted(free & self._used)}')
        if free | self._used != set(range(self._size)):
            raise AssertionError('index lost')

    def __repr__(self) -> str:
        return f'IndexSets(free={self._free}, used={self.used()})'
