"""
Fixed capacity object pool.
"""
import logging
from typing import TypeVar, Generic, List, Optional, Any, Callable

from .errors import PoolConfigError, CapacityExhaustedError, InvalidReleaseError, PoolError, PoolClosedError
from .handle import BorrowHandle
from .indices import IndexSets
from .storage import Cell, StorageStrategy, InlineStorage, IndirectStorage

T = TypeVar("T")


class StackPool(Generic[T]):
    """
    Pool of exactly max_size slots for objects built by object_type.

    create() takes a free slot, (re)initializes it through the storage
    strategy and returns a BorrowHandle. The slot comes back to the pool when
    the handle is released.

    With strict=False, releasing an object not leased from this pool is
    logged and ignored instead of raising InvalidReleaseError.
    """

    __slots__ = (
        '_factory', '_max_size', '_storage', '_strict',
        '_cells', '_generations', '_indices', '_closed',
    )

    _factory: Callable[..., T]
    _max_size: int
    _storage: StorageStrategy
    _strict: bool

    _cells: List[Cell]
    _generations: List[int]
    _indices: IndexSets
    _closed: bool

    def __init__(
            self, object_type: Callable[..., T], max_size: int,
            storage: Optional[StorageStrategy] = None,
            strict: bool = True,
    ):
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 1:
            raise PoolConfigError(f'max_size must be a positive int, got {max_size!r}')

        if storage is None:
            storage = InlineStorage()
        storage.validate(object_type)

        self._factory = object_type
        self._max_size = max_size
        self._storage = storage
        self._strict = strict

        self._cells = [Cell() for _ in range(max_size)]
        self._generations = [0] * max_size
        self._indices = IndexSets(max_size)
        self._closed = False

    def max_size(self) -> int:
        return self._max_size

    def size_left(self) -> int:
        return self._indices.free_count()

    def size_used(self) -> int:
        return self._indices.used_count()

    def is_full(self) -> bool:
        return self._indices.free_count() == 0

    def create(self, *args, **kwargs) -> BorrowHandle[T]:
        """Returns an empty handle when all slots are in use."""
        if self._closed:
            raise PoolClosedError('create on a closed pool')

        if self._indices.free_count() == 0:
            logging.debug('Pool exhausted, max size %d', self._max_size)
            return BorrowHandle(self)

        index = self._indices.take()
        self._generations[index] += 1
        cell = self._cells[index]
        try:
            self._storage.initialize(cell, self._factory, *args, **kwargs)
        except Exception:
            self._indices.give_back(index)
            raise

        return BorrowHandle(self, self._storage.address_of(cell), index, self._generations[index])

    def create_or_fail(self, *args, **kwargs) -> BorrowHandle[T]:
        handle = self.create(*args, **kwargs)
        if not handle:
            raise CapacityExhaustedError(f'all {self._max_size} slots are in use')
        return handle

    def destroy(self, obj: Any, index: Optional[int] = None, generation: Optional[int] = None) -> None:
        """
        Return the slot holding obj to the free set.

        Handles pass their slot index and lease generation. The release is
        accepted only when the slot is still leased under that generation and
        still holds obj, so stale and double releases are caught even when
        the slot was handed out again with the very same object.

        Without an index the used slots are scanned for obj by identity. Slots
        holding the same object (small ints, interned strings, objects reused
        in place) can not be told apart this way, the first one is freed.
        """
        if index is None:
            index = self._find_index(obj)
        elif not self._is_leased(index, generation, obj):
            index = None

        if index is None:
            if self._strict:
                raise InvalidReleaseError(f'object {obj!r} is not leased from this pool')
            logging.warning('Ignored release of an object not leased from pool. %r', obj)
            return

        self._indices.give_back(index)

    def close(self) -> None:
        """Drop all stored objects, only allowed when nothing is leased."""
        used = self._indices.used_count()
        if used > 0:
            raise PoolError(f'can not close pool, {used} slots still leased')

        for cell in self._cells:
            self._storage.reset(cell)
        self._closed = True

    def _is_leased(self, index: Any, generation: Optional[int], obj: Any) -> bool:
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < self._max_size or not self._indices.is_used(index):
            return False
        if generation != self._generations[index]:
            return False
        return self._storage.address_of(self._cells[index]) is obj

    def _find_index(self, obj: Any) -> Optional[int]:
        for index in self._indices.used():
            if self._storage.address_of(self._cells[index]) is obj:
                return index
        return None

    def __len__(self) -> int:
        return self._indices.used_count()

    def __repr__(self) -> str:
        return (
            f'StackPool(max_size={self._max_size}, size_left={self.size_left()}, '
            f'storage={self._storage!r})'
        )


def new_stack_pool(object_type: Callable[..., T], max_size: int, strict: bool = True) -> StackPool[T]:
    """Pool storing objects inline, in their slots."""
    return StackPool(object_type, max_size, storage=InlineStorage(), strict=strict)


def new_boxed_pool(object_type: Callable[..., T], max_size: int, strict: bool = True) -> StackPool[T]:
    """Pool storing each object behind a Box."""
    return StackPool(object_type, max_size, storage=IndirectStorage(), strict=strict)
