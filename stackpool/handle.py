"""
Borrow handle, a lease on one slot of a pool.
"""
from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Generic, TypeVar, Optional, Any

from typing_extensions import Protocol

from .errors import PoolError, EmptyHandleError

T = TypeVar("T")


# pylint: disable=too-few-public-methods
class Releaser(Protocol):
    """The side of the pool a handle talks to."""

    @abstractmethod
    def destroy(self, obj: Any, index: Optional[int] = None, generation: Optional[int] = None) -> None:
        """Return the slot holding obj to the free set."""


class BorrowHandle(Generic[T]):
    """
    Scoped, movable, non-copyable handle to a pooled object.

    The slot is given back to the pool exactly once: on release(), on leaving
    a with block, or when the handle is garbage collected. An empty handle
    (returned when the pool is exhausted) is falsy and releasing it is a no-op.

    generation identifies the lease: the pool bumps it each time the slot is
    handed out, so a stale release of a reused slot is detected.
    """

    __slots__ = '_pool', '_obj', '_index', '_generation'

    _pool: Releaser
    _obj: Optional[T]
    _index: Optional[int]
    _generation: Optional[int]

    def __init__(
            self, pool: Releaser, obj: Optional[T] = None,
            index: Optional[int] = None, generation: Optional[int] = None,
    ):
        self._pool = pool
        self._obj = obj
        self._index = index
        self._generation = generation

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def generation(self) -> Optional[int]:
        return self._generation

    @property
    def value(self) -> T:
        if self._index is None:
            raise EmptyHandleError('dereference of an empty borrow handle')
        return self._obj  # type: ignore

    def get(self) -> Optional[T]:
        """Returns the object, or None for an empty handle."""
        return self._obj

    def release(self) -> None:
        """Give the slot back to the pool, calling it more than once is a no-op."""
        index = self._index
        if index is None:
            return

        obj = self._obj
        generation = self._generation
        self._clear()
        self._pool.destroy(obj, index, generation)

    def move(self) -> BorrowHandle[T]:
        """Transfer the lease to a new handle, this handle becomes empty."""
        moved: BorrowHandle[T] = BorrowHandle(self._pool, self._obj, self._index, self._generation)
        self._clear()
        return moved

    def _clear(self) -> None:
        self._obj = None
        self._index = None
        self._generation = None

    def __bool__(self) -> bool:
        return self._index is not None

    def __enter__(self) -> BorrowHandle[T]:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.release()
            return

        # keep the exception raised inside the with block
        try:
            self.release()
        except PoolError as e:
            logging.error('Borrow handle release error. %s', e)

    def __del__(self):
        try:
            self.release()
        except PoolError as e:
            logging.error('Borrow handle release error. %s', e)

    def __copy__(self):
        raise TypeError('BorrowHandle can not be copied, use move()')

    def __deepcopy__(self, memo):
        raise TypeError('BorrowHandle can not be copied, use move()')

    def __reduce_ex__(self, protocol):
        raise TypeError('BorrowHandle can not be pickled')

    def __repr__(self) -> str:
        if self._index is None:
            return 'BorrowHandle(empty)'
        return f'BorrowHandle(index={self._index}, value={self._obj!r})'
