"""
Storage strategies, define how a slot relates to the object it holds.
"""
from abc import abstractmethod
from typing import Any, Callable, TypeVar, Generic

from typing_extensions import Protocol

from .errors import PoolConfigError

T = TypeVar("T")

ObjectFactory = Callable[..., T]


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return 'EMPTY'


EMPTY: Any = _Empty()


class Cell:
    """One slot of the pool's backing store."""

    __slots__ = ('value',)

    value: Any

    def __init__(self):
        self.value = EMPTY

    def is_empty(self) -> bool:
        return self.value is EMPTY


# pylint: disable=too-few-public-methods
class Box(Generic[T]):
    """Owning indirection to a separately allocated object."""

    __slots__ = ('obj',)

    obj: T

    def __init__(self, obj: T):
        self.obj = obj


class StorageStrategy(Protocol):
    """Policy for building objects inside cells and finding them again."""

    @abstractmethod
    def address_of(self, cell: Cell) -> Any:
        """Returns the live object represented by the cell."""

    @abstractmethod
    def initialize(self, cell: Cell, factory: ObjectFactory, *args, **kwargs) -> None:
        """Construct (or re-construct) the object of the cell, replacing the previous value."""

    @abstractmethod
    def reset(self, cell: Cell) -> None:
        """Put the cell back into its empty form."""

    @abstractmethod
    def validate(self, factory: ObjectFactory) -> None:
        """Raise PoolConfigError if the strategy can not store objects built by factory."""


def _can_reinit(factory: ObjectFactory) -> bool:
    # immutable builtins (int, str, tuple...) are built by __new__, __init__ is a no-op
    return isinstance(factory, type) and factory.__init__ is not object.__init__


class InlineStorage:
    """
    The cell stores the object itself.

    With reuse=True, a cell already holding an instance of the same type is
    re-initialized in place by calling __init__ again, keeping its identity.
    """

    __slots__ = ('_reuse',)

    _reuse: bool

    def __init__(self, reuse: bool = False):
        self._reuse = reuse

    def address_of(self, cell: Cell) -> Any:
        return cell.value

    def initialize(self, cell: Cell, factory: ObjectFactory, *args, **kwargs) -> None:
        obj = cell.value
        if self._reuse and _can_reinit(factory) and type(obj) is factory:  # pylint: disable=unidiomatic-typecheck
            obj.__init__(*args, **kwargs)
            return
        cell.value = factory(*args, **kwargs)

    def reset(self, cell: Cell) -> None:
        cell.value = EMPTY

    def validate(self, factory: ObjectFactory) -> None:
        pass

    def __repr__(self) -> str:
        return f'InlineStorage(reuse={self._reuse})'


class IndirectStorage:
    """The cell stores a box, the object lives behind it."""

    __slots__ = ('_box_type',)

    _box_type: Callable[[Any], Any]

    def __init__(self, box_type: Callable[[Any], Any] = Box):
        self._box_type = box_type

    def address_of(self, cell: Cell) -> Any:
        box = cell.value
        if box is EMPTY:
            return EMPTY
        return box.obj

    def initialize(self, cell: Cell, factory: ObjectFactory, *args, **kwargs) -> None:
        cell.value = self._box_type(factory(*args, **kwargs))

    def reset(self, cell: Cell) -> None:
        cell.value = EMPTY

    def validate(self, factory: ObjectFactory) -> None:
        if factory is self._box_type:
            raise PoolConfigError('object type and box type must differ')

    def __repr__(self) -> str:
        return f'IndirectStorage(box_type={getattr(self._box_type, "__name__", self._box_type)})'
