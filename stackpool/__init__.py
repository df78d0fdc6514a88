from stackpool.errors import PoolError, CapacityExhaustedError, InvalidReleaseError  # type: ignore
from stackpool.errors import PoolConfigError, EmptyHandleError, PoolClosedError  # type: ignore
from stackpool.handle import BorrowHandle  # type: ignore
from stackpool.indices import IndexSets  # type: ignore
from stackpool.pool import StackPool, new_stack_pool, new_boxed_pool  # type: ignore
from stackpool.storage import Cell, Box, EMPTY, StorageStrategy, InlineStorage, IndirectStorage  # type: ignore
