"""
Error types of stackpool.
"""


class PoolError(Exception):
    """Base class for all pool errors."""


class CapacityExhaustedError(PoolError):
    """All slots are currently leased."""


class InvalidReleaseError(PoolError):
    """Release of an object that is not leased from this pool (stale, foreign or double release)."""


class PoolConfigError(PoolError, ValueError):
    """Pool constructed with invalid arguments."""


class EmptyHandleError(PoolError):
    """Dereference of an empty or already released handle."""


class PoolClosedError(PoolError):
    """Use of a pool after close()."""
