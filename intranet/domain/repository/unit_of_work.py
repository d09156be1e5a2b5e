"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction scope shared by the repositories of one request.

    ``transaction()`` wraps one attempt: everything written inside it is
    discarded if the block raises. ``commit()`` makes the work durable.
    Storage failures surface as ``TransientStorageError`` (or its
    ``StorageConflictError`` subclass) so callers can retry.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an attempt scope that rolls back on exception."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make all completed attempts durable.

        Raises:
            TransientStorageError: If the commit failed; nothing was persisted
        """
        pass
