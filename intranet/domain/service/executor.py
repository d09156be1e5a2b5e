"""Per-email serialized execution with bounded retry."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire

from intranet.domain.error import TransientStorageError
from intranet.domain.repository import UnitOfWork
from intranet.domain.value import Email
from intranet.util.locking import KeyedLock

from .base import Service

T = TypeVar("T")


class PerEmailExecutor(Service):
    """Runs account mutations for one email strictly one at a time.

    Each call holds the lock for the normalized email for its whole
    duration. Inside it, the operation runs in its own transaction attempt
    and is committed before the lock is released. On a transient storage
    error the attempt is rolled back and the operation runs again from
    scratch, so it must re-read whatever it depends on.
    """

    def __init__(
        self,
        keyed_lock: KeyedLock,
        unit_of_work: UnitOfWork,
        max_attempts: int = 3,
    ) -> None:
        """Initialize executor.

        Args:
            keyed_lock: Process-wide lock registry
            unit_of_work: Transaction scope of the current request
            max_attempts: Attempts before a transient error is re-raised
        """
        self.keyed_lock = keyed_lock
        self.unit_of_work = unit_of_work
        self.max_attempts = max_attempts

    async def run(
        self,
        email: Email,
        operation: Callable[[], Awaitable[T]],
        name: str = "operation",
    ) -> T:
        """Run ``operation`` under the lock for ``email``.

        Args:
            email: Normalized email the operation mutates
            operation: Zero-argument coroutine function; called once per attempt
            name: Operation name for logs

        Returns:
            Whatever the successful attempt returned

        Raises:
            TransientStorageError: If every attempt failed transiently
        """
        async with self.keyed_lock.hold(email.root):
            attempt = 0
            while True:
                attempt += 1
                try:
                    async with self.unit_of_work.transaction():
                        result = await operation()
                    await self.unit_of_work.commit()
                    return result
                except TransientStorageError as e:
                    if attempt >= self.max_attempts:
                        logfire.error(
                            "Storage retries exhausted",
                            operation=name,
                            email=email.root,
                            attempts=attempt,
                            error=str(e),
                        )
                        raise
                    logfire.warn(
                        "Transient storage error, retrying",
                        operation=name,
                        email=email.root,
                        attempt=attempt,
                        error=str(e),
                    )
