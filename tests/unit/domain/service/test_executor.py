"""Unit tests for PerEmailExecutor."""

import asyncio

import pytest

from intranet.domain.error import (
    NotFoundError,
    StorageConflictError,
    TransientStorageError,
)
from intranet.domain.service import PerEmailExecutor
from intranet.domain.value import Email
from intranet.persistence.repository.inmemory import (
    InMemoryDatabase,
    InMemoryUnitOfWork,
)
from intranet.util.locking import KeyedLock


def _executor(max_attempts: int = 3) -> tuple[PerEmailExecutor, InMemoryUnitOfWork]:
    unit_of_work = InMemoryUnitOfWork(InMemoryDatabase())
    return PerEmailExecutor(KeyedLock(), unit_of_work, max_attempts), unit_of_work


class TestPerEmailExecutor:
    """Tests for serialized, retried execution."""

    @pytest.mark.asyncio
    async def test_returns_result_and_commits_once(self):
        """A successful operation commits exactly once."""
        # Arrange
        executor, unit_of_work = _executor()

        async def operation():
            return "done"

        # Act
        result = await executor.run(Email("a@acme.com"), operation)

        # Assert
        assert result == "done"
        assert unit_of_work.commits == 1

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self):
        """Transient failures re-run the operation from scratch."""
        # Arrange
        executor, unit_of_work = _executor(max_attempts=3)
        calls = []

        async def operation():
            calls.append(1)
            if len(calls) < 3:
                raise StorageConflictError("serialization failure")
            return len(calls)

        # Act
        result = await executor.run(Email("a@acme.com"), operation)

        # Assert
        assert result == 3
        assert unit_of_work.commits == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        """The last transient error is re-raised once attempts run out."""
        # Arrange
        executor, unit_of_work = _executor(max_attempts=2)
        calls = []

        async def operation():
            calls.append(1)
            raise TransientStorageError("timeout")

        # Act & Assert
        with pytest.raises(TransientStorageError, match="timeout"):
            await executor.run(Email("a@acme.com"), operation)
        assert len(calls) == 2
        assert unit_of_work.commits == 0

    @pytest.mark.asyncio
    async def test_domain_errors_are_not_retried(self):
        """Business errors propagate on the first attempt."""
        # Arrange
        executor, _ = _executor()
        calls = []

        async def operation():
            calls.append(1)
            raise NotFoundError("Account", "missing")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await executor.run(Email("a@acme.com"), operation)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_same_email_runs_one_at_a_time(self):
        """Operations for one email never overlap."""
        # Arrange
        executor, _ = _executor()
        running = 0
        peak = 0

        async def operation():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        # Act
        await asyncio.gather(
            *(executor.run(Email("same@acme.com"), operation) for _ in range(5))
        )

        # Assert
        assert peak == 1

    @pytest.mark.asyncio
    async def test_email_case_shares_one_lock(self):
        """Addresses differing only by case serialize together."""
        # Arrange
        executor, _ = _executor()
        running = 0
        peak = 0

        async def operation():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        # Act
        await asyncio.gather(
            executor.run(Email("Case@Acme.com"), operation),
            executor.run(Email("case@acme.com"), operation),
        )

        # Assert
        assert peak == 1
