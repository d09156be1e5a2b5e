"""Account repository interface."""

from abc import ABC, abstractmethod

from intranet.domain.model.account import Account
from intranet.domain.value import Email, Role, UserId


class AccountRepository(ABC):
    """Repository for Account aggregate (the user store).

    Defines the contract for account persistence operations.
    Implementations live in the persistence layer. All calls participate in
    the transaction opened by the caller's UnitOfWork.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Account | None:
        """Find an account by ID.

        Args:
            user_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Account | None:
        """Find an account by email, case-insensitively.

        Args:
            email: Normalized email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: The account to insert

        Returns:
            The inserted account

        Raises:
            StorageConflictError: If an account with the same email exists
        """
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Overwrite an existing account's mutable fields.

        Args:
            account: The account with updated values

        Returns:
            The updated account

        Raises:
            StorageConflictError: If the account no longer exists
        """
        pass

    @abstractmethod
    async def list(
        self, role: Role | None = None, limit: int = 50, offset: int = 0
    ) -> list[Account]:
        """List accounts ordered by email.

        Args:
            role: Optional role filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of accounts
        """
        pass

    @abstractmethod
    async def count(self, role: Role | None = None) -> int:
        """Count accounts, optionally by role."""
        pass
