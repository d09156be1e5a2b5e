"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidIdentityError(ValidationError):
    """Raised when an identity reaching the core has a malformed or empty email.

    Distinct from a domain rejection: the upstream identity provider should
    never hand over such an identity.
    """

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Invalid email address: {email!r}")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class DomainNotAllowedError(BusinessRuleViolationError):
    """Raised when an admin command targets an email outside the allowed domain."""

    def __init__(self, email: str, allowed_domain: str):
        self.email = email
        self.allowed_domain = allowed_domain
        super().__init__(f"Email {email} is not in the allowed domain {allowed_domain}")


class SelfRoleChangeError(BusinessRuleViolationError):
    """Raised when an admin tries to change their own role."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Users cannot modify their own admin role")


class NotAuthorizedError(DomainError):
    """Raised when the acting user lacks the role an operation requires."""

    def __init__(self, user_id: str, action: str):
        self.user_id = user_id
        self.action = action
        super().__init__(f"User {user_id} is not authorized to {action}")


class AccountInactiveError(DomainError):
    """Raised when a deactivated account presents a session."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Account {user_id} is inactive")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyExistsError(DomainError):
    """Raised when creating a resource whose natural key is taken."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class TransientStorageError(DomainError):
    """Retryable storage failure (connection loss, timeout, lost race).

    Nothing from the failed attempt is visible once this is raised: the
    attempt's transaction has been rolled back.
    """

    pass


class StorageConflictError(TransientStorageError):
    """A concurrent writer won: unique key taken or conditional update missed."""

    pass
