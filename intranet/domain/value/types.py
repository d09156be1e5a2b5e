"""Domain value objects for the intranet.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator

from intranet.domain.error import InvalidIdentityError
from intranet.domain.value.common import RootValueObject, ValueObject
from intranet.domain.value.identifiers import UserId

PLACEHOLDER_FIRST_NAME = "Unknown"

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class Role(str, Enum):
    """The three flat roles."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class ReconcileOutcome(str, Enum):
    """What a reconciliation did to the account."""

    CREATED = "Created"
    ACTIVATED = "Activated"
    REAUTHENTICATED = "Reauthenticated"
    DOMAIN_REJECTED = "DomainRejected"


class IdentityProvider(str, Enum):
    """Upstream identity providers that hand over verified identities."""

    GOOGLE = "google"
    MICROSOFT = "microsoft"


class Email(RootValueObject[str]):
    """Normalized email address (trimmed, lowercased).

    Two addresses differing only by case are the same identity.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and validate the address shape."""
        v = v.strip().lower()
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Email must look like local@domain")
        return v

    @classmethod
    def parse(cls, raw: str | None) -> "Email":
        """Build an Email, raising a domain error for malformed input.

        Raises:
            InvalidIdentityError: If raw is empty or malformed
        """
        if not raw or not raw.strip():
            raise InvalidIdentityError(raw or "")
        try:
            return cls(raw)
        except PydanticValidationError as e:
            raise InvalidIdentityError(raw) from e

    @property
    def domain(self) -> str:
        """Part after the last '@'."""
        return self.root.rsplit("@", 1)[1]


class PersonName(ValueObject):
    """First/last name pair derived from an identity provider display name."""

    first_name: str
    last_name: str = ""

    @classmethod
    def from_display_name(cls, display_name: str | None) -> "PersonName":
        """Split a display name on whitespace.

        The first token becomes the first name (``Unknown`` when there is
        none); the remaining tokens, joined by single spaces, become the
        last name.

        Examples:
            "Ada" -> ("Ada", "")
            "Ada Lovelace Byron" -> ("Ada", "Lovelace Byron")
            "" -> ("Unknown", "")
        """
        tokens = (display_name or "").split()
        if not tokens:
            return cls(first_name=PLACEHOLDER_FIRST_NAME, last_name="")
        return cls(first_name=tokens[0], last_name=" ".join(tokens[1:]))


class RequestPrincipal(ValueObject):
    """Who is making the current request, as read from the store just now.

    Built once per request and never mutated. The role here is the stored
    role at request time, not whatever the session was issued with.
    """

    user_id: UserId
    email: Email
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
