"""Email domain allow-list."""

from pydantic import ValidationError as PydanticValidationError

from intranet.domain.value import Email

from .base import Service


class DomainPolicy(Service):
    """Decides which email domains may hold accounts.

    Driven by a single configured domain. Empty means every domain is
    allowed. Matching is exact on the part after the last '@', ignoring
    case; subdomains do not match.
    """

    def __init__(self, allowed_domain: str | None) -> None:
        self.allowed_domain = (allowed_domain or "").strip().lstrip("@").lower()

    @property
    def is_restricted(self) -> bool:
        return bool(self.allowed_domain)

    def is_allowed(self, email: Email | str) -> bool:
        if not self.allowed_domain:
            return True
        if isinstance(email, str):
            try:
                email = Email(email)
            except PydanticValidationError:
                return False
        return email.domain == self.allowed_domain
