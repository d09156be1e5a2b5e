"""Errors raised outside the domain layer."""


class ConfigurationError(Exception):
    """A configured value cannot be used as given."""

    def __init__(self, setting: str, reason: str) -> None:
        self.setting = setting
        self.reason = reason
        super().__init__(f"{setting} is invalid: {reason}")
