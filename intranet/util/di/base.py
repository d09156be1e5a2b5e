"""Provider base class for the DI container."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Components with an in-memory twin for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base of every provider the container is assembled from.

    A provider class with subclasses is a swappable component: one subclass
    sets ``__is_mock__ = True`` and serves tests, another is production. A
    provider class without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_swappable(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def variant(cls, mock: bool) -> Type["ProviderBase"]:
        """Return the in-memory or production implementation of this provider.

        Raises:
            ValueError: If the requested implementation was never defined
                (or its module never imported)
        """
        if not cls.is_swappable():
            return cls
        for impl in cls.__subclasses__():
            if impl.__is_mock__ == mock:
                return impl
        kind = "mock" if mock else "production"
        raise ValueError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )
