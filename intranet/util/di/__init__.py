"""Dependency injection wiring.

``PROVIDERS`` is the ordered list of provider classes the container is built
from. ``resolve_providers`` instantiates it, choosing in-memory
implementations for the components named in ``mocked``.
"""

from typing import Iterable, Type

from intranet.util.di.application import ProdApplicationProvider
from intranet.util.di.base import Component, ProviderBase
from intranet.util.di.core import ProdConfigProvider
from intranet.util.di.domain import ProdDomainProvider
from intranet.util.di.infrastructure import PersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def swappable_components() -> set[Component]:
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_swappable() and base.__mock_component__
    }


def resolve_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per ``PROVIDERS`` entry.

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    mocked = set(mocked)
    unknown = mocked - swappable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")
    return [
        base.variant(mock=base.__mock_component__ in mocked)() for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "resolve_providers",
    "swappable_components",
]
