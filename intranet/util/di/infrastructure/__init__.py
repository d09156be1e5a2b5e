"""Infrastructure providers."""

# The production subclass must be imported for PersistenceProvider.variant()
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
