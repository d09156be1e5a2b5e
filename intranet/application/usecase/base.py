"""Use case base."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One command or query, taking a request model and returning a response model."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...
