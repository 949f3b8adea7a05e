"""Base use case for the destructive operations."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """A request model in, a response model out."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the operation for the identity carried by the request."""
