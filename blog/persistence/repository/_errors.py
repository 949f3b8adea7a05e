"""Store error translation for Postgres repositories."""

import functools
from typing import Awaitable, Callable, ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from blog.domain.error import StoreUnavailableError

P = ParamSpec("P")
R = TypeVar("R")

# Connection-level failures; the request may be retried
UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)


def translate_store_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Re-raise connectivity failures as StoreUnavailableError."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except UNAVAILABLE_ERRORS as e:
            logfire.error(
                "Store unavailable",
                operation=func.__qualname__,
                error_type=type(e).__name__,
            )
            raise StoreUnavailableError(func.__qualname__) from e

    return wrapper
