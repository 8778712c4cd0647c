"""
Run independent awaitables together and collect each outcome.

Unlike a bare ``asyncio.gather`` a failure never surfaces as the combined
result: every task settles, and the caller inspects each one.
"""
import asyncio
from typing import Any, Awaitable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


class Settled(Generic[T]):
    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[BaseException] = None):
        self.value = value
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"Settled(value={self.value!r})"
        return f"Settled(error={self.error!r})"


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> List[Settled[T]]:
    """Await everything concurrently; results come back in input order"""
    tasks: List[Awaitable[Any]] = list(awaitables)
    if not tasks:
        return []
    results = await asyncio.gather(*tasks, return_exceptions=True)
    return [
        Settled(error=result) if isinstance(result, BaseException) else Settled(value=result)
        for result in results
    ]
