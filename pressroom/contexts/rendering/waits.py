"""Clock abstraction for fixed settle windows."""

import asyncio


class Waiter:
    """
    Fixed-delay waits used as last-resort synchronization.

    Substitute a subclass in tests to make settle windows instantaneous
    and observable.
    """

    async def sleep(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)
