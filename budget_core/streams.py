import asyncio
from typing import AsyncIterable, AsyncIterator, Tuple

from budget_core.collator import Stream, StreamCollator
from budget_core.functional import Either

Delivery = Tuple[Stream, Either]

_DONE = object()


async def pump(collator: StreamCollator, deliveries: AsyncIterable[Delivery]) -> int:
    """Apply deliveries one at a time; each finishes before the next is read.

    Returns the number of deliveries applied.
    """
    count = 0
    async for stream, result in deliveries:
        collator.deliver(stream, result)
        count += 1
        await asyncio.sleep(0)  # cooperate
    return count


async def merge(*sources: AsyncIterable[Delivery]) -> AsyncIterator[Delivery]:
    """Interleave independent delivery sources into one sequence.

    Order within a source is kept; no ordering across sources is implied.
    """
    queue: asyncio.Queue = asyncio.Queue()

    async def forward(source: AsyncIterable[Delivery]) -> None:
        try:
            async for item in source:
                await queue.put(item)
        finally:
            await queue.put(_DONE)

    tasks = [asyncio.create_task(forward(s)) for s in sources]
    remaining = len(tasks)
    try:
        while remaining:
            item = await queue.get()
            if item is _DONE:
                remaining -= 1
                continue
            yield item
    finally:
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        # CancelledError is not an Exception, so only real source errors remain
        errors = [r for r in results if isinstance(r, Exception)]
        if errors:
            raise errors[0]
