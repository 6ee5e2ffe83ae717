"""Composition helpers for async iterators used as data streams."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Iterable
from typing import Any, Callable, TypeVar, Union

T = TypeVar("T")

Chunk = Union[bytes, bytearray, memoryview, str]
StreamFilter = Callable[[T], Union[bool, Awaitable[bool]]]

_DONE = object()


async def array_to_stream(items: Iterable[T | None]) -> AsyncIterator[T]:
    """Yield ``items`` in order. A ``None`` element ends the stream."""
    for item in items:
        if item is None:
            return
        yield item


async def stream_to_array(stream: AsyncIterator[T]) -> list[T]:
    return [chunk async for chunk in stream]


async def stream_to_bytes(stream: AsyncIterator[Chunk]) -> bytes:
    """Drain ``stream`` into one bytes object; str chunks are UTF-8 encoded."""
    parts: list[bytes] = []
    async for chunk in stream:
        if isinstance(chunk, str):
            parts.append(chunk.encode("utf-8"))
        elif isinstance(chunk, bytes):
            parts.append(chunk)
        elif isinstance(chunk, (bytearray, memoryview)):
            parts.append(bytes(chunk))
        else:
            raise TypeError(f"Cannot convert {type(chunk).__name__} chunk to bytes")
    return b"".join(parts)


async def filter_stream(stream: AsyncIterator[T], fn: StreamFilter[T]) -> AsyncIterator[T]:
    """Pass through the chunks for which ``fn`` (sync or async) is truthy."""
    async for chunk in stream:
        keep = fn(chunk)
        if inspect.isawaitable(keep):
            keep = await keep
        if keep:
            yield chunk


async def merge_streams(*streams: AsyncIterator[Any]) -> AsyncIterator[Any]:
    """Fan several streams into one, in arrival order.

    Each source keeps its own ordering. The merged stream ends once every
    source is exhausted; the first source error is re-raised here and the
    other sources are cancelled.
    """
    if not streams:
        return

    # One slot per source: a pump waits until the consumer catches up.
    queue: asyncio.Queue[tuple[Any, BaseException | None]] = asyncio.Queue(maxsize=len(streams))

    async def pump(source: AsyncIterator[Any]) -> None:
        try:
            async for chunk in source:
                await queue.put((chunk, None))
        except Exception as err:
            await queue.put((_DONE, err))
            return
        await queue.put((_DONE, None))

    tasks = [asyncio.create_task(pump(s)) for s in streams]
    remaining = len(tasks)
    try:
        while remaining:
            chunk, err = await queue.get()
            if err is not None:
                raise err
            if chunk is _DONE:
                remaining -= 1
                continue
            yield chunk
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
