"""Helpers shared by the async stream stages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterable


async def close_upstream(source: AsyncIterable[object]) -> None:
    """Close ``source`` if it is an async generator, releasing its resources."""

    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        await aclose()
