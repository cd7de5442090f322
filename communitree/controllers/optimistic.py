"""Generic optimistic-update helper."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R")


async def with_optimistic_update(
    apply: Callable[[], S],
    request: Callable[[], Awaitable[R]],
    commit: Callable[[R], None],
    rollback: Callable[[S], None],
) -> R:
    """Apply a local change, confirm it remotely, then commit or roll back.

    ``apply`` performs the optimistic change and returns a snapshot of what it
    replaced. If ``request`` raises, ``rollback`` receives that snapshot and
    the exception propagates. Otherwise ``commit`` receives the result.
    """
    snapshot = apply()
    try:
        result = await request()
    except Exception:
        logger.warning("Remote request failed; rolling back optimistic update")
        rollback(snapshot)
        raise
    commit(result)
    return result
