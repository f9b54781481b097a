"""Fixtures for stream normalizer tests.

Provides an upstream double that records whether it was closed and can fail
at a configured position, mimicking an SDK stream handle.
"""
from __future__ import annotations

from typing import Any, Iterator, List, Optional

import pytest


class RecordingUpstream:
    """Iterable native stream double with a ``close()`` hook.

    Attributes:
        chunks: Items yielded in order.
        fail_at: Index at which ``error`` is raised instead of yielding.
        closed: Set once ``close()`` is called.
        pulled: Number of items handed out so far.
    """

    def __init__(self, chunks: List[Any], fail_at: Optional[int] = None, error: Optional[BaseException] = None) -> None:
        self.chunks = list(chunks)
        self.fail_at = fail_at
        self.error = error or RuntimeError("connection reset by peer")
        self.closed = False
        self.pulled = 0

    def __iter__(self) -> Iterator[Any]:
        for index, chunk in enumerate(self.chunks):
            if index == self.fail_at:
                raise self.error
            self.pulled += 1
            yield chunk
        if self.fail_at is not None and self.fail_at >= len(self.chunks):
            raise self.error

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def upstream_factory():
    """Return a constructor for :class:`RecordingUpstream`."""
    return RecordingUpstream


@pytest.fixture()
def commits() -> List[str]:
    """List collecting texts passed to ``on_complete``."""
    return []
