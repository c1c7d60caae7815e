"""Row-by-row streaming of a grid for progressive and animated display."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, AsyncIterator, Iterator, Union

from asciiforge.errors import ConfigurationError

if TYPE_CHECKING:
    from asciiforge.grid.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowCompleted:
    row_index: int
    data: str
    total: int

    @property
    def progress(self) -> float:
        """Fraction of rows delivered so far, in ``(0, 1]``."""
        return (self.row_index + 1) / self.total


@dataclass(frozen=True)
class StreamComplete:
    total: int


StreamEvent = Union[RowCompleted, StreamComplete]


class RowStream:
    """Finite, restartable sequence of row notifications.

    Each iteration reads the grid afresh, so iterating twice yields the
    grid's current rows both times.  The last event is always a single
    :class:`StreamComplete`.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def __iter__(self) -> Iterator[StreamEvent]:
        total = self.grid.height
        for row in range(total):
            yield RowCompleted(row, self.grid.row_string(row) or "", total)
        yield StreamComplete(total)

    def __len__(self) -> int:
        return self.grid.height + 1


class DelayedRowStream:
    """Async variant of :class:`RowStream` for animated consumers.

    Sleeps *delay* seconds between successive row events only: there is
    no pause before the first row or before the completion event.
    Cancelling the consuming task stops the stream.
    """

    def __init__(self, grid: Grid, delay: float = 0.05) -> None:
        if delay < 0:
            raise ConfigurationError(f"delay must be non-negative, got {delay}", delay)
        self.grid = grid
        self.delay = delay

    async def __aiter__(self) -> AsyncIterator[StreamEvent]:
        total = self.grid.height
        for row in range(total):
            if row > 0:
                await asyncio.sleep(self.delay)
            yield RowCompleted(row, self.grid.row_string(row) or "", total)
        logger.debug("Streamed %d rows with %.3fs delay", total, self.delay)
        yield StreamComplete(total)
