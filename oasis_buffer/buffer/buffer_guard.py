################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Scoped exclusive access to a vector buffer."""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING
from typing import Any
from typing import Iterator
from typing import Optional

from numpy.typing import NDArray

from oasis_buffer.buffer.buffer_types import BufferContractError


if TYPE_CHECKING:
    from oasis_buffer.buffer.vector_buffer import VectorBuffer


class BufferGuard:
    """Hold a buffer's lock for the duration of a with block.

    The guard exposes the operations that are only safe while the lock is
    held: reading the ordered data, positional cursors and erasing. The lock
    is released when the block exits, including on exceptions. A guard is
    single-use.
    """

    def __init__(self, buffer: VectorBuffer) -> None:
        self._buffer: VectorBuffer = buffer
        self._active: bool = False
        self._used: bool = False

    def __enter__(self) -> BufferGuard:
        if self._used:
            raise BufferContractError("BufferGuard cannot be entered twice")
        self._buffer.lock()
        self._used = True
        self._active = True
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._active = False
        self._buffer.unlock()

    @property
    def active(self) -> bool:
        """Return True while the guard holds the lock."""
        return self._active

    def data(self) -> list[tuple[int, NDArray[Any]]]:
        """Return the stored (timestamp, sample) pairs, oldest first."""
        self._require_active()
        return self._buffer.data()

    def iterator_equal_or_before(
        self, t_ns: int
    ) -> Optional[Iterator[tuple[int, NDArray[Any]]]]:
        """Iterate from the newest sample at or before t_ns."""
        self._require_active()
        return self._buffer.iterator_equal_or_before(t_ns)

    def iterator_equal_or_after(
        self, t_ns: int
    ) -> Optional[Iterator[tuple[int, NDArray[Any]]]]:
        """Iterate from the oldest sample at or after t_ns."""
        self._require_active()
        return self._buffer.iterator_equal_or_after(t_ns)

    def remove_data_before_timestamp(self, t_ns: int) -> int:
        """Erase samples strictly older than t_ns, returning the count removed."""
        self._require_active()
        return self._buffer._remove_data_before_timestamp_impl(
            self._buffer._check_timestamp(t_ns, "t_ns")
        )

    def erase(self, t_ns: int) -> bool:
        """Erase the sample stored at exactly t_ns, if any."""
        self._require_active()
        return self._buffer._erase_impl(self._buffer._check_timestamp(t_ns, "t_ns"))

    def size(self) -> int:
        self._require_active()
        return len(self._buffer._timestamps)

    def _require_active(self) -> None:
        if not self._active or not self._buffer.is_locked_by_caller():
            raise BufferContractError("BufferGuard used outside its with block")
