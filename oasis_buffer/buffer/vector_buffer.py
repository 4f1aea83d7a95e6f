################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Thread-safe buffer of fixed-dimension samples indexed by nanosecond timestamps
"""

from __future__ import annotations

import logging
import threading
from bisect import bisect_left
from bisect import bisect_right
from contextlib import contextmanager
from typing import Any
from typing import Iterator
from typing import Optional

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray

from oasis_buffer.buffer.buffer_guard import BufferGuard
from oasis_buffer.buffer.buffer_types import BufferContractError
from oasis_buffer.buffer.buffer_types import BufferLookup
from oasis_buffer.buffer.buffer_types import InterpolatedRange
from oasis_buffer.config.buffer_params import BufferParams
from oasis_buffer.math_utils.interpolation import interpolation_dtype
from oasis_buffer.math_utils.interpolation import lerp_vector
from oasis_buffer.math_utils.validation import as_sample
from oasis_buffer.math_utils.validation import as_timestamp_ns
from oasis_buffer.timing.time_base import TimeBaseError
from oasis_buffer.timing.time_base import sec_to_ns


_LOG: logging.Logger = logging.getLogger(__name__)


class VectorBuffer:
    """
    Ordered store mapping int64 nanosecond timestamps to fixed-size vectors

    The oldest entry is at index 0 and the newest at index -1. Inserting an
    existing timestamp overwrites its sample. Every public operation takes
    the internal lock for its own duration. Batch access uses either
    acquire() or the manual lock()/unlock() pair.
    """

    def __init__(
        self, dim: int, dtype: DTypeLike = np.float64, *, name: str = "buffer"
    ) -> None:
        if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
            raise BufferContractError("Sample dimension must be a positive int")
        sample_dtype: np.dtype[Any] = np.dtype(dtype)
        if sample_dtype == np.bool_ or not (
            np.issubdtype(sample_dtype, np.floating)
            or np.issubdtype(sample_dtype, np.integer)
        ):
            raise BufferContractError(f"Unsupported sample dtype: {sample_dtype}")

        self._dim: int = dim
        self._dtype: np.dtype[Any] = sample_dtype
        self._name: str = name

        self._lock: threading.Lock = threading.Lock()
        # Thread ident of the lock()/acquire() holder, None otherwise
        self._owner: Optional[int] = None

        self._timestamps: list[int] = []
        self._values: list[NDArray[Any]] = []

    @classmethod
    def from_params(cls, params: BufferParams) -> VectorBuffer:
        """
        Create an empty buffer from validated parameters
        """

        params.validate()
        return cls(params.dim, params.dtype, name=params.name)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._dtype

    @property
    def name(self) -> str:
        return self._name

    def insert(self, t_ns: int, sample: Any) -> None:
        """
        Insert a sample, overwriting any sample at the same timestamp
        """

        stamp: int = self._check_timestamp(t_ns, "t_ns")
        value: NDArray[Any] = self._check_sample(sample)

        with self._locked():
            index: int = bisect_left(self._timestamps, stamp)
            if index < len(self._timestamps) and self._timestamps[index] == stamp:
                self._values[index] = value
            else:
                self._timestamps.insert(index, stamp)
                self._values.insert(index, value)

    def get_nearest_value(self, t_ns: int) -> BufferLookup:
        """
        Get the sample with timestamp closest to t_ns

        When two samples are equally close the later one is returned.
        """

        stamp: int = self._check_timestamp(t_ns, "t_ns")

        with self._locked():
            if not self._timestamps:
                _LOG.debug("%s: nearest lookup on empty buffer", self._name)
                return BufferLookup.missing(self._dim, self._dtype)

            # First key at or after the query, stepped back when the earlier
            # key is strictly closer
            index: int = bisect_left(self._timestamps, stamp)
            if index == len(self._timestamps):
                index -= 1
            elif (
                index > 0
                and stamp - self._timestamps[index - 1]
                < self._timestamps[index] - stamp
            ):
                index -= 1

            return BufferLookup(value=self._values[index], found=True)

    def get_oldest_value(self) -> BufferLookup:
        """
        Get the sample with the smallest timestamp
        """

        with self._locked():
            if not self._values:
                return BufferLookup.missing(self._dim, self._dtype)
            return BufferLookup(value=self._values[0], found=True)

    def get_newest_value(self) -> BufferLookup:
        """
        Get the sample with the largest timestamp
        """

        with self._locked():
            if not self._values:
                return BufferLookup.missing(self._dim, self._dtype)
            return BufferLookup(value=self._values[-1], found=True)

    def get_between_values_interpolated(
        self, t_from_ns: int, t_to_ns: int
    ) -> InterpolatedRange:
        """
        Get the samples covering [t_from_ns, t_to_ns]

        The result starts with the sample at t_from_ns, continues with every
        stored sample strictly inside the interval and ends with the sample
        at t_to_ns. Boundary samples that do not match a stored timestamp are
        linearly interpolated between the bracketing pair. Boundaries outside
        the stored span are clamped to the oldest or newest timestamp, so no
        extrapolation happens.

        Returns an empty range if the interval is reversed or does not
        overlap the buffer.
        """

        stamp_from: int = self._check_timestamp(t_from_ns, "t_from_ns")
        stamp_to: int = self._check_timestamp(t_to_ns, "t_to_ns")

        if stamp_from > stamp_to:
            _LOG.debug(
                "%s: reversed interval [%d, %d]", self._name, stamp_from, stamp_to
            )
            return InterpolatedRange.empty(self._dim, self._out_dtype())

        stamps: list[int]
        columns: list[NDArray[Any]]

        with self._locked():
            if not self._timestamps:
                _LOG.debug("%s: range lookup on empty buffer", self._name)
                return InterpolatedRange.empty(self._dim, self._out_dtype())

            oldest_ns: int = self._timestamps[0]
            newest_ns: int = self._timestamps[-1]
            if stamp_from > newest_ns or stamp_to < oldest_ns:
                _LOG.debug(
                    "%s: interval [%d, %d] outside stored span [%d, %d]",
                    self._name,
                    stamp_from,
                    stamp_to,
                    oldest_ns,
                    newest_ns,
                )
                return InterpolatedRange.empty(self._dim, self._out_dtype())

            t_start_ns: int = max(stamp_from, oldest_ns)
            t_end_ns: int = min(stamp_to, newest_ns)

            stamps = [t_start_ns]
            columns = [self._value_at(t_start_ns)]

            if t_end_ns > t_start_ns:
                first: int = bisect_right(self._timestamps, t_start_ns)
                last: int = bisect_left(self._timestamps, t_end_ns)
                stamps.extend(self._timestamps[first:last])
                columns.extend(self._values[first:last])

                stamps.append(t_end_ns)
                columns.append(self._value_at(t_end_ns))

        return InterpolatedRange(
            timestamps=np.array(stamps, dtype=np.int64),
            values=np.column_stack(columns).astype(self._out_dtype(), copy=False),
        )

    def remove_data_before_timestamp(self, t_ns: int) -> None:
        """
        Erase all samples with timestamp strictly less than t_ns
        """

        stamp: int = self._check_timestamp(t_ns, "t_ns")

        with self._locked():
            self._remove_data_before_timestamp_impl(stamp)

    def remove_data_older_than(self, seconds: float) -> None:
        """
        Erase samples older than the newest timestamp minus seconds
        """

        try:
            age_ns: int = sec_to_ns(seconds)
        except TimeBaseError as exc:
            raise self._contract_error(f"Invalid age {seconds!r}: {exc}") from exc

        with self._locked():
            if not self._timestamps:
                return
            self._remove_data_before_timestamp_impl(self._timestamps[-1] - age_ns)

    def clear(self) -> None:
        with self._locked():
            self._timestamps.clear()
            self._values.clear()

    def size(self) -> int:
        with self._locked():
            return len(self._timestamps)

    def empty(self) -> bool:
        with self._locked():
            return not self._timestamps

    def __len__(self) -> int:
        return self.size()

    def acquire(self) -> BufferGuard:
        """
        Return a guard that holds the buffer lock inside a with block

        Example:
            with buffer.acquire() as guard:
                for t_ns, value in guard.data():
                    ...
        """

        return BufferGuard(self)

    def lock(self) -> None:
        """
        Take the buffer lock for a batch of data() and iterator calls

        Every lock() must be paired with unlock() on all exit paths. Prefer
        acquire(), which does this automatically.
        """

        if self._owner == threading.get_ident():
            raise self._contract_error("lock() called while already holding the lock")
        self._lock.acquire()
        self._owner = threading.get_ident()

    def unlock(self) -> None:
        if self._owner != threading.get_ident():
            raise self._contract_error("unlock() called without holding the lock")
        self._owner = None
        self._lock.release()

    def is_locked_by_caller(self) -> bool:
        """
        Return True if the calling thread holds the lock through lock()
        """

        return self._owner == threading.get_ident()

    def data(self) -> list[tuple[int, NDArray[Any]]]:
        """
        Return the stored (timestamp, sample) pairs, oldest first

        The calling thread must hold the lock. The stored samples are
        read-only arrays.
        """

        self._require_lock("data()")
        return list(zip(self._timestamps, self._values))

    def iterator_equal_or_before(
        self, t_ns: int
    ) -> Optional[Iterator[tuple[int, NDArray[Any]]]]:
        """
        Iterate from the newest sample at or before t_ns to the end

        Returns None if every stored sample is newer than t_ns. The calling
        thread must hold the lock.
        """

        self._require_lock("iterator_equal_or_before()")
        index: Optional[int] = self._index_equal_or_before(
            self._check_timestamp(t_ns, "t_ns")
        )
        if index is None:
            return None
        return self._iter_from(index)

    def iterator_equal_or_after(
        self, t_ns: int
    ) -> Optional[Iterator[tuple[int, NDArray[Any]]]]:
        """
        Iterate from the oldest sample at or after t_ns to the end

        Returns None if every stored sample is older than t_ns. The calling
        thread must hold the lock.
        """

        self._require_lock("iterator_equal_or_after()")
        index: Optional[int] = self._index_equal_or_after(
            self._check_timestamp(t_ns, "t_ns")
        )
        if index is None:
            return None
        return self._iter_from(index)

    def _remove_data_before_timestamp_impl(self, t_ns: int) -> int:
        index: int = bisect_left(self._timestamps, t_ns)
        if index > 0:
            del self._timestamps[:index]
            del self._values[:index]
            _LOG.debug("%s: removed %d samples before %d", self._name, index, t_ns)
        return index

    def _erase_impl(self, t_ns: int) -> bool:
        index: int = bisect_left(self._timestamps, t_ns)
        if index < len(self._timestamps) and self._timestamps[index] == t_ns:
            del self._timestamps[index]
            del self._values[index]
            return True
        return False

    def _index_equal_or_before(self, t_ns: int) -> Optional[int]:
        index: int = bisect_right(self._timestamps, t_ns)
        if index == 0:
            return None
        return index - 1

    def _index_equal_or_after(self, t_ns: int) -> Optional[int]:
        index: int = bisect_left(self._timestamps, t_ns)
        if index == len(self._timestamps):
            return None
        return index

    def _iter_from(self, index: int) -> Iterator[tuple[int, NDArray[Any]]]:
        return zip(self._timestamps[index:], self._values[index:])

    def _value_at(self, t_ns: int) -> NDArray[Any]:
        # t_ns must lie within [oldest, newest]
        index: int = bisect_left(self._timestamps, t_ns)
        if self._timestamps[index] == t_ns:
            return self._values[index]
        return lerp_vector(
            self._timestamps[index - 1],
            self._values[index - 1],
            self._timestamps[index],
            self._values[index],
            t_ns,
        )

    def _out_dtype(self) -> np.dtype[Any]:
        return interpolation_dtype(self._dtype)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        # threading.Lock is not reentrant, so fail instead of deadlocking
        if self._owner == threading.get_ident():
            raise self._contract_error(
                "Buffer operation called while holding the lock, "
                "use the guard or data() instead"
            )
        with self._lock:
            yield

    def _require_lock(self, operation: str) -> None:
        if self._owner != threading.get_ident():
            raise self._contract_error(f"Call lock() before {operation}")

    def _check_timestamp(self, t_ns: Any, name: str) -> int:
        try:
            return as_timestamp_ns(t_ns, name)
        except ValueError as exc:
            raise self._contract_error(str(exc)) from exc

    def _check_sample(self, sample: Any) -> NDArray[Any]:
        try:
            return as_sample(sample, self._dim, self._dtype, "sample")
        except ValueError as exc:
            raise self._contract_error(str(exc)) from exc

    def _contract_error(self, message: str) -> BufferContractError:
        _LOG.error("%s: %s", self._name, message)
        return BufferContractError(message)
