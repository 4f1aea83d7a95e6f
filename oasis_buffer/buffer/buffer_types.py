################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Result and error types for timestamped vector buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Iterator

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray


class VectorBufferError(Exception):
    """Base class for vector buffer errors."""


class BufferContractError(VectorBufferError):
    """Raised when a caller violates the buffer usage contract."""


@dataclass(frozen=True)
class BufferLookup:
    """Result of a single-value buffer query.

    Attributes:
        value: Stored sample, or a zero vector when nothing was found
        found: True if the query matched a stored sample
    """

    value: NDArray[Any]
    found: bool

    def __iter__(self) -> Iterator[Any]:
        """Unpack as (value, found)."""
        return iter((self.value, self.found))

    @classmethod
    def missing(cls, dim: int, dtype: DTypeLike) -> BufferLookup:
        """Return the result reported when no sample is available."""
        value: NDArray[Any] = np.zeros(dim, dtype=dtype)
        value.flags.writeable = False
        return cls(value=value, found=False)


@dataclass(frozen=True)
class InterpolatedRange:
    """Samples extracted from a buffer over a time interval.

    Attributes:
        timestamps: Sample times in nanoseconds, shape (n,), int64
        values: Samples as columns, shape (dim, n), one column per timestamp
    """

    timestamps: NDArray[np.int64]
    values: NDArray[Any]

    def __post_init__(self) -> None:
        """Validate that timestamps and value columns line up."""
        if self.timestamps.ndim != 1 or self.values.ndim != 2:
            raise VectorBufferError("Range must hold a 1-D stamp and 2-D value array")
        if self.values.shape[1] != self.timestamps.shape[0]:
            raise VectorBufferError("Range needs one value column per timestamp")

    def __len__(self) -> int:
        """Return the number of samples in the range."""
        return int(self.timestamps.shape[0])

    def is_empty(self) -> bool:
        """Return True if the query produced no samples."""
        return self.timestamps.shape[0] == 0

    @classmethod
    def empty(cls, dim: int, dtype: DTypeLike) -> InterpolatedRange:
        """Return the result reported when the query does not overlap data."""
        return cls(
            timestamps=np.zeros(0, dtype=np.int64),
            values=np.zeros((dim, 0), dtype=dtype),
        )
