################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validation helpers for buffer inputs."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray


# Representable timestamp range in nanoseconds
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# Array kinds accepted as sample input: bool, signed, unsigned, float
_NUMERIC_KINDS: frozenset[str] = frozenset({"b", "i", "u", "f"})


def as_timestamp_ns(value: Any, name: str) -> int:
    """Return a Python int timestamp in the int64 range."""
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"{name} must be an integer timestamp in nanoseconds")
    if not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer timestamp in nanoseconds")

    t_ns: int = int(value)
    if t_ns < INT64_MIN or t_ns > INT64_MAX:
        raise ValueError(f"{name} must fit in a signed 64-bit integer")

    return t_ns


def as_sample(value: Any, dim: int, dtype: DTypeLike, name: str) -> NDArray[Any]:
    """Return a finite, read-only copy of a sample with shape (dim,).

    Column vectors with shape (dim, 1) are flattened.
    """
    try:
        source: NDArray[Any] = np.asarray(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"{name} must be numeric") from exc
    if source.dtype.kind not in _NUMERIC_KINDS:
        raise ValueError(f"{name} must be numeric")

    if source.shape == (dim, 1):
        source = source.reshape((dim,))
    if source.shape != (dim,):
        raise ValueError(f"{name} must have shape ({dim},), got {source.shape}")
    if not np.all(np.isfinite(source)):
        raise ValueError(f"{name} must be finite")

    target_dtype: np.dtype[Any] = np.dtype(dtype)
    with np.errstate(invalid="ignore", over="ignore"):
        array: NDArray[Any] = source.astype(target_dtype)

    # Integer targets must hold the input exactly, no truncation or wraparound
    if np.issubdtype(target_dtype, np.integer) and not np.array_equal(array, source):
        raise ValueError(f"{name} is not representable as {target_dtype}")
    if not np.all(np.isfinite(array)):
        raise ValueError(f"{name} overflows {target_dtype}")

    array.flags.writeable = False
    return array
