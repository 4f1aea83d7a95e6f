################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Linear interpolation between timestamped vectors."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray


def interpolation_dtype(dtype: DTypeLike) -> np.dtype[Any]:
    """Return the scalar type used for interpolated output.

    Floating types are kept, integer samples are promoted to float64.
    """
    sample_dtype: np.dtype[Any] = np.dtype(dtype)
    if np.issubdtype(sample_dtype, np.floating):
        return sample_dtype
    return np.dtype(np.float64)


def lerp_vector(
    t0_ns: int,
    v0: NDArray[Any],
    t1_ns: int,
    v1: NDArray[Any],
    t_ns: int,
) -> NDArray[Any]:
    """Interpolate component-wise between (t0, v0) and (t1, v1) at t.

    Computes v0 + (v1 - v0) * (t - t0) / (t1 - t0). The timestamp differences
    are exact integers so the weight keeps full nanosecond resolution.
    """
    if t1_ns <= t0_ns:
        raise ValueError("Bracketing timestamps must be strictly increasing")
    if t_ns < t0_ns or t_ns > t1_ns:
        raise ValueError("Interpolation time must lie inside the bracketing pair")

    out_dtype: np.dtype[Any] = interpolation_dtype(np.result_type(v0, v1))
    start: NDArray[Any] = np.asarray(v0, dtype=out_dtype)
    end: NDArray[Any] = np.asarray(v1, dtype=out_dtype)

    weight: float = (t_ns - t0_ns) / (t1_ns - t0_ns)
    result: NDArray[Any] = start + (end - start) * out_dtype.type(weight)
    return result
