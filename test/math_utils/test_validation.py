################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for buffer input validation helpers."""

from __future__ import annotations

import numpy as np
import pytest

from oasis_buffer.math_utils.validation import INT64_MAX
from oasis_buffer.math_utils.validation import INT64_MIN
from oasis_buffer.math_utils.validation import as_sample
from oasis_buffer.math_utils.validation import as_timestamp_ns


def test_as_timestamp_accepts_integers() -> None:
    """Python and numpy integers within int64 should be accepted."""
    assert as_timestamp_ns(5, "t") == 5
    assert as_timestamp_ns(np.int32(-3), "t") == -3
    assert as_timestamp_ns(INT64_MAX, "t") == INT64_MAX
    assert as_timestamp_ns(INT64_MIN, "t") == INT64_MIN


@pytest.mark.parametrize("value", [1.0, True, np.bool_(False), None, INT64_MAX + 1])
def test_as_timestamp_rejects_invalid(value: object) -> None:
    """Floats, bools and out-of-range values should be rejected."""
    with pytest.raises(ValueError):
        as_timestamp_ns(value, "t")


def test_as_sample_returns_read_only_copy() -> None:
    """Samples should be coerced, copied and frozen."""
    source: np.ndarray = np.array([1, 2, 3], dtype=np.int64)
    sample: np.ndarray = as_sample(source, 3, np.float64, "sample")
    assert sample.dtype == np.float64
    assert not sample.flags.writeable
    assert source.flags.writeable


def test_as_sample_rejects_infinite() -> None:
    """Non-finite values should be rejected."""
    with pytest.raises(ValueError):
        as_sample([1.0, np.inf], 2, np.float64, "sample")


@pytest.mark.parametrize(
    "value, dtype",
    [
        ([0.5, 1.0], np.int64),
        ([2**31, 0], np.int32),
        ([-1, 0], np.uint32),
        ([1e300, 0.0], np.float32),
        ([2**70, 0], np.int64),
        ([None, 0.0], np.float64),
    ],
)
def test_as_sample_rejects_unrepresentable(value: object, dtype: type) -> None:
    """Values the target dtype cannot hold exactly should be rejected."""
    with pytest.raises(ValueError):
        as_sample(value, 2, dtype, "sample")


def test_as_sample_keeps_exact_integers() -> None:
    """Whole-valued input should convert exactly to integer dtypes."""
    sample: np.ndarray = as_sample([3.0, -4.0], 2, np.int32, "sample")
    assert sample.dtype == np.int32
    assert sample.tolist() == [3, -4]
