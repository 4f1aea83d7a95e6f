################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the IMU buffer preset."""

from __future__ import annotations

import numpy as np
import pytest

from oasis_buffer.buffer.buffer_types import BufferContractError
from oasis_buffer.buffer.buffer_types import InterpolatedRange
from oasis_buffer.buffer.imu_buffer import IMU_SAMPLE_DIM
from oasis_buffer.buffer.imu_buffer import ImuBuffer


def test_insert_acc_gyr_stacks_accel_first() -> None:
    """Accel and gyro readings should be stacked into one 6-D sample."""
    buffer: ImuBuffer = ImuBuffer()
    assert buffer.dim == IMU_SAMPLE_DIM
    buffer.insert_acc_gyr(100, [0.0, 0.0, 9.81], [0.1, 0.2, 0.3])

    value: np.ndarray = buffer.get_newest_value().value
    acc: np.ndarray
    gyr: np.ndarray
    acc, gyr = ImuBuffer.split_acc_gyr(value)
    assert np.allclose(acc, [0.0, 0.0, 9.81])
    assert np.allclose(gyr, [0.1, 0.2, 0.3])


def test_split_interpolated_range() -> None:
    """Interpolated ranges should split into (3, n) accel and gyro blocks."""
    buffer: ImuBuffer = ImuBuffer()
    buffer.insert_acc_gyr(0, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    buffer.insert_acc_gyr(10, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0])

    result: InterpolatedRange = buffer.get_between_values_interpolated(5, 10)
    acc: np.ndarray
    gyr: np.ndarray
    acc, gyr = ImuBuffer.split_acc_gyr(result.values)
    assert acc.shape == (3, 2)
    assert gyr.shape == (3, 2)
    assert np.allclose(acc[:, 0], [0.5, 1.0, 1.5])
    assert np.allclose(gyr[:, 1], [4.0, 5.0, 6.0])


def test_insert_acc_gyr_rejects_bad_shapes() -> None:
    """Readings that are not 3-vectors are a contract violation."""
    buffer: ImuBuffer = ImuBuffer()
    with pytest.raises(BufferContractError):
        buffer.insert_acc_gyr(0, [0.0, 0.0], [0.0, 0.0, 0.0])
    assert buffer.empty()


@pytest.mark.parametrize("shape", [(5,), (3, 6), (6, 2, 2)])
def test_split_rejects_wrong_rows(shape: tuple[int, ...]) -> None:
    """Splitting anything but six rows is a contract violation."""
    with pytest.raises(BufferContractError):
        ImuBuffer.split_acc_gyr(np.zeros(shape))
