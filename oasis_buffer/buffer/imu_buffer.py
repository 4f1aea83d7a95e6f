################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Vector buffer preset for stacked accelerometer and gyroscope samples."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray

from oasis_buffer.buffer.buffer_types import BufferContractError
from oasis_buffer.buffer.vector_buffer import VectorBuffer
from oasis_buffer.math_utils.validation import as_sample


# Stacked IMU measurement dimension, [ax, ay, az, wx, wy, wz]
IMU_SAMPLE_DIM: int = 6

# Accelerometer block in m/s^2
ACC_SLICE: slice = slice(0, 3)
# Gyroscope block in rad/s
GYR_SLICE: slice = slice(3, 6)


class ImuBuffer(VectorBuffer):
    """Buffer of 6-D IMU samples with accel stacked before gyro."""

    def __init__(self, dtype: DTypeLike = np.float64, *, name: str = "imu") -> None:
        super().__init__(IMU_SAMPLE_DIM, dtype, name=name)

    def insert_acc_gyr(self, t_ns: int, acc: Any, gyr: Any) -> None:
        """Insert an accelerometer and gyroscope reading taken at t_ns."""
        try:
            acc_mps2: NDArray[Any] = as_sample(acc, 3, self.dtype, "acc")
            gyr_rads: NDArray[Any] = as_sample(gyr, 3, self.dtype, "gyr")
        except ValueError as exc:
            raise self._contract_error(str(exc)) from exc

        self.insert(t_ns, np.concatenate((acc_mps2, gyr_rads)))

    @staticmethod
    def split_acc_gyr(values: NDArray[Any]) -> tuple[NDArray[Any], NDArray[Any]]:
        """Split a (6,) sample or (6, n) matrix into accel and gyro blocks."""
        array: NDArray[Any] = np.asarray(values)
        if array.ndim not in (1, 2) or array.shape[0] != IMU_SAMPLE_DIM:
            raise BufferContractError(f"IMU values must have {IMU_SAMPLE_DIM} rows")
        return array[ACC_SLICE], array[GYR_SLICE]
