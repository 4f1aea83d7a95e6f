################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from oasis_buffer.buffer.buffer_guard import BufferGuard
from oasis_buffer.buffer.buffer_types import BufferContractError
from oasis_buffer.buffer.buffer_types import BufferLookup
from oasis_buffer.buffer.buffer_types import InterpolatedRange
from oasis_buffer.buffer.buffer_types import VectorBufferError
from oasis_buffer.buffer.imu_buffer import ImuBuffer
from oasis_buffer.buffer.vector_buffer import VectorBuffer
from oasis_buffer.config.buffer_params import BufferParams
from oasis_buffer.config.buffer_params import BufferParamsError
from oasis_buffer.config.buffer_params import load_buffer_params


__all__ = [
    "BufferContractError",
    "BufferGuard",
    "BufferLookup",
    "BufferParams",
    "BufferParamsError",
    "ImuBuffer",
    "InterpolatedRange",
    "VectorBuffer",
    "VectorBufferError",
    "load_buffer_params",
]
