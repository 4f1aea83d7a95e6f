################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time conversion helpers for timestamped sample buffers."""

from __future__ import annotations

import math


# Nanoseconds per second
NS_PER_SEC: int = 1_000_000_000


class TimeBaseError(Exception):
    """Raised when time conversions fail."""


def sec_to_ns(t_sec: float) -> int:
    """Convert a signed duration in seconds to integer nanoseconds.

    Rounds to the nearest integer nanosecond using Python's built-in round
    (ties-to-even) to keep conversion stable across runs.
    """
    if isinstance(t_sec, bool):
        raise TimeBaseError("Seconds must be a number")
    if not math.isfinite(t_sec):
        raise TimeBaseError("Seconds must be finite")
    t_ns: float = t_sec * NS_PER_SEC
    if not math.isfinite(t_ns):
        raise TimeBaseError("Seconds out of range")
    return int(round(t_ns))
