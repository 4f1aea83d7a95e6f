################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration schema for timestamped vector buffers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from pathlib import Path
from typing import Any
from typing import Mapping

import yaml


# Buffer name used in log messages
BUFFER_NAME: str = "buffer"
# Sample dimension
BUFFER_DIM: int = 3
# Scalar type of stored samples
BUFFER_DTYPE: str = "float64"

# Supported scalar type names
SUPPORTED_DTYPES: frozenset[str] = frozenset({"float32", "float64", "int32", "int64"})


class BufferParamsError(Exception):
    """Raised when buffer parameter validation or loading fails."""


@dataclass(frozen=True)
class BufferParams:
    """Parameters for constructing a vector buffer."""

    # Buffer name used in log messages
    name: str = BUFFER_NAME
    # Sample dimension
    dim: int = BUFFER_DIM
    # Scalar type of stored samples
    dtype: str = BUFFER_DTYPE

    @classmethod
    def defaults(cls) -> BufferParams:
        """Return the default buffer parameters."""
        return cls()

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> BufferParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise BufferParamsError("params must be a mapping")
        known_keys: set[str] = {field.name for field in fields(cls)}
        unknown_keys: list[str] = sorted(set(params.keys()) - known_keys)
        if unknown_keys:
            raise BufferParamsError(f"unknown parameter: {unknown_keys[0]}")

        defaults: BufferParams = cls.defaults()
        result: BufferParams = cls(
            name=_as_str("name", params.get("name", defaults.name)),
            dim=_as_int("dim", params.get("dim", defaults.dim)),
            dtype=_as_str("dtype", params.get("dtype", defaults.dtype)),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameter invariants."""
        if not self.name:
            raise BufferParamsError("name must be set")
        if isinstance(self.dim, bool) or not isinstance(self.dim, int):
            raise BufferParamsError("dim must be an int")
        if self.dim <= 0:
            raise BufferParamsError("dim must be positive")
        if self.dtype not in SUPPORTED_DTYPES:
            raise BufferParamsError(
                f"dtype must be one of {', '.join(sorted(SUPPORTED_DTYPES))}"
            )

    def replace(self, **overrides: Any) -> BufferParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, Any]:
        """Return a flat dict representation."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def loads_buffer_params(text: str) -> BufferParams:
    """Parse buffer parameters from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise BufferParamsError("Invalid YAML") from exc
    if loaded is None:
        return BufferParams.defaults()
    if not isinstance(loaded, dict):
        raise BufferParamsError("YAML root must be a mapping")
    return BufferParams.from_dict(loaded)


def load_buffer_params(path: str | os.PathLike[str]) -> BufferParams:
    """Load buffer parameters from a YAML file."""
    if not is_yaml_path(path):
        raise BufferParamsError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise BufferParamsError(
            f"Failed to load buffer params from {path_obj}"
        ) from exc
    return loads_buffer_params(text)


def _as_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BufferParamsError(f"{name} must be an int")
    return int(value)


def _as_str(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise BufferParamsError(f"{name} must be a string")
    return value
