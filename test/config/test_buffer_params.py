################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for buffer parameter schema and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from oasis_buffer.config.buffer_params import BufferParams
from oasis_buffer.config.buffer_params import BufferParamsError
from oasis_buffer.config.buffer_params import load_buffer_params
from oasis_buffer.config.buffer_params import loads_buffer_params


def test_defaults_validate() -> None:
    """Defaults should validate successfully."""
    params: BufferParams = BufferParams.defaults()
    params.validate()
    assert params.as_dict() == {"name": "buffer", "dim": 3, "dtype": "float64"}


def test_replace_returns_copy() -> None:
    """Replace should leave the original parameters untouched."""
    params: BufferParams = BufferParams.defaults()
    updated: BufferParams = params.replace(dim=6)
    assert updated.dim == 6
    assert params.dim == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"dim": 0},
        {"dim": True},
        {"name": ""},
        {"dtype": "complex128"},
    ],
)
def test_validate_rejects_invalid(overrides: dict[str, object]) -> None:
    """Invalid values should fail validation."""
    params: BufferParams = BufferParams.defaults().replace(**overrides)
    with pytest.raises(BufferParamsError):
        params.validate()


def test_from_dict_uses_defaults_for_missing_keys() -> None:
    """Missing keys should fall back to defaults."""
    params: BufferParams = BufferParams.from_dict({"dim": 7})
    assert params.dim == 7
    assert params.name == "buffer"
    assert params.dtype == "float64"


def test_from_dict_rejects_unknown_and_mistyped_keys() -> None:
    """Unknown keys and wrong types should be rejected."""
    with pytest.raises(BufferParamsError):
        BufferParams.from_dict({"capacity": 10})
    with pytest.raises(BufferParamsError):
        BufferParams.from_dict({"dim": "3"})
    with pytest.raises(BufferParamsError):
        BufferParams.from_dict({"dtype": 64})


def test_loads_yaml() -> None:
    """YAML text should parse into parameters."""
    params: BufferParams = loads_buffer_params(
        "name: imu\ndim: 6\ndtype: float32\n"
    )
    assert params == BufferParams(name="imu", dim=6, dtype="float32")


def test_loads_empty_yaml_returns_defaults() -> None:
    """An empty document should yield the defaults."""
    assert loads_buffer_params("") == BufferParams.defaults()


def test_loads_yaml_rejects_non_mapping() -> None:
    """The YAML root must be a mapping."""
    with pytest.raises(BufferParamsError):
        loads_buffer_params("- 1\n- 2\n")
    with pytest.raises(BufferParamsError):
        loads_buffer_params("dim: [1, 2\n")


def test_load_yaml_file(tmp_path: Path) -> None:
    """Parameters should load from a YAML file on disk."""
    path: Path = tmp_path / "pose_buffer.yaml"
    path.write_text("name: pose\ndim: 7\n", encoding="utf-8")
    params: BufferParams = load_buffer_params(path)
    assert params.name == "pose"
    assert params.dim == 7


def test_load_rejects_bad_paths(tmp_path: Path) -> None:
    """Non-YAML suffixes and missing files should fail."""
    with pytest.raises(BufferParamsError):
        load_buffer_params(tmp_path / "params.json")
    with pytest.raises(BufferParamsError):
        load_buffer_params(tmp_path / "missing.yaml")
