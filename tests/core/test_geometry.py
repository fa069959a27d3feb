from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import Geometry


def test_from_lines_normalizes_2d_and_offsets() -> None:
    xy = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]], dtype=np.float32)
    g = Geometry.from_lines([xy])
    assert g.coords.shape == (3, 3)
    assert g.offsets.tolist() == [0, 3]
    assert np.allclose(g.coords[:, 2], 0.0)


def test_constructor_normalizes_dtype_and_contiguity() -> None:
    coords = np.asfortranarray(np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]], dtype=np.float64))
    offsets = np.array([0, 2], dtype=np.int64)
    g = Geometry(coords, offsets)
    assert g.coords.dtype == np.float32
    assert g.offsets.dtype == np.int32
    assert g.coords.flags.c_contiguous is True
    assert np.allclose(g.coords, coords)


def test_constructor_invalid_shapes_raise() -> None:
    with pytest.raises(ValueError):
        Geometry(np.zeros((2, 2), dtype=np.float32), np.array([0, 2], dtype=np.int32))
    with pytest.raises(ValueError):
        Geometry(np.zeros((2, 3), dtype=np.float32), np.array([0, 1], dtype=np.int32))


def test_from_lines_1d_invalid_raises() -> None:
    bad = np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float32)  # 4 は 3 の倍数でない
    with pytest.raises(ValueError):
        Geometry.from_lines([bad])


def test_empty_geometry_properties() -> None:
    g = Geometry.from_lines([])
    assert g.n_vertices == 0
    assert g.coords.shape == (0, 3)
    assert g.offsets.tolist() == [0]
    assert len(g) == 0


def test_flat_is_readonly_xyz_sequence(geom_two_lines: Geometry) -> None:
    flat = geom_two_lines.flat
    assert flat.shape == (15,)
    assert flat[:6].tolist() == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    with pytest.raises(ValueError):
        flat[0] = 1.0
    # 元配列は書き込み可能なまま
    assert geom_two_lines.coords.flags.writeable is True


def test_lines_splits_by_offsets(geom_two_lines: Geometry) -> None:
    lines = geom_two_lines.lines()
    assert [ln.shape[0] for ln in lines] == [2, 3]


def test_concat_merges_coords_and_offsets() -> None:
    g1 = Geometry.from_lines([np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)])
    g2 = Geometry.from_lines([np.array([[2.0, 0.0, 0.0]], dtype=np.float32)])
    g = g1.concat(g2)

    expect_coords = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0]], dtype=np.float32)
    assert np.allclose(g.coords, expect_coords)
    assert g.offsets.tolist() == [0, 2, 3]
    assert g.n_lines == 2
    assert g.n_vertices == 3


def test_concat_with_empty_returns_copy(geom_two_lines: Geometry) -> None:
    out = Geometry.empty().concat(geom_two_lines)
    assert out is not geom_two_lines
    assert np.array_equal(out.offsets, geom_two_lines.offsets)
    out2 = geom_two_lines.concat(Geometry.empty())
    assert np.array_equal(out2.coords, geom_two_lines.coords)

