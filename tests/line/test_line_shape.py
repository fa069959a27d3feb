from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry
from engine.line.shape import LineShape


def _line(*pts: tuple[float, float, float]) -> Geometry:
    return Geometry.from_lines([np.array(pts, dtype=np.float32)])


def test_points_and_count() -> None:
    shape = LineShape("s", _line((0, 0, 0), (1, 0, 0)), widths=np.array([1, 1, 2, 2]))
    assert shape.point_count == 2
    assert shape.points.tolist() == [0, 0, 0, 1, 0, 0]
    assert shape.colors is None


def test_append_concatenates_and_notifies(listener) -> None:
    shape = LineShape(
        "s",
        _line((0, 0, 0), (1, 0, 0)),
        widths=np.array([1, 1, 2, 2], dtype=np.float32),
        lazy=True,
        listener=listener,
    )
    shape.append(_line((2, 0, 0)), np.array([3, 3], dtype=np.float32))
    assert shape.widths.tolist() == [1, 1, 2, 2, 3, 3]
    assert shape.widths.dtype == np.float32
    assert shape.point_count == 3
    assert shape.geometry.offsets.tolist() == [0, 2, 3]
    assert listener.calls == [True]


def test_update_lazy_flushes_with_deferred_false(listener) -> None:
    shape = LineShape("s", Geometry.empty(), lazy=True, listener=listener)
    shape.update_lazy()
    assert listener.calls == [False]


def test_without_listener_is_silent() -> None:
    shape = LineShape("s", Geometry.empty())
    shape.append(_line((0, 0, 0)), np.array([1, 1]))
    shape.update_lazy()
    assert shape.point_count == 1
