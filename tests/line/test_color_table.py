from __future__ import annotations

import numpy as np
import pytest

from engine.line.colors import WHITE, complete_color_table
from engine.line.distribution import ColorDistribution as CD

RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
GRAY = (0.5, 0.5, 0.5)


def _rows(arr: np.ndarray) -> list[tuple[float, ...]]:
    return [tuple(float(v) for v in row) for row in arr]


@pytest.mark.parametrize("dist", list(CD))
def test_truncates_when_table_is_longer(dist: CD) -> None:
    out = complete_color_table(2, [RED, GREEN, BLUE], dist)
    assert _rows(out) == [RED, GREEN]


@pytest.mark.parametrize("dist", list(CD))
def test_exact_length_returns_copy(dist: CD) -> None:
    out = complete_color_table(2, [RED, GREEN], dist)
    assert _rows(out) == [RED, GREEN]
    assert out.shape == (2, 3)
    assert out.dtype == np.float32


def test_repeat_is_periodic(numba_mode: bool) -> None:
    out = complete_color_table(5, [RED, GREEN], CD.REPEAT)
    assert _rows(out) == [RED, GREEN, RED, GREEN, RED]


def test_start_pads_with_default() -> None:
    out = complete_color_table(4, [RED], CD.START, GRAY)
    assert _rows(out) == [RED, GRAY, GRAY, GRAY]


def test_end_prepends_missing_defaults() -> None:
    out = complete_color_table(3, [RED], CD.END, GRAY)
    assert _rows(out) == [GRAY, GRAY, RED]


def test_start_end_leaves_one_slot_short() -> None:
    # 前半 1 行 + 既定色 (missing-1)=2 行 + 残り 1 行
    out = complete_color_table(5, [RED, GREEN], CD.START_END, GRAY)
    assert _rows(out) == [RED, GRAY, GRAY, GREEN]


def test_even_samples_point_count_minus_one_slots(numba_mode: bool) -> None:
    # stride = 2 / 4 → index 0,0,1,1
    out = complete_color_table(5, [RED, GREEN], CD.EVEN)
    assert _rows(out) == [RED, RED, GREEN, GREEN]


def test_even_single_point_falls_back_to_default(numba_mode: bool) -> None:
    out = complete_color_table(1, [], CD.EVEN, GRAY)
    assert _rows(out) == [GRAY]
    assert np.all(np.isfinite(out))


@pytest.mark.parametrize("dist", [CD.REPEAT, CD.EVEN])
def test_empty_source_uses_default_fill(dist: CD) -> None:
    out = complete_color_table(3, None, dist)
    assert _rows(out) == [WHITE, WHITE, WHITE]


def test_none_does_not_pad() -> None:
    out = complete_color_table(4, [RED], CD.NONE)
    assert _rows(out) == [RED]


@pytest.mark.parametrize("dist", [CD.START, CD.END, CD.REPEAT])
@pytest.mark.parametrize("n", [0, 1, 2, 5, 11])
def test_length_invariant(dist: CD, n: int) -> None:
    out = complete_color_table(n, [RED, GREEN, BLUE], dist)
    assert out.shape == (n, 3)


def test_accepts_hex_and_255_tuples() -> None:
    out = complete_color_table(3, ["#ff0000", (0, 255, 0)], CD.START, "#0000ff")
    assert _rows(out) == [RED, GREEN, BLUE]


def test_invalid_color_raises() -> None:
    with pytest.raises(ValueError):
        complete_color_table(2, ["#12"], CD.START)


def test_array_and_tuple_inputs_agree_for_255_values() -> None:
    from_array = complete_color_table(3, np.array([[255, 0, 0]]), CD.START)
    from_tuples = complete_color_table(3, [(255, 0, 0)], CD.START)
    assert _rows(from_array) == _rows(from_tuples) == [RED, WHITE, WHITE]
