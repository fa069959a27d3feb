"""
どこで: `engine.line.colors`。
何を: 色テーブル（点ごとに 1 色, `(K,3) float32`）を点数に合わせて補完/切り詰める。
なぜ: 幅テーブルと同じ 6 区分のポリシーを持つが、START_END/EVEN の端数処理が異なるため別実装とする。

補完規則（`missing = point_count - len(colors)`）:
- `missing < 0`: 先頭 `point_count` 行に切り詰める。
- `missing == 0`: 入力のコピーを返す。
- `missing > 0`:
  - NONE: 入力をそのまま返す（長さは `point_count` に満たない）。
  - START / END: 既存の後ろ/前に既定色を `missing` 行。
  - START_END: 前半 `len//2` 行 + 既定色 `missing-1` 行 + 残り（長さ `point_count-1`）。
  - REPEAT: 既存の行を巡回して `point_count` 行。
  - EVEN: `stride = len/(point_count-1)` で `point_count-1` 行を抜き出す。

境界:
- EVEN で `point_count == 1`、EVEN/REPEAT で空テーブルの場合は START 補完に退避する。
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import numpy as np

from common.types import RGB
from util.color import to_color_table

from .distribution import ColorDistribution, as_color_distribution
from .kernels import cyclic_indices, stride_indices

logger = logging.getLogger(__name__)

ColorsLike = np.ndarray | Iterable[object]
_Filler = Callable[[int, np.ndarray, int, np.ndarray], np.ndarray]

WHITE: RGB = (1.0, 1.0, 1.0)


def _default_rows(count: int, color: np.ndarray) -> np.ndarray:
    return np.tile(color, (max(count, 0), 1))


# ── ポリシーごとの補完関数 ────────────────
def _fill_none(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    return src.copy()


def _fill_start(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    return np.concatenate([src, _default_rows(missing, default)])


def _fill_end(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    return np.concatenate([_default_rows(missing, default), src])


def _fill_start_end(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    half = src.shape[0] // 2
    return np.concatenate([src[:half], _default_rows(missing - 1, default), src[half:]])


def _fill_repeat(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    if src.shape[0] == 0:
        logger.debug("color REPEAT: empty source; using START fill")
        return _fill_start(point_count, src, missing, default)
    return src[cyclic_indices(point_count, src.shape[0], 1)]


def _fill_even(point_count: int, src: np.ndarray, missing: int, default: np.ndarray) -> np.ndarray:
    # point_count == 1 ではストライドの分母が 0 になる
    if point_count <= 1 or src.shape[0] == 0:
        logger.debug(
            "color EVEN: point_count=%d, source=%d row(s); using START fill",
            point_count,
            src.shape[0],
        )
        return _fill_start(point_count, src, missing, default)
    stride = src.shape[0] / (point_count - 1)
    return src[stride_indices(point_count - 1, stride)]


_FILLERS: dict[ColorDistribution, _Filler] = {
    ColorDistribution.NONE: _fill_none,
    ColorDistribution.REPEAT: _fill_repeat,
    ColorDistribution.EVEN: _fill_even,
    ColorDistribution.START: _fill_start,
    ColorDistribution.END: _fill_end,
    ColorDistribution.START_END: _fill_start_end,
}


def complete_color_table(
    point_count: int,
    colors: ColorsLike | None,
    distribution: ColorDistribution | int | str = ColorDistribution.START,
    default_color: object = WHITE,
) -> np.ndarray:
    """色テーブルを点数に合わせて補完する（純関数）。

    Parameters
    ----------
    point_count : int
        線形状の点数。負値は 0 とみなす。
    colors : ColorsLike | None
        1 点 1 色の列。Hex 文字列, (r,g,b) タプル, `(K,3)` 配列を受理。
    distribution : ColorDistribution | int | str, default START
        色列が点数より短い場合の分配ポリシー。
    default_color : object, default WHITE
        空きを埋める既定色。

    Returns
    -------
    np.ndarray
        `(K, 3) float32`。NONE/START_END/EVEN 以外では `K == point_count`。

    Raises
    ------
    ValueError
        色の指定が解釈できない場合（`util.color` 参照）。
    """
    src = to_color_table(colors)
    n = max(int(point_count), 0)
    missing = n - src.shape[0]

    if missing < 0:
        return src[:n].copy()
    if missing == 0:
        return src.copy()

    dist = as_color_distribution(distribution)
    default = to_color_table([default_color])[0]
    return _FILLERS[dist](n, src, missing, default)


__all__ = ["ColorsLike", "WHITE", "complete_color_table"]
