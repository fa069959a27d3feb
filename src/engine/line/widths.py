"""
どこで: `engine.line.widths`。
何を: 幅テーブル（点ごとの上側/下側の半幅ペア）を点数ちょうどの長さへ補完/切り詰める。
なぜ: 呼び出し側が点数ぴったりの幅を渡すことは稀であり、分配ポリシーに従い決定的に伸縮させるため。

テーブルの並び:
- 平坦な float32 ベクトル。`2i` が点 i の上側、`2i+1` が下側の半幅。

補完規則（`missing = point_count - len(widths) / 2`）:
- `missing < 0`: 先頭 `2 * point_count` 要素に切り詰める（補間なし）。
- `missing == 0`: 入力のコピーを返す（ポリシーに依らない）。
- `missing > 0`: ポリシーごとの補完関数へ委譲する（下記 `_FILLERS`）。

境界:
- EVEN で `point_count == 1`、EVEN/REPEAT/START_END で要素数 < 2 の場合は START 補完に退避する。
- 読み出し位置が末尾を越える場合は末尾要素に丸める（奇数長テーブル等、内容は未規定）。
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

import numpy as np

from .distribution import WidthDistribution, as_width_distribution
from .kernels import cyclic_indices, stride_indices

logger = logging.getLogger(__name__)

WidthsLike = np.ndarray | Sequence[float]
_Filler = Callable[[int, np.ndarray, int, float, float], np.ndarray]


def as_width_array(widths: WidthsLike | None) -> np.ndarray:
    """幅列を平坦な float32 ベクトルへ整形する（`None` は空）。"""
    if widths is None:
        return np.empty(0, dtype=np.float32)
    return np.asarray(widths, dtype=np.float32).reshape(-1)


def _default_pairs(count: int, upper: float, lower: float) -> np.ndarray:
    out = np.empty(count * 2, dtype=np.float32)
    out[0::2] = upper
    out[1::2] = lower
    return out


def _gather_pairs(src: np.ndarray, starts: np.ndarray) -> np.ndarray:
    """平坦 index `starts` から `(src[i], src[i+1])` を読み出して並べる。"""
    last = src.size - 1
    out = np.empty(starts.size * 2, dtype=np.float32)
    out[0::2] = src[np.minimum(starts, last)]
    out[1::2] = src[np.minimum(starts + 1, last)]
    return out


# ── ポリシーごとの補完関数 ────────────────
def _fill_none(point_count: int, src: np.ndarray, missing: int, upper: float, lower: float) -> np.ndarray:
    return src.copy()


def _fill_start(point_count: int, src: np.ndarray, missing: int, upper: float, lower: float) -> np.ndarray:
    return np.concatenate([src, _default_pairs(missing, upper, lower)])


def _fill_end(point_count: int, src: np.ndarray, missing: int, upper: float, lower: float) -> np.ndarray:
    return np.concatenate([_default_pairs(missing, upper, lower), src])


def _fill_start_end(
    point_count: int, src: np.ndarray, missing: int, upper: float, lower: float
) -> np.ndarray:
    """前半 `half-1` ペア + 中央値ペア × missing + 平坦 index `half` 以降。

    中央値ペアは `(src[half//2 + 1], src[half//2])`（上下が入れ替わる並び）。
    """
    if src.size < 2:
        logger.debug("width START_END: source has %d value(s); using START fill", src.size)
        return _fill_start(point_count, src, missing, upper, lower)
    half = src.size // 2
    head = src[: 2 * max(half - 1, 0)]
    middle = _default_pairs(missing, float(src[half // 2 + 1]), float(src[half // 2]))
    tail = src[half:]
    return np.concatenate([head, middle, tail])


def _fill_repeat(point_count: int, src: np.ndarray, missing: int, upper: float, lower: float) -> np.ndarray:
    if src.size < 2:
        logger.debug("width REPEAT: source has %d value(s); using START fill", src.size)
        return _fill_start(point_count, src, missing, upper, lower)
    period = (src.size // 2) * 2
    return _gather_pairs(src, cyclic_indices(point_count, period, 2))


def _fill_even(point_count: int, src: np.ndarray, missing: int, upper: float, lower: float) -> np.ndarray:
    # point_count == 1 ではストライドの分母が 0 になる
    if point_count <= 1 or src.size < 2:
        logger.debug(
            "width EVEN: point_count=%d, source=%d value(s); using START fill",
            point_count,
            src.size,
        )
        return _fill_start(point_count, src, missing, upper, lower)
    stride = src.size / ((point_count - 1) * 2)
    return _gather_pairs(src, stride_indices(point_count, stride))


_FILLERS: dict[WidthDistribution, _Filler] = {
    WidthDistribution.NONE: _fill_none,
    WidthDistribution.REPEAT: _fill_repeat,
    WidthDistribution.EVEN: _fill_even,
    WidthDistribution.START: _fill_start,
    WidthDistribution.END: _fill_end,
    WidthDistribution.START_END: _fill_start_end,
}


def complete_width_table(
    point_count: int,
    widths: WidthsLike | None,
    distribution: WidthDistribution | int | str = WidthDistribution.START,
    default_width_upper: float = 1.0,
    default_width_lower: float = 1.0,
) -> np.ndarray:
    """幅テーブルを点数に合わせて補完する（純関数）。

    Parameters
    ----------
    point_count : int
        線形状の点数。負値は 0 とみなす。
    widths : WidthsLike | None
        `[upper0, lower0, upper1, lower1, ...]` の平坦な幅列。
    distribution : WidthDistribution | int | str, default START
        幅列が点数より短い場合の分配ポリシー。
    default_width_upper, default_width_lower : float, default 1.0
        START/END 等で空きを埋める既定の半幅。

    Returns
    -------
    np.ndarray
        float32 の平坦な幅列。通常は長さ `2 * point_count`。
        START_END（2 ペア以外）と NONE は長さが一致しない場合がある。
    """
    src = as_width_array(widths)
    n = max(int(point_count), 0)
    missing = n - src.size / 2

    if missing < 0:
        return src[: 2 * n].copy()
    if missing == 0:
        return src.copy()

    dist = as_width_distribution(distribution)
    filler = _FILLERS[dist]
    return filler(n, src, math.ceil(missing), float(default_width_upper), float(default_width_lower))


__all__ = ["WidthsLike", "as_width_array", "complete_width_table"]
