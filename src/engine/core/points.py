"""
どこで: `engine.core.points`。
何を: 呼び出し側の点入力（1 本の平坦な点列 / 複数ポリラインの列）を `Geometry` と点数へ正規化する。
なぜ: 幅/色テーブルの補完は点数を目標長として使うため、平坦化より前に点数を確定させる必要がある。

入力の判別:
- `FlatPoints` / `GroupedPoints` のタグ付きバリアントを受け取り、構造の推測はしない。
- 生の list/ndarray は `as_point_batch` で 1 度だけバリアントへ解決する。
  - ndarray: `ndim<=2` は 1 本（`(3K,)`/`(K,3)`/`(K,2)`）、`ndim==3` は複数本。
  - list/tuple: 先頭要素が数値なら 1 本の平坦な点列、列なら複数本（各要素が 1 本）。
- list と ndarray では同じ座標でもポリライン境界が変わる（総点数は同じ）:
  - `[(0, 0, 0), (1, 0, 0)]` は 2 本（各 1 点）のポリラインになる。
  - `np.array([(0, 0, 0), (1, 0, 0)])` は `(K,3)` とみなし 1 本（2 点）になる。
  - list の点列を 1 本として渡すには `FlatPoints([...])` で包む。

注意:
- 1 次元の座標列の長さが 3 の倍数でない場合は例外にせず、末尾の端数を捨てて警告ログを出す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Number
from typing import Sequence

import numpy as np

from .geometry import Geometry, LineLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlatPoints:
    """1 本のポリラインを表す点列。"""

    coords: LineLike


@dataclass(frozen=True)
class GroupedPoints:
    """1 つの形状を共有する独立ポリラインの列。"""

    lines: Sequence[LineLike]


PointBatch = FlatPoints | GroupedPoints


@dataclass(frozen=True)
class NormalizedPoints:
    """正規化結果（点列と総点数）。"""

    geometry: Geometry
    count: int

    @property
    def flat(self) -> np.ndarray:
        return self.geometry.flat


def as_point_batch(raw: object) -> PointBatch:
    """生の点入力をタグ付きバリアントへ解決する。"""
    if isinstance(raw, (FlatPoints, GroupedPoints)):
        return raw
    if isinstance(raw, Geometry):
        return GroupedPoints(raw.lines())
    if isinstance(raw, np.ndarray):
        if raw.ndim == 3:
            return GroupedPoints(list(raw))
        return FlatPoints(raw)
    if isinstance(raw, (list, tuple)):
        if not raw or isinstance(raw[0], Number):
            return FlatPoints(raw)
        return GroupedPoints(list(raw))
    raise TypeError(f"points は list/tuple/ndarray で指定してください: {type(raw)!r}")


def _trim_line(line: LineLike, index: int) -> tuple[np.ndarray, int]:
    """1 本分を配列化し、点数を数える（1D の端数座標は捨てる）。"""
    arr = np.asarray(line, dtype=np.float32)
    if arr.ndim != 1:
        return arr, int(arr.shape[0]) if arr.ndim > 0 else 0
    rem = arr.size % 3
    if rem:
        logger.warning(
            "line %d: coordinate count %d is not a multiple of 3; dropping %d trailing value(s)",
            index,
            arr.size,
            rem,
        )
        arr = arr[: arr.size - rem]
    return arr, arr.size // 3


def normalize_points(batch: PointBatch | object) -> NormalizedPoints:
    """点入力を平坦化し、総点数と共に返す。

    Parameters
    ----------
    batch : PointBatch | object
        `FlatPoints`/`GroupedPoints`、または `as_point_batch` が解決できる生の入力。

    Returns
    -------
    NormalizedPoints
        `geometry`（ポリライン境界を保持した点列）と `count`（総点数）。
        平坦な 1 本と、要素 1 つの `GroupedPoints` は同じ点数になる。
    """
    resolved = as_point_batch(batch)
    raw_lines = [resolved.coords] if isinstance(resolved, FlatPoints) else list(resolved.lines)

    # 点数は平坦化より前に確定させる（補完側の目標長）
    lines: list[np.ndarray] = []
    count = 0
    for i, line in enumerate(raw_lines):
        arr, n = _trim_line(line, i)
        if n == 0:
            continue
        lines.append(arr)
        count += n

    geometry = Geometry.from_lines(lines)
    return NormalizedPoints(geometry=geometry, count=count)


__all__ = [
    "FlatPoints",
    "GroupedPoints",
    "PointBatch",
    "NormalizedPoints",
    "as_point_batch",
    "normalize_points",
]
