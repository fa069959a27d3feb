"""
統合 Geometry 型（線形状の点列表現）

本モジュールは、伸長可能な線形状が保持する点列の唯一の表現 `Geometry` を提供する。
正規化（engine.core.points）、属性テーブル補完（engine.line）、状態更新（api.lines）の
いずれも同じ表現を受け渡し、描画側への境界摩擦を最小化する。

データモデル（不変条件）:
- `coords: float32 ndarray (N, 3)` — 全頂点を 1 本の連続メモリで保持（行は XYZ）。
- `offsets: int32 ndarray (M+1,)` — 各ポリラインの開始 index（末尾は必ず N）。
- i 本目の線分配列は `coords[offsets[i] : offsets[i+1]]` で取り出せる。
- dtype/形状は常に上記に正規化される（入力が 2D の場合は Z を 0 で補う）。

API 方針:
- 形状は構築後に変更しない。点の追加は `concat` で新しいインスタンスを作る。
- 平坦な点列（x0, y0, z0, x1, ...）は `flat` で取り出す（幅/色テーブルと同じ並び）。

直感図（複数線の格納）:

    # 2 本のポリライン（線0は3点、線1は2点）
    #
    # coords (N=5)
    #   idx  xy z
    #   0   [0, 0, 0]
    #   1   [1, 0, 0]
    #   2   [1, 1, 0]
    #   3   [2, 2, 0]
    #   4   [3, 2, 0]
    # offsets (M+1=3): [0, 3, 5]
    #
    # 取り出し:
    #   線0 = coords[0:3]
    #   線1 = coords[3:5]

補足:
- 空ジオメトリは `coords.shape==(0,3)`, `offsets==[0]`（線本数 M=0）。
- 単頂点の線も許容（例: `coords=[[0,0,0]]`, `offsets=[0,1]`）。
- `concat` は後続の `offsets[1:]` に先行頂点数を加算して結合する。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

NumberLike = float | int
LineLike = np.ndarray | Sequence[NumberLike] | Sequence[Sequence[NumberLike]]


def _normalize_geometry_input(
    coords: np.ndarray,
    offsets: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` 生成時の内部正規化ヘルパ。"""

    coords_arr = np.asarray(coords, dtype=np.float32)
    if coords_arr.ndim != 2 or coords_arr.shape[1] != 3:
        raise ValueError("coords は形状 (N, 3) の配列である必要があります。")
    if not coords_arr.flags.c_contiguous:
        coords_arr = np.ascontiguousarray(coords_arr, dtype=np.float32)

    offsets_arr = np.asarray(offsets, dtype=np.int32)
    if offsets_arr.ndim != 1 or offsets_arr.size == 0:
        raise ValueError("offsets は少なくとも1要素を含む 1 次元配列である必要があります。")
    if offsets_arr[0] != 0:
        raise ValueError("offsets[0] は常に 0 である必要があります。")
    if offsets_arr[-1] != coords_arr.shape[0]:
        raise ValueError("offsets[-1] は coords の行数と一致する必要があります。")
    if np.any(np.diff(offsets_arr) < 0):
        raise ValueError("offsets は単調非減少である必要があります。")

    return coords_arr, offsets_arr


def _line_to_array(line: LineLike) -> np.ndarray:
    """1 本分の座標列を `(K, 3) float32` に整形する。"""
    arr = np.asarray(line, dtype=np.float32)
    if arr.ndim == 1:
        if arr.size % 3 != 0:
            raise ValueError(
                "1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）"
            )
        return arr.reshape(-1, 3)
    if arr.ndim != 2:
        raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
    if arr.shape[0] == 0:
        return np.empty((0, 3), dtype=np.float32)
    if arr.shape[1] == 2:
        zeros = np.zeros((arr.shape[0], 1), dtype=np.float32)
        return np.hstack([arr, zeros])
    if arr.shape[1] != 3:
        raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
    return arr


class Geometry:
    """線形状の点列（複数ポリライン）を保持する不変データ構造。

    フィールド:
    - `coords (N,3) float32`: すべての点列を連結した配列。
    - `offsets (M+1,) int32`: 各ポリラインの開始 index（末尾は N）。
    """

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        norm_coords, norm_offsets = _normalize_geometry_input(coords, offsets)
        self.coords = norm_coords
        self.offsets = norm_offsets

    # ── ファクトリ ───────────────────
    @classmethod
    def empty(cls) -> "Geometry":
        return cls(np.empty((0, 3), dtype=np.float32), np.array([0], dtype=np.int32))

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """線分集合を統一表現に正規化して `Geometry` を生成する。

        Parameters
        ----------
        lines : Iterable[LineLike]
            各要素は座標列。`list`/`tuple`/`ndarray` いずれも可。形状は
            - `(K, 2)` の場合は `Z=0` を補完して `(K, 3)` に正規化。
            - `(K, 3)` の場合はそのまま使用。
            - `(3K,)` の 1 次元ベクトルは `(x, y, z)` の並びとして `(-1, 3)` に整形。

        Returns
        -------
        Geometry
            `coords (N, 3) float32` と `offsets (M+1,) int32` を持つジオメトリ。

        Raises
        ------
        ValueError
            形状が `(K,2)/(K,3)/(3K,)` いずれにも適合しない場合、または 1D ベクトル長が
            3 の倍数でない場合。
        """
        np_lines = [_line_to_array(line) for line in lines]
        if not np_lines:
            return cls.empty()

        offsets = np.zeros(len(np_lines) + 1, dtype=np.int32)
        offsets[1:] = np.cumsum([arr.shape[0] for arr in np_lines])
        coords = np.concatenate(np_lines, axis=0)
        return cls(coords, offsets)

    # ── 基本操作（すべて純粋） ────────
    @property
    def flat(self) -> np.ndarray:
        """平坦な点列 `(3N,)` を読み取り専用ビューで返す。"""
        view = self.coords.reshape(-1)
        view.setflags(write=False)
        return view

    def lines(self) -> list[np.ndarray]:
        """ポリラインごとの `(K, 3)` ビューを返す。"""
        return [self.coords[a:b] for a, b in zip(self.offsets[:-1], self.offsets[1:])]

    def concat(self, other: "Geometry") -> "Geometry":
        """ポリライン集合の連結（純関数）。

        `coords` は縦方向に結合し、`offsets` は後段の先頭を `len(self.coords)` だけ
        シフトして統合する。いずれかが線を持たない場合は他方のコピーを返す。
        """
        if len(other) == 0:
            return Geometry(self.coords.copy(), self.offsets.copy())
        if len(self) == 0:
            return Geometry(other.coords.copy(), other.offsets.copy())
        offset_shift = self.coords.shape[0]
        new_coords = np.vstack([self.coords, other.coords]).astype(np.float32, copy=False)
        adjusted_other_offsets = other.offsets[1:] + offset_shift
        new_offsets = np.hstack([self.offsets, adjusted_other_offsets]).astype(np.int32, copy=False)
        return Geometry(new_coords, new_offsets)

    def __len__(self) -> int:
        """ポリライン本数（`M`）を返す。"""
        return int(self.offsets.shape[0] - 1)

    @property
    def n_vertices(self) -> int:
        """頂点数 `N` を返す。"""
        return int(self.coords.shape[0])

    @property
    def n_lines(self) -> int:
        """ポリライン本数 `M` を返す。`len(self)` と同義。"""
        return len(self)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Geometry(N={self.n_vertices}, M={self.n_lines})"
