"""
どこで: `engine.line.shape`。
何を: 伸長可能な線形状の可変状態 `LineShape`（点列/幅テーブル/遅延フラグ/マテリアル参照）。
なぜ: 生成後も点と属性を追記し続ける形状の所有権と変更規律を 1 か所に閉じ込めるため。

所有権:
- `geometry`（点列）と `widths`（幅テーブル）は `LineShape` が排他的に所有する。
- `material` は描画側と共有する非所有参照。色テーブルはマテリアル側が持つ。
- `listener` は描画側の受け手。点/幅が変わるたびに `lazy` をそのまま渡して通知する。

並行性:
- 内部で同期しない。1 つの形状に対する変更は同時に 1 つまで（呼び出し側の規律）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np

from engine.core.geometry import Geometry


class GeometryListener(Protocol):
    """点/幅の変更を受け取る描画側の受け手。"""

    def notify_geometry_changed(self, deferred: bool) -> None: ...


@dataclass(eq=False)
class LineShape:
    """線形状の可変状態。`api.lines.create_line` で生成/追記する。"""

    name: str
    geometry: Geometry
    widths: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float32))
    lazy: bool = False
    updatable: bool = False
    material: Any | None = None
    listener: GeometryListener | None = None

    # ---- 読み出し -------------------------------------------------------
    @property
    def points(self) -> np.ndarray:
        """平坦な点列 `(3N,)`（読み取り専用ビュー）。"""
        return self.geometry.flat

    @property
    def point_count(self) -> int:
        return self.geometry.n_vertices

    @property
    def colors(self) -> np.ndarray | None:
        """マテリアルが保持する色テーブル（無ければ None）。"""
        return getattr(self.material, "colors", None)

    # ---- 変更 -----------------------------------------------------------
    def append(self, geometry: Geometry, widths: np.ndarray) -> None:
        """点列と幅テーブルを末尾に追記する（再補完はしない）。"""
        self.widths = np.concatenate(
            [self.widths, np.asarray(widths, dtype=np.float32).reshape(-1)]
        )
        self.geometry = self.geometry.concat(geometry)
        self.notify_changed()

    def update_lazy(self) -> None:
        """遅延中の再構築を描画側へ促す（`deferred=False` で通知）。"""
        if self.listener is not None:
            self.listener.notify_geometry_changed(False)

    def notify_changed(self) -> None:
        """現在の `lazy` を添えて描画側へ変更を通知する。"""
        if self.listener is not None:
            self.listener.notify_geometry_changed(self.lazy)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return (
            f"LineShape(name={self.name!r}, points={self.point_count}, "
            f"lines={self.geometry.n_lines}, lazy={self.lazy})"
        )


__all__ = ["GeometryListener", "LineShape"]
