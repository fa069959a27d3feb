"""
どこで: `engine.render` のマテリアル協調層。
何を: 線形状に付くマテリアル `LineMaterial` と、その生成/色更新/解放を担う `LineMaterialHost`。
なぜ: 色テーブルの受け渡しを描画実装（シェーダ/GPU）から切り離し、状態更新側の契約を最小にするため。

契約:
- `attach_material(name, colors, ...) -> LineMaterial`
- `update_colors(material, colors, deferred)`: `deferred=True` のときは再構築を保留し、
  `flush()` でまとめて確定する。
- 色の結合対象として扱うのは STANDARD/PBR のみ（`is_color_mergeable`）。

寿命:
- ホストはマテリアルを弱参照で保持する。線形状（`LineShape.material`）が手放せば登録も消える。
- 保留中の更新は名前ではなくマテリアル自身で追跡する（同名で置き換えられた後も `flush()` 対象）。
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from common.types import RGB
from util.color import normalize_rgb, to_color_table

logger = logging.getLogger(__name__)


class MaterialType(IntEnum):
    STANDARD = 0
    PBR = 1
    SIMPLE = 2


_COLOR_MERGEABLE = frozenset({MaterialType.STANDARD, MaterialType.PBR})


@dataclass(eq=False)
class LineMaterial:
    """線形状のマテリアル（色テーブルの保持者）。"""

    name: str
    material_type: MaterialType
    color: RGB
    colors: np.ndarray | None = None
    revision: int = 0
    pending: bool = False

    @property
    def use_colors(self) -> bool:
        return self.colors is not None


def is_color_mergeable(material: object) -> bool:
    """色テーブルを追記できるマテリアルか（STANDARD/PBR かつ色テーブル保持）。"""
    return (
        isinstance(material, LineMaterial)
        and material.material_type in _COLOR_MERGEABLE
        and material.colors is not None
    )


class LineMaterialHost:
    """
    マテリアルの生成・色更新・解放を管理（描画側の最小実装）。
    同名のマテリアルを再生成した場合は後勝ちで名前引きを置き換える。
    """

    def __init__(self) -> None:
        self._materials: "weakref.WeakValueDictionary[str, LineMaterial]" = (
            weakref.WeakValueDictionary()
        )
        self._pending: "weakref.WeakSet[LineMaterial]" = weakref.WeakSet()

    def attach_material(
        self,
        name: str,
        colors: np.ndarray | None,
        *,
        material_type: MaterialType = MaterialType.STANDARD,
        color: object = (1.0, 1.0, 1.0),
    ) -> LineMaterial:
        """色テーブル付きのマテリアルを生成して登録する。"""
        table = None if colors is None else to_color_table(colors)
        material = LineMaterial(
            name=name,
            material_type=MaterialType(material_type),
            color=normalize_rgb(color),
            colors=table,
        )
        if name in self._materials:
            logger.debug("material %r replaced", name)
        self._materials[name] = material
        return material

    def update_colors(self, material: LineMaterial, colors: np.ndarray, deferred: bool) -> None:
        """色テーブルを差し替える。`deferred` のときは確定を `flush()` まで保留する。"""
        material.colors = to_color_table(colors)
        material.revision += 1
        material.pending = bool(deferred)
        if material.pending:
            self._pending.add(material)
        else:
            self._pending.discard(material)
        logger.debug(
            "material %r colors updated: %d entries (deferred=%s)",
            material.name,
            material.colors.shape[0],
            deferred,
        )

    def flush(self) -> list[LineMaterial]:
        """保留中の色更新を確定し、確定したマテリアルを返す。"""
        flushed = [m for m in list(self._pending) if m.pending]
        self._pending.clear()
        for m in flushed:
            m.pending = False
        return flushed

    def get(self, name: str) -> LineMaterial | None:
        return self._materials.get(name)

    def release(self, material: LineMaterial) -> None:
        """登録を解除する（終了時に使う）。"""
        if self._materials.get(material.name) is material:
            del self._materials[material.name]
        self._pending.discard(material)

    def __len__(self) -> int:
        return len(self._materials)


_DEFAULT_HOST: LineMaterialHost | None = None


def default_material_host() -> LineMaterialHost:
    """プロセス共有の既定ホストを返す（初回に生成）。"""
    global _DEFAULT_HOST
    if _DEFAULT_HOST is None:
        _DEFAULT_HOST = LineMaterialHost()
    return _DEFAULT_HOST


__all__ = [
    "MaterialType",
    "LineMaterial",
    "LineMaterialHost",
    "is_color_mergeable",
    "default_material_host",
]
