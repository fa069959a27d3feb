"""
どこで: `api.lines`（ShapeBuilder）。
何を: 点入力と幅/色テーブルから線形状 `LineShape` を生成、または既存形状へ点と属性を追記する。
なぜ: 正規化 → テーブル補完 → 状態更新 → マテリアル連携 の一方向の流れを 1 つの入口にまとめるため。

モード:
- 生成（`instance=None`）: 点を正規化し、点数に合わせて幅（と色）を補完して新しい形状を作る。
  `create_and_assign_material=True` ならマテリアルを生成し、補完済みの色テーブルを持たせる。
- 追記（`instance` 指定）: 新しい点だけを正規化し、その点数に対してのみ幅/色を補完する。
  幅は既存テーブルへ単純連結（結合後の再補完はしない）、点は新しいポリラインとして追加する。
  色は既存マテリアルが STANDARD/PBR で色テーブルを持つ場合のみ連結して 1 回で更新し、
  それ以外は捨てる。`create_and_assign_material` は無視する。

使用例:
    from api import create_line, WidthDistribution

    line = create_line("l", [0, 0, 0, 1, 0, 0], widths=[2, 2])
    create_line("l", [2, 0, 0], widths=[3, 3], instance=line)
    line.widths.tolist()  # [2.0, 2.0, 1.0, 1.0, 3.0, 3.0]
"""

from __future__ import annotations

import logging

import numpy as np

from engine.core.points import normalize_points
from engine.line.colors import ColorsLike, complete_color_table
from engine.line.defaults import get_line_defaults
from engine.line.distribution import ColorDistribution, WidthDistribution
from engine.line.shape import GeometryListener, LineShape
from engine.line.widths import WidthsLike, complete_width_table
from engine.render.material import (
    LineMaterial,
    LineMaterialHost,
    MaterialType,
    default_material_host,
    is_color_mergeable,
)

logger = logging.getLogger(__name__)


def create_line_material(
    name: str,
    *,
    material_type: MaterialType = MaterialType.STANDARD,
    color: object | None = None,
    colors: ColorsLike | None = None,
    material_host: LineMaterialHost | None = None,
) -> LineMaterial:
    """線形状用のマテリアルを単体で生成する（色テーブルは補完しない）。"""
    host = default_material_host() if material_host is None else material_host
    base_color = get_line_defaults().color if color is None else color
    return host.attach_material(name, colors, material_type=material_type, color=base_color)


def create_line(
    name: str,
    points: object,
    *,
    widths: WidthsLike | None = None,
    width_distribution: WidthDistribution | int | str | None = None,
    colors: ColorsLike | None = None,
    color_distribution: ColorDistribution | int | str | None = None,
    default_color: object | None = None,
    default_width_upper: float | None = None,
    default_width_lower: float | None = None,
    instance: LineShape | None = None,
    lazy: bool | None = None,
    updatable: bool = False,
    create_and_assign_material: bool = True,
    material_type: MaterialType = MaterialType.STANDARD,
    color: object | None = None,
    material_host: LineMaterialHost | None = None,
    listener: GeometryListener | None = None,
) -> LineShape:
    """線形状を生成する、または `instance` へ点と属性を追記する。

    Parameters
    ----------
    name : str
        形状名（生成時のみ使用。マテリアル名にも使う）。
    points : object
        `FlatPoints`/`GroupedPoints`、平坦な座標列、`(K,3)` 配列、またはそれらの列。
    widths : WidthsLike | None
        `[upper0, lower0, ...]` の幅列。省略時は既定幅で埋める。
    width_distribution, color_distribution : optional
        分配ポリシー。省略時は既定値（通常 START）。
    colors : ColorsLike | None
        1 点 1 色の列。省略時は色の補完を行わない。
    default_color : object | None
        色の空きを埋める色。省略時は `color`、それも無ければ既定色。
    default_width_upper, default_width_lower : float | None
        幅の空きを埋める半幅。省略時は既定値。
    instance : LineShape | None
        指定時は追記モード。
    lazy : bool | None
        遅延再構築フラグ。協調側へそのまま渡す（追記時は `None` なら形状の値を維持）。
    create_and_assign_material : bool, default True
        生成時にマテリアルを作って割り当てるか。追記時は無視。

    Returns
    -------
    LineShape
        生成した形状、または追記後の `instance`。
    """
    defaults = get_line_defaults()
    normalized = normalize_points(points)
    count = normalized.count

    w_dist = defaults.width_distribution if width_distribution is None else width_distribution
    c_dist = defaults.color_distribution if color_distribution is None else color_distribution
    upper = defaults.width_upper if default_width_upper is None else default_width_upper
    lower = defaults.width_lower if default_width_lower is None else default_width_lower
    base_color = defaults.color if color is None else color
    fill_color = base_color if default_color is None else default_color

    new_widths = complete_width_table(count, widths, w_dist, upper, lower)
    new_colors = (
        None if colors is None else complete_color_table(count, colors, c_dist, fill_color)
    )
    host = default_material_host() if material_host is None else material_host

    if instance is None:
        shape = LineShape(
            name=name,
            geometry=normalized.geometry,
            widths=new_widths,
            lazy=bool(lazy),
            updatable=updatable,
            listener=listener,
        )
        if create_and_assign_material:
            shape.material = host.attach_material(
                name, new_colors, material_type=material_type, color=base_color
            )
        logger.debug("line %r created: %d point(s)", name, count)
        shape.notify_changed()
        return shape

    # ---- 追記モード ----
    if lazy is not None:
        instance.lazy = bool(lazy)
    if listener is not None:
        instance.listener = listener
    instance.append(normalized.geometry, new_widths)
    logger.debug(
        "line %r extended: +%d point(s), total %d", instance.name, count, instance.point_count
    )

    if new_colors is not None:
        material = instance.material
        if is_color_mergeable(material):
            merged = np.concatenate([material.colors, new_colors])
            host.update_colors(material, merged, instance.lazy)
        else:
            logger.debug("line %r: material cannot merge colors; new colors dropped", instance.name)

    return instance


__all__ = ["create_line", "create_line_material"]
