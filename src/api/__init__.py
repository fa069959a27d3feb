"""
どこで: `api` 入口（高レベル公開 API）。
何を: 線形状の生成/追記 `create_line`、テーブル補完関数、分配ポリシー、`LineShape` などを再輸出。
なぜ: 利用者が単一名前空間から点入力 → 属性補完 → 形状の生成/伸長まで完結できるようにするため。

Usage:
    from api import create_line, ColorDistribution

    line = create_line(
        "trail",
        [[0, 0, 0, 1, 0, 0], [0, 1, 0, 1, 1, 0]],
        widths=[2, 2],
        colors=["#ff0000", "#0000ff"],
        color_distribution=ColorDistribution.REPEAT,
    )
    create_line("trail", [2, 0, 0, 3, 0, 0], instance=line)
"""

from engine.core.geometry import Geometry
from engine.core.points import FlatPoints, GroupedPoints, normalize_points
from engine.line.colors import complete_color_table
from engine.line.distribution import ColorDistribution, WidthDistribution
from engine.line.shape import GeometryListener, LineShape
from engine.line.widths import complete_width_table
from engine.render.material import LineMaterial, LineMaterialHost, MaterialType

from .lines import create_line, create_line_material

__all__ = [
    # メインAPI
    "create_line",
    "create_line_material",
    "complete_width_table",
    "complete_color_table",
    "normalize_points",
    # 列挙
    "WidthDistribution",
    "ColorDistribution",
    "MaterialType",
    # クラス（高度な使用）
    "FlatPoints",
    "GroupedPoints",
    "Geometry",
    "LineShape",
    "GeometryListener",
    "LineMaterial",
    "LineMaterialHost",
]

# バージョン情報
__version__ = "2026.10"
