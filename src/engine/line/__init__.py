"""
どこで: `engine.line` サブパッケージ。
何を: 幅/色テーブルの分配ポリシーと補完、および伸長可能な線形状の状態 `LineShape`。
なぜ: 点数に合わせた属性テーブルの伸縮を、描画やマテリアルから独立した純関数として保つため。
"""

from .colors import complete_color_table
from .distribution import ColorDistribution, WidthDistribution
from .shape import GeometryListener, LineShape
from .widths import complete_width_table

__all__ = [
    "ColorDistribution",
    "WidthDistribution",
    "complete_color_table",
    "complete_width_table",
    "GeometryListener",
    "LineShape",
]
