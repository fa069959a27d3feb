"""
どこで: `engine.line.distribution`。
何を: 幅/色テーブルが点数に足りないときの分配ポリシー（列挙）。
なぜ: 幅と色は補完時の端数処理が異なるため、同じ 6 区分でも別の列挙として扱う。
"""

from __future__ import annotations

from enum import IntEnum


class WidthDistribution(IntEnum):
    """幅テーブルの分配ポリシー。

    - NONE: 幅テーブルを変更しない
    - REPEAT: 幅テーブルを繰り返して埋める
    - EVEN: 幅テーブルを点列全体へ均等に引き伸ばす
    - START: 先頭に配置し、残りを既定幅で埋める
    - END: 末尾に配置し、先頭側を既定幅で埋める
    - START_END: 前半/後半に分けて配置し、間を中央付近の幅で埋める
    """

    NONE = 0
    REPEAT = 1
    EVEN = 2
    START = 3
    END = 4
    START_END = 5


class ColorDistribution(IntEnum):
    """色テーブルの分配ポリシー。

    - NONE: 色テーブルを変更しない（点数に足りなくても埋めない）
    - REPEAT: 色テーブルを繰り返して埋める
    - EVEN: 色テーブルを点列全体へ均等に引き伸ばす
    - START: 先頭に配置し、残りを既定色で埋める
    - END: 末尾に配置し、先頭側を既定色で埋める
    - START_END: 前半/後半に分けて配置し、間を既定色で埋める
    """

    NONE = 0
    REPEAT = 1
    EVEN = 2
    START = 3
    END = 4
    START_END = 5


def _coerce(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        try:
            return enum_cls[key]
        except KeyError:
            raise ValueError(f"unknown {enum_cls.__name__}: {value!r}") from None
    return enum_cls(int(value))


def as_width_distribution(value: WidthDistribution | int | str) -> WidthDistribution:
    """列挙値/整数/名前（"start_end" 等）から `WidthDistribution` を得る。"""
    return _coerce(WidthDistribution, value)


def as_color_distribution(value: ColorDistribution | int | str) -> ColorDistribution:
    """列挙値/整数/名前（"repeat" 等）から `ColorDistribution` を得る。"""
    return _coerce(ColorDistribution, value)


__all__ = [
    "WidthDistribution",
    "ColorDistribution",
    "as_width_distribution",
    "as_color_distribution",
]
