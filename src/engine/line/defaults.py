"""
どこで: `engine.line.defaults`。
何を: 既定色/既定幅/既定ポリシーなどライブラリ共通の補完定数を解決する。
なぜ: 組込み定数 → `configs/default.yaml`/`config.yaml` の `line:` → 環境変数 の順で上書きできるようにするため。

設定例（YAML）:

    line:
      default_color: "#ffffff"
      default_width_upper: 1.0
      default_width_lower: 1.0
      width_distribution: start
      color_distribution: start

- 不正な値は警告ログを出して無視する（フェイルソフト）。
- 解決結果はキャッシュする。設定を変えた後は `reload_line_defaults()` を呼ぶ。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from common.settings import get as _get_settings
from common.types import RGB
from util.color import normalize_rgb
from util.utils import load_config

from .colors import WHITE
from .distribution import (
    ColorDistribution,
    WidthDistribution,
    as_color_distribution,
    as_width_distribution,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineDefaults:
    color: RGB = WHITE
    width_upper: float = 1.0
    width_lower: float = 1.0
    width_distribution: WidthDistribution = WidthDistribution.START
    color_distribution: ColorDistribution = ColorDistribution.START


_CACHED: LineDefaults | None = None


def _apply_config(base: LineDefaults, section: Mapping[str, Any]) -> LineDefaults:
    parsers = {
        "default_color": ("color", normalize_rgb),
        "default_width_upper": ("width_upper", float),
        "default_width_lower": ("width_lower", float),
        "width_distribution": ("width_distribution", as_width_distribution),
        "color_distribution": ("color_distribution", as_color_distribution),
    }
    out = base
    for key, (field_name, parse) in parsers.items():
        if key not in section:
            continue
        try:
            out = replace(out, **{field_name: parse(section[key])})
        except (TypeError, ValueError) as e:
            logger.warning("config line.%s ignored: %s", key, e)
    return out


def _apply_env(base: LineDefaults) -> LineDefaults:
    s = _get_settings()
    out = base
    if s.LINE_DEFAULT_WIDTH_UPPER is not None:
        out = replace(out, width_upper=s.LINE_DEFAULT_WIDTH_UPPER)
    if s.LINE_DEFAULT_WIDTH_LOWER is not None:
        out = replace(out, width_lower=s.LINE_DEFAULT_WIDTH_LOWER)
    if s.LINE_DEFAULT_COLOR is not None:
        try:
            out = replace(out, color=normalize_rgb(s.LINE_DEFAULT_COLOR))
        except ValueError as e:
            logger.warning("PXD_LINE_DEFAULT_COLOR ignored: %s", e)
    return out


def get_line_defaults() -> LineDefaults:
    """現在の既定値を返す（初回のみ config/env を読む）。"""
    global _CACHED
    if _CACHED is None:
        section = load_config().get("line") or {}
        if not isinstance(section, Mapping):
            logger.warning("config section 'line' must be a mapping; ignored")
            section = {}
        _CACHED = _apply_env(_apply_config(LineDefaults(), section))
    return _CACHED


def reload_line_defaults() -> LineDefaults:
    """キャッシュを破棄して既定値を解決し直す。"""
    global _CACHED
    _CACHED = None
    return get_line_defaults()


__all__ = ["LineDefaults", "get_line_defaults", "reload_line_defaults"]
