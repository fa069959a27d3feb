"""
どこで: `util.color`。
何を: 色指定の正規化（Hex, RGB(A) 0–1, RGB(A) 0–255）と色テーブル `(K,3) float32` への変換。
なぜ: 線の色テーブル/既定色/設定値で同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from common.types import RGB


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def normalize_rgb(value: object) -> RGB:
    """1 色を RGB(0–1) へ正規化する（アルファは捨てる）。

    - 受理: Hex 文字列, (r,g,b[,a]) の list/tuple/ndarray（0–1 または 0–255）
    - 全成分が 0..1 に収まればそのまま、そうでなければ 0–255 とみなしてスケールする。
    """
    if isinstance(value, str):
        r, g, b, _a = parse_hex_color_str(value)
        return (r, g, b)
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(value) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(value[0]), float(value[1]), float(value[2])]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if all(0.0 <= x <= 1.0 for x in fseq):
        return (fseq[0], fseq[1], fseq[2])
    r, g, b = (max(0, min(255, int(round(x)))) for x in fseq)
    return (r / 255.0, g / 255.0, b / 255.0)


def to_color_table(colors: Iterable[object] | np.ndarray | None) -> np.ndarray:
    """色の列を `(K, 3) float32` の色テーブルへ変換する。

    - `None` や空列は `(0, 3)` を返す。
    - 数値 ndarray は `(K,3)`/`(K,4)` を受理（4 列目は捨てる）。0–1/0–255 の判定は行ごとに
      `normalize_rgb` と同じ規則で行う。
    - それ以外は要素ごとに `normalize_rgb` を適用する。
    """
    if colors is None:
        return np.empty((0, 3), dtype=np.float32)
    if isinstance(colors, np.ndarray) and colors.dtype.kind in "fiu":
        arr = np.asarray(colors, dtype=np.float32)
        if arr.size == 0:
            return np.empty((0, 3), dtype=np.float32)
        if arr.ndim != 2 or arr.shape[1] not in (3, 4):
            raise ValueError(f"色テーブルの形状が不正です: {arr.shape}")
        rgb = arr[:, :3]
        # 行ごとに normalize_rgb と同じ判定（0..1 に収まらない行は 0–255 とみなす）
        in_unit = np.all((rgb >= 0.0) & (rgb <= 1.0), axis=1)
        scaled = np.clip(np.rint(rgb), 0.0, 255.0) / np.float32(255.0)
        out = np.where(in_unit[:, None], rgb, scaled)
        return np.ascontiguousarray(out, dtype=np.float32)
    rows: Sequence[RGB] = [normalize_rgb(c) for c in colors]
    if not rows:
        return np.empty((0, 3), dtype=np.float32)
    return np.asarray(rows, dtype=np.float32).reshape(-1, 3)


__all__ = [
    "parse_hex_color_str",
    "normalize_rgb",
    "to_color_table",
]
