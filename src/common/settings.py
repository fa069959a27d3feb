"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_str


@dataclass
class _Settings:
    # 線の既定値（None は「未指定」= config/組込み定数に委ねる）
    LINE_DEFAULT_WIDTH_UPPER: float | None = None
    LINE_DEFAULT_WIDTH_LOWER: float | None = None
    LINE_DEFAULT_COLOR: str | None = None

    # Kernels
    USE_NUMBA: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 幅は `env_float`（負値は 0 に丸める）、色は Hex 文字列のまま保持する。
    - 色の妥当性検証は利用側（`util.color`）で行う。
    """

    # 線の既定値（下限丸め）
    _settings.LINE_DEFAULT_WIDTH_UPPER = env_float(
        "PXD_LINE_DEFAULT_WIDTH_UPPER", None, min_value=0.0
    )
    _settings.LINE_DEFAULT_WIDTH_LOWER = env_float(
        "PXD_LINE_DEFAULT_WIDTH_LOWER", None, min_value=0.0
    )
    _settings.LINE_DEFAULT_COLOR = env_str("PXD_LINE_DEFAULT_COLOR", None)

    # Kernels
    _settings.USE_NUMBA = env_bool("PYX_USE_NUMBA", True)

    # Logging
    _settings.LOG_LEVEL = env_str("PXD_LOG_LEVEL", "INFO") or "INFO"


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
