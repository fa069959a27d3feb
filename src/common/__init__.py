"""
どこで: `common` パッケージ。
何を: 設定/環境変数/ロギング/型エイリアスなど、全層で使う軽量基盤。
なぜ: line/render/api から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .types import RGB

__all__ = [
    "RGB",
]
