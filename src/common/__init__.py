"""
どこで: `common` パッケージ。
何を: script/sprites/functions で使う軽量ユーティリティ（BaseRegistry, 設定, 環境変数）。
なぜ: 共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry, normalize_name

__all__ = [
    "BaseRegistry",
    "normalize_name",
]
