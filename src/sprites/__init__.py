"""
どこで: `sprites` パッケージ。
何を: スプライトマップ（探索/レイアウト/生成）と合成エンジンを公開する。
なぜ: 関数拡張層（`functions`）から画像処理の詳細を切り離すため。
"""

from .base import SpriteMapBase, discover_sprites, path_and_name
from .engine import PillowEngine
from .image import SpriteImage

__all__ = [
    "SpriteMapBase",
    "SpriteImage",
    "PillowEngine",
    "discover_sprites",
    "path_and_name",
]
