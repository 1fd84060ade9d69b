"""
どこで: `functions` パッケージ。
何を: スクリプト関数（image-url / sprite-*）を宣言テーブルへ登録し、呼び出し口を公開する。
なぜ: ホスト側はこのパッケージを import するだけで関数群を利用できるようにするため。
"""

# 関数を登録
from . import sprites  # noqa: F401
from . import urls  # noqa: F401
from .registry import call, declare, function, get_function, is_function_registered, list_functions
from .sprites import SpriteMap

__all__ = [
    "call",
    "declare",
    "function",
    "get_function",
    "is_function_registered",
    "list_functions",
    "SpriteMap",
]
