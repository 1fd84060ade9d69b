"""
どこで: `common.base_registry`。
何を: 文字列キーを正規化して保持する汎用レジストリと、名前正規化ヘルパを提供する。
なぜ: スタイルシート側の `sprite-map` と Python 側の `sprite_map` を同一視するため。
"""

from __future__ import annotations

from typing import Any, Callable


def normalize_name(name: str) -> str:
    """ハイフンをアンダースコアへ寄せる（大文字小文字は保持）。

    スタイルシートの変数/キーワード名は大文字小文字を区別するため、ここでは畳まない。
    """
    return name.replace("-", "_")


class BaseRegistry:
    """名前 → オブジェクトのレジストリ。

    - 文字列キーは正規化されます（`-` → `_`、小文字化）。
    - デコレータは名前省略可。省略時は関数名から推論します。
    """

    def __init__(self):
        # 登録対象の型は統一せず Any とする（関数/宣言オブジェクトの双方を許容）。
        self._registry: dict[str, Any] = {}

    # === 内部ユーティリティ ===
    @classmethod
    def _normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "Sprite-Map" -> "sprite_map"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        return normalize_name(name).lower()

    def register(self, name: str | None = None) -> Callable:
        """オブジェクトをレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            key = self._normalize_key(name) if name else self._normalize_key(obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"'{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        """登録されたオブジェクトを取得。"""
        key = self._normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"'{name}' は登録されていません")
        return self._registry[key]

    def list_all(self) -> list[str]:
        """登録されているすべての名前を取得（未ソート）。"""
        return list(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        """指定された名前が登録されているかチェック"""
        return self._normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """レジストリから削除（名前が存在しない場合は無視）。"""
        key = self._normalize_key(name)
        if key in self._registry:
            del self._registry[key]
