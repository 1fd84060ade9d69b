"""
どこで: `script.keywords`。
何を: 可変長キーワード引数の読み取り専用コンテナ `KeywordArgs`。
なぜ: `$my-option` と `$my_option` を同じ設定値として解決するため（キーは `-` → `_` で正規化）。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from common.base_registry import normalize_name

from .values import Value


class KeywordArgs(Mapping[str, Value]):
    """正規化済みキーで保持するキーワード引数集合。

    - 構築時・参照時の両方でキーを正規化する。
    - 同一キーが表記違いで重複した場合は後勝ち。
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._data: dict[str, Value] = {}
        for source in (data or {}, kwargs):
            for key, value in source.items():
                self._data[normalize_name(str(key).lstrip("$"))] = value

    def get_var(self, name: str) -> Value | None:
        """変数名（`-`/`_` どちらの表記でも可）に対応する値。未指定は None。"""
        return self._data.get(normalize_name(str(name).lstrip("$")))

    def __getitem__(self, key: str) -> Value:
        return self._data[normalize_name(str(key).lstrip("$"))]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_name(key.lstrip("$")) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"KeywordArgs({self._data!r})"


__all__ = ["KeywordArgs"]
