"""
どこで: `script.values`（ホスト式の値モデル）。
何を: スタイルシート式が扱う値（数値+単位/文字列/真偽/リスト）と CSS 文字列化を提供する。
なぜ: 関数拡張層の入出力をプリプロセッサ側の値型に揃え、型検査を `isinstance` で行えるようにするため。

データモデル（不変条件）:
- 値はすべて不変（frozen dataclass）。演算結果は新しいインスタンスとして返す。
- `Number` の単位は高々 1 つ（`""` は単位なし）。
- `List` の区切りは `"space"` か `"comma"` のみ。

描画規則:
- 整数値の `Number` は小数点なしで描画し、それ以外は小数 5 桁までに丸める。
- 引用付き `String` は二重引用符で囲み、識別子はそのまま出力する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

PRECISION = 5

_SEPARATORS = {"space": " ", "comma": ", "}


def _format_number(value: float) -> str:
    v = round(float(value), PRECISION)
    if v.is_integer():
        return str(int(v))
    return f"{v:.{PRECISION}f}".rstrip("0").rstrip(".")


class Value:
    """式の値の基底クラス。"""

    def to_css(self) -> str:
        raise NotImplementedError

    def to_bool(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.to_css()


@dataclass(frozen=True, eq=True)
class Number(Value):
    """単位付き数値（例: `24px`, `50%`, `0`）。"""

    value: float = 0
    unit: str = ""

    @property
    def unit_str(self) -> str:
        return self.unit

    @property
    def unitless(self) -> bool:
        return not self.unit

    def to_css(self) -> str:
        return f"{_format_number(self.value)}{self.unit}"


@dataclass(frozen=True, eq=True)
class String(Value):
    """識別子（`quoted=False`）または引用付き文字列。"""

    value: str = ""
    quoted: bool = False

    def to_css(self) -> str:
        if self.quoted:
            escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return self.value


@dataclass(frozen=True, eq=True)
class Bool(Value):
    value: bool = False

    def to_css(self) -> str:
        return "true" if self.value else "false"

    def to_bool(self) -> bool:
        return bool(self.value)


@dataclass(frozen=True, eq=True, init=False)
class List(Value):
    """順序付きリスト。`separator` は "space" / "comma"。"""

    items: tuple[Value, ...]
    separator: str

    def __init__(self, items: Iterable[Value] = (), separator: str = "space") -> None:
        if separator not in _SEPARATORS:
            raise ValueError(f"unknown list separator: {separator!r}")
        object.__setattr__(self, "items", tuple(items))
        object.__setattr__(self, "separator", separator)

    @property
    def value(self) -> list[Value]:
        return list(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_css(self) -> str:
        return _SEPARATORS[self.separator].join(item.to_css() for item in self.items)


ZERO = Number(0)


__all__ = ["Value", "Number", "String", "Bool", "List", "ZERO", "PRECISION"]
