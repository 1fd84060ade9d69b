"""
どこで: `sprites.image`。
何を: スプライトマップ内の 1 画像（元ファイル・寸法・配置オフセット・オプション）を表す。
なぜ: 配置計算/一意性ハッシュ/合成の各段が同じ属性集合を参照できるようにするため。

オプション解決順（`KeywordArgs` 上のキー、`-`/`_` 同一視）:
- `<name>-repeat` → `repeat` → `no-repeat`
- `<name>-position` → `position` → `0px`
- `<name>-spacing` → `spacing` → `0`
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from script.errors import ScriptSyntaxError
from script.keywords import KeywordArgs
from script.values import Number, String, Value

if TYPE_CHECKING:  # pragma: no cover
    from .base import SpriteMapBase

REPEAT_MODES = ("no-repeat", "repeat-x")

_DEFAULT_POSITION = Number(0, "px")
_DEFAULT_SPACING = Number(0)
_DEFAULT_REPEAT = String("no-repeat")


class SpriteImage:
    """スプライトマップの 1 要素。`left`/`top` はマップ側が割り当てる。"""

    def __init__(self, base: "SpriteMapBase", relative_file: str, options: KeywordArgs) -> None:
        self.base = base
        self.relative_file = relative_file
        self.file: Path = base.images_path / relative_file
        self.options = options
        self.name = Path(relative_file).stem
        self.left: int = 0
        self.top: int = 0
        self._size: tuple[int, int] | None = None
        self._digest: str | None = None

    # ── 寸法（遅延読み込み） ───────────────────
    def _dimensions(self) -> tuple[int, int]:
        if self._size is None:
            with Image.open(self.file) as im:
                self._size = (int(im.width), int(im.height))
        return self._size

    @property
    def width(self) -> int:
        return self._dimensions()[0]

    @property
    def height(self) -> int:
        return self._dimensions()[1]

    # ── オプション ───────────────────
    def _get_var_file(self, var: str) -> Value | None:
        return self.options.get_var(f"{self.name}-{var}")

    def _option(self, var: str, default: Value) -> Value:
        value = self._get_var_file(var)
        if value is None:
            value = self.options.get_var(var)
        return default if value is None else value

    @property
    def repeat(self) -> str:
        value = self._option("repeat", _DEFAULT_REPEAT)
        mode = getattr(value, "value", value)
        if mode not in REPEAT_MODES:
            raise ScriptSyntaxError(
                f"Invalid repeat value {mode!s} for sprite {self.name}."
                f" Expected one of: {', '.join(REPEAT_MODES)}"
            )
        return str(mode)

    @property
    def position(self) -> Number:
        value = self._option("position", _DEFAULT_POSITION)
        if not isinstance(value, Number):
            raise ScriptSyntaxError(f"The position of sprite {self.name} must be a number, got {value}")
        return value

    @property
    def spacing(self) -> float:
        value = self._option("spacing", _DEFAULT_SPACING)
        if not isinstance(value, Number):
            raise ScriptSyntaxError(f"The spacing of sprite {self.name} must be a number, got {value}")
        return value.value

    @property
    def offset(self) -> float:
        """幅計算に効く水平オフセット（px/単位なしのみ、% は 0）。"""
        position = self.position
        return position.value if position.unitless or position.unit_str == "px" else 0

    # ── 同一性 ───────────────────
    @property
    def digest(self) -> str:
        if self._digest is None:
            self._digest = hashlib.md5(self.file.read_bytes()).hexdigest()
        return self._digest

    @property
    def mtime(self) -> float:
        return self.file.stat().st_mtime

    def __repr__(self) -> str:
        return f"SpriteImage({self.relative_file!r}, left={self.left}, top={self.top})"


__all__ = ["SpriteImage", "REPEAT_MODES"]
