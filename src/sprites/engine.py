"""
どこで: `sprites.engine`。
何を: Pillow で元画像を読み、numpy の RGBA キャンバスへ配置して PNG として保存するエンジン。
なぜ: レイアウト（`SpriteMapBase`）と画素処理を分離し、合成は配列のスライス代入で完結させるため。

合成規則:
- キャンバスは透明（RGBA 全 0）で初期化する。
- 画像は `(left, top)` に「置換」で配置する（アルファ合成はしない）。
- `repeat-x` は `left - ceil(left / width) * width` から右端まで水平に敷き詰める。
- キャンバス外にはみ出す部分は切り捨てる。
"""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
from PIL import Image

from .base import SpriteMapBase


def load_rgba(path: Path) -> np.ndarray:
    """画像を (H, W, 4) uint8 の RGBA 配列として読み込む。"""
    with Image.open(path) as im:
        return np.asarray(im.convert("RGBA"), dtype=np.uint8)


def replace_region(canvas: np.ndarray, pixels: np.ndarray, left: int, top: int) -> None:
    """`pixels` を `canvas` の (left, top) に上書きする（範囲外はクリップ）。"""
    h, w = pixels.shape[:2]
    canvas_h, canvas_w = canvas.shape[:2]
    x0, y0 = max(left, 0), max(top, 0)
    x1, y1 = min(left + w, canvas_w), min(top + h, canvas_h)
    if x0 >= x1 or y0 >= y1:
        return
    canvas[y0:y1, x0:x1] = pixels[y0 - top : y1 - top, x0 - left : x1 - left]


class PillowEngine(SpriteMapBase):
    """Pillow + numpy によるシート合成/保存。"""

    def construct_sprite(self) -> np.ndarray:
        canvas = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        for image in self.images:
            pixels = load_rgba(image.file)
            if image.repeat == "no-repeat":
                replace_region(canvas, pixels, int(image.left), int(image.top))
                continue
            step = image.width
            x = int(image.left - math.ceil(image.left / step) * step)
            while x < self.width:
                replace_region(canvas, pixels, x, int(image.top))
                x += step
        return canvas

    def save(self, data: np.ndarray) -> Path:
        out = self.filename
        out.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(np.ascontiguousarray(data, dtype=np.uint8)).save(out, format="PNG")
        return out


__all__ = ["PillowEngine", "load_rgba", "replace_region"]
