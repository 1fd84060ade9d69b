"""共通フィクスチャ。

- 一時ディレクトリ上の images パス（設定を環境変数経由で差し替え）
- 小さな単色 PNG を書き出すヘルパ
- `icons/` に 3 枚（10x10, 20x8, 6x12）を置いたスプライトフォルダ
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import numpy as np
import pytest
from PIL import Image

from common import settings

PngWriter = Callable[..., Path]


@pytest.fixture()
def images_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """設定の画像パスを一時ディレクトリへ向ける。"""
    root = tmp_path / "images"
    root.mkdir()
    monkeypatch.setenv("SPX_PROJECT_PATH", str(tmp_path))
    monkeypatch.setenv("SPX_IMAGES_PATH", str(root))
    monkeypatch.delenv("SPX_GENERATED_IMAGES_PATH", raising=False)
    monkeypatch.delenv("SPX_HTTP_IMAGES_PATH", raising=False)
    monkeypatch.delenv("SPX_HTTP_GENERATED_IMAGES_PATH", raising=False)
    monkeypatch.delenv("SPX_ASSET_HOST", raising=False)
    monkeypatch.delenv("SPX_SPRITE_CLEANUP", raising=False)
    settings.reload_from_env()
    yield root
    monkeypatch.undo()
    settings.reload_from_env()


@pytest.fixture()
def write_png(images_path: Path) -> PngWriter:
    """`relative` に (w, h) の単色 RGBA PNG を書き出す。"""

    def _write(relative: str, size: tuple[int, int], color=(255, 0, 0, 255)) -> Path:
        w, h = size
        arr = np.empty((h, w, 4), dtype=np.uint8)
        arr[:, :] = color
        out = images_path / relative
        out.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(arr).save(out, format="PNG")
        return out

    return _write


@pytest.fixture()
def icons(write_png: PngWriter) -> dict[str, Path]:
    """`icons/` に 3 画像（名前順: edit, new, trash）を用意する。"""
    return {
        "edit": write_png("icons/edit.png", (10, 10), (255, 0, 0, 255)),
        "new": write_png("icons/new.png", (20, 8), (0, 255, 0, 255)),
        "trash": write_png("icons/trash.png", (6, 12), (0, 0, 255, 255)),
    }
