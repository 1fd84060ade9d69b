"""
どこで: `sprites.base`（スプライトマップの中核）。
何を: glob からの画像探索、縦積みレイアウト、内容ハッシュ、初回アクセス時のシート生成を提供する。
なぜ: 関数拡張層から「構築は副作用なし・描画時に 1 度だけ生成」という契約で扱えるようにするため。

データモデル（不変条件）:
- `images` は探索結果をファイル名順に並べたもの。レイアウトは構築時に 1 度だけ計算し以後固定。
- 先頭画像は `top == 0`。以降は `前.top + 前.height + max(spacing, 前.spacing)`。
- `left` は位置が % 指定なら `(width - image.width) * pct / 100`（整数へ丸め）、それ以外は位置の値。
- `uniqueness_hash` はレイアウトと元画像内容に依存し、同一入力なら常に同一。

生成:
- `generate()` は `filename` が無いか元画像の方が新しい場合のみ書き出す（冪等）。
- 実際の合成/保存は `construct_sprite()` / `save()` をサブクラス（エンジン）が実装する。
"""

from __future__ import annotations

import glob
import hashlib
import logging
import math
import os
import re
from pathlib import Path
from typing import Any

from common import settings
from script.errors import ScriptSyntaxError
from script.keywords import KeywordArgs
from script.values import Value

from .image import SpriteImage

logger = logging.getLogger(__name__)

# レイアウト方式を変えたら更新する（既存シートのハッシュを失効させる）
SPRITE_VERSION = "1"
HASH_LENGTH = 10

# フォルダ名部分にはワイルドカードとドットを含めない（"icons/*/*.png" -> "icons"）
_URI_RE = re.compile(r"^((?:.+/)?([^*./]+))/(.+?)\.png$")


def path_and_name(uri: str) -> tuple[str, str]:
    """glob から (path, name) を導出する（例: "ui/icons/*.png" -> ("ui/icons", "icons")）。"""
    m = _URI_RE.match(uri)
    if not m:
        raise ScriptSyntaxError(
            f'Invalid sprite path "{uri}". A sprite map glob must name a folder'
            ' and end in .png, for example "icons/*.png".'
        )
    return m.group(1), m.group(2)


def discover_sprites(uri: str, images_path: Path | None = None) -> list[str]:
    """画像パス配下で glob に一致するファイルを、画像パスからの相対パスで返す（ソート済み）。"""
    root = images_path if images_path is not None else settings.get().IMAGES_PATH
    # root はパターンとして解釈しない（"site[1]/images" なども可）
    matches = sorted(f for f in glob.glob(uri, root_dir=root) if os.path.isfile(os.path.join(root, f)))
    return [Path(f).as_posix() for f in matches]


class SpriteMapBase(Value):
    """名前付きの画像集合。構築のみではディスクへ何も書かない。"""

    def __init__(
        self,
        sprites: list[str],
        path: str,
        name: str,
        kwargs: KeywordArgs | None = None,
        *,
        images_path: Path | None = None,
        generated_images_path: Path | None = None,
    ) -> None:
        cfg = settings.get()
        self.path = path
        self.name = name
        self.kwargs = kwargs if kwargs is not None else KeywordArgs()
        self.images_path = Path(images_path) if images_path is not None else cfg.IMAGES_PATH
        self.generated_images_path = (
            Path(generated_images_path)
            if generated_images_path is not None
            else cfg.GENERATED_IMAGES_PATH
        )
        self.images = [SpriteImage(self, f, self.kwargs) for f in sprites]
        if not self.images:
            raise ScriptSyntaxError(f"Sprite map {path}/{name} has no images.")
        self.width = 0
        self.height = 0
        self._uniqueness_hash: str | None = None
        self.compute_image_positions()

    @classmethod
    def from_uri(cls, uri: str, kwargs: KeywordArgs | None = None, **options: Any) -> "SpriteMapBase":
        """glob からスプライトマップを構築する。一致なしは `ScriptSyntaxError`。"""
        path, name = path_and_name(uri)
        images_path = options.get("images_path") or settings.get().IMAGES_PATH
        sprites = discover_sprites(uri, images_path)
        if not sprites:
            raise ScriptSyntaxError(
                f'No files were found in the load path matching "{uri}".'
                f" Your current load paths are: {images_path}"
            )
        return cls(sprites, path, name, kwargs, **options)

    # ── レイアウト ───────────────────
    def compute_image_positions(self) -> None:
        self.width = int(math.ceil(max(image.width + image.offset for image in self.images)))
        previous: SpriteImage | None = None
        for image in self.images:
            position = image.position
            if position.unit_str == "%":
                image.left = int(round((self.width - image.width) * (position.value / 100)))
            else:
                image.left = int(round(position.value))
            if previous is None:
                image.top = 0
            else:
                gap = max(image.spacing, previous.spacing)
                image.top = int(math.ceil(previous.top + previous.height + gap))
            previous = image
        last = self.images[-1]
        self.height = last.top + last.height

    # ── 参照 ───────────────────
    @property
    def sprite_names(self) -> list[str]:
        return [image.name for image in self.images]

    def image_for(self, name: str) -> SpriteImage | None:
        for image in self.images:
            if image.name == name:
                return image
        return None

    # ── 同一性/出力先 ───────────────────
    @property
    def uniqueness_hash(self) -> str:
        if self._uniqueness_hash is None:
            digest = hashlib.md5()
            digest.update(SPRITE_VERSION.encode("utf-8"))
            digest.update(self.path.encode("utf-8"))
            for image in self.images:
                for attr in (
                    image.relative_file,
                    image.height,
                    image.width,
                    image.repeat,
                    image.spacing,
                    image.position,
                    image.digest,
                ):
                    digest.update(str(attr).encode("utf-8"))
            self._uniqueness_hash = digest.hexdigest()[:HASH_LENGTH]
        return self._uniqueness_hash

    @property
    def filename(self) -> Path:
        return self.generated_images_path / f"{self.path}-{self.uniqueness_hash}.png"

    @property
    def mtime(self) -> float | None:
        try:
            return self.filename.stat().st_mtime
        except FileNotFoundError:
            return None

    # ── 生成 ───────────────────
    def outdated(self) -> bool:
        generated = self.mtime
        if generated is None:
            return True
        return any(image.mtime > generated for image in self.images)

    def generation_required(self) -> bool:
        return not self.filename.exists() or self.outdated()

    def generate(self) -> bool:
        """必要な場合のみシートを書き出す。書き出したら True。"""
        if not self.generation_required():
            logger.debug("sprite sheet is up to date: %s", self.filename)
            return False
        if settings.get().SPRITE_CLEANUP:
            self.cleanup_old_sprites()
        data = self.construct_sprite()
        self.save(data)
        logger.info("Created %s", self.filename)
        return True

    def cleanup_old_sprites(self) -> list[Path]:
        """同じ path の古いシート（ハッシュ違い）を削除する。"""
        stem = Path(self.path).name
        folder = self.filename.parent
        pattern = re.compile(rf"^{re.escape(stem)}-[0-9a-f]{{{HASH_LENGTH}}}\.png$")
        removed: list[Path] = []
        if not folder.is_dir():
            return removed
        for candidate in folder.iterdir():
            if candidate == self.filename or not pattern.match(candidate.name):
                continue
            candidate.unlink()
            logger.debug("removed stale sprite sheet %s", candidate)
            removed.append(candidate)
        return removed

    def construct_sprite(self) -> Any:
        raise NotImplementedError

    def save(self, data: Any) -> Path:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r}, sprites={self.sprite_names!r})"


__all__ = [
    "SpriteMapBase",
    "path_and_name",
    "discover_sprites",
    "SPRITE_VERSION",
    "HASH_LENGTH",
]
