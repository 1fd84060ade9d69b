"""
どこで: `functions.urls`。
何を: `image-url(path, only-path, cache-buster)` を提供する（`sprite-url` から利用）。
なぜ: 画像パスを公開 URL（http パス/アセットホスト/キャッシュバスター付き）へ解決するため。
"""

from __future__ import annotations

import re
from pathlib import Path

from common import settings
from script.errors import ScriptSyntaxError
from script.values import Bool, String, Value

from .registry import function

_ABSOLUTE_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|//|/)", re.IGNORECASE)

_FALSE = Bool(False)
_TRUE = Bool(True)


def _clean_url(url: str) -> String:
    return String(f"url('{url}')")


def _real_path(path: str) -> Path | None:
    """公開パスに対応するファイルシステム上のパス（生成先を優先）。"""
    cfg = settings.get()
    for root in (cfg.GENERATED_IMAGES_PATH, cfg.IMAGES_PATH):
        candidate = root / path
        if candidate.is_file():
            return candidate
    return None


def _http_prefix(real_path: Path | None) -> str:
    cfg = settings.get()
    if (
        real_path is not None
        and cfg.GENERATED_IMAGES_PATH != cfg.IMAGES_PATH
        and real_path.parent.is_relative_to(cfg.GENERATED_IMAGES_PATH)
    ):
        return cfg.HTTP_GENERATED_IMAGES_PATH
    return cfg.HTTP_IMAGES_PATH


@function(
    "image-url",
    ("path",),
    ("path", "only-path"),
    ("path", "only-path", "cache-buster"),
)
def image_url(path: Value, only_path: Value = _FALSE, cache_buster: Value = _TRUE) -> String:
    """画像パスを URL 値へ解決する。"""
    if not isinstance(path, String):
        raise ScriptSyntaxError(f"The first argument to image-url() must be a string, got {path}")
    cfg = settings.get()
    value = path.value

    prefix = f"{cfg.HTTP_IMAGES_PATH}/"
    if value.startswith(prefix):
        # http パス付きのルート相対は通常の相対パスとして扱う
        value = value[len(prefix) :]
    elif _ABSOLUTE_RE.match(value):
        return String(value) if only_path.to_bool() else _clean_url(value)

    real_path = _real_path(value)
    url = f"{_http_prefix(real_path)}/{value}"

    if cache_buster.to_bool():
        if isinstance(cache_buster, String):
            url = f"{url}?{cache_buster.value}"
        elif real_path is not None:
            url = f"{url}?{int(real_path.stat().st_mtime)}"

    if cfg.ASSET_HOST:
        url = f"{cfg.ASSET_HOST}{'' if url.startswith('/') else '/'}{url}"

    return String(url) if only_path.to_bool() else _clean_url(url)


__all__ = ["image_url"]
