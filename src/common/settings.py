"""
どこで: `common.settings`
何を: 画像ディレクトリや公開 URL などの設定を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

環境変数はすべて `SPX_` 接頭辞。派生値（`IMAGES_PATH` など）は未設定時に
他の設定から導出する。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .env import env_bool, env_path, env_str


@dataclass
class _Settings:
    # ファイルシステム
    PROJECT_PATH: Path = field(default_factory=Path.cwd)
    IMAGES_DIR: str = "images"
    IMAGES_PATH: Path = field(default_factory=lambda: Path.cwd() / "images")
    GENERATED_IMAGES_PATH: Path = field(default_factory=lambda: Path.cwd() / "images")

    # 公開 URL
    HTTP_IMAGES_PATH: str = "/images"
    HTTP_GENERATED_IMAGES_PATH: str = "/images"
    ASSET_HOST: str | None = None

    # Sprites
    SPRITE_CLEANUP: bool = True


_settings = _Settings()


def reload_from_env(overrides: Mapping[str, str] | None = None) -> None:
    """環境変数から設定を再読込。

    - パスは `env_path`（絶対パスへ解決）、bool は `env_bool` を使用。
    - 派生値は明示指定が無い場合のみ導出する。
    - `overrides`（`SPX_*` キー）は環境変数より優先する。`os.environ` は書き換えない。
    """
    src: Mapping[str, str] = {**os.environ, **(overrides or {})}

    # ファイルシステム
    _settings.PROJECT_PATH = env_path("SPX_PROJECT_PATH", Path.cwd(), src) or Path.cwd()
    _settings.IMAGES_DIR = env_str("SPX_IMAGES_DIR", "images", src) or "images"
    _settings.IMAGES_PATH = env_path(
        "SPX_IMAGES_PATH", _settings.PROJECT_PATH / _settings.IMAGES_DIR, src
    ) or (_settings.PROJECT_PATH / _settings.IMAGES_DIR)
    _settings.GENERATED_IMAGES_PATH = (
        env_path("SPX_GENERATED_IMAGES_PATH", _settings.IMAGES_PATH, src) or _settings.IMAGES_PATH
    )

    # 公開 URL（末尾の '/' は落とす。ルート '/' は空文字になる）
    http_images = env_str("SPX_HTTP_IMAGES_PATH", "/images", src) or "/images"
    _settings.HTTP_IMAGES_PATH = http_images.rstrip("/")
    http_generated = env_str("SPX_HTTP_GENERATED_IMAGES_PATH", http_images, src) or http_images
    _settings.HTTP_GENERATED_IMAGES_PATH = http_generated.rstrip("/")
    host = env_str("SPX_ASSET_HOST", source=src)
    _settings.ASSET_HOST = host.rstrip("/") if host else None

    # Sprites
    _settings.SPRITE_CLEANUP = env_bool("SPX_SPRITE_CLEANUP", True, src)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
