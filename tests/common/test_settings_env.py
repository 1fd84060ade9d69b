from __future__ import annotations

import os
from pathlib import Path

from common import settings
from common.env import env_bool, env_path, env_str


def test_env_helpers(monkeypatch, tmp_path):
    monkeypatch.setenv("SPX_T_BOOL", "off")
    monkeypatch.setenv("SPX_T_NUM", "0")
    monkeypatch.setenv("SPX_T_BAD", "maybe")
    monkeypatch.setenv("SPX_T_STR", "  ")
    monkeypatch.setenv("SPX_T_PATH", str(tmp_path))
    assert env_bool("SPX_T_BOOL", True) is False
    assert env_bool("SPX_T_NUM", True) is False
    assert env_bool("SPX_T_BAD", True) is True
    assert env_bool("SPX_T_MISSING", False) is False
    assert env_str("SPX_T_STR", "fallback") == "fallback"
    assert env_path("SPX_T_PATH") == tmp_path.resolve()
    assert env_path("SPX_T_MISSING") is None


def test_derived_paths_follow_project_path(monkeypatch, tmp_path):
    monkeypatch.setenv("SPX_PROJECT_PATH", str(tmp_path))
    monkeypatch.setenv("SPX_IMAGES_DIR", "img")
    for key in ("SPX_IMAGES_PATH", "SPX_GENERATED_IMAGES_PATH", "SPX_HTTP_IMAGES_PATH",
                "SPX_HTTP_GENERATED_IMAGES_PATH", "SPX_ASSET_HOST"):
        monkeypatch.delenv(key, raising=False)
    try:
        settings.reload_from_env()
        s = settings.get()
        assert s.IMAGES_PATH == Path(tmp_path).resolve() / "img"
        assert s.GENERATED_IMAGES_PATH == s.IMAGES_PATH
        assert s.HTTP_IMAGES_PATH == "/images"
        assert s.HTTP_GENERATED_IMAGES_PATH == "/images"
        assert s.ASSET_HOST is None
        assert s.SPRITE_CLEANUP is True
    finally:
        monkeypatch.undo()
        settings.reload_from_env()


def test_http_paths_are_trimmed(monkeypatch):
    monkeypatch.setenv("SPX_HTTP_IMAGES_PATH", "/static/img/")
    monkeypatch.setenv("SPX_ASSET_HOST", "https://cdn.example.com/")
    monkeypatch.delenv("SPX_HTTP_GENERATED_IMAGES_PATH", raising=False)
    try:
        settings.reload_from_env()
        s = settings.get()
        assert s.HTTP_IMAGES_PATH == "/static/img"
        assert s.HTTP_GENERATED_IMAGES_PATH == "/static/img"
        assert s.ASSET_HOST == "https://cdn.example.com"
    finally:
        monkeypatch.undo()
        settings.reload_from_env()


def test_overrides_win_without_touching_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SPX_IMAGES_PATH", str(tmp_path / "env"))
    monkeypatch.delenv("SPX_GENERATED_IMAGES_PATH", raising=False)
    try:
        settings.reload_from_env({"SPX_IMAGES_PATH": str(tmp_path / "cli")})
        s = settings.get()
        assert s.IMAGES_PATH == (tmp_path / "cli").resolve()
        assert s.GENERATED_IMAGES_PATH == s.IMAGES_PATH
        assert os.environ["SPX_IMAGES_PATH"] == str(tmp_path / "env")
    finally:
        monkeypatch.undo()
        settings.reload_from_env()


def test_env_helpers_read_from_given_mapping(monkeypatch):
    monkeypatch.setenv("SPX_T_STR", "from-env")
    assert env_str("SPX_T_STR", source={"SPX_T_STR": "from-map"}) == "from-map"
    assert env_bool("SPX_T_MISSING", True, {}) is True
