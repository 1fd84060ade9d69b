"""
どこで: `common.env`
何を: 環境変数の軽量パースヘルパを提供。
なぜ: 各所に散在する `os.getenv` + 例外/境界ガードを簡素化するため。

各ヘルパは `source` で参照先のマッピングを差し替えられる（既定は `os.environ`）。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional


def env_str(name: str, default: Optional[str] = None, source: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """文字列環境変数を取得（未設定/空文字は既定値）。"""
    raw = (os.environ if source is None else source).get(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw if raw else default


def env_path(
    name: str, default: Optional[Path] = None, source: Optional[Mapping[str, str]] = None
) -> Optional[Path]:
    """パス環境変数を取得（`~` を展開し、絶対パスへ解決）。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[Path]
        未設定時の既定値（そのまま返す）。
    source : Optional[Mapping[str, str]]
        参照するマッピング。省略時は `os.environ`。

    Returns
    -------
    Optional[Path]
        解決済みのパス。未設定時は `default`。
    """
    raw = env_str(name, source=source)
    if raw is None:
        return default
    return Path(raw).expanduser().resolve()


def env_bool(name: str, default: bool = False, source: Optional[Mapping[str, str]] = None) -> bool:
    """真偽環境変数を取得（0/1, true/false を許容）。"""
    raw = (os.environ if source is None else source).get(name)
    if raw is None:
        return bool(default)
    try:
        # 数値優先
        return int(raw) != 0
    except ValueError:
        s = raw.strip().lower()
        if s in {"true", "t", "yes", "y", "on"}:
            return True
        if s in {"false", "f", "no", "n", "off"}:
            return False
        return bool(default)
