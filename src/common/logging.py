"""
どこで: `common.logging`。
何を: CLI 向けの最小ロギング設定ヘルパ。
なぜ: 各モジュールは `logging.getLogger(__name__)` のみを使い、設定は入口で 1 度だけ行うため。

補足:
- Pillow の PNG プラグインは DEBUG でチャンク単位のログを大量に出すため、`PIL` ロガーは
  INFO 未満へ下げない。
"""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("PIL",)


def _to_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば書式は変えない（レベル調整のみ）
    - `sprite-map` CLI から呼び出す想定
    """
    lvl = _to_level(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(lvl, logging.INFO))

    root = logging.getLogger()
    if root.handlers:
        # アプリ側で設定済み
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["setup_default_logging"]
