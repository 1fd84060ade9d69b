"""
どこで: `script.errors`。
何を: 関数拡張層が送出する利用者向けエラー。
なぜ: 引数不正/スプライト欠如/アリティ不一致をすべて同一の型で呼び出し元へ返すため。
"""

from __future__ import annotations


class ScriptSyntaxError(Exception):
    """スタイルシート式の評価を中断させるエラー（回復経路なし）。"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


__all__ = ["ScriptSyntaxError"]
