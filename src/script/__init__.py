"""
どこで: `script` パッケージ。
何を: ホスト式の値型とエラー型を再輸出する。
"""

from .errors import ScriptSyntaxError
from .keywords import KeywordArgs
from .values import ZERO, Bool, List, Number, String, Value

__all__ = [
    "ScriptSyntaxError",
    "Value",
    "Number",
    "String",
    "Bool",
    "List",
    "ZERO",
    "KeywordArgs",
]
