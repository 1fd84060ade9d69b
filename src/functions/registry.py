"""
どこで: `functions` のレジストリ層（関数宣言テーブル）。
何を: `@function` デコレータによるアリティ別の宣言と、名前/キーワードを正規化した呼び出しを提供。
なぜ: スタイルシート式から `sprite-position($map, new, $offset-x: 3px)` のように呼べるようにするため。

公開 API 概要:
- `function`（デコレータ）: 関数を 1 つ以上のシグネチャで登録
- `declare(name, args)`: 登録済み関数へアリティを追加
- `call(name, *args, **kwargs)`: シグネチャを解決して呼び出す
- `get_function(name)` / `list_functions()` / `is_function_registered(name)` / `unregister(name)`

バインド規則:
- 位置引数を先頭から埋め、残りの仮引数はすべて名前付き引数で埋まる必要がある。
- 余った名前付き引数は `var_kwargs` 宣言時のみ `KeywordArgs` として末尾に渡す。
- 名前付き引数のキーは `$` を除き `-` → `_` で正規化する。
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Sequence

from common.base_registry import BaseRegistry, normalize_name
from script.errors import ScriptSyntaxError
from script.keywords import KeywordArgs

ScriptFn = Callable[..., Any]


@dataclass(frozen=True)
class Signature:
    """1 つのアリティ（仮引数名の並び）。"""

    args: tuple[str, ...]
    var_kwargs: bool = False

    @classmethod
    def of(cls, args: Iterable[str], var_kwargs: bool = False) -> "Signature":
        return cls(tuple(normalize_name(a) for a in args), var_kwargs)


@dataclass
class FunctionDecl:
    """宣言テーブルの 1 エントリ。"""

    name: str
    fn: ScriptFn
    signatures: list[Signature] = field(default_factory=list)
    variadic: bool = False

    def arities(self) -> list[int]:
        return sorted({len(sig.args) for sig in self.signatures})


# 関数宣言テーブル
_function_registry = BaseRegistry()


def _infer_args(fn: ScriptFn) -> tuple[str, ...]:
    params = inspect.signature(fn).parameters.values()
    return tuple(
        p.name
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


def function(
    name: str,
    *signatures: Sequence[str],
    var_kwargs: bool = False,
    variadic: bool = False,
):
    """スクリプト関数を宣言テーブルへ登録するデコレータ。

    使用例:
    - `@function("sprite-url")`                         → 仮引数を関数定義から推論。
    - `@function("sprite", ("map", "sprite"), ("map", "sprite", "offset-x"))` → 複数アリティ。
    - `@function("sprite-map", ("glob",), var_kwargs=True)` → 余りキーワードを受け取る。
    - `@function("sprite-image", variadic=True)`        → 任意個の引数をそのまま渡す。

    例外:
    - TypeError: 呼び出し可能でないものを登録しようとした場合。
    - ValueError: 同名の関数が既に登録されている場合。
    """

    def _decorator(fn: ScriptFn) -> ScriptFn:
        if not callable(fn):
            raise TypeError(f"@function は呼び出し可能オブジェクトのみ登録可能です: got {fn!r}")
        sigs = [Signature.of(s, var_kwargs) for s in signatures]
        if not sigs and not variadic:
            sigs = [Signature.of(_infer_args(fn), var_kwargs)]
        decl = FunctionDecl(name=name, fn=fn, signatures=sigs, variadic=variadic)
        _function_registry.register(name)(decl)
        return fn

    return _decorator


def declare(name: str, args: Sequence[str], *, var_kwargs: bool = False) -> None:
    """登録済み関数にアリティを追加する（重複は無視）。

    例外:
    - KeyError: 未登録名の場合。
    """
    decl: FunctionDecl = _function_registry.get(name)
    sig = Signature.of(args, var_kwargs)
    if sig not in decl.signatures:
        decl.signatures.append(sig)


def get_function(name: str) -> FunctionDecl:
    """登録された宣言を取得。

    例外:
    - KeyError: 未登録名の場合。
    """
    return _function_registry.get(name)


def list_functions() -> list[str]:
    """登録済み関数名（正規化済み）をソートして返す。"""
    return sorted(_function_registry.list_all())


def is_function_registered(name: str) -> bool:
    return _function_registry.is_registered(name)


def unregister(name: str) -> None:
    """名前を指定して登録を解除（存在しない場合は無視）。"""
    _function_registry.unregister(name)


def _describe_arities(counts: list[int]) -> str:
    words = [str(c) for c in counts]
    if len(words) <= 1:
        return "".join(words) or "0"
    return f"{', '.join(words[:-1])} or {words[-1]}"


def _bind(sig: Signature, args: tuple[Any, ...], named: Mapping[str, Any]) -> list[Any] | None:
    if len(args) > len(sig.args):
        return None
    given, rest = sig.args[: len(args)], sig.args[len(args) :]
    if any(key in given for key in named):
        return None
    if any(key not in named for key in rest):
        return None
    extras = {k: v for k, v in named.items() if k not in rest}
    if extras and not sig.var_kwargs:
        return None
    bound = list(args) + [named[key] for key in rest]
    if sig.var_kwargs:
        bound.append(KeywordArgs(extras))
    return bound


def call(name: str, *args: Any, **kwargs: Any) -> Any:
    """宣言テーブル経由でスクリプト関数を呼び出す。

    例外:
    - ScriptSyntaxError: 未定義関数/未知のキーワード/アリティ不一致、および関数本体の送出。
    """
    try:
        decl: FunctionDecl = _function_registry.get(name)
    except KeyError:
        raise ScriptSyntaxError(f"Undefined function: {name}()") from None

    if decl.variadic:
        return decl.fn(*args, **kwargs)

    named = {normalize_name(str(k).lstrip("$")): v for k, v in kwargs.items()}
    if not any(sig.var_kwargs for sig in decl.signatures):
        known = {arg for sig in decl.signatures for arg in sig.args}
        for key in named:
            if key not in known:
                raise ScriptSyntaxError(
                    f"Function {decl.name} doesn't have an argument named ${key.replace('_', '-')}"
                )

    for sig in sorted(decl.signatures, key=lambda s: len(s.args)):
        bound = _bind(sig, args, named)
        if bound is not None:
            return decl.fn(*bound)

    given = len(args) + len(named)
    raise ScriptSyntaxError(
        f"wrong number of arguments ({given} for {_describe_arities(decl.arities())})"
        f" for `{decl.name}'"
    )


__all__ = [
    "Signature",
    "FunctionDecl",
    "function",
    "declare",
    "call",
    "get_function",
    "list_functions",
    "is_function_registered",
    "unregister",
]
