"""
どこで: `functions.sprites`（スプライト関数群）。
何を: `sprite-map`/`sprite`/`sprite-url`/`sprite-position` などをスタイルシート式から呼べるよう登録する。
なぜ: 引数検査と値変換だけをここで行い、探索/レイアウト/生成は `sprites` 側へ委譲するため。

使用例（スタイルシート側）:

    $icons: sprite-map("icons/*.png");          // 構築のみ（副作用なし）
    background: sprite($icons, new) no-repeat;  // url('/images/icons-0123abcdef.png') 0 -24px no-repeat
    background-position: sprite-position($icons, new, 3px, -2px);  // 3px -26px
    background: $icons no-repeat;               // sprite-url($icons) と同じ

エラー方針:
- 引数の型不一致/スプライト欠如はすべて `ScriptSyntaxError`（回復経路なし）。
- `sprite-image()` は常に失敗する（`sprite()` への置き換え案内のみ）。
"""

from __future__ import annotations

from script.errors import ScriptSyntaxError
from script.keywords import KeywordArgs
from script.values import ZERO, Bool, List, Number, String, Value
from sprites.engine import PillowEngine
from sprites.image import SpriteImage

from .registry import function
from .urls import image_url

HELP_URL = "http://compass-style.org/help/tutorials/spriting/"


class SpriteMap(PillowEngine):
    """式の値としてのスプライトマップ。プロパティ値として描画すると `sprite-url` と同じ。"""

    def to_css(self) -> str:
        return sprite_url(self).to_css()


# ── エラー ───────────────────
def _missing_sprite(function_name: str) -> ScriptSyntaxError:
    return ScriptSyntaxError(
        f"The first argument to {function_name}() must be a sprite map."
        f" See {HELP_URL} for more information."
    )


def _missing_name(function_name: str) -> ScriptSyntaxError:
    return ScriptSyntaxError(
        f"The second argument to {function_name} must be a sprite name."
        f" See {HELP_URL} for more information."
    )


def _missing_image(sprite_map: SpriteMap, name: Value) -> ScriptSyntaxError:
    return ScriptSyntaxError(
        f"No sprite called {name} found in sprite map {sprite_map.path}/{sprite_map.name}."
        f" Did you mean one of: {', '.join(sprite_map.sprite_names)}"
    )


def _require_map(value: Value, function_name: str) -> SpriteMap:
    if not isinstance(value, SpriteMap):
        raise _missing_sprite(function_name)
    return value


def _require_image(sprite_map: SpriteMap, name: Value | None, function_name: str) -> SpriteImage:
    if not isinstance(name, String):
        raise _missing_name(function_name)
    image = sprite_map.image_for(name.value)
    if image is None:
        raise _missing_image(sprite_map, name)
    return image


def _require_offset(value: Value, function_name: str) -> Number:
    if not isinstance(value, Number):
        raise ScriptSyntaxError(f"The offsets passed to {function_name}() must be numbers, got {value}")
    return value


def _pixels(value: float) -> Number:
    return Number(value, "" if value == 0 else "px")


# ── 関数 ───────────────────
@function("sprite-map", ("glob",), var_kwargs=True)
def sprite_map(glob: Value, kwargs: KeywordArgs | None = None) -> SpriteMap:
    """glob からスプライトマップを構築する（初回の url 化まで画像は生成しない）。"""
    if not isinstance(glob, String):
        raise ScriptSyntaxError(
            "The first argument to sprite-map() must be a glob string such as"
            f' "icons/*.png". See {HELP_URL} for more information.'
        )
    return SpriteMap.from_uri(glob.value, kwargs if kwargs is not None else KeywordArgs())


@function(
    "sprite",
    ("map", "sprite"),
    ("map", "sprite", "offset-x"),
    ("map", "sprite", "offset-x", "offset-y"),
)
def sprite(map: Value, sprite: Value, offset_x: Number = ZERO, offset_y: Number = ZERO) -> List:
    """背景ショートハンド用に `url x y` を返す。"""
    _require_map(map, "sprite")
    if not isinstance(sprite, String):
        raise _missing_name("sprite()")
    url = sprite_url(map)
    position = sprite_position(map, sprite, offset_x, offset_y)
    return List([url, *position.value], "space")


@function("sprite-map-name")
def sprite_map_name(map: Value) -> String:
    """スプライトマップ名（glob のフォルダ名）。"""
    return String(_require_map(map, "sprite-map-name").name)


@function("sprite-file")
def sprite_file(map: Value, sprite: Value) -> String:
    """元画像ファイルのパス（画像パスからの相対）。"""
    sprite_map = _require_map(map, "sprite-file")
    return String(_require_image(sprite_map, sprite, "sprite-file()").relative_file)


@function("sprite-url")
def sprite_url(map: Value) -> String:
    """シートを（必要なら）生成して URL を返す。"""
    sprite_map = _require_map(map, "sprite-url")
    sprite_map.generate()
    return image_url(
        String(f"{sprite_map.path}-{sprite_map.uniqueness_hash}.png"),
        Bool(False),
        Bool(False),
    )


@function(
    "sprite-position",
    ("map",),
    ("map", "sprite"),
    ("map", "sprite", "offset-x"),
    ("map", "sprite", "offset-x", "offset-y"),
)
def sprite_position(
    map: Value,
    sprite: Value | None = None,
    offset_x: Number = ZERO,
    offset_y: Number = ZERO,
) -> List:
    """シート内での背景位置 `x y`。

    - 通常は `offset - 原点` を px で返す（0 は単位なし）。
    - `offset_x` が % の場合はそのまま通す。
    """
    sprite_map = _require_map(map, "sprite-position")
    image = _require_image(sprite_map, sprite, "sprite-position")
    offset_x = _require_offset(offset_x, "sprite-position")
    offset_y = _require_offset(offset_y, "sprite-position")
    if offset_x.unit_str == "%":
        x = offset_x
    else:
        x = _pixels(offset_x.value - image.left)
    y = _pixels(offset_y.value - image.top)
    return List([x, y], "space")


@function("sprite-width", ("map", "sprite"))
def sprite_width(map: Value, sprite: Value) -> Number:
    sprite_map = _require_map(map, "sprite-width")
    return Number(_require_image(sprite_map, sprite, "sprite-width()").width, "px")


@function("sprite-height", ("map", "sprite"))
def sprite_height(map: Value, sprite: Value) -> Number:
    sprite_map = _require_map(map, "sprite-height")
    return Number(_require_image(sprite_map, sprite, "sprite-height()").height, "px")


@function("sprite-names", ("map",))
def sprite_names(map: Value) -> List:
    """`@each` で回せるよう、スプライト名をカンマ区切りリストで返す。"""
    sprite_map = _require_map(map, "sprite-names")
    return List([String(name) for name in sprite_map.sprite_names], "comma")


@function("sprite-image", variadic=True)
def sprite_image(*args: Value, **kwargs: Value) -> Value:
    raise ScriptSyntaxError(
        "The sprite-image() function has been replaced by sprite()."
        f" See {HELP_URL} for more information."
    )


__all__ = [
    "SpriteMap",
    "HELP_URL",
    "sprite_map",
    "sprite",
    "sprite_map_name",
    "sprite_file",
    "sprite_url",
    "sprite_position",
    "sprite_width",
    "sprite_height",
    "sprite_names",
    "sprite_image",
]
