"""
どこで: `functions.cli`（`sprite-map` コマンド / `python -m functions`）。
何を: glob からスプライトシートを生成し、スプライトごとの CSS ルールを標準出力へ書く。
なぜ: スタイルシートを介さずにシート生成と `sprite()` の結果を確認できるようにするため。

使い方:
    sprite-map "icons/*.png" --images-path ./images --spacing 2

出力例（1 スプライト 1 行）:
    .icons-new { background: url('/images/icons-0123abcdef.png') 0 -24px; }

補足:
- `--images-path` などのパス指定は設定へ直接渡す（`os.environ` は書き換えない）。
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from common import settings
from common.logging import setup_default_logging
from script.errors import ScriptSyntaxError
from script.values import Number, String

from .registry import call

logger = logging.getLogger(__name__)


def _parse_number(raw: str) -> Number:
    text = raw.strip()
    for unit in ("px", "%"):
        if text.endswith(unit):
            return Number(float(text[: -len(unit)]), unit)
    return Number(float(text))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sprite-map", description="Generate a sprite sheet and its CSS rules.")
    p.add_argument("glob", help='glob relative to the images path, e.g. "icons/*.png"')
    p.add_argument("--images-path", help="folder the glob is resolved against")
    p.add_argument("--generated-images-path", help="folder the sheet is written to")
    p.add_argument("--http-images-path", help="public URL prefix of the images folder")
    p.add_argument("--spacing", type=_parse_number, help="vertical gap between sprites (px)")
    p.add_argument("--position", type=_parse_number, help="horizontal position (px or %%)")
    p.add_argument("--repeat", choices=("no-repeat", "repeat-x"), help="repeat mode for every sprite")
    p.add_argument("--log-level", default="INFO")
    return p


def _apply_overrides(args: argparse.Namespace) -> None:
    overrides = {
        "SPX_IMAGES_PATH": args.images_path,
        "SPX_GENERATED_IMAGES_PATH": args.generated_images_path,
        "SPX_HTTP_IMAGES_PATH": args.http_images_path,
    }
    settings.reload_from_env({k: v for k, v in overrides.items() if v is not None})


def render_rules(glob: str, **options) -> list[str]:
    """スプライトマップを生成し、スプライトごとの CSS ルール文字列を返す。"""
    sprite_map = call("sprite-map", String(glob, quoted=True), **options)
    name = call("sprite-map-name", sprite_map).value
    rules = []
    for sprite_name in call("sprite-names", sprite_map):
        background = call("sprite", sprite_map, sprite_name)
        rules.append(f".{name}-{sprite_name.value} {{ background: {background.to_css()}; }}")
    return rules


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)
    _apply_overrides(args)

    options = {}
    if args.spacing is not None:
        options["spacing"] = args.spacing
    if args.position is not None:
        options["position"] = args.position
    if args.repeat is not None:
        options["repeat"] = String(args.repeat)

    try:
        rules = render_rules(args.glob, **options)
    except ScriptSyntaxError as e:
        print(e.message, file=sys.stderr)
        return 1
    for rule in rules:
        print(rule)
    logger.debug("rendered %d rules", len(rules))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
