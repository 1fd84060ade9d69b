from __future__ import annotations

import numpy as np
from PIL import Image

from script import KeywordArgs, Number, String
from sprites import PillowEngine
from sprites.engine import load_rgba, replace_region


def test_replace_region_clips_to_canvas():
    canvas = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels = np.full((3, 3, 4), 9, dtype=np.uint8)
    replace_region(canvas, pixels, -1, 2)
    assert canvas[2:4, 0:2].min() == 9
    assert canvas[:2].max() == 0
    assert canvas[2:4, 2:].max() == 0
    replace_region(canvas, pixels, 10, 10)  # 完全に範囲外は無視


def test_constructed_sheet_places_each_sprite(icons):
    m = PillowEngine.from_uri("icons/*.png")
    sheet = m.construct_sprite()
    assert sheet.shape == (30, 20, 4)
    # edit: 赤 (0..10, 0..10)
    assert tuple(sheet[5, 5]) == (255, 0, 0, 255)
    assert sheet[0:10, 10:20, 3].max() == 0
    # new: 緑 (10..18, 0..20)
    assert tuple(sheet[12, 19]) == (0, 255, 0, 255)
    # trash: 青 (18..30, 0..6)、右側は透明
    assert tuple(sheet[29, 0]) == (0, 0, 255, 255)
    assert tuple(sheet[29, 6]) == (0, 0, 0, 0)


def test_repeat_x_tiles_full_width(icons):
    kw = KeywordArgs({"trash-repeat": String("repeat-x"), "trash-position": Number(3, "px")})
    m = PillowEngine.from_uri("icons/*.png", kw)
    sheet = m.construct_sprite()
    row = sheet[m.image_for("trash").top]
    assert (row[:, 2] == 255).all()  # 全幅が青で埋まる
    assert row[:, 3].min() == 255


def test_saved_png_roundtrips_dimensions(icons):
    m = PillowEngine.from_uri("icons/*.png")
    m.generate()
    with Image.open(m.filename) as im:
        assert im.size == (m.width, m.height)
        assert im.mode == "RGBA"
    np.testing.assert_array_equal(load_rgba(m.filename), m.construct_sprite())


def test_save_creates_nested_folders(write_png):
    write_png("ui/icons/a.png", (3, 3))
    m = PillowEngine.from_uri("ui/icons/*.png")
    m.generate()
    assert m.filename.parent.name == "ui"
    assert m.filename.name.startswith("icons-")
    assert m.filename.exists()
