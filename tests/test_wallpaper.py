from pathlib import Path

import pytest
from PIL import Image

from settings_pages.wallpaper import (
    Cached,
    GenerateThumbnail,
    border_radius,
    cache_dir,
    load_each_from_path,
    load_thumbnail,
    open_image,
    round_corners,
)


def _opaque(width, height, color=(10, 20, 30, 255)):
    return Image.new("RGBA", (width, height), color)


def _save_png(path, size=(40, 30)):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, (200, 100, 50)).save(path, format="PNG")
    return path


def test_round_corners_clears_corner_keeps_center():
    img = _opaque(20, 20)
    round_corners(img, (8, 8, 8, 8))
    assert img.getpixel((0, 0))[3] == 0
    assert img.getpixel((19, 19))[3] == 0
    assert img.getpixel((10, 10))[3] == 255
    assert img.getpixel((10, 0))[3] == 255


def test_round_corners_is_symmetric():
    img = _opaque(20, 20)
    round_corners(img, (8, 8, 8, 8))
    for x in range(20):
        for y in range(20):
            alpha = img.getpixel((x, y))[3]
            assert alpha == img.getpixel((19 - x, y))[3]
            assert alpha == img.getpixel((x, 19 - y))[3]
            assert alpha == img.getpixel((y, x))[3]


def test_round_corners_keeps_colour_channels():
    img = _opaque(20, 20)
    round_corners(img, (8, 8, 8, 8))
    assert {img.getpixel((x, y))[:3] for x in range(20) for y in range(20)} == {(10, 20, 30)}


def test_round_corners_alpha_grows_toward_center():
    img = _opaque(20, 20)
    round_corners(img, (8, 8, 8, 8))
    diagonal = [img.getpixel((i, i))[3] for i in range(10)]
    assert diagonal == sorted(diagonal)


def test_round_corners_rejects_oversized_radius():
    with pytest.raises(ValueError):
        round_corners(_opaque(10, 10), (6, 6, 0, 0))


def test_round_corners_rejects_non_rgba():
    with pytest.raises(ValueError):
        round_corners(Image.new("RGB", (20, 20)), (2, 2, 2, 2))


def test_border_radius_zero_leaves_image_unchanged():
    img = _opaque(10, 10)
    border_radius(img, 0, lambda x, y: (x - 1, y - 1))
    assert img.tobytes() == _opaque(10, 10).tobytes()


def test_open_image_reads_png(tmp_path):
    path = _save_png(tmp_path / "a.png", (40, 30))
    image = open_image(path)
    assert image.size == (40, 30)


def test_open_image_rejects_non_image(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image")
    assert open_image(path) is None


def test_open_image_missing(tmp_path):
    assert open_image(tmp_path / "missing.png") is None


def test_load_thumbnail_without_cache(tmp_path):
    path = _save_png(tmp_path / "a.png")
    operation = load_thumbnail(None, path)
    assert isinstance(operation, GenerateThumbnail)
    assert operation.path is None


def test_load_thumbnail_with_cache_names_png(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    path = _save_png(tmp_path / "a.png")
    operation = load_thumbnail(cache, path)
    assert isinstance(operation, GenerateThumbnail)
    assert operation.path.parent == cache
    assert operation.path.suffix == ".png"


def test_load_thumbnail_unreadable_image(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"garbage")
    assert load_thumbnail(None, path) is None


def test_load_thumbnail_replaces_corrupt_cache_entry(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    path = _save_png(tmp_path / "a.png")
    thumb_path = load_thumbnail(cache, path).path
    thumb_path.write_bytes(b"corrupt")
    operation = load_thumbnail(cache, path)
    assert isinstance(operation, GenerateThumbnail)
    assert operation.path == thumb_path
    assert not thumb_path.exists()


def test_load_each_from_path_generates_and_caches(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    root = tmp_path / "walls"
    _save_png(root / "wide.png", (600, 338))
    _save_png(root / "nested" / "deep.png", (40, 30))
    (root / "readme.txt").write_text("skip me")

    results = {path.name: (display, selection) for path, display, selection in load_each_from_path(root, cache)}

    assert set(results) == {"wide.png", "deep.png"}
    display, selection = results["wide.png"]
    assert display.size == (300, 169)
    assert selection.size == (158, 105)
    assert selection.getpixel((0, 0))[3] == 0
    assert selection.getpixel((79, 52))[3] == 255
    assert len(list(cache.glob("*.png"))) == 2

    assert isinstance(load_thumbnail(cache, root / "wide.png"), Cached)


def test_load_each_from_path_keeps_aspect_ratio(tmp_path):
    cache = tmp_path / "cache"
    cache.mkdir()
    _save_png(tmp_path / "walls" / "tall.png", (100, 400))
    [(path, display, _)] = list(load_each_from_path(tmp_path / "walls", cache))
    assert path.name == "tall.png"
    assert display.height == 169
    assert abs(display.width / display.height - 0.25) < 0.02


def test_load_each_from_path_missing_directory(tmp_path):
    assert list(load_each_from_path(tmp_path / "missing", tmp_path)) == []


def test_cache_dir_uses_xdg_cache_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    cache = cache_dir()
    assert Path(cache).is_dir()
    assert tmp_path in Path(cache).parents