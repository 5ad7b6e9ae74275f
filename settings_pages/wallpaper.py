"""Wallpaper colours and thumbnail loading with an on-disk cache."""

from __future__ import annotations

import hashlib
import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence, Union

from PIL import Image

log = logging.getLogger(__name__)

RGB = tuple[float, float, float]


@dataclass(frozen=True)
class Gradient:
    """A gradient between colours at the given angle."""

    colors: tuple[RGB, ...]
    radius: float


Color = Union[RGB, Gradient]

DEFAULT_COLORS: tuple[Color, ...] = (
    (0.580, 0.922, 0.922),
    (0.000, 0.286, 0.427),
    (1.000, 0.678, 0.000),
    (0.282, 0.725, 0.78),
    (0.333, 0.278, 0.259),
    (0.969, 0.878, 0.384),
    (0.063, 0.165, 0.298),
    (1.000, 0.843, 0.631),
    (0.976, 0.227, 0.514),
    (1.000, 0.612, 0.867),
    (0.812, 0.490, 1.000),
    (0.835, 0.549, 1.000),
    (0.243, 0.533, 1.000),
    (0.584, 0.769, 0.988),
    Gradient(((1.000, 0.678, 0.000), (0.282, 0.725, 0.78)), 270.0),
    Gradient(((1.000, 0.843, 0.631), (0.58, 0.922, 0.922)), 270.0),
    Gradient(((1.000, 0.612, 0.867), (0.976, 0.29, 0.514)), 270.0),
    Gradient(((0.584, 0.769, 0.988), (0.063, 0.165, 0.298)), 270.0),
)

DISPLAY_SIZE = (300, 169)
SELECTION_SIZE = (158, 105)
SELECTION_RADIUS = (8, 8, 8, 8)


@dataclass
class GenerateThumbnail:
    """A thumbnail still to be made from ``image``, saved to ``path`` if given."""

    path: Optional[Path]
    image: Image.Image


@dataclass
class Cached:
    """A thumbnail read back from the cache."""

    image: Image.Image


ImageOperation = Union[GenerateThumbnail, Cached]


def cache_dir() -> Optional[Path]:
    """Directory where wallpaper thumbnails are stored, created if missing."""
    base = os.environ.get("XDG_CACHE_HOME")
    if base:
        root = Path(base)
    else:
        try:
            root = Path.home() / ".cache"
        except RuntimeError:
            return None
    cache = root / "settings_pages" / "wallpapers"
    try:
        cache.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return cache


def open_image(path: Union[str, os.PathLike]) -> Optional[Image.Image]:
    """Decode the image at ``path``; None if it cannot be read or decoded."""
    try:
        data = Path(path).read_bytes()
    except OSError as why:
        log.error("error reading image %s: %s", path, why)
        return None
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as why:
        log.error("image decode failed %s: %s", path, why)
        return None
    return image


def _creation_time(path: Path) -> int:
    stat = path.stat()
    birth = getattr(stat, "st_birthtime", None)
    if birth is not None:
        return int(birth * 1_000_000_000)
    return stat.st_ctime_ns


def _thumbnail_name(path: Path, created: int) -> str:
    digest = hashlib.blake2b(digest_size=8)
    digest.update(os.fsencode(path))
    digest.update(created.to_bytes(16, "little", signed=True))
    return f"{int.from_bytes(digest.digest(), 'little'):x}.png"


def load_thumbnail(cache: Optional[Path], path: Union[str, os.PathLike]) -> Optional[ImageOperation]:
    """A cached thumbnail of ``path``, or what is needed to make one."""
    path = Path(path)
    if cache is not None:
        try:
            created: Optional[int] = _creation_time(path)
        except OSError:
            created = None
        if created is not None:
            thumbnail_path = Path(cache) / _thumbnail_name(path, created)
            if thumbnail_path.exists():
                cached = open_image(thumbnail_path)
                if cached is not None:
                    return Cached(cached)
                try:
                    thumbnail_path.unlink()
                except OSError:
                    pass
            image = open_image(path)
            return None if image is None else GenerateThumbnail(thumbnail_path, image)

    image = open_image(path)
    return None if image is None else GenerateThumbnail(None, image)


def _fit_dimensions(width: int, height: int, box: tuple[int, int]) -> tuple[int, int]:
    ratio = min(box[0] / width, box[1] / height)
    return max(round(width * ratio), 1), max(round(height * ratio), 1)


def _display_thumbnail(operation: ImageOperation) -> Image.Image:
    if isinstance(operation, Cached):
        return operation.image.convert("RGBA")
    image = operation.image
    size = _fit_dimensions(image.width, image.height, DISPLAY_SIZE)
    thumbnail = image.convert("RGBA").resize(size, Image.Resampling.BOX)
    if operation.path is not None:
        try:
            thumbnail.save(operation.path, format="PNG")
        except OSError as why:
            log.error("failed to save image thumbnail %s: %s", operation.path, why)
            try:
                operation.path.unlink()
            except OSError:
                pass
    return thumbnail


def load_each_from_path(
    path: Union[str, os.PathLike], cache: Optional[Path] = None
) -> Iterator[tuple[Path, Image.Image, Image.Image]]:
    """Yield ``(path, display thumbnail, selection thumbnail)`` for every image below ``path``.

    Thumbnails are cached in ``cache``, which defaults to :func:`cache_dir`.
    """
    if cache is None:
        cache = cache_dir()
    pending = [Path(path)]
    while pending:
        directory = pending.pop()
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue
            entry_path = Path(entry.path)
            if is_dir:
                pending.append(entry_path)
            elif is_file:
                operation = load_thumbnail(cache, entry_path)
                if operation is None:
                    continue
                display = _display_thumbnail(operation)
                selection = display.resize(SELECTION_SIZE, Image.Resampling.LANCZOS)
                round_corners(selection, SELECTION_RADIUS)
                yield entry_path, display, selection


def round_corners(img: Image.Image, radius: Sequence[int]) -> None:
    """Make the corners of an RGBA image transparent with antialiased arcs.

    ``radius`` gives the top-left, top-right, bottom-right and bottom-left radii.
    """
    if img.mode != "RGBA":
        raise ValueError("image must be RGBA")
    width, height = img.size
    top_left, top_right, bottom_right, bottom_left = radius
    if (
        top_left + top_right > width
        or bottom_left + bottom_right > width
        or top_left + bottom_left > height
        or top_right + bottom_right > height
    ):
        raise ValueError("corner radii do not fit the image")

    border_radius(img, top_left, lambda x, y: (x - 1, y - 1))
    border_radius(img, top_right, lambda x, y: (width - x, y - 1))
    border_radius(img, bottom_right, lambda x, y: (width - x, height - y))
    border_radius(img, bottom_left, lambda x, y: (x - 1, height - y))


def border_radius(
    img: Image.Image, r: int, coordinates: Callable[[int, int], tuple[int, int]]
) -> None:
    """Round one corner of radius ``r``; ``coordinates`` maps corner-relative points."""
    if r == 0:
        return
    pixels = img.load()
    r0 = r
    # 16x antialiasing: a 16x16 grid gives 256 shades.
    r = 16 * r

    def clear(x: int, y: int) -> None:
        pos = coordinates(r0 - x, r0 - y)
        red, green, blue, _ = pixels[pos]
        pixels[pos] = (red, green, blue, 0)

    def draw(alpha: int, x: int, y: int) -> None:
        pos = coordinates(r0 - x, r0 - y)
        red, green, blue, current = pixels[pos]
        pixels[pos] = (red, green, blue, (alpha * current + 128) // 256)

    x = 0
    y = r - 1
    p = 2 - r
    alpha = 0
    skip_draw = True

    while True:
        column = x // 16
        for j in range(y // 16 + 1, r0):
            clear(column, j)
        for i in range(y // 16 + 1, r0):
            clear(i, column)

        if not skip_draw:
            draw(alpha, x // 16 - 1, y // 16)
            draw(alpha, y // 16, x // 16 - 1)
            alpha = 0

        for _ in range(16):
            skip_draw = False
            if x >= y:
                break
            alpha += y % 16 + 1
            if p < 0:
                x += 1
                p += 2 * x + 2
            else:
                if y % 16 == 0:
                    draw(alpha, x // 16, y // 16)
                    draw(alpha, y // 16, x // 16)
                    skip_draw = True
                    alpha = (x + 1) % 16 * 16
                x += 1
                p -= 2 * (y - x) + 2
                y -= 1
        else:
            continue
        break

    if x // 16 == y // 16:
        if x == y:
            alpha += y % 16 + 1
        s = y % 16 + 1
        draw(2 * alpha - s * s, x // 16, y // 16)

    remaining = range(y // 16 + 1, r0)
    for i in remaining:
        for j in remaining:
            clear(i, j)