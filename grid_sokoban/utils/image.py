import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw
from typing import Tuple

RGBA = Tuple[int, int, int, int]
UInt8Array = npt.NDArray[np.uint8]


def tint_image(
    base: Image.Image, target_rgb: Tuple[int, int, int], strength: float = 0.5
) -> Image.Image:
    """
    Blend visible pixels toward ``target_rgb``; alpha is left untouched.
    ``strength`` 0 keeps the original, 1 paints the flat color.
    """
    if base.mode != "RGBA":
        base = base.convert("RGBA")

    arr: UInt8Array = np.array(base, dtype=np.uint8)
    visible = arr[..., 3] > 0
    mix = np.float32(np.clip(strength, 0.0, 1.0))

    rgb = arr[..., :3].astype(np.float32)
    target = np.array(target_rgb, dtype=np.float32)
    blended = ((1.0 - mix) * rgb + mix * target).round().astype(np.uint8)

    out: UInt8Array = arr.copy()
    out[..., :3][visible] = blended[visible]
    return Image.fromarray(out)


def flat_tile(size: int, color: RGBA, inset: int = 0) -> Image.Image:
    """Square tile of ``color``, optionally inset from a transparent border."""
    tile = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    ImageDraw.Draw(tile).rectangle(
        [inset, inset, size - 1 - inset, size - 1 - inset], fill=color
    )
    return tile


def disc_tile(size: int, color: RGBA, inset: int = 0) -> Image.Image:
    tile = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    ImageDraw.Draw(tile).ellipse(
        [inset, inset, size - 1 - inset, size - 1 - inset], fill=color
    )
    return tile


def draw_direction_triangle_on_image(
    image: Image.Image, size: int, dx: int, dy: int
) -> Image.Image:
    """
    Draw one filled triangle pointing (dx, dy), centroid at the image center.
    """
    if (dx, dy) == (0, 0):
        return image

    draw = ImageDraw.Draw(image)
    cx, cy = size // 2, size // 2

    tri_height = max(4, int(size * 0.3))
    tri_half_base = max(3, int(size * 0.18))

    # Perpendicular gives the base direction
    px, py = -dy, dx

    # Centroid sits 1/3 of the height above the base
    tip = (
        int(round(cx + dx * tri_height * 2 / 3)),
        int(round(cy + dy * tri_height * 2 / 3)),
    )
    base_x = cx - dx * tri_height / 3
    base_y = cy - dy * tri_height / 3
    left = (
        int(round(base_x + px * tri_half_base)),
        int(round(base_y + py * tri_half_base)),
    )
    right = (
        int(round(base_x - px * tri_half_base)),
        int(round(base_y - py * tri_half_base)),
    )

    draw.polygon([tip, left, right], fill=(255, 255, 255, 230), outline=(0, 0, 0, 230))
    return image
