"""Pillow renderer for game states.

Each cell is drawn bottom-up: floor, then target, wall or box, then the actor.
Textures are resolved from sprite keys (see :mod:`grid_sokoban.renderer.pose`)
through a :data:`TextureMap` rooted at ``asset_root``. A key with no readable
asset falls back to a flat colored tile so states render without any asset
files.
"""

import os
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from PIL import Image

from grid_sokoban.components import Position
from grid_sokoban.renderer.pose import TileKey, actor_pose, sprite_key
from grid_sokoban.state import GameState
from grid_sokoban.utils.image import (
    RGBA,
    disc_tile,
    draw_direction_triangle_on_image,
    flat_tile,
    tint_image,
)


DEFAULT_RESOLUTION = 640
DEFAULT_ASSET_ROOT = "assets"

TextureMap = Dict[str, str]
TexLookupFn = Callable[[str, int], Optional[Image.Image]]

DEFAULT_TEXTURE_MAP: TextureMap = {
    TileKey.FLOOR: "tiles/floor.png",
    TileKey.WALL: "tiles/wall.png",
    TileKey.TARGET: "tiles/target.png",
    TileKey.BOX: "tiles/box.png",
    TileKey.BOX_ON_TARGET: "tiles/box_on_target.png",
}
"""Sprite key to asset path relative to ``asset_root``. Actor keys are optional."""


@dataclass(frozen=True)
class ColorScheme:
    floor: RGBA = (200, 190, 170, 255)
    wall: RGBA = (120, 70, 50, 255)
    target: RGBA = (220, 60, 60, 255)
    box: RGBA = (200, 150, 60, 255)
    box_on_target: Tuple[int, int, int] = (60, 180, 80)
    actor: RGBA = (50, 90, 200, 255)


DEFAULT_COLORS = ColorScheme()


def load_texture(path: str, size: int) -> Optional[Image.Image]:
    if not os.path.isfile(path):
        return None
    try:
        return Image.open(path).convert("RGBA").resize((size, size))
    except OSError:
        return None


def fallback_texture(key: str, size: int, colors: ColorScheme) -> Image.Image:
    """Flat-color stand-in for a sprite key."""
    inset = max(1, size // 8)
    if key == TileKey.FLOOR:
        return flat_tile(size, colors.floor)
    if key == TileKey.WALL:
        return flat_tile(size, colors.wall)
    if key == TileKey.TARGET:
        return disc_tile(size, colors.target, inset=size // 3)
    if key == TileKey.BOX:
        return flat_tile(size, colors.box, inset=inset)
    if key == TileKey.BOX_ON_TARGET:
        return tint_image(
            flat_tile(size, colors.box, inset=inset), colors.box_on_target, 0.7
        )
    return disc_tile(size, colors.actor, inset=inset)


def render(
    state: GameState,
    resolution: int = DEFAULT_RESOLUTION,
    still: bool = False,
    texture_map: Optional[TextureMap] = None,
    asset_root: str = DEFAULT_ASSET_ROOT,
    colors: ColorScheme = DEFAULT_COLORS,
    tex_lookup_fn: Optional[TexLookupFn] = None,
    cache: Optional[Dict[Tuple[str, int], Tuple[Image.Image, bool]]] = None,
) -> Image.Image:
    """
    Renders a game state as a PIL Image ``resolution`` pixels wide.
    """
    cell_size: int = max(1, resolution // max(1, state.width))
    if texture_map is None:
        texture_map = DEFAULT_TEXTURE_MAP
    if cache is None:
        cache = {}

    def default_get_tex(key: str, size: int) -> Optional[Image.Image]:
        path = texture_map.get(key)
        if not path:
            return None
        return load_texture(f"{asset_root}/{path}", size)

    tex_lookup = tex_lookup_fn or default_get_tex

    def get_tex(key: str) -> Tuple[Image.Image, bool]:
        """Texture for ``key`` and whether it is the flat-color fallback."""
        cache_key = (key, cell_size)
        if cache_key not in cache:
            tex = tex_lookup(key, cell_size)
            if tex is None:
                cache[cache_key] = (fallback_texture(key, cell_size, colors), True)
            else:
                cache[cache_key] = (tex, False)
        return cache[cache_key]

    img = Image.new(
        "RGBA",
        (state.width * cell_size, state.height * cell_size),
        (0, 0, 0, 0),
    )

    def paste(key: str, pos: Position) -> None:
        tex, _ = get_tex(key)
        img.alpha_composite(tex, (pos.x * cell_size, pos.y * cell_size))

    for y in range(state.height):
        for x in range(state.width):
            pos = Position(x, y)
            if pos not in state.walls:
                paste(TileKey.FLOOR, pos)

    for pos in state.target_positions:
        paste(TileKey.TARGET, pos)
    for pos in state.wall_positions:
        paste(TileKey.WALL, pos)
    for pos, on_target in state.boxes_with_target_flag():
        paste(TileKey.BOX_ON_TARGET if on_target else TileKey.BOX, pos)

    pose = actor_pose(state, still=still)
    actor_tex, is_fallback = get_tex(sprite_key(pose))
    if is_fallback:
        actor_tex = draw_direction_triangle_on_image(
            actor_tex.copy(), cell_size, pose.facing.dx, pose.facing.dy
        )
    actor_pos = state.actor.position
    img.alpha_composite(actor_tex, (actor_pos.x * cell_size, actor_pos.y * cell_size))

    return img


class TextureRenderer:
    resolution: int
    texture_map: TextureMap
    asset_root: str
    colors: ColorScheme
    tex_lookup_fn: Optional[TexLookupFn]

    def __init__(
        self,
        resolution: int = DEFAULT_RESOLUTION,
        texture_map: Optional[TextureMap] = None,
        asset_root: str = DEFAULT_ASSET_ROOT,
        colors: ColorScheme = DEFAULT_COLORS,
        tex_lookup_fn: Optional[TexLookupFn] = None,
    ):
        self.resolution = resolution
        self.texture_map = texture_map or DEFAULT_TEXTURE_MAP
        self.asset_root = asset_root
        self.colors = colors
        self.tex_lookup_fn = tex_lookup_fn
        self._cache: Dict[Tuple[str, int], Tuple[Image.Image, bool]] = {}

    def render(
        self, state: GameState, still: bool = False, resolution: Optional[int] = None
    ) -> Image.Image:
        return render(
            state,
            resolution=resolution or self.resolution,
            still=still,
            texture_map=self.texture_map,
            asset_root=self.asset_root,
            colors=self.colors,
            tex_lookup_fn=self.tex_lookup_fn,
            cache=self._cache,
        )
