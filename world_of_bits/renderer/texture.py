import colorsys
import math
from functools import lru_cache
from typing import Tuple

from PIL import Image, ImageDraw

from world_of_bits.components import Cell
from world_of_bits.state import State
from world_of_bits.systems.cells import peek_cell
from world_of_bits.systems.window import can_interact, player_cell


DEFAULT_RESOLUTION = 500

Color = Tuple[int, int, int, int]

BACKGROUND_COLOR: Color = (235, 235, 235, 255)
GRID_COLOR: Color = (68, 68, 68, 255)
TEXT_COLOR: Color = (20, 20, 20, 255)
PLAYER_COLOR: Color = (41, 128, 185, 255)
DIM_COLOR: Color = (255, 255, 255, 140)


@lru_cache(maxsize=64)
def token_color(value: int) -> Color:
    """Deterministically map a token value to a fill colour.

    Hue walks around the wheel with the exponent, starting at yellow for 2.
    """
    exponent = int(math.log2(value))
    h = (0.14 + 0.13 * (exponent - 1)) % 1.0
    r, g, b = colorsys.hsv_to_rgb(h, 0.75, 0.95)
    return int(r * 255), int(g * 255), int(b * 255), 255


def image_side(render_radius: int, resolution: int = DEFAULT_RESOLUTION) -> int:
    """Return the pixel width (and height) of a rendered window."""
    side = 2 * render_radius + 1
    return side * max(resolution // side, 1)


def window_cell_at(state: State, row: int, col: int) -> Cell:
    """Return the cell drawn at ``(row, col)`` of the window image.

    Row 0 is the northernmost row, column 0 the westernmost column.
    """
    center = player_cell(state)
    radius = state.config.render_radius
    return Cell(center.i + radius - row, center.j - radius + col)


def render(state: State, resolution: int = DEFAULT_RESOLUTION) -> Image.Image:
    """
    Renders the visible window as a square RGBA image.

    Cells are read with ``peek_cell`` so rendering never decides a cell.
    """
    radius = state.config.render_radius
    side = 2 * radius + 1
    pixels = image_side(radius, resolution)
    cell_px = pixels // side
    img = Image.new("RGBA", (pixels, pixels), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(img, "RGBA")
    center = player_cell(state)

    for row in range(side):
        for col in range(side):
            cell = window_cell_at(state, row, col)
            x0, y0 = col * cell_px, row * cell_px
            box = (x0, y0, x0 + cell_px - 1, y0 + cell_px - 1)

            content = peek_cell(state, cell)
            fill = token_color(content) if content is not None else None
            draw.rectangle(box, fill=fill, outline=GRID_COLOR)
            if content is not None:
                draw.text((x0 + 2, y0 + 2), str(content), fill=TEXT_COLOR)
            if not can_interact(cell, center, state.config.interact_radius):
                draw.rectangle(box, fill=DIM_COLOR)

    px, py = radius * cell_px, radius * cell_px
    draw.rectangle(
        (px, py, px + cell_px - 1, py + cell_px - 1), outline=PLAYER_COLOR, width=2
    )
    return img


class TextureRenderer:
    resolution: int

    def __init__(self, resolution: int = DEFAULT_RESOLUTION):
        self.resolution = resolution

    def render(self, state: State) -> Image.Image:
        return render(state, resolution=self.resolution)
