#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .rasterizer import draw_line_dda, fill_triangle

UPPER_HALF_BLOCK = '▀'

# Luminance ramp for terminals without color
ASCII_RAMP = " .:-=+*#%@"


class Canvas:
    """
    In-memory RGB raster surface.

    pixels[y][x] holds an (r, g, b) tuple. Implements the drawing calls the
    compositor needs: clear, fill_polygon and stroke_line.
    """
    __slots__ = ['w', 'h', 'pixels', 'background']

    def __init__(self, w, h, background=(0, 0, 0)):
        self.w, self.h = w, h
        self.background = tuple(background)
        self.pixels = [[self.background] * w for _ in range(h)]

    @property
    def width(self):
        return self.w

    @property
    def height(self):
        return self.h

    def clear(self, color=None):
        if color is not None:
            self.background = tuple(color)
        bg = self.background
        for row in self.pixels:
            row[:] = [bg] * self.w

    def set_pixel(self, x, y, color):
        if x < 0 or x >= self.w or y < 0 or y >= self.h: return
        self.pixels[y][x] = color

    def get_pixel(self, x, y):
        return self.pixels[y][x]

    def fill_polygon(self, points, color):
        """Fill a convex screen-space polygon (fan-split into triangles)."""
        if len(points) < 3:
            return
        p0 = points[0]
        for i in range(1, len(points) - 1):
            fill_triangle(self, p0, points[i], points[i + 1], color)

    def stroke_line(self, p1, p2, color):
        draw_line_dda(self, p1, p2, color)

    def stroke_polygon(self, points, color):
        n = len(points)
        for i in range(n):
            draw_line_dda(self, points[i], points[(i + 1) % n], color)

    def cell_rows(self):
        """Number of terminal rows needed (two pixel rows per cell)."""
        return (self.h + 1) // 2


def luminance(color) -> float:
    r, g, b = color
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0


def render_cell_halfblock(top, bottom):
    """
    A 1x2 pixel cell as (char, fg, bg): the upper half block drawn in the
    top pixel's color over the bottom pixel's color.
    """
    if top == bottom:
        return ' ', top, bottom
    return UPPER_HALF_BLOCK, top, bottom


def render_cell_ascii(top, bottom, background=(0, 0, 0)) -> str:
    """
    Renders a 1x2 pixel cell as an ASCII character based on brightness.
    Used when color or unicode output is unavailable.
    """
    if top == background and bottom == background:
        return ' '
    level = (luminance(top) + luminance(bottom)) / 2.0
    idx = int(round(level * (len(ASCII_RAMP) - 1)))
    # Anything drawn stays visible
    return ASCII_RAMP[max(1, min(len(ASCII_RAMP) - 1, idx))]
