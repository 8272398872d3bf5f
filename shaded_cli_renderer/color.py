#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses
import logging

logger = logging.getLogger(__name__)


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        return (int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
    except ValueError:
        return None


# --- xterm-256 palette ---

# The 6x6x6 color cube occupies indices 16-231.
_CUBE_VALUES = [0, 95, 135, 175, 215, 255]

# Grayscale ramp occupies indices 232-255: 8, 18, ..., 238

# ANSI 0-7 approximate RGB values
_ANSI8 = [
    (0, 0, 0),       # 0  black
    (128, 0, 0),     # 1  red
    (0, 128, 0),     # 2  green
    (128, 128, 0),   # 3  yellow
    (0, 0, 128),     # 4  blue
    (128, 0, 128),   # 5  magenta
    (0, 128, 128),   # 6  cyan
    (192, 192, 192), # 7  white
]


def _nearest_cube_index(v):
    return min(range(6), key=lambda i: abs(v - _CUBE_VALUES[i]))


def rgb_to_xterm(r, g, b):
    """Nearest xterm-256 index, searching the color cube and the gray ramp."""
    ri, gi, bi = _nearest_cube_index(r), _nearest_cube_index(g), _nearest_cube_index(b)
    cube_idx = 16 + ri * 36 + gi * 6 + bi
    cr, cg, cb = _CUBE_VALUES[ri], _CUBE_VALUES[gi], _CUBE_VALUES[bi]
    cube_dist = (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2

    gray_avg = (r + g + b) // 3
    gray_step = max(0, min(23, (gray_avg - 8 + 5) // 10))
    gv = 8 + gray_step * 10
    gray_dist = (r - gv) ** 2 + (g - gv) ** 2 + (b - gv) ** 2

    return 232 + gray_step if gray_dist < cube_dist else cube_idx


def rgb_to_ansi8(r, g, b):
    """Nearest basic ANSI color index (0-7), for 8-color terminals."""
    return min(range(8), key=lambda i: (r - _ANSI8[i][0]) ** 2 +
                                       (g - _ANSI8[i][1]) ** 2 +
                                       (b - _ANSI8[i][2]) ** 2)


class ColorPairCache:
    """
    Maps (fg, bg) RGB pairs to curses color pairs, allocating on demand.

    Colors are quantized to the terminal palette (xterm-256 or ANSI-8) so
    that shaded triangles with nearby colors share a pair. When the
    terminal runs out of pairs, pair 0 is returned.
    """

    def __init__(self):
        self.enabled = False
        self.num_colors = 0
        self.max_pairs = 0
        self._pairs = {}
        self._next_pair = 1

    def init(self, use_color=True):
        """Call once after curses initialization."""
        self._pairs.clear()
        self._next_pair = 1
        self.enabled = False
        if not use_color:
            return
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            self.num_colors = curses.COLORS
            self.max_pairs = curses.COLOR_PAIRS
        except curses.error as e:
            logger.warning("Color initialization failed: %s", e)
            return
        self.enabled = self.num_colors >= 8
        logger.debug("Terminal colors: %d, pairs: %d", self.num_colors, self.max_pairs)

    def quantize(self, rgb):
        if self.num_colors >= 256:
            return rgb_to_xterm(*rgb)
        return rgb_to_ansi8(*rgb)

    def pair(self, fg_rgb, bg_rgb):
        """curses attribute for a foreground/background color combination."""
        if not self.enabled:
            return curses.color_pair(0)
        key = (self.quantize(fg_rgb), self.quantize(bg_rgb))
        pair_id = self._pairs.get(key)
        if pair_id is None:
            if self._next_pair >= self.max_pairs:
                return curses.color_pair(0)
            pair_id = self._next_pair
            try:
                curses.init_pair(pair_id, key[0], key[1])
            except curses.error:
                pair_id = 0
            else:
                self._next_pair += 1
            self._pairs[key] = pair_id
        return curses.color_pair(pair_id)
