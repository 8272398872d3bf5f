#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import os
from dataclasses import dataclass, field
from typing import Tuple

from .math_utils import Vec3
from .transform import NEAR_PLANE

RGB = Tuple[int, int, int]


@dataclass
class RenderConfig:
    """Configuration for the shading pipeline and the debug overlays."""
    # Overlay / shading toggles
    draw_wireframe: bool = False
    draw_normals: bool = False
    draw_bounds: bool = False
    enable_specular: bool = True

    # Terminal output
    use_color: bool = True
    use_ascii: bool = False

    # Lighting (view-space directional light)
    ambient: float = 0.15
    shininess: float = 64.0
    light_dir: Vec3 = field(default_factory=lambda: Vec3(-1.0, 1.0, -1.0))

    # Near-plane guards: per-vertex projection vs. whole-triangle rejection
    near_plane: float = NEAR_PLANE
    cull_near: float = 1e-6

    normal_length: float = 0.15

    background: RGB = (16, 16, 16)
    wire_color: RGB = (240, 240, 240)
    selected_wire_color: RGB = (255, 212, 0)
    normal_color: RGB = (255, 64, 64)
    bounds_color: RGB = (120, 180, 255)

    fps: int = 60
    # Terminals report no key-up; a press counts as held this long (s)
    key_hold: float = 0.5

    def __post_init__(self):
        self.light_dir = Vec3.of(self.light_dir).normalize()

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    @classmethod
    def detect_terminal(cls) -> 'RenderConfig':
        """
        Autodetect terminal capabilities and return a default config.
        Checks TERM and LANG environment variables.
        """
        term = os.environ.get('TERM', '').lower()
        lang = os.environ.get('LANG', '').lower()

        # Accurate color detection requires curses initialization,
        # so this is a pre-init guess.
        is_dumb = term in ('dumb', 'unknown')
        is_linux_console = term == 'linux'
        supports_utf8 = 'utf-8' in lang or 'utf8' in lang

        return cls(
            use_color=not is_dumb,
            # Half-block glyphs need a unicode-capable terminal font
            use_ascii=not supports_utf8 or is_linux_console,
        )
