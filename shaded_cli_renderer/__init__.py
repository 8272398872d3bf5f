#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging

from .math_utils import Vec3
from .errors import RendererError, MissingAssetError, ViewportError
from .config import RenderConfig
from .mesh import Mesh, Bounds, parse_obj, normalize, export_obj, load_mesh, save_obj, cube_mesh
from .transform import NEAR_PLANE, Viewport, apply_model, apply_view, project, to_screen
from .camera import Camera
from .scene import Scene, SceneObject, Pose, DefaultAsset, build_default_scene
from .shading import CULL_NEAR, Lighting, ShadedTriangle, shade_scene
from .canvas import Canvas
from .compositor import Compositor, FrameStats, shade_color
from .frame import FrameInput, FrameScheduler, Viewer

logging.getLogger(__name__).addHandler(logging.NullHandler())
