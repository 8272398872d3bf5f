#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses
import logging
import sys
import time

from .camera import Camera
from .canvas import Canvas, render_cell_ascii, render_cell_halfblock
from .color import ColorPairCache, parse_hex_color
from .config import RenderConfig
from .errors import MissingAssetError
from .frame import FrameInput, FrameScheduler, HeldKeys, Viewer
from .math_utils import Vec3
from .mesh import cube_mesh, load_mesh
from .scene import DefaultAsset, Pose, Scene

logger = logging.getLogger(__name__)

# Canonical layout of the default scene: primary model left, cube right
PRIMARY_POSE = Pose.uniform((-1.5, 0.0, 0.0), 3.0)
PRIMARY_COLOR = (0, 255, 0)
CUBE_POSE = Pose.uniform((1.5, 0.0, 0.0), 1.8)
CUBE_COLOR = (80, 200, 255)

EMPTY_SCENE_MESSAGE = "Load an .obj to begin"

LOOK_STEP_PX = 25.0     # arrow key press as a drag distance
MOUSE_DRAG_SCALE = 8.0  # terminal cells -> pixels for mouse drags
ROTATE_STEP = 0.1
MOVE_STEP = 0.1
SCALE_STEP = 1.1

KEY_ESC = 27
KEY_TAB = 9
KEY_DELETE_CODES = (ord('x'), curses.KEY_DC)
KEY_LOAD = ord('i')

# Selected-object edits: key -> (axis, delta)
ROTATION_KEYS = {
    ord('h'): ('y', -ROTATE_STEP), ord('l'): ('y', ROTATE_STEP),
    ord('j'): ('x', -ROTATE_STEP), ord('k'): ('x', ROTATE_STEP),
    ord('u'): ('z', -ROTATE_STEP), ord('o'): ('z', ROTATE_STEP),
}
POSITION_KEYS = {
    ord('H'): ('x', -MOVE_STEP), ord('L'): ('x', MOVE_STEP),
    ord('J'): ('y', -MOVE_STEP), ord('K'): ('y', MOVE_STEP),
    ord('U'): ('z', -MOVE_STEP), ord('O'): ('z', MOVE_STEP),
}

# xterm button-event tracking: motion is reported while a button is held
MOUSE_DRAG_ON = "\033[?1002h"
MOUSE_DRAG_OFF = "\033[?1002l"


class HudLogHandler(logging.Handler):
    """Keeps the most recent warning or error for the HUD status line."""

    def __init__(self, level=logging.WARNING):
        super().__init__(level)
        self.message = ""

    def emit(self, record):
        try:
            self.message = self.format(record)
        except Exception:
            self.handleError(record)


def build_default_assets(model_paths=(), include_cube=True):
    """
    Default mesh set for the scene. The first loadable model takes the
    left-hand slot; missing files are logged and left out.
    """
    assets = []
    for path in model_paths:
        try:
            mesh = load_mesh(path)
        except MissingAssetError as e:
            logger.warning("%s", e)
            continue
        name = str(path).replace('\\', '/').rsplit('/', 1)[-1]
        if not assets:
            assets.append(DefaultAsset(name, mesh, PRIMARY_POSE, PRIMARY_COLOR))
        else:
            # Further models stack behind the primary one
            offset = Vec3(0.0, 0.0, 1.5 * len(assets))
            pose = Pose(PRIMARY_POSE.position + offset, PRIMARY_POSE.rotation, PRIMARY_POSE.scale)
            assets.append(DefaultAsset(name, mesh, pose, PRIMARY_COLOR))
    if include_cube:
        assets.append(DefaultAsset("cube", cube_mesh(), CUBE_POSE, CUBE_COLOR))
    return assets


class DemoApp:
    """
    Interactive curses front end: collects key and mouse input into one
    FrameInput per frame, advances the viewer and blits the rendered canvas
    with a HUD on top.
    """

    def __init__(self, stdscr, args):
        self.stdscr = stdscr
        self.running = True
        self.args = args

        # ── Curses setup ────────────────────────────────────────────────
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.nodelay(True)
        stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)
        sys.stdout.write(MOUSE_DRAG_ON)
        sys.stdout.flush()

        # ── Logging into the HUD ────────────────────────────────────────
        self.hud_log = HudLogHandler()
        logging.getLogger().addHandler(self.hud_log)

        # ── RenderConfig from terminal detection + CLI overrides ────────
        config = RenderConfig.detect_terminal()
        if args.no_color or args.mono:
            config.use_color = False
        if args.ascii:
            config.use_ascii = True
        config.draw_wireframe = args.wireframe
        config.draw_normals = args.normals
        config.draw_bounds = args.bounds
        config.enable_specular = not args.no_specular
        config.fps = max(1, args.fps)
        bg_rgb = parse_hex_color(args.bg_color)
        if bg_rgb is not None:
            config.background = bg_rgb
        self.config = config

        self.colors = ColorPairCache()
        self.colors.init(config.use_color)

        # ── Scene from the default assets ───────────────────────────────
        assets = build_default_assets(args.models, include_cube=not args.no_cube)
        self.viewer = Viewer(Scene(assets), Camera(), config)

        # ── Input state ─────────────────────────────────────────────────
        self.held = HeldKeys(config.key_hold)
        self._reset_pending()
        self._mouse_down = None

        # ── Frame counter ───────────────────────────────────────────────
        self.frame_count = 0
        self.fps = 0
        self.last_fps_time = time.time()

    def _reset_pending(self):
        self.drag_dx = 0.0
        self.drag_dy = 0.0
        self.wheel = 0
        self.toggles = {}
        self.selection = None

    # ────────────────────────────────────────────────────────────────────
    # Input
    # ────────────────────────────────────────────────────────────────────
    def handle_input(self):
        """Drain all pending keys for this frame."""
        while True:
            try:
                key = self.stdscr.getch()
            except curses.error:
                key = -1
            if key == -1:
                return
            self.handle_key(key)

    def _toggle(self, name):
        current = self.toggles.get(name, getattr(self.config, name))
        self.toggles[name] = not current

    def handle_key(self, key):
        scene = self.viewer.scene

        if key in (KEY_ESC, curses.KEY_EXIT):
            self.running = False
        elif key == curses.KEY_MOUSE:
            self.handle_mouse()
        elif key == curses.KEY_RESIZE:
            self.held.release_all()
        elif 0 <= key < 256 and chr(key) in 'wasdqe':
            self.held.press(chr(key))
        elif 0 <= key < 256 and chr(key) in 'WASDQE':
            self.held.press(chr(key).lower())
            self.held.press('shift')
        # Look
        elif key == curses.KEY_UP:
            self.drag_dy -= LOOK_STEP_PX
        elif key == curses.KEY_DOWN:
            self.drag_dy += LOOK_STEP_PX
        # Positive yaw turns the view to the left
        elif key == curses.KEY_RIGHT:
            self.drag_dx -= LOOK_STEP_PX
        elif key == curses.KEY_LEFT:
            self.drag_dx += LOOK_STEP_PX
        elif key in (ord('='), ord('+')):
            self.wheel += 1
        elif key == ord('-'):
            self.wheel -= 1
        # Overlay toggles
        elif key == ord('1'):
            self._toggle('draw_wireframe')
        elif key == ord('2'):
            self._toggle('draw_normals')
        elif key == ord('3'):
            self._toggle('draw_bounds')
        elif key == ord('4'):
            self._toggle('enable_specular')
        # Selection and scene edits
        elif key == KEY_TAB and len(scene):
            base = scene.selected if self.selection is None else self.selection
            self.selection = (base + 1) % len(scene)
        elif key == ord('`') and len(scene):
            base = scene.selected if self.selection is None else self.selection
            self.selection = (base - 1) % len(scene)
        elif key in KEY_DELETE_CODES:
            removed = scene.remove_selected()
            if removed is not None:
                logger.info("Removed '%s'", removed.name)
        elif key == ord('c'):
            scene.clear()
        elif key == ord('r'):
            self.viewer.reset_view()
        elif key in ROTATION_KEYS:
            scene.nudge_rotation(*ROTATION_KEYS[key])
        elif key in POSITION_KEYS:
            scene.nudge_position(*POSITION_KEYS[key])
        elif key == ord('['):
            scene.nudge_scale(1.0 / SCALE_STEP)
        elif key == ord(']'):
            scene.nudge_scale(SCALE_STEP)
        elif key == ord('n'):
            scene.toggle_unlit()
        elif key == ord('p'):
            self.viewer.export_selected(self.args.export_path)
        elif key == KEY_LOAD:
            self.load_prompted()

    def handle_mouse(self):
        try:
            _id, mx, my, _z, bstate = curses.getmouse()
        except curses.error:
            return
        if bstate & curses.BUTTON1_PRESSED:
            self._mouse_down = (mx, my)
        elif bstate & curses.BUTTON1_RELEASED:
            self._drag_to(mx, my)
            self._mouse_down = None
        elif bstate & curses.BUTTON4_PRESSED:
            self.wheel += 1
        elif bstate & getattr(curses, 'BUTTON5_PRESSED', 0):
            self.wheel -= 1
        elif bstate & curses.REPORT_MOUSE_POSITION:
            self._drag_to(mx, my)

    def _drag_to(self, mx, my):
        """Accumulate look input from the last reported drag position."""
        if self._mouse_down is None:
            return
        sx, sy = self._mouse_down
        self.drag_dx += (mx - sx) * MOUSE_DRAG_SCALE
        # A text cell is two pixels tall
        self.drag_dy += (my - sy) * MOUSE_DRAG_SCALE * 2
        self._mouse_down = (mx, my)

    def prompt(self, label):
        """Read a line of text on the status row. Returns '' when cancelled."""
        stdscr = self.stdscr
        th, tw = stdscr.getmaxyx()
        stdscr.nodelay(False)
        curses.echo()
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        try:
            stdscr.move(th - 1, 0)
            stdscr.clrtoeol()
            stdscr.addstr(th - 1, 0, label[:tw - 1])
            raw = stdscr.getstr(th - 1, min(len(label), tw - 1), 1024)
        except curses.error as e:
            logger.warning("Input prompt failed: %s", e)
            return ""
        finally:
            curses.noecho()
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            stdscr.nodelay(True)
        return raw.decode('utf-8', errors='replace').strip()

    def load_prompted(self):
        """Ask for an .obj path and add the mesh to the scene."""
        path = self.prompt("Load .obj: ")
        # Keys pressed before the prompt must not keep moving the camera
        self.held.release_all()
        if path:
            self.viewer.load_file(path)

    def collect_input(self) -> FrameInput:
        """Snapshot and clear this frame's input."""
        frame_input = FrameInput(
            keys=self.held.snapshot(),
            drag_dx=self.drag_dx,
            drag_dy=self.drag_dy,
            wheel=self.wheel,
            selection=self.selection,
            **self.toggles,
        )
        self._reset_pending()
        return frame_input

    # ────────────────────────────────────────────────────────────────────
    # Output
    # ────────────────────────────────────────────────────────────────────
    def blit(self, canv: Canvas, top_row: int):
        """Draw the canvas to the screen, two pixel rows per text row."""
        stdscr = self.stdscr
        config = self.config
        pixels = canv.pixels
        bg = canv.background
        use_color = config.use_color and self.colors.enabled

        for cy in range(canv.cell_rows()):
            top = pixels[2 * cy]
            bottom = pixels[2 * cy + 1] if 2 * cy + 1 < canv.h else top
            for x in range(canv.w):
                try:
                    if use_color and not config.use_ascii:
                        char, fg, bgc = render_cell_halfblock(top[x], bottom[x])
                        stdscr.addstr(cy + top_row, x, char, self.colors.pair(fg, bgc))
                    else:
                        char = render_cell_ascii(top[x], bottom[x], bg)
                        if char == ' ':
                            continue
                        attr = self.colors.pair(top[x], bg) if use_color else curses.A_NORMAL
                        stdscr.addstr(cy + top_row, x, char, attr)
                except curses.error:
                    pass

    def draw_hud(self, tw, th, ms):
        scene = self.viewer.scene
        config = self.config
        stats = self.viewer.last_stats

        obj = scene.selected_object
        sel = f"{scene.selected + 1}.{obj.name}" if obj is not None else "-"
        counts = scene.stats()
        vf = f"V:{counts[0]} F:{counts[1]}" if counts else "V:- F:-"
        modestr = (f"{'WIRE' if config.draw_wireframe else '----'} "
                   f"{'NRM' if config.draw_normals else '---'} "
                   f"{'BOX' if config.draw_bounds else '---'} "
                   f"{'SPEC' if config.enable_specular else '----'}")
        hdr = (f" OBJ:{len(scene)} | SEL:{sel} | {vf}"
               f" | TRI:{stats.triangles_drawn}"
               f" | FPS:{self.fps} | {ms:.1f}ms | [{modestr}] ")
        try:
            self.stdscr.addstr(0, 0, hdr.center(tw - 1, '=')[:tw - 1],
                               curses.color_pair(0) | curses.A_BOLD)
        except curses.error:
            pass

        status = EMPTY_SCENE_MESSAGE if not len(scene) else self.hud_log.message
        if status:
            try:
                self.stdscr.addstr(th - 1, 0, status[:tw - 1], curses.A_DIM)
            except curses.error:
                pass

    # ────────────────────────────────────────────────────────────────────
    # Frame step
    # ────────────────────────────────────────────────────────────────────
    def step(self, dt):
        start_time = time.time()

        self.handle_input()
        if not self.running:
            return False

        self.viewer.advance(self.collect_input(), dt)

        th, tw = self.stdscr.getmaxyx()
        W = tw - 1
        H = (th - 2) * 2
        self.stdscr.erase()
        if W > 0 and H > 0:
            canv = Canvas(W, H, self.config.background)
            self.viewer.render(canv)
            self.blit(canv, 1)

        self.frame_count += 1
        now = time.time()
        if now - self.last_fps_time >= 1.0:
            self.fps = self.frame_count
            self.frame_count = 0
            self.last_fps_time = now

        self.draw_hud(tw, th, (now - start_time) * 1000)
        self.stdscr.refresh()
        return True

    def run(self):
        try:
            FrameScheduler(self.step, fps=self.config.fps).run()
        finally:
            logging.getLogger().removeHandler(self.hud_log)
            sys.stdout.write(MOUSE_DRAG_OFF)
            sys.stdout.flush()


def main(stdscr, args):
    """Entry point called from curses.wrapper."""
    app = DemoApp(stdscr, args)
    app.run()
