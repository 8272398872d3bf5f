import curses
import logging

import pytest

from shaded_cli_renderer.camera import Camera
from shaded_cli_renderer.config import RenderConfig
from shaded_cli_renderer.demo import (
    CUBE_POSE, KEY_LOAD, MOUSE_DRAG_SCALE, MOVE_STEP, PRIMARY_POSE,
    DemoApp, HudLogHandler, build_default_assets,
)
from shaded_cli_renderer.frame import HeldKeys, Viewer
from shaded_cli_renderer.math_utils import Vec3
from shaded_cli_renderer.mesh import cube_mesh
from shaded_cli_renderer.scene import DefaultAsset, Scene

TRIANGLE_OBJ = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"


def test_default_assets_model_left_cube_right(tmp_path):
    path = tmp_path / "penguin.obj"
    path.write_text(TRIANGLE_OBJ)
    assets = build_default_assets([path])
    assert [a.name for a in assets] == ["penguin.obj", "cube"]
    assert assets[0].pose == PRIMARY_POSE
    assert assets[1].pose == CUBE_POSE


def test_missing_default_asset_is_left_out(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assets = build_default_assets([tmp_path / "penguin.obj"])
    assert [a.name for a in assets] == ["cube"]
    assert "penguin.obj" in caplog.text


def test_no_content_when_everything_is_missing(tmp_path):
    assets = build_default_assets([tmp_path / "gone.obj"], include_cube=False)
    assert assets == []
    assert len(Scene(assets)) == 0


def test_extra_models_get_distinct_poses(tmp_path):
    paths = []
    for name in ("a.obj", "b.obj"):
        p = tmp_path / name
        p.write_text(TRIANGLE_OBJ)
        paths.append(p)
    assets = build_default_assets(paths, include_cube=False)
    assert len(assets) == 2
    assert assets[0].pose.position != assets[1].pose.position


def test_hud_log_handler_keeps_last_warning():
    handler = HudLogHandler()
    log = logging.getLogger("test.hud")
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    try:
        log.info("not shown")
        assert handler.message == ""
        log.warning("first")
        log.error("second")
        log.info("ignored")
        log.debug("ignored")
    finally:
        log.removeHandler(handler)
    assert handler.message == "second"


def make_app(assets):
    # Key and mouse handling runs without a terminal; only the screen setup
    # in __init__ needs curses
    app = DemoApp.__new__(DemoApp)
    app.config = RenderConfig()
    app.viewer = Viewer(Scene(assets), Camera(), app.config)
    app.held = HeldKeys(app.config.key_hold)
    app.running = True
    app._mouse_down = None
    app._reset_pending()
    return app


def cube_app():
    return make_app([DefaultAsset("cube", cube_mesh(), CUBE_POSE)])


def test_position_keys_move_selected_object():
    app = cube_app()
    obj = app.viewer.scene.selected_object
    app.handle_key(ord('L'))
    app.handle_key(ord('K'))
    app.handle_key(ord('O'))
    app.handle_key(ord('O'))
    assert obj.position.x == pytest.approx(1.5 + MOVE_STEP)
    assert obj.position.y == pytest.approx(MOVE_STEP)
    assert obj.position.z == pytest.approx(2 * MOVE_STEP)
    app.handle_key(ord('H'))
    app.handle_key(ord('J'))
    app.handle_key(ord('U'))
    assert obj.position.x == pytest.approx(1.5)
    assert obj.position.y == pytest.approx(0.0)
    assert obj.position.z == pytest.approx(MOVE_STEP)
    assert obj.rotation == Vec3(0, 0, 0)


def test_rotation_keys_still_rotate():
    app = cube_app()
    obj = app.viewer.scene.selected_object
    app.handle_key(ord('l'))
    app.handle_key(ord('j'))
    assert obj.rotation.y == pytest.approx(0.1)
    assert obj.rotation.x == pytest.approx(-0.1)
    assert obj.position == CUBE_POSE.position


def test_load_key_adds_mesh_from_prompt(tmp_path):
    path = tmp_path / "penguin.obj"
    path.write_text(TRIANGLE_OBJ)
    app = cube_app()
    app.prompt = lambda label: str(path)
    app.held.press('w')
    app.handle_key(KEY_LOAD)
    scene = app.viewer.scene
    assert len(scene) == 2
    assert scene.selected_object.name == "penguin.obj"
    assert app.held.snapshot() == frozenset()


def test_load_key_with_empty_answer_does_nothing():
    app = cube_app()
    app.prompt = lambda label: ""
    app.handle_key(KEY_LOAD)
    assert len(app.viewer.scene) == 1


def test_load_key_with_missing_file_reports_warning(tmp_path, caplog):
    app = cube_app()
    app.prompt = lambda label: str(tmp_path / "gone.obj")
    with caplog.at_level(logging.WARNING):
        app.handle_key(KEY_LOAD)
    assert len(app.viewer.scene) == 1
    assert "gone.obj" in caplog.text


def test_mouse_drag_looks_while_moving(monkeypatch):
    events = [
        (0, 10, 5, 0, curses.BUTTON1_PRESSED),
        (0, 12, 5, 0, curses.REPORT_MOUSE_POSITION),
        (0, 13, 6, 0, curses.BUTTON1_RELEASED),
    ]
    monkeypatch.setattr(curses, "getmouse", lambda: events.pop(0))
    app = cube_app()

    app.handle_mouse()
    app.handle_mouse()
    first = app.collect_input()
    assert first.drag_dx == pytest.approx(2 * MOUSE_DRAG_SCALE)
    assert first.drag_dy == 0.0

    app.handle_mouse()
    second = app.collect_input()
    assert second.drag_dx == pytest.approx(MOUSE_DRAG_SCALE)
    assert second.drag_dy == pytest.approx(2 * MOUSE_DRAG_SCALE)


def test_mouse_motion_without_button_is_ignored(monkeypatch):
    monkeypatch.setattr(curses, "getmouse",
                        lambda: (0, 30, 9, 0, curses.REPORT_MOUSE_POSITION))
    app = cube_app()
    app.handle_mouse()
    frame_input = app.collect_input()
    assert frame_input.drag_dx == 0.0
    assert frame_input.drag_dy == 0.0
