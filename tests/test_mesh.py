import pytest

from shaded_cli_renderer.errors import MissingAssetError
from shaded_cli_renderer.math_utils import Vec3
from shaded_cli_renderer.mesh import (
    BOX_EDGES, Mesh, cube_mesh, export_obj, load_mesh, normalize, parse_obj, save_obj,
)

TRIANGLE = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3"


def test_parse_single_triangle():
    mesh = parse_obj(TRIANGLE)
    assert mesh.vertex_count == 3
    assert mesh.triangles == ((0, 1, 2),)
    assert mesh.vertices[1] == Vec3(1, 0, 0)


def test_negative_indices_resolve_against_running_count():
    mesh = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -1 -2 -3")
    assert mesh.triangles == ((2, 1, 0),)


def test_negative_indices_use_count_at_parse_time():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\nv 5 5 5\nf -4 -3 -1"
    mesh = parse_obj(text)
    assert mesh.triangles == ((0, 1, 2), (0, 1, 3))


def test_polygon_is_fan_triangulated():
    text = "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nv -1 1 0\nf 1 2 3 4 5"
    mesh = parse_obj(text)
    assert mesh.triangles == ((0, 1, 2), (0, 2, 3), (0, 3, 4))


def test_slash_attributes_are_ignored():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0 0\nvn 0 0 1\nf 1/1/1 2//1 3/1"
    mesh = parse_obj(text)
    assert mesh.vertex_count == 3
    assert mesh.triangles == ((0, 1, 2),)


def test_comments_blank_lines_and_other_records_ignored():
    text = "# a comment\n\no thing\ng group\ns off\nusemtl red\n" + TRIANGLE + "\n"
    mesh = parse_obj(text)
    assert mesh.vertex_count == 3
    assert mesh.triangle_count == 1


def test_malformed_records_are_skipped():
    text = "\n".join([
        "v 1 2",          # too few fields
        "v a b c",        # not numbers
        "v nan 0 0",      # not finite
        "v 0 0 0",
        "v 1 0 0",
        "v 0 1 0",
        "f 1 2",          # too few references
        "f 1 x 2",        # only two usable references
        "f 1 2 9",        # only two references in range
        "f 0 2 3",        # index 0 is not a vertex
        "f 1 2 3",
    ])
    mesh = parse_obj(text)
    assert mesh.vertex_count == 3
    assert mesh.triangles == ((0, 1, 2),)


def test_unparseable_face_token_is_dropped():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\nf 1 2 oops 3"
    mesh = parse_obj(text)
    assert mesh.triangles == ((0, 1, 2),)


def test_out_of_range_face_reference_is_dropped():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\n"
    assert parse_obj(text + "f 1 2 3 99").triangles == ((0, 1, 2),)
    assert parse_obj(text + "f 1 2 3 0").triangles == ((0, 1, 2),)
    assert parse_obj(text + "f 1 -9 2 3").triangles == ((0, 1, 2),)


def test_malformed_records_are_logged(caplog):
    with caplog.at_level("WARNING", logger="shaded_cli_renderer.mesh"):
        parse_obj("v 1 2\n" + TRIANGLE)
    assert "Skipped 1 malformed" in caplog.text


def test_normalize_fits_largest_dimension_and_centers():
    mesh = parse_obj("v 0 0 0\nv 2 0 0\nv 0 4 0\nv 0 0 1\nf 1 2 3")
    norm = normalize(mesh)

    xs = [v.x for v in norm.vertices]
    ys = [v.y for v in norm.vertices]
    zs = [v.z for v in norm.vertices]
    dims = (max(xs) - min(xs), max(ys) - min(ys), max(zs) - min(zs))
    assert max(dims) == pytest.approx(0.9)
    assert dims == pytest.approx((0.45, 0.9, 0.225))
    for lo, hi in ((min(xs), max(xs)), (min(ys), max(ys)), (min(zs), max(zs))):
        assert lo + hi == pytest.approx(0.0, abs=1e-12)

    assert tuple(norm.bounds.min) == pytest.approx((min(xs), min(ys), min(zs)))
    assert tuple(norm.bounds.max) == pytest.approx((max(xs), max(ys), max(zs)))
    assert tuple(norm.bounds.center()) == pytest.approx((0, 0, 0), abs=1e-12)
    assert norm.triangles == mesh.triangles


def test_normalize_does_not_mutate_input():
    mesh = parse_obj("v 0 0 0\nv 2 0 0\nv 0 4 0\nf 1 2 3")
    before = mesh.vertices
    normalize(mesh)
    assert mesh.vertices == before
    assert mesh.bounds is None


def test_normalize_empty_mesh_is_noop():
    empty = Mesh()
    assert normalize(empty) is empty
    assert empty.bounds is None


def test_normalize_single_point():
    mesh = normalize(parse_obj("v 3 3 3\nv 3 3 3\nv 3 3 3\nf 1 2 3"))
    assert all(v == Vec3(0, 0, 0) for v in mesh.vertices)


def test_export_format():
    text = export_obj(parse_obj(TRIANGLE))
    lines = text.strip().splitlines()
    assert lines[0].startswith("#")
    assert lines[1:4] == ["v 0.0 0.0 0.0", "v 1.0 0.0 0.0", "v 0.0 1.0 0.0"]
    assert lines[4] == "f 1 2 3"
    assert "/" not in text


def test_export_import_round_trip():
    source = "\n".join([
        "v 0.1 0.2 0.3", "v -1.5 2.25 1e-3", "v 3 4 5", "v 0.333333333333 -7 2",
        "f 1 2 3 4", "f 4/1/1 3/1/1 1/1/1",
    ])
    mesh = normalize(parse_obj(source))
    again = parse_obj(export_obj(mesh))

    assert again.vertex_count == mesh.vertex_count
    assert again.triangle_count == mesh.triangle_count
    assert again.triangles == mesh.triangles
    for t0, t1 in zip(mesh.triangles, again.triangles):
        for i0, i1 in zip(t0, t1):
            assert tuple(again.vertices[i1]) == pytest.approx(tuple(mesh.vertices[i0]))


def test_load_and_save(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text(TRIANGLE)
    mesh = load_mesh(path)
    assert mesh.triangle_count == 1
    assert mesh.bounds is not None

    out = tmp_path / "out.obj"
    save_obj(mesh, out)
    assert load_mesh(out).triangles == mesh.triangles


def test_load_missing_file_raises_missing_asset(tmp_path):
    with pytest.raises(MissingAssetError) as exc:
        load_mesh(tmp_path / "nope.obj")
    assert "nope.obj" in str(exc.value)


def test_cube_is_normalized_and_outward_wound():
    cube = cube_mesh()
    assert cube.vertex_count == 8
    assert cube.triangle_count == 12
    size = cube.bounds.size()
    assert tuple(size) == pytest.approx((0.9, 0.9, 0.9))
    for i0, i1, i2 in cube.triangles:
        a, b, c = cube.vertices[i0], cube.vertices[i1], cube.vertices[i2]
        n = (b - a).cross(c - a)
        center = (a + b + c) * (1.0 / 3.0)
        assert n.dot(center) > 0


def test_bounds_corners_and_edges():
    bounds = cube_mesh().bounds
    corners = bounds.corners()
    assert len(corners) == 8
    assert len(BOX_EDGES) == 12
    # Every box edge runs along exactly one axis
    for i, j in BOX_EDGES:
        d = corners[j] - corners[i]
        assert sum(1 for c in d if abs(c) > 1e-12) == 1
