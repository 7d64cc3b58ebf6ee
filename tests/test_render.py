"""Tests for SVG rendering, file output and batch builds."""

from __future__ import annotations

import re
import tempfile
from pathlib import Path

import pytest

from framediag.build import render_airframe, render_catalog
from framediag.catalog import AIRFRAMES, AirframeSpec, MotorSpec
from framediag.config import ATTRIBUTION, RenderConfig
from framediag.geometry import place_arrow
from framediag.io import WriteError, insert_attribution, write_svg
from framediag.models import Circle, Point, Quadrant, RotationSense
from framediag.render import CLOSE, DiagramSession


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


QUAD = AirframeSpec(
    name="test_quad",
    filename="test_quad.svg",
    struts=(
        (Point(40, 40), Point(160, 160)),
        (Point(40, 160), Point(160, 40)),
    ),
    motors=(
        MotorSpec(Point(160, 160), "1", RotationSense.CW, Quadrant.SE),
        MotorSpec(Point(160, 40), "2", RotationSense.CCW, Quadrant.NE),
        MotorSpec(Point(40, 160), "3", RotationSense.CCW, Quadrant.SW),
        MotorSpec(Point(40, 40), "4", RotationSense.CW, Quadrant.NW),
    ),
)


_NUM = r"(-?[\d.]+)"
_LINE_PATH = re.compile(
    rf'd="M\s*{_NUM}\s+{_NUM}\s+L\s*{_NUM}\s+{_NUM}\s*"'
)


def _line_segments(svg_text):
    """Every two-point ``M x y L x y`` path in *svg_text*."""
    return [
        tuple(float(v) for v in match)
        for match in _LINE_PATH.findall(svg_text)
    ]


def _has_segment(segments, start, end, tol=1e-3):
    return any(
        abs(x1 - start.x) < tol and abs(y1 - start.y) < tol
        and abs(x2 - end.x) < tol and abs(y2 - end.y) < tol
        for x1, y1, x2, y2 in segments
    )


class TestAttribution:
    def test_second_line(self):
        text = insert_attribution("<?xml?>\n<svg>\n</svg>\n", "<!-- hi -->")
        assert text.splitlines() == ["<?xml?>", "<!-- hi -->", "<svg>", "</svg>"]

    def test_single_line_input(self):
        assert insert_attribution("<svg/>", "<!-- hi -->") == "<svg/>\n<!-- hi -->\n"


class TestWriteSvg:
    def test_creates_parents(self, tmp_dir):
        out = write_svg("<svg/>", tmp_dir / "a" / "b" / "x.svg")
        assert out.read_text(encoding="utf-8") == "<svg/>"

    def test_write_error(self, tmp_dir):
        blocker = tmp_dir / "blocker"
        blocker.write_text("not a directory")
        target = blocker / "x.svg"
        with pytest.raises(WriteError) as info:
            write_svg("<svg/>", target)
        assert info.value.path == target
        assert isinstance(info.value.cause, OSError)
        assert info.value.__cause__ is info.value.cause


class TestDiagramSession:
    def test_writes_on_exit(self, tmp_dir):
        out = tmp_dir / "session.svg"
        with DiagramSession(out) as s:
            s.draw_strut(Point(40, 100), Point(160, 100))
            s.end_body()
            s.draw_motor(Point(40, 100), "1", RotationSense.CW, Quadrant.NW)
            s.draw_servo(Point(64, 120), "S1")
            s.draw_heading(70)
        text = out.read_text(encoding="utf-8")
        assert text.splitlines()[1] == ATTRIBUTION
        assert ">S1</text>" in text

    def test_no_file_on_error(self, tmp_dir):
        out = tmp_dir / "broken.svg"
        with pytest.raises(ValueError):
            with DiagramSession(out) as s:
                s.draw_heading()
                raise ValueError("boom")
        assert not out.exists()

    def test_state_tracks_last_stroke(self, tmp_dir):
        s = DiagramSession(tmp_dir / "state.svg")
        try:
            s.line_width = 1
            s.draw_path([Point(0, 0), Point(10, 0), Point(10, 10), CLOSE], "silver")
            assert s.stroke_width == 1
            s.draw_motor(Point(100, 100), "1/2", RotationSense.NONE, Quadrant.SE)
            assert s.stroke_width == 3
            assert s.font_size == s.radius
            s.draw_servo(Point(30, 100), " 3", "red")
            assert s.font_size == 16
        finally:
            s.discard()

    def test_label_offset_whole_units(self, tmp_dir):
        s = DiagramSession(tmp_dir / "label.svg")
        try:
            s.radius = 14
            s.draw_motor(Point(100, 15), "1/2", RotationSense.NONE, Quadrant.SE, label_offset=(-9, 0))
            assert s.ax.texts[-1].get_position() == (88, 18)
        finally:
            s.discard()

    def test_close_after_discard_raises(self, tmp_dir):
        out = tmp_dir / "discarded.svg"
        s = DiagramSession(out)
        s.discard()
        with pytest.raises(RuntimeError):
            s.close()
        assert not out.exists()

    def test_second_close_is_noop(self, tmp_dir):
        out = tmp_dir / "twice.svg"
        s = DiagramSession(out)
        assert s.close() == out
        assert s.close() == out
        assert out.exists()

    def test_custom_attribution(self, tmp_dir):
        config = RenderConfig(attribution="<!-- custom -->")
        out = tmp_dir / "custom.svg"
        with DiagramSession(out, config) as s:
            s.draw_heading()
        assert out.read_text(encoding="utf-8").splitlines()[1] == "<!-- custom -->"


class TestRenderAirframe:
    def test_end_to_end_quad(self, tmp_dir):
        out = render_airframe(QUAD, tmp_dir / QUAD.filename)
        text = out.read_text(encoding="utf-8")
        assert text.count(ATTRIBUTION) == 1
        assert text.splitlines()[1] == ATTRIBUTION
        assert "<svg" in text
        for label in ("1", "2", "3", "4"):
            assert f">{label}</text>" in text

    @pytest.mark.parametrize("spec", [QUAD, AIRFRAMES["hex_x"], AIRFRAMES["octo_x8"]], ids=lambda s: s.name)
    def test_arrows_match_placement(self, tmp_dir, spec):
        text = render_airframe(spec, tmp_dir / spec.filename).read_text(encoding="utf-8")
        segments = _line_segments(text)
        radius = spec.motor_radius or 28
        for motor in spec.all_motors():
            arrow = place_arrow(Circle(motor.position, radius), motor.sense, motor.quadrant, radius * 0.6)
            for start, end in arrow.segments():
                assert _has_segment(segments, start, end), (motor.label, start, end)

    def test_quad_se_clockwise_coordinates(self, tmp_dir):
        text = render_airframe(QUAD, tmp_dir / QUAD.filename).read_text(encoding="utf-8")
        segments = _line_segments(text)
        anchor = Point(179.79899, 179.79899)
        assert _has_segment(segments, anchor, Point(177.78299, 162.99899))
        assert _has_segment(segments, anchor, Point(196.59899, 179.79899))

    def test_canvas_size(self, tmp_dir):
        out = render_airframe(AIRFRAMES["quad_x"], tmp_dir / "quad_x.svg")
        header = re.search(r"<svg[^>]*>", out.read_text(encoding="utf-8")).group(0)
        assert 'width="200pt"' in header
        assert 'height="200pt"' in header

    @pytest.mark.parametrize("name", sorted(AIRFRAMES))
    def test_every_airframe(self, tmp_dir, name):
        spec = AIRFRAMES[name]
        out = render_airframe(spec, tmp_dir / spec.filename)
        text = out.read_text(encoding="utf-8")
        assert text.count(ATTRIBUTION) == 1
        for motor in spec.all_motors():
            assert f">{motor.label}</text>" in text

    def test_deterministic(self, tmp_dir):
        a = render_airframe(AIRFRAMES["hex_x"], tmp_dir / "a.svg").read_text(encoding="utf-8")
        b = render_airframe(AIRFRAMES["hex_x"], tmp_dir / "b.svg").read_text(encoding="utf-8")
        assert a == b


class TestRenderCatalog:
    def test_renders_all(self, tmp_dir):
        result = render_catalog(tmp_dir)
        assert result.ok
        assert len(result.written) == len(AIRFRAMES)
        for spec in AIRFRAMES.values():
            assert (tmp_dir / spec.filename).exists()

    def test_selected_names(self, tmp_dir):
        result = render_catalog(tmp_dir, ["bicopter", "tri"])
        assert [p.name for p in result.written] == ["bicopter.svg", "tri.svg"]

    def test_unknown_name(self, tmp_dir):
        with pytest.raises(KeyError):
            render_catalog(tmp_dir, ["nope"])

    def test_failure_is_isolated(self, tmp_dir):
        # A directory where the file should go makes that one write fail.
        (tmp_dir / "quad_x.svg").mkdir()
        result = render_catalog(tmp_dir, ["bicopter", "quad_x", "quad_p"])
        assert not result.ok
        assert list(result.failed) == ["quad_x"]
        assert isinstance(result.failed["quad_x"], WriteError)
        assert [p.name for p in result.written] == ["bicopter.svg", "quad_p.svg"]
