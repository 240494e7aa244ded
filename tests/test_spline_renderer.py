"""SplineRenderer Tests

Catmull-Rom to Bezier conversion with end clamping, and the draw-call
sequence for each point-count regime.
"""

import pytest

from radialwave.core.interfaces import StrokeStyle
from radialwave.geometry import Point
from radialwave.rendering import (
    FINAL_STYLE,
    PROGRESS_STYLE,
    SplineRenderer,
    SplineStyle,
    catmull_rom_segments,
)
from mocks import RecordingSurface

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


def expected_controls(p0, p1, p2, p3, tension):
    k = tension / 6
    cp1 = (p1[0] + (p2[0] - p0[0]) * k, p1[1] + (p2[1] - p0[1]) * k)
    cp2 = (p2[0] - (p3[0] - p1[0]) * k, p2[1] - (p3[1] - p1[1]) * k)
    return cp1, cp2


def assert_point(actual, expected):
    assert actual.x == pytest.approx(expected[0])
    assert actual.y == pytest.approx(expected[1])


class TestCatmullRomSegments:
    def test_fewer_than_two_points(self):
        assert catmull_rom_segments([], 0.5) == []
        assert catmull_rom_segments([Point(1, 1)], 0.5) == []

    def test_segment_count_open(self):
        assert len(catmull_rom_segments(SQUARE, 0.5)) == 3

    def test_interpolates_every_point(self):
        segments = catmull_rom_segments(SQUARE, 2.0)
        assert [s.start for s in segments] == SQUARE[:-1]
        assert [s.end for s in segments] == SQUARE[1:]

    @pytest.mark.parametrize("tension", [0.5, 2.0])
    def test_control_points_with_end_clamping(self, tension):
        segments = catmull_rom_segments(SQUARE, tension)
        p = SQUARE

        # 首段 p0 取 p1，末段 p3 取 p2
        neighbours = [
            (p[0], p[0], p[1], p[2]),
            (p[0], p[1], p[2], p[3]),
            (p[1], p[2], p[3], p[3]),
        ]
        for segment, (p0, p1, p2, p3) in zip(segments, neighbours):
            cp1, cp2 = expected_controls(p0, p1, p2, p3, tension)
            assert_point(segment.cp1, cp1)
            assert_point(segment.cp2, cp2)

    def test_closed_appends_first_point(self):
        triangle = [Point(0, 0), Point(10, 0), Point(5, 8)]
        segments = catmull_rom_segments(triangle, 0.5, closed=True)

        assert len(segments) == 3
        assert segments[-1].end == triangle[0]

    def test_closed_always_appends_first_point(self):
        closed_square = SQUARE + [SQUARE[0]]
        segments = catmull_rom_segments(closed_square, 0.5, closed=True)

        assert len(segments) == len(closed_square)
        last = segments[-1]
        assert last.start == SQUARE[0]
        assert last.end == SQUARE[0]

        # 末段 p0 取前一个点，p3 钳制为 p2
        cp1, cp2 = expected_controls(SQUARE[3], SQUARE[0], SQUARE[0], SQUARE[0], 0.5)
        assert_point(last.cp1, cp1)
        assert_point(last.cp2, cp2)

    def test_closed_with_two_points_stays_open(self):
        segments = catmull_rom_segments([Point(0, 0), Point(1, 1)], 0.5, closed=True)
        assert len(segments) == 1

    def test_two_points_degenerates_to_straight_controls(self):
        a, b = Point(0, 0), Point(6, 0)
        segment = catmull_rom_segments([a, b], 0.5)[0]
        assert_point(segment.cp1, (0.5, 0))
        assert_point(segment.cp2, (5.5, 0))


class TestSplineRenderer:
    @pytest.fixture
    def renderer(self):
        return SplineRenderer()

    def test_zero_points_no_draw(self, renderer):
        surface = RecordingSurface()
        renderer.draw_progress(surface, [])
        assert surface.calls == []

    def test_one_point_marker_only(self, renderer):
        surface = RecordingSurface()
        renderer.draw_progress(surface, [Point(5, 5)])

        assert surface.names() == ["fill_marker"]
        _, center, radius, style = surface.calls[0]
        assert center == Point(5, 5)
        assert radius == PROGRESS_STYLE.marker_radius
        assert style == PROGRESS_STYLE.stroke

    def test_two_points_single_line(self, renderer):
        surface = RecordingSurface()
        renderer.draw_progress(surface, [Point(0, 0), Point(3, 4)])

        assert surface.names() == ["begin_path", "move_to", "line_to", "stroke"]
        assert surface.calls[2] == ("line_to", Point(3, 4))

    def test_progress_curve_is_open(self, renderer):
        surface = RecordingSurface()
        renderer.draw_progress(surface, SQUARE)

        assert surface.names() == ["begin_path", "move_to"] + ["cubic_to"] * 3 + ["stroke"]
        assert surface.calls[1] == ("move_to", SQUARE[0])
        assert surface.calls[-1] == ("stroke", PROGRESS_STYLE.stroke)

    def test_final_curve_is_closed(self, renderer):
        surface = RecordingSurface()
        renderer.draw_final(surface, SQUARE + [SQUARE[0]])

        assert surface.names().count("cubic_to") == 5
        assert surface.calls[-2][3] == SQUARE[0]
        assert surface.calls[-1] == ("stroke", FINAL_STYLE.stroke)

    def test_final_control_points_use_final_tension(self, renderer):
        surface = RecordingSurface()
        renderer.draw_final(surface, SQUARE)

        first_cubic = surface.calls[2]
        cp1, _ = expected_controls(SQUARE[0], SQUARE[0], SQUARE[1], SQUARE[2], 0.5)
        assert_point(first_cubic[1], cp1)

    def test_custom_styles(self):
        style = SplineStyle(tension=1.0, closed=False,
                            stroke=StrokeStyle(width=1.0, glow=0.0), marker_radius=9.0)
        renderer = SplineRenderer(progress_style=style, final_style=style)
        surface = RecordingSurface()

        renderer.draw_final(surface, [Point(1, 2)])
        assert surface.calls[0][2] == 9.0


class TestDefaultStyles:
    def test_progress_style(self):
        assert PROGRESS_STYLE.tension == 2.0
        assert PROGRESS_STYLE.closed is False
        assert PROGRESS_STYLE.stroke.width == 3.0
        assert PROGRESS_STYLE.stroke.glow == 12.0
        assert PROGRESS_STYLE.stroke.alpha == 0.8

    def test_final_style(self):
        assert FINAL_STYLE.tension == 0.5
        assert FINAL_STYLE.closed is True
        assert FINAL_STYLE.stroke.width == 4.0
        assert FINAL_STYLE.stroke.glow == 15.0
        assert FINAL_STYLE.stroke.alpha == 0.9
