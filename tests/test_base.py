"""
Unit tests for base types
"""

from core.base import Bitmap, Point, Stroke, StrokeSurface


class TestPoint:
    def test_create_point(self):
        point = Point(10, 20)
        assert point.x == 10
        assert point.y == 20

    def test_to_tuple(self):
        assert Point(15, 25).to_tuple() == (15, 25)

    def test_scaled(self):
        assert Point(1.5, 2).scaled(10) == (15.0, 20.0)


class TestStroke:
    def test_is_dot(self):
        assert Stroke([Point(1, 1)]).is_dot() is True
        assert Stroke([Point(1, 1), Point(2, 2)]).is_dot() is False

    def test_from_dict_defaults(self):
        stroke = Stroke.from_dict({"points": [[1, 2], [3, 4]]})
        assert stroke.points == [Point(1.0, 2.0), Point(3.0, 4.0)]
        assert stroke.width == 2.0
        assert stroke.color == (0, 0, 0)


class TestStrokeSurface:
    def test_area(self):
        assert StrokeSurface(100, 50).area() == 5000
        assert StrokeSurface(0, 50).area() == 0
        assert StrokeSurface(-10, 50).area() == 0

    def test_is_empty(self):
        assert StrokeSurface(10, 10).is_empty() is True
        assert StrokeSurface(10, 10, [Stroke([])]).is_empty() is True
        assert StrokeSurface(10, 10, [Stroke([Point(1, 1)])]).is_empty() is False

    def test_serialized_drawing(self):
        surface = StrokeSurface(
            750, 750,
            [Stroke([Point(1, 2), Point(3, 4)], width=5.0, color=(255, 0, 0))],
        )
        restored = StrokeSurface.from_bytes(surface.to_bytes())
        assert restored == surface


class TestBitmap:
    def test_size(self):
        assert Bitmap(20, 10, b"png").size() == (20, 10)

    def test_is_empty(self):
        assert Bitmap(20, 10, b"").is_empty() is True
        assert Bitmap(20, 10, b"png").is_empty() is False
