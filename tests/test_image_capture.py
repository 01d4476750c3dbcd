"""
Tests for core/image_capture.py
"""

import pytest

from core import image_capture
from core.base import Point, Stroke, StrokeSurface
from core.config import DEFAULT_CAPTURE_SCALE
from core.image_capture import capture_surface, decode_bitmap, fit_scale, has_ink, render_surface
from core.types import CaptureError

from tests.fakes import make_surface


class TestCaptureSurface:
    """Test stroke surface capture"""

    def test_bitmap_covers_scaled_bounds(self, surface):
        """Bitmap dimensions are surface bounds x scale"""
        bitmap = capture_surface(surface, scale=3)
        assert bitmap.size() == (120, 60)
        assert bitmap.scale == 3
        assert bitmap.data.startswith(b"\x89PNG")

    def test_decoded_image_has_ink(self, surface):
        bitmap = capture_surface(surface, scale=2)
        image = decode_bitmap(bitmap)
        assert image.size == (80, 40)
        assert has_ink(image) is True

    def test_single_point_stroke_is_drawn(self):
        """A dot still produces ink"""
        surface = StrokeSurface(10, 10, [Stroke([Point(5, 5)], width=2.0)])
        bitmap = capture_surface(surface, scale=4)
        assert has_ink(decode_bitmap(bitmap)) is True

    def test_zero_area_fails(self):
        with pytest.raises(CaptureError):
            capture_surface(StrokeSurface(0, 100, [Stroke([Point(0, 0)])]), scale=2)

    def test_empty_surface_fails(self):
        """Nothing drawn → no drawable content"""
        with pytest.raises(CaptureError):
            capture_surface(StrokeSurface(50, 50), scale=2)

    def test_invalid_scale(self, surface):
        with pytest.raises(ValueError):
            capture_surface(surface, scale=0)
        with pytest.raises(ValueError):
            capture_surface(surface, scale=-1)


class TestRenderSurface:
    def test_white_background(self):
        image = render_surface(StrokeSurface(10, 10), scale=1)
        assert image.getpixel((5, 5)) == (255, 255, 255)
        assert has_ink(image) is False

    def test_stroke_color(self):
        surface = StrokeSurface(20, 20, [Stroke([Point(0, 10), Point(20, 10)], width=4, color=(255, 0, 0))])
        image = render_surface(surface, scale=1)
        assert image.getpixel((10, 10)) == (255, 0, 0)


class TestPixelBudget:
    """Bitmap size stays bounded for large canvases"""

    def test_large_surface_scaled_down(self, monkeypatch):
        monkeypatch.setattr(image_capture, "MAX_CAPTURE_PIXELS", 10_000)

        bitmap = capture_surface(make_surface(2000, 2000))

        width, height = bitmap.size()
        assert width * height <= 10_000
        assert bitmap.scale < DEFAULT_CAPTURE_SCALE
        assert has_ink(decode_bitmap(bitmap)) is True

    def test_small_surface_keeps_scale(self, surface):
        assert fit_scale(surface, 2, max_pixels=10_000) == 2

    def test_fit_scale_respects_rounding(self):
        surface = StrokeSurface(3, 1000)
        scale = fit_scale(surface, 50, max_pixels=5_000)
        assert round(3 * scale) * round(1000 * scale) <= 5_000

    def test_render_over_budget_fails(self):
        with pytest.raises(CaptureError):
            render_surface(StrokeSurface(100, 100), scale=10, max_pixels=1_000)
