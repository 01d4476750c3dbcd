"""
Stroke surface rasterization

Renders the user's vector strokes into a PNG bitmap for the OCR engines.
Thin handwritten strokes lose detail at screen resolution, so capture
happens at a large scale factor (device pixel ratio x 10 by default).
"""

import io
import math
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .base import Bitmap, Stroke, StrokeSurface
from .config import DEFAULT_CAPTURE_SCALE, MAX_CAPTURE_PIXELS
from .types import CaptureError

BACKGROUND = (255, 255, 255)
INK_THRESHOLD = 250


def _draw_stroke(draw: ImageDraw.ImageDraw, stroke: Stroke, scale: float) -> None:
    width = max(1, int(round(stroke.width * scale)))
    points = [p.scaled(scale) for p in stroke.points]

    if stroke.is_dot():
        x, y = points[0]
        r = width / 2
        draw.ellipse((x - r, y - r, x + r, y + r), fill=stroke.color)
        return

    draw.line(points, fill=stroke.color, width=width, joint="curve")
    # Round caps so segment ends do not leave gaps in the glyphs
    r = width / 2
    for x, y in (points[0], points[-1]):
        draw.ellipse((x - r, y - r, x + r, y + r), fill=stroke.color)


def has_ink(image: Image.Image, threshold: int = INK_THRESHOLD) -> bool:
    """Check if the image has any non-background pixel"""
    gray = np.asarray(image.convert("L"))
    return bool((gray < threshold).any())


def _pixel_size(surface: StrokeSurface, scale: float) -> Tuple[int, int]:
    return int(round(surface.width * scale)), int(round(surface.height * scale))


def fit_scale(surface: StrokeSurface, scale: float, max_pixels: Optional[int] = None) -> float:
    """
    Largest scale <= scale whose bitmap stays within max_pixels

    Args:
        surface: Surface to be rendered
        scale: Requested pixels per surface unit
        max_pixels: Pixel budget (default: MAX_CAPTURE_PIXELS)
    """
    if max_pixels is None:
        max_pixels = MAX_CAPTURE_PIXELS
    if surface.area() <= 0 or scale <= 0:
        return scale

    if surface.area() * scale * scale > max_pixels:
        scale = math.sqrt(max_pixels / surface.area())
    # 반올림으로 한도를 넘는 경우
    while scale > 0 and math.prod(_pixel_size(surface, scale)) > max_pixels:
        scale *= 0.99
    return scale


def render_surface(
    surface: StrokeSurface,
    scale: float,
    max_pixels: Optional[int] = None,
) -> Image.Image:
    """
    Render a stroke surface into a PIL image

    Args:
        surface: Strokes and bounds to render
        scale: Pixels per surface unit
        max_pixels: Pixel budget (default: MAX_CAPTURE_PIXELS)

    Returns:
        RGB image with white background

    Raises:
        CaptureError: zero-area surface or bitmap over the pixel budget
    """
    if max_pixels is None:
        max_pixels = MAX_CAPTURE_PIXELS
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")

    width, height = _pixel_size(surface, scale)
    if surface.area() <= 0 or width <= 0 or height <= 0:
        raise CaptureError(
            f"Surface has zero area ({surface.width}x{surface.height})"
        )
    if width * height > max_pixels:
        raise CaptureError(
            f"Bitmap {width}x{height} exceeds {max_pixels} pixels"
        )

    image = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)
    for stroke in surface.strokes:
        if stroke.points:
            _draw_stroke(draw, stroke, scale)
    return image


def capture_surface(surface: StrokeSurface, scale: Optional[float] = None) -> Bitmap:
    """
    Capture a stroke surface as a PNG bitmap

    Args:
        surface: Strokes drawn by the user
        scale: Scale factor (default: DEFAULT_CAPTURE_SCALE), lowered to
            fit MAX_CAPTURE_PIXELS

    Returns:
        Bitmap covering the surface bounds

    Raises:
        ValueError: scale <= 0
        CaptureError: zero-area surface or nothing drawn
    """
    if scale is None:
        scale = DEFAULT_CAPTURE_SCALE
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")

    scale = fit_scale(surface, scale)
    image = render_surface(surface, scale)
    if not has_ink(image):
        raise CaptureError("Rendering produced no drawable content")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    data = buffer.getvalue()
    if not data:
        raise CaptureError("Rendering produced no pixel data")

    return Bitmap(width=image.width, height=image.height, data=data, scale=scale)


def decode_bitmap(bitmap: Bitmap) -> Image.Image:
    """Decode bitmap bytes back into a PIL image"""
    return Image.open(io.BytesIO(bitmap.data))
