"""
Base types implementation

Stroke surface (vector input drawn by the user) and Bitmap (raster
output handed to the OCR engines).
"""

import json
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class Point:
    """2D coordinate in surface space"""
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def scaled(self, factor: float) -> Tuple[float, float]:
        """Coordinate in bitmap space for the given scale factor"""
        return (self.x * factor, self.y * factor)


@dataclass
class Stroke:
    """Single pen stroke: ordered points drawn with one pen"""
    points: List[Point]
    width: float = 2.0
    color: Tuple[int, int, int] = (0, 0, 0)

    def is_dot(self) -> bool:
        """A single-point stroke is rendered as a dot"""
        return len(self.points) == 1

    def to_dict(self) -> dict:
        return {
            "points": [[p.x, p.y] for p in self.points],
            "width": self.width,
            "color": list(self.color),
        }

    @staticmethod
    def from_dict(data: dict) -> 'Stroke':
        return Stroke(
            points=[Point(float(x), float(y)) for x, y in data.get("points", [])],
            width=float(data.get("width", 2.0)),
            color=tuple(data.get("color", (0, 0, 0))),
        )


@dataclass
class StrokeSurface:
    """
    Drawing surface: bounds plus the strokes drawn on it.

    Owned by the UI layer; the capture step only reads it.
    """
    width: float
    height: float
    strokes: List[Stroke] = field(default_factory=list)

    def area(self) -> float:
        return max(self.width, 0) * max(self.height, 0)

    def is_empty(self) -> bool:
        return not any(stroke.points for stroke in self.strokes)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "strokes": [s.to_dict() for s in self.strokes],
        }

    @staticmethod
    def from_dict(data: dict) -> 'StrokeSurface':
        return StrokeSurface(
            width=float(data["width"]),
            height=float(data["height"]),
            strokes=[Stroke.from_dict(s) for s in data.get("strokes", [])],
        )

    def to_bytes(self) -> bytes:
        """Serialized drawing, stored alongside a code file"""
        return json.dumps(self.to_dict()).encode("utf-8")

    @staticmethod
    def from_bytes(data: bytes) -> 'StrokeSurface':
        return StrokeSurface.from_dict(json.loads(data.decode("utf-8")))


@dataclass
class Bitmap:
    """Raster image (PNG-encoded) produced from a StrokeSurface"""
    width: int
    height: int
    data: bytes
    scale: float = 1.0

    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def is_empty(self) -> bool:
        return not self.data
