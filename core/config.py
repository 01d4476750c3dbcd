"""기본 설정"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# 코드 버퍼 삽입 지점
INSERTION_MARKER = "Your code starts here"

# 들여쓰기 단위 (공백 4칸)
INDENT_UNIT = "    "

# 캡처 배율: 기기 픽셀 밀도 x 10 (얇은 획 보존)
DEVICE_PIXEL_RATIO = _env_float("CODESCRIBE_DEVICE_PIXEL_RATIO", 2.0)
CAPTURE_SCALE_MULTIPLIER = 10.0
DEFAULT_CAPTURE_SCALE = DEVICE_PIXEL_RATIO * CAPTURE_SCALE_MULTIPLIER

# 캡처 비트맵 최대 픽셀 수 (초과 시 배율을 낮춤)
MAX_CAPTURE_PIXELS = 16_000_000

# 캔버스 최대 크기 (surface 단위)
MAX_SURFACE_EXTENT = 10_000

# OCR 엔진 선택 플래그 (True: Google Vision, False: Tesseract)
USE_REMOTE_OCR = _env_flag("CODESCRIBE_USE_REMOTE_OCR")

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
JDOODLE_ENDPOINT = "https://api.jdoodle.com/v1/execute"

DATABASE_URL = os.getenv("CODESCRIBE_DATABASE_URL", "sqlite:///./codescribe.db")

__all__ = [
    "INSERTION_MARKER",
    "INDENT_UNIT",
    "DEVICE_PIXEL_RATIO",
    "CAPTURE_SCALE_MULTIPLIER",
    "DEFAULT_CAPTURE_SCALE",
    "MAX_CAPTURE_PIXELS",
    "MAX_SURFACE_EXTENT",
    "USE_REMOTE_OCR",
    "VISION_ENDPOINT",
    "JDOODLE_ENDPOINT",
    "DATABASE_URL",
]
