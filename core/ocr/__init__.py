"""
OCR Plugin System

핵심 설계:
- OCR 엔진 독립적 인터페이스 (recognize 하나)
- 플러그인 아키텍처 (로컬 Tesseract / 원격 Google Vision)
- 엔진 선택은 호출자가 넘기는 플래그로 결정
"""

from .interface import (
    OcrOptions,
    OcrEngineInterface,
    OcrEngineType,
    RecognitionLevel,
    CODE_RECOGNITION_OPTIONS,
)

from .registry import OcrEngineRegistry, build_default_registry

__all__ = [
    "OcrOptions",
    "OcrEngineInterface",
    "OcrEngineType",
    "RecognitionLevel",
    "CODE_RECOGNITION_OPTIONS",
    "OcrEngineRegistry",
    "build_default_registry",
]
