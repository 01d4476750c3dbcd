"""
OCR Engine Registry (플러그인 등록 시스템)

등록된 OCR 엔진을 관리하고, 호출자가 넘긴 플래그로 엔진을 선택
"""

from typing import Dict, Optional

from core.types import RecognitionError
from .interface import OcrEngineInterface, OcrEngineType


class OcrEngineRegistry:
    """
    OCR 엔진 레지스트리

    플러그인 패턴: 새 엔진 추가 시 register()만 호출하면 됨
    """

    def __init__(self):
        self._engines: Dict[OcrEngineType, OcrEngineInterface] = {}

    def register(self, engine_type: OcrEngineType, engine: OcrEngineInterface):
        """
        새 OCR 엔진 등록

        Args:
            engine_type: 엔진 타입
            engine: 엔진 인스턴스 (OcrEngineInterface 구현체)
        """
        self._engines[engine_type] = engine
        print(f"[Registry] OCR 엔진 등록: {engine_type.value} ({engine.name()})")

    def get(self, engine_type: OcrEngineType) -> Optional[OcrEngineInterface]:
        """
        등록된 엔진 가져오기

        Returns:
            OcrEngineInterface: 엔진 인스턴스 (없으면 None)
        """
        return self._engines.get(engine_type)

    def is_available(self, engine_type: OcrEngineType) -> bool:
        """등록되어 있고 사용 가능하면 True"""
        engine = self.get(engine_type)
        return engine is not None and engine.is_available()

    def list_available(self) -> list[OcrEngineType]:
        """사용 가능한 모든 엔진 목록"""
        return [
            engine_type
            for engine_type, engine in self._engines.items()
            if engine.is_available()
        ]

    def select(self, use_remote: bool) -> OcrEngineInterface:
        """
        설정 플래그로 엔진 선택 (런타임 자동 감지 없음)

        Args:
            use_remote: True면 원격 엔진, False면 로컬 엔진

        Raises:
            RecognitionError: 해당 타입의 엔진이 등록되지 않음
        """
        engine_type = OcrEngineType.REMOTE if use_remote else OcrEngineType.LOCAL
        engine = self.get(engine_type)
        if engine is None:
            raise RecognitionError(f"No OCR engine registered for {engine_type.value}")
        return engine


def build_default_registry() -> OcrEngineRegistry:
    """Tesseract(로컬) + Google Vision(원격) 엔진을 등록한 레지스트리"""
    from .tesseract_plugin import TesseractEngine
    from .vision_plugin import GoogleVisionEngine

    registry = OcrEngineRegistry()
    registry.register(OcrEngineType.LOCAL, TesseractEngine())
    registry.register(OcrEngineType.REMOTE, GoogleVisionEngine())
    return registry
