"""
OCR Engine Interface (추상화 계층)

모든 OCR 엔진은 이 인터페이스를 구현해야 함
로컬(Tesseract) / 원격(Google Vision) 엔진이 동일한 출력 계약을 가짐
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.base import Bitmap


# =============================================================================
# OCR Options (표준 입력 옵션)
# =============================================================================

class RecognitionLevel(Enum):
    """
    인식 정확도 수준
    """
    FAST = "fast"          # 빠르지만 정확도 낮음
    ACCURATE = "accurate"  # 느리지만 정확함


@dataclass
class OcrOptions:
    """
    OCR 옵션

    모든 OCR 엔진이 동일한 옵션을 받음
    """
    level: RecognitionLevel = RecognitionLevel.ACCURATE
    """정확도 수준"""

    uses_language_correction: bool = False
    """자연어 교정 (코드 인식 시 식별자/연산자를 망가뜨리므로 기본 비활성화)"""

    min_revision: Optional[int] = None
    """최소 엔진 리비전 힌트 (지원하는 엔진만 사용)"""

    languages: List[str] = field(default_factory=lambda: ["eng"])
    """언어 코드 (예: "eng")"""


CODE_RECOGNITION_OPTIONS = OcrOptions()


# =============================================================================
# OCR Engine Types
# =============================================================================

class OcrEngineType(Enum):
    """
    OCR 엔진 타입

    새로운 엔진 추가 시 여기에 추가만 하면 됨
    """
    LOCAL = "local"    # 기기 내 인식 (네트워크 없음)
    REMOTE = "remote"  # 클라우드 인식


# =============================================================================
# OCR Engine Interface (추상 인터페이스)
# =============================================================================

class OcrEngineInterface(ABC):
    """
    OCR 엔진 추상 인터페이스

    모든 OCR 엔진은 이 인터페이스를 구현해야 함
    """

    engine_type: OcrEngineType

    @abstractmethod
    def name(self) -> str:
        """엔진 이름"""
        pass

    @abstractmethod
    async def recognize(self, bitmap: Bitmap, options: OcrOptions = CODE_RECOGNITION_OPTIONS) -> str:
        """
        OCR 실행

        Args:
            bitmap: 캡처된 캔버스 이미지
            options: 인식 옵션

        Returns:
            str: 인식된 텍스트 (여러 줄 가능)

        Raises:
            RecognitionError: 텍스트를 찾지 못했거나 이미지/응답 처리 실패
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        엔진 사용 가능 여부 (API 키 확인 등)

        Returns:
            bool: 사용 가능하면 True
        """
        pass
