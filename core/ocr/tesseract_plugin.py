"""
Tesseract OCR Plugin (로컬 엔진)

OcrEngineInterface 구현, 네트워크 호출 없음
"""

import asyncio
from typing import Dict, List, Tuple

import cv2
import numpy as np
import pytesseract

from core.base import Bitmap
from core.types import RecognitionError
from .interface import (
    CODE_RECOGNITION_OPTIONS,
    OcrEngineInterface,
    OcrEngineType,
    OcrOptions,
    RecognitionLevel,
)

# 사전(dawg) 비활성화 → 자연어 교정 없이 글자 그대로 인식
NO_CORRECTION_CONFIG = "-c load_system_dawg=0 -c load_freq_dawg=0"

# 한 덩어리의 텍스트 블록으로 간주 (코드 한 화면)
PAGE_SEG_MODE = 6


def build_tesseract_config(options: OcrOptions) -> str:
    """OcrOptions → Tesseract 설정 문자열"""
    parts = [f"--psm {PAGE_SEG_MODE}"]
    if options.min_revision is not None:
        parts.append(f"--oem {options.min_revision}")
    if not options.uses_language_correction:
        parts.append(NO_CORRECTION_CONFIG)
    return " ".join(parts)


def decode_image(data: bytes) -> np.ndarray:
    """
    PNG 바이트 → 그레이스케일 이미지

    Raises:
        RecognitionError: 디코딩 실패
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_GRAYSCALE) if buffer.size else None
    if image is None:
        raise RecognitionError("Failed to decode bitmap")
    return image


def preprocess(image: np.ndarray, level: RecognitionLevel) -> np.ndarray:
    """
    정확도 수준에 따른 전처리

    FAST: 절반 크기로 축소
    ACCURATE: 원본 크기 + Otsu 이진화
    """
    if level == RecognitionLevel.FAST:
        h, w = image.shape[:2]
        return cv2.resize(image, (max(1, w // 2), max(1, h // 2)), interpolation=cv2.INTER_AREA)

    _, binary = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return binary


def group_lines(data: Dict[str, list]) -> List[str]:
    """
    image_to_data 출력 → 줄 단위 텍스트

    (block, paragraph, line) 번호가 같은 단어를 한 줄로 합침
    """
    lines: Dict[Tuple[int, int, int], List[str]] = {}

    for i in range(len(data["text"])):
        text = str(data["text"][i]).strip()
        conf = float(data["conf"][i])

        # 빈 텍스트 또는 인식 실패(-1) 건너뜀
        if not text or conf < 0:
            continue

        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        lines.setdefault(key, []).append(text)

    return [" ".join(words) for words in lines.values()]


class TesseractEngine(OcrEngineInterface):
    """Tesseract OCR 플러그인 (무료, 오프라인)"""

    engine_type = OcrEngineType.LOCAL

    def name(self) -> str:
        return "Tesseract OCR"

    def _run(self, bitmap: Bitmap, options: OcrOptions) -> str:
        image = preprocess(decode_image(bitmap.data), options.level)

        try:
            data = pytesseract.image_to_data(
                image,
                lang="+".join(options.languages),
                config=build_tesseract_config(options),
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            raise RecognitionError("Tesseract failed", cause=e)

        lines = group_lines(data)
        if not lines:
            raise RecognitionError("No text regions detected")
        return "\n".join(lines)

    async def recognize(self, bitmap: Bitmap, options: OcrOptions = CODE_RECOGNITION_OPTIONS) -> str:
        # Tesseract 호출은 블로킹이므로 워커 스레드에서 실행
        return await asyncio.to_thread(self._run, bitmap, options)

    def is_available(self) -> bool:
        try:
            pytesseract.get_tesseract_version()
            return True
        except (pytesseract.TesseractNotFoundError, OSError):
            return False
