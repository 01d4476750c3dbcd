"""
Google Cloud Vision OCR Plugin (원격 엔진)

DOCUMENT_TEXT_DETECTION 요청 1회 (재시도 없음, 재시도 여부는 호출자가 결정)
"""

import asyncio
import json
import os
from typing import List, Optional

import aiohttp

from core.base import Bitmap
from core.config import VISION_ENDPOINT
from core.types import RecognitionError
from .interface import (
    CODE_RECOGNITION_OPTIONS,
    OcrEngineInterface,
    OcrEngineType,
    OcrOptions,
)
from .parser import build_annotate_request, extract_error, extract_text

# Tesseract 언어 코드 → Vision BCP-47 언어 힌트
VISION_LANGUAGE_CODES = {
    "eng": "en",
    "kor": "ko",
    "jpn": "ja",
    "chi_sim": "zh",
    "deu": "de",
    "fra": "fr",
    "spa": "es",
}


def to_language_hints(languages: List[str]) -> List[str]:
    """OcrOptions.languages → Vision languageHints (매핑에 없으면 그대로)"""
    return [VISION_LANGUAGE_CODES.get(code, code) for code in languages]


class GoogleVisionEngine(OcrEngineInterface):
    """Google Vision OCR 플러그인 (유료, 네트워크 필요)"""

    engine_type = OcrEngineType.REMOTE

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: str = VISION_ENDPOINT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key or os.getenv('GOOGLE_VISION_API_KEY')
        self.endpoint = endpoint
        self._session = session

    def name(self) -> str:
        return "Google Cloud Vision"

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def _post(self, session: aiohttp.ClientSession, body: dict) -> tuple[int, bytes]:
        async with session.post(
            self.endpoint,
            params={"key": self.api_key},
            json=body,
            headers={"Content-Type": "application/json"},
        ) as resp:
            return resp.status, await resp.read()

    async def recognize(self, bitmap: Bitmap, options: OcrOptions = CODE_RECOGNITION_OPTIONS) -> str:
        if not self.api_key:
            raise RecognitionError("Google Vision API key not found")
        if bitmap.is_empty():
            raise RecognitionError("Bitmap has no image data")

        # 언어 교정을 끈 경우 언어 힌트도 보내지 않음 (식별자 보존)
        hints = to_language_hints(options.languages) if options.uses_language_correction else None
        body = build_annotate_request(bitmap.data, hints)

        try:
            if self._session is not None:
                status, body_bytes = await self._post(self._session, body)
            else:
                async with aiohttp.ClientSession() as session:
                    status, body_bytes = await self._post(session, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            print(f"[Vision] 요청 실패: {e}")
            raise RecognitionError("Vision request failed", cause=e)

        if status != 200:
            print(f"[Vision] 응답 상태 {status}")
            raise RecognitionError(f"Vision request failed with status {status}")

        try:
            payload = json.loads(body_bytes)
        except ValueError as e:
            raise RecognitionError("Failed to parse Vision response", cause=e)

        recognized = extract_text(payload)
        if recognized is None:
            detail = extract_error(payload)
            if detail:
                raise RecognitionError(f"Vision returned an error: {detail}")
            raise RecognitionError("No text found in Vision response")

        return recognized
