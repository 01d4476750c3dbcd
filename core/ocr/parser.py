"""
Google Vision 요청/응답 변환

원격 OCR 엔진의 JSON 요청 본문 생성과 응답 → 텍스트 파싱
"""

import base64
from typing import Any, Dict, List, Optional

DOCUMENT_TEXT_DETECTION = "DOCUMENT_TEXT_DETECTION"


def build_annotate_request(image_data: bytes, language_hints: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    images:annotate 요청 본문 생성

    Args:
        image_data: PNG 바이트 (base64로 인코딩됨)
        language_hints: 언어 힌트 (없으면 imageContext 생략)
    """
    request: Dict[str, Any] = {
        "image": {"content": base64.b64encode(image_data).decode("ascii")},
        "features": [{"type": DOCUMENT_TEXT_DETECTION}],
    }
    if language_hints:
        request["imageContext"] = {"languageHints": list(language_hints)}

    return {"requests": [request]}


def extract_text(payload: Any) -> Optional[str]:
    """
    응답에서 텍스트 추출

    1. responses[0].fullTextAnnotation.text
    2. responses[0].textAnnotations[0].description (fallback)
    3. 둘 다 없으면 None

    Args:
        payload: json.loads 결과

    Returns:
        str: 인식된 텍스트 (없으면 None)
    """
    if not isinstance(payload, dict):
        return None

    responses = payload.get("responses")
    if not isinstance(responses, list) or not responses:
        return None

    first = responses[0]
    if not isinstance(first, dict):
        return None

    full_text = first.get("fullTextAnnotation")
    if isinstance(full_text, dict) and isinstance(full_text.get("text"), str):
        return full_text["text"]

    annotations = first.get("textAnnotations")
    if isinstance(annotations, list) and annotations:
        description = annotations[0].get("description") if isinstance(annotations[0], dict) else None
        if isinstance(description, str):
            return description

    return None


def extract_error(payload: Any) -> Optional[str]:
    """응답 내 error.message (요청 단위 오류)"""
    if not isinstance(payload, dict):
        return None
    responses = payload.get("responses")
    if isinstance(responses, list) and responses and isinstance(responses[0], dict):
        error = responses[0].get("error")
        if isinstance(error, dict):
            return error.get("message")
    return None
