"""공통 타입 정의 (에러 종류 + 단계별 결과)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class CodeScribeError(RuntimeError):
    """파이프라인 공통 예외"""

    def __init__(self, message: str, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{super().__str__()} (cause={self.cause})"
        return super().__str__()


class CaptureError(CodeScribeError):
    """캔버스에 그릴 내용이 없거나 래스터화 결과가 비어 있음"""


class RecognitionError(CodeScribeError):
    """OCR 엔진이 텍스트를 찾지 못했거나 원격 호출/파싱 실패"""


class UnsupportedLanguageError(CodeScribeError):
    """언어 키가 고정 매핑 테이블에 없음 (네트워크 호출 전에 검사)"""

    def __init__(self, language_key: str):
        super().__init__(f"Unsupported language: {language_key!r}")
        self.language_key = language_key


class ExecutionFailure(str, Enum):
    """실행 실패 원인"""
    NETWORK = "network"
    BAD_STATUS = "bad-status"
    MALFORMED_RESPONSE = "malformed-response"


class ExecutionError(CodeScribeError):
    """원격 실행 서비스 호출 실패"""

    def __init__(
        self,
        kind: ExecutionFailure,
        message: str,
        *,
        status: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"{kind.value}: {message}", cause=cause)
        self.kind = kind
        self.status = status


class PersistenceError(CodeScribeError):
    """저장된 파일 레코드를 읽거나 쓸 수 없음"""


@dataclass
class StageDiagnostics:
    """단계 실행 중 수집되는 보조 진단 정보"""

    info: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    runtime_ms: Optional[float] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def add_info(self, message: str) -> None:
        self.info.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


@dataclass
class StageResult:
    """
    파이프라인 경계에서 반환되는 표준 결과

    실패는 예외로 전파하지 않고 ``error`` 에 담아 돌려줌
    """

    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[CodeScribeError] = None
    diagnostics: StageDiagnostics = field(default_factory=StageDiagnostics)

    @classmethod
    def ok(cls, message: str = "", **data: Any) -> "StageResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(
        cls,
        error: CodeScribeError,
        *,
        diagnostics: Optional[StageDiagnostics] = None,
        **data: Any,
    ) -> "StageResult":
        return cls(
            success=False,
            message=str(error),
            data=data,
            error=error,
            diagnostics=diagnostics or StageDiagnostics(),
        )
