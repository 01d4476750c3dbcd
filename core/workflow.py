"""
Complete workflow for handwritten code recognition

Workflow steps:
1. Capture the stroke surface as a bitmap
2. Run OCR with the engine selected by the caller's flag
3. Reconstruct indentation
4. Merge into the code buffer
5. (on demand) Execute the buffer remotely

Errors from every step are caught at this boundary and returned as a
StageResult; a failed request leaves the code buffer untouched.
"""

import asyncio
import time
from enum import Enum
from typing import Optional

from .base import StrokeSurface
from .config import INSERTION_MARKER, USE_REMOTE_OCR
from .image_capture import capture_surface
from .indentation import IndentationReconstructor
from .jdoodle_client import JDoodleClient
from .languages import DEFAULT_LANGUAGE, resolve_language, template_for
from .ocr import CODE_RECOGNITION_OPTIONS, OcrEngineRegistry, OcrOptions
from .script_merger import merge
from .types import (
    CaptureError,
    CodeScribeError,
    ExecutionError,
    RecognitionError,
    StageDiagnostics,
    StageResult,
    UnsupportedLanguageError,
)


class WorkflowState(Enum):
    """State reached by a recognition request"""
    INITIAL = "initial"
    CAPTURED = "captured"
    RECOGNIZED = "recognized"
    RECONSTRUCTED = "reconstructed"
    MERGED = "merged"
    FAILED = "failed"


class CodeifyPipeline:
    """
    Stroke surface → indented code

    Stateless: every call is an independent request.
    """

    def __init__(
        self,
        registry: OcrEngineRegistry,
        reconstructor: Optional[IndentationReconstructor] = None,
        scale: Optional[float] = None,
    ):
        self.registry = registry
        self.reconstructor = reconstructor or IndentationReconstructor()
        self.scale = scale

    async def recognize(
        self,
        surface: StrokeSurface,
        use_remote: bool = USE_REMOTE_OCR,
        options: OcrOptions = CODE_RECOGNITION_OPTIONS,
    ) -> StageResult:
        """
        Run capture → OCR → reconstruction

        Returns:
            StageResult with recognized_text and reconstructed_text on success,
            or the CaptureError/RecognitionError on failure
        """
        start = time.perf_counter()
        diagnostics = StageDiagnostics()
        state = WorkflowState.INITIAL

        try:
            bitmap = capture_surface(surface, self.scale)
            state = WorkflowState.CAPTURED
            diagnostics.extras["bitmap_size"] = bitmap.size()

            engine = self.registry.select(use_remote)
            diagnostics.add_info(f"engine: {engine.name()}")

            recognized = await engine.recognize(bitmap, options)
            state = WorkflowState.RECOGNIZED

            code = self.reconstructor.reconstruct(recognized)
            state = WorkflowState.RECONSTRUCTED
        except (CaptureError, RecognitionError) as e:
            diagnostics.runtime_ms = (time.perf_counter() - start) * 1000
            diagnostics.extras["last_state"] = state.value
            return StageResult.fail(e, diagnostics=diagnostics, state=WorkflowState.FAILED)

        result = StageResult.ok(
            "Recognition completed",
            state=state,
            recognized_text=recognized,
            reconstructed_text=code,
        )
        diagnostics.runtime_ms = (time.perf_counter() - start) * 1000
        result.diagnostics = diagnostics
        return result


class EditingSession:
    """
    Editing session for one code buffer

    - Merges are serialized per session (single writer on the buffer)
    - Each codeify request gets an increasing token; results that arrive
      after a newer request was issued are discarded
    """

    def __init__(
        self,
        pipeline: CodeifyPipeline,
        executor: Optional[JDoodleClient] = None,
        buffer: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        marker: str = INSERTION_MARKER,
    ):
        resolve_language(language)
        self.pipeline = pipeline
        self.executor = executor
        self.language = language
        self.marker = marker
        self.buffer = buffer if buffer else template_for(language)
        self._latest_token = 0
        self._merge_lock = asyncio.Lock()

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def _issue_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def is_stale(self, token: int) -> bool:
        return token != self._latest_token

    async def codeify(
        self,
        surface: StrokeSurface,
        use_remote: bool = USE_REMOTE_OCR,
        options: OcrOptions = CODE_RECOGNITION_OPTIONS,
    ) -> StageResult:
        """
        Recognize the surface and merge the code into the buffer

        Returns:
            StageResult with the new buffer, the failure, or a discarded
            (stale) result
        """
        token = self._issue_token()
        result = await self.pipeline.recognize(surface, use_remote, options)
        result.data["token"] = token

        if self.is_stale(token):
            print(f"[Session] 오래된 인식 결과 무시 (token={token}, latest={self._latest_token})")
            return StageResult(
                success=False,
                message="Discarded stale recognition result",
                data={"token": token, "stale": True},
                diagnostics=result.diagnostics,
            )

        if not result.success:
            return result

        async with self._merge_lock:
            self.buffer = merge(self.buffer, result.data["reconstructed_text"], self.marker)

        result.data["state"] = WorkflowState.MERGED
        result.data["buffer"] = self.buffer
        return result

    async def run(self) -> StageResult:
        """
        Execute the current buffer with the session language

        Returns:
            StageResult with output, or the UnsupportedLanguageError/ExecutionError
        """
        if self.executor is None:
            raise ValueError("No executor configured for this session")

        script = self.buffer
        try:
            execution = await self.executor.execute(script, self.language)
        except (UnsupportedLanguageError, ExecutionError) as e:
            return StageResult.fail(e, language=self.language)

        return StageResult.ok(
            "Execution completed",
            output=execution.output,
            execution=execution,
            language=self.language,
        )

    def select_language(self, language_key: str) -> str:
        """
        Switch language and reset the buffer to its template

        Raises:
            UnsupportedLanguageError: unknown language key
        """
        template = template_for(language_key)
        self.language = language_key
        self.buffer = template
        return self.buffer

    def clear(self) -> str:
        """Reset the buffer to the current language template"""
        self.buffer = template_for(self.language)
        return self.buffer


def describe_failure(result: StageResult) -> str:
    """User-facing message for a failed result"""
    if result.success:
        return ""
    if isinstance(result.error, CodeScribeError):
        return f"Error: {result.error}"
    return f"Error: {result.message}"
