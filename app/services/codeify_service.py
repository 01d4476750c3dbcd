"""
Codeify Service (인식 → 병합 → 저장, 실행)

core/workflow.py 파이프라인을 호출해 파일 단위로 실제 작업 수행
"""

import asyncio
import weakref
from typing import Optional

from app.services.file_service import FileService, initial_script
from core.base import StrokeSurface
from core.config import USE_REMOTE_OCR
from core.jdoodle_client import JDoodleClient
from core.languages import DEFAULT_LANGUAGE
from core.types import StageResult
from core.workflow import CodeifyPipeline, EditingSession


class CodeifyService:
    """
    파일 단위 인식/실행 서비스

    같은 파일에 대한 요청은 파일별 Lock으로 직렬화 (버퍼 단일 writer)
    Lock은 요청이 잡고 있는 동안만 유지됨
    실패한 요청은 저장된 파일을 변경하지 않음
    """

    def __init__(self, pipeline: CodeifyPipeline, executor: Optional[JDoodleClient] = None):
        self.pipeline = pipeline
        self.executor = executor
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, file_id: str) -> asyncio.Lock:
        lock = self._locks.get(file_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[file_id] = lock
        return lock

    async def codeify_file(
        self,
        files: FileService,
        file_id: str,
        surface: StrokeSurface,
        use_remote: bool = USE_REMOTE_OCR,
        language: str = DEFAULT_LANGUAGE,
    ) -> Optional[StageResult]:
        """
        캔버스 인식 결과를 파일 스크립트에 병합

        워크플로우:
        1. 파일 로드 (스크립트가 비어 있으면 언어 템플릿)
        2. 인식 + 들여쓰기 복원 + 병합
        3. 성공 시 스크립트와 그림 저장

        Returns:
            StageResult (파일이 없으면 None)
        """
        if files.get_file(file_id) is None:
            return None

        async with self._lock_for(file_id):
            # 대기 중 삭제되었을 수 있음
            file = files.get_file(file_id)
            if file is None:
                return None

            session = EditingSession(
                self.pipeline,
                buffer=initial_script(file, language),
                language=language,
            )
            result = await session.codeify(surface, use_remote)
            if not result.success:
                return result

            files.update_script(file_id, session.buffer)
            files.update_drawing(file_id, surface)
            return result

    async def execute_file(
        self,
        files: FileService,
        file_id: str,
        language: str = DEFAULT_LANGUAGE,
    ) -> Optional[StageResult]:
        """
        파일 스크립트 실행

        Returns:
            StageResult (파일이 없으면 None)
        """
        file = files.get_file(file_id)
        if file is None:
            return None

        session = EditingSession(
            self.pipeline,
            executor=self.executor,
            buffer=initial_script(file, language),
            language=language,
        )
        return await session.run()
