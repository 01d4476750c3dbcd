"""
File Service (코드 파일 관리)
"""

from typing import List, Optional

from app.models import CodeFile
from app.repositories import CodeFileRepository
from core.base import StrokeSurface
from core.languages import DEFAULT_LANGUAGE, template_for


class FileService:
    """
    코드 파일 관리 서비스

    비즈니스 로직:
    - 파일 생성/조회/이름 변경/삭제
    - 스크립트, 캔버스 그림 갱신
    """

    def __init__(self, repository: CodeFileRepository):
        self.repo = repository

    def create_file(self, name: str) -> CodeFile:
        """
        새 파일 생성 (빈 스크립트)

        Raises:
            ValueError: 이름이 비어 있음
        """
        if not name or not name.strip():
            raise ValueError("File name must not be empty")
        return self.repo.put(CodeFile.new(name.strip()))

    def get_file(self, file_id: str) -> Optional[CodeFile]:
        """파일 조회"""
        return self.repo.get(file_id)

    def list_files(self) -> List[CodeFile]:
        """모든 파일 조회"""
        return self.repo.list_all()

    def delete_file(self, file_id: str) -> bool:
        """파일 삭제"""
        return self.repo.delete(file_id)

    def rename_file(self, file_id: str, name: str) -> Optional[CodeFile]:
        """이름 변경 (id는 유지)"""
        if not name or not name.strip():
            raise ValueError("File name must not be empty")
        file = self.repo.get(file_id)
        if file is None:
            return None
        file.name = name.strip()
        return self.repo.put(file)

    def update_script(self, file_id: str, script: str) -> Optional[CodeFile]:
        """스크립트 저장"""
        file = self.repo.get(file_id)
        if file is None:
            return None
        file.script = script
        return self.repo.put(file)

    def update_drawing(self, file_id: str, surface: Optional[StrokeSurface]) -> Optional[CodeFile]:
        """캔버스 그림 저장 (None이면 삭제)"""
        file = self.repo.get(file_id)
        if file is None:
            return None
        file.canvas_drawing = surface.to_bytes() if surface is not None else None
        return self.repo.put(file)

    def load_drawing(self, file_id: str) -> Optional[StrokeSurface]:
        """저장된 캔버스 그림 복원"""
        file = self.repo.get(file_id)
        if file is None or file.canvas_drawing is None:
            return None
        return StrokeSurface.from_bytes(file.canvas_drawing)


def initial_script(file: CodeFile, language: str = DEFAULT_LANGUAGE) -> str:
    """편집 시작 시 스크립트 (비어 있으면 언어 템플릿)"""
    return file.script if file.script else template_for(language)
