"""
CodeFile Repository 인터페이스

저장 방식(SQLite, 키-값 저장소)과 무관하게 id 기준 get/put/delete 제공
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.models import CodeFile


class CodeFileRepository(ABC):
    """CodeFile 저장소 추상 인터페이스"""

    @abstractmethod
    def get(self, file_id: str) -> Optional[CodeFile]:
        """id로 조회 (없으면 None)"""
        pass

    @abstractmethod
    def put(self, file: CodeFile) -> CodeFile:
        """저장 (같은 id가 있으면 덮어씀)"""
        pass

    @abstractmethod
    def delete(self, file_id: str) -> bool:
        """삭제 (삭제했으면 True)"""
        pass

    @abstractmethod
    def list_all(self) -> List[CodeFile]:
        """모든 파일 조회"""
        pass
