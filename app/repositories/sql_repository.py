"""
CodeFile Repository (SQLite 기반)
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models import CodeFile, CodeFileRecord
from .base import CodeFileRepository


class SqlCodeFileRepository(CodeFileRepository):
    """
    SQLAlchemy 세션을 통한 CodeFile 영속성 관리
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    def _find(self, file_id: str) -> Optional[CodeFileRecord]:
        return self.db.query(CodeFileRecord).filter(CodeFileRecord.id == file_id).first()

    def get(self, file_id: str) -> Optional[CodeFile]:
        record = self._find(file_id)
        return record.to_entity() if record else None

    def put(self, file: CodeFile) -> CodeFile:
        record = self._find(file.id)
        if record is None:
            record = CodeFileRecord(id=file.id)
            self.db.add(record)
        record.apply(file)
        self.db.commit()
        self.db.refresh(record)
        return record.to_entity()

    def delete(self, file_id: str) -> bool:
        record = self._find(file_id)
        if record:
            self.db.delete(record)
            self.db.commit()
            return True
        return False

    def list_all(self) -> List[CodeFile]:
        records = self.db.query(CodeFileRecord).order_by(CodeFileRecord.created_at).all()
        return [r.to_entity() for r in records]
