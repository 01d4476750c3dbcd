"""
CodeFile 모델

- CodeFile: 도메인 엔티티 {id, name, script, canvas_drawing?}
- CodeFileRecord: SQLAlchemy ORM 행
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, LargeBinary, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


@dataclass
class CodeFile:
    """
    코드 파일 (id는 생성 후 변경되지 않음)
    """
    id: str
    name: str
    script: str = ""
    canvas_drawing: Optional[bytes] = None

    @staticmethod
    def new(name: str) -> 'CodeFile':
        """빈 파일 생성 (UUID 발급)"""
        return CodeFile(id=str(uuid.uuid4()), name=name)

    def to_dict(self):
        """Dict 변환 (API 응답용)"""
        return {
            "id": self.id,
            "name": self.name,
            "script": self.script,
            "has_drawing": self.canvas_drawing is not None,
        }


class CodeFileRecord(Base):
    """
    CodeFile 저장 행
    """
    __tablename__ = "code_files"

    id = Column(String, primary_key=True, index=True)  # UUID
    name = Column(String, nullable=False)
    script = Column(Text, nullable=False, default="")
    canvas_drawing = Column(LargeBinary, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<CodeFileRecord(id={self.id}, name={self.name})>"

    def to_entity(self) -> CodeFile:
        return CodeFile(
            id=self.id,
            name=self.name,
            script=self.script or "",
            canvas_drawing=self.canvas_drawing,
        )

    def apply(self, file: CodeFile) -> None:
        """엔티티 값 반영 (id 제외)"""
        self.name = file.name
        self.script = file.script
        self.canvas_drawing = file.canvas_drawing
