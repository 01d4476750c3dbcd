"""
Database 설정 (SQLite)
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.models import Base
from core.config import DATABASE_URL


def make_engine(url: str = DATABASE_URL):
    """
    Engine 생성

    in-memory SQLite는 연결 하나를 공유해야 테이블이 유지됨
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args)


engine = make_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """
    데이터베이스 초기화

    테이블 생성 (없을 경우)
    """
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Session:
    """
    데이터베이스 세션 가져오기 (FastAPI Depends용)

    Usage:
        @app.get("/files")
        def list_files(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
