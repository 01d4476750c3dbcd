"""
FastAPI 메인 애플리케이션

- 파일: POST /files, GET /files, GET /files/{file_id}, DELETE /files/{file_id}, PUT /files/{file_id}/script
- 인식: POST /files/{file_id}/codeify, POST /reconstruct
- 실행: POST /files/{file_id}/execute
"""

from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.database import get_db, init_db
from app.repositories import SqlCodeFileRepository
from app.services import CodeifyService, FileService
from core.base import StrokeSurface
from core.config import MAX_SURFACE_EXTENT, USE_REMOTE_OCR
from core.indentation import reconstruct
from core.jdoodle_client import JDoodleClient
from core.languages import DEFAULT_LANGUAGE, resolve_language, supported_languages
from core.ocr import build_default_registry
from core.types import (
    CaptureError,
    ExecutionError,
    RecognitionError,
    UnsupportedLanguageError,
)
from core.workflow import CodeifyPipeline, describe_failure

# FastAPI 앱 생성
app = FastAPI(
    title="CodeScribe API",
    description="손글씨 코드 인식 → 들여쓰기 복원 → 실행 API",
    version="1.0.0"
)


# ============================================================================
# Request/Response Models
# ============================================================================

class StrokeModel(BaseModel):
    """펜 획"""
    points: List[List[float]]
    width: float = 2.0
    color: List[int] = Field(default_factory=lambda: [0, 0, 0])


class SurfaceModel(BaseModel):
    """캔버스 (크기 + 획 목록)"""
    width: float = Field(gt=0, le=MAX_SURFACE_EXTENT)
    height: float = Field(gt=0, le=MAX_SURFACE_EXTENT)
    strokes: List[StrokeModel] = Field(default_factory=list)

    def to_surface(self) -> StrokeSurface:
        return StrokeSurface.from_dict(self.model_dump())


class CreateFileRequest(BaseModel):
    name: str


class UpdateScriptRequest(BaseModel):
    script: str


class ReconstructRequest(BaseModel):
    text: str


class CodeifyRequest(BaseModel):
    surface: SurfaceModel
    use_remote: bool = USE_REMOTE_OCR
    language: str = DEFAULT_LANGUAGE


class ExecuteRequest(BaseModel):
    language: str = DEFAULT_LANGUAGE


class CodeFileResponse(BaseModel):
    id: str
    name: str
    script: str
    has_drawing: bool


class CodeifyResponse(BaseModel):
    file_id: str
    recognized_text: str
    reconstructed_text: str
    script: str


class ExecuteResponse(BaseModel):
    file_id: str
    language: str
    output: str


# ============================================================================
# Dependencies
# ============================================================================

_codeify_service: Optional[CodeifyService] = None


def get_file_service(db: Session = Depends(get_db)) -> FileService:
    return FileService(SqlCodeFileRepository(db))


def get_codeify_service() -> CodeifyService:
    """기본 인식/실행 서비스 (JDoodle 자격 증명이 없으면 실행 비활성화)"""
    global _codeify_service
    if _codeify_service is None:
        try:
            executor = JDoodleClient()
        except ValueError as e:
            print(f"[API] 코드 실행 비활성화: {e}")
            executor = None
        pipeline = CodeifyPipeline(build_default_registry())
        _codeify_service = CodeifyService(pipeline, executor)
    return _codeify_service


def _require_language(language: str) -> None:
    try:
        resolve_language(language)
    except UnsupportedLanguageError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ============================================================================
# Startup/Shutdown Events
# ============================================================================

@app.on_event("startup")
def startup_event():
    """앱 시작 시 데이터베이스 초기화"""
    init_db()
    print("✅ 데이터베이스 초기화 완료")


# ============================================================================
# API Endpoints
# ============================================================================

@app.post("/files", response_model=CodeFileResponse)
def create_file(request: CreateFileRequest, files: FileService = Depends(get_file_service)):
    """새 파일 생성"""
    try:
        file = files.create_file(request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return file.to_dict()


@app.get("/files", response_model=List[CodeFileResponse])
def list_files(files: FileService = Depends(get_file_service)):
    """모든 파일 조회"""
    return [f.to_dict() for f in files.list_files()]


@app.get("/files/{file_id}", response_model=CodeFileResponse)
def get_file(file_id: str, files: FileService = Depends(get_file_service)):
    """파일 조회"""
    file = files.get_file(file_id)
    if not file:
        raise HTTPException(status_code=404, detail=f"File not found: {file_id}")
    return file.to_dict()


@app.put("/files/{file_id}/script", response_model=CodeFileResponse)
def update_script(file_id: str, request: UpdateScriptRequest, files: FileService = Depends(get_file_service)):
    """스크립트 저장 (직접 편집)"""
    file = files.update_script(file_id, request.script)
    if not file:
        raise HTTPException(status_code=404, detail=f"File not found: {file_id}")
    return file.to_dict()


@app.delete("/files/{file_id}")
def delete_file(file_id: str, files: FileService = Depends(get_file_service)):
    """파일 삭제"""
    if not files.delete_file(file_id):
        raise HTTPException(status_code=404, detail=f"File not found: {file_id}")
    return {"message": f"File deleted: {file_id}"}


@app.post("/reconstruct")
def reconstruct_text(request: ReconstructRequest):
    """인식된 텍스트 → 들여쓰기 복원"""
    return {"code": reconstruct(request.text)}


@app.post("/files/{file_id}/codeify", response_model=CodeifyResponse)
async def codeify_file(
    file_id: str,
    request: CodeifyRequest,
    files: FileService = Depends(get_file_service),
    service: CodeifyService = Depends(get_codeify_service),
):
    """
    캔버스 인식 → 스크립트 병합 → 저장
    """
    _require_language(request.language)
    try:
        surface = request.surface.to_surface()
        result = await service.codeify_file(
            files, file_id, surface,
            use_remote=request.use_remote,
            language=request.language,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail=f"File not found: {file_id}")
    if not result.success:
        if isinstance(result.error, (CaptureError, RecognitionError)):
            raise HTTPException(status_code=422, detail=describe_failure(result))
        raise HTTPException(status_code=500, detail=describe_failure(result))

    return CodeifyResponse(
        file_id=file_id,
        recognized_text=result.data["recognized_text"],
        reconstructed_text=result.data["reconstructed_text"],
        script=result.data["buffer"],
    )


@app.post("/files/{file_id}/execute", response_model=ExecuteResponse)
async def execute_file(
    file_id: str,
    request: ExecuteRequest,
    files: FileService = Depends(get_file_service),
    service: CodeifyService = Depends(get_codeify_service),
):
    """
    파일 스크립트 실행
    """
    _require_language(request.language)
    try:
        result = await service.execute_file(files, file_id, request.language)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail=f"File not found: {file_id}")
    if not result.success:
        if isinstance(result.error, UnsupportedLanguageError):
            raise HTTPException(status_code=400, detail=describe_failure(result))
        if isinstance(result.error, ExecutionError):
            raise HTTPException(status_code=502, detail=describe_failure(result))
        raise HTTPException(status_code=500, detail=describe_failure(result))

    return ExecuteResponse(file_id=file_id, language=request.language, output=result.data["output"])


@app.get("/languages")
def list_languages():
    """지원 언어 목록"""
    return {"languages": supported_languages(), "default": DEFAULT_LANGUAGE}


@app.get("/")
def root():
    """API 루트"""
    return {
        "message": "CodeScribe API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": [
            "POST /files - 파일 생성",
            "GET /files - 모든 파일 조회",
            "GET /files/{file_id} - 파일 조회",
            "PUT /files/{file_id}/script - 스크립트 저장",
            "DELETE /files/{file_id} - 파일 삭제",
            "POST /reconstruct - 들여쓰기 복원",
            "POST /files/{file_id}/codeify - 캔버스 인식 후 병합",
            "POST /files/{file_id}/execute - 코드 실행",
            "GET /languages - 지원 언어",
        ]
    }


# ============================================================================
# 실행
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
