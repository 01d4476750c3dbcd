"""
CodeFile Repository (키-값 저장소 기반)

모든 파일을 JSON 배열 하나로 직렬화해 단일 키에 저장하는 외부 포맷:

    [{"id": ..., "name": ..., "script": ..., "canvasDrawing": <base64>?}, ...]

직렬화는 encode_records / decode_records 경계에서만 처리
"""

import base64
import json
from typing import Dict, List, MutableMapping, Optional, Union

from app.models import CodeFile
from core.types import PersistenceError
from .base import CodeFileRepository

SAVED_FILES_KEY = "savedFiles"


def encode_records(files: List[CodeFile]) -> bytes:
    """CodeFile 목록 → JSON 배열 바이트"""
    records = []
    for f in files:
        record = {"id": f.id, "name": f.name, "script": f.script}
        if f.canvas_drawing is not None:
            record["canvasDrawing"] = base64.b64encode(f.canvas_drawing).decode("ascii")
        records.append(record)
    return json.dumps(records).encode("utf-8")


def decode_records(blob: Union[bytes, str]) -> List[CodeFile]:
    """
    JSON 배열 → CodeFile 목록

    Raises:
        PersistenceError: JSON이 아니거나 필수 필드가 없음
    """
    try:
        records = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PersistenceError("Saved files are not valid JSON", cause=e)

    if not isinstance(records, list):
        raise PersistenceError("Saved files must be a JSON array")

    files = []
    for record in records:
        if not isinstance(record, dict) or not all(
            isinstance(record.get(name), str) for name in ("id", "name", "script")
        ):
            raise PersistenceError(f"Malformed file record: {record!r}")

        drawing = record.get("canvasDrawing")
        try:
            canvas_drawing = base64.b64decode(drawing, validate=True) if drawing is not None else None
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed canvasDrawing in record {record['id']!r}", cause=e)

        files.append(CodeFile(
            id=record["id"],
            name=record["name"],
            script=record["script"],
            canvas_drawing=canvas_drawing,
        ))
    return files


class KeyValueCodeFileRepository(CodeFileRepository):
    """
    단일 키 JSON blob 저장소

    store: dict 호환 키-값 저장소 (UserDefaults 등)
    """

    def __init__(self, store: MutableMapping[str, bytes], key: str = SAVED_FILES_KEY):
        self.store = store
        self.key = key

    def _load(self) -> Dict[str, CodeFile]:
        blob = self.store.get(self.key)
        if not blob:
            return {}
        return {f.id: f for f in decode_records(blob)}

    def _save(self, files: Dict[str, CodeFile]) -> None:
        self.store[self.key] = encode_records(list(files.values()))

    def get(self, file_id: str) -> Optional[CodeFile]:
        return self._load().get(file_id)

    def put(self, file: CodeFile) -> CodeFile:
        files = self._load()
        files[file.id] = file
        self._save(files)
        return file

    def delete(self, file_id: str) -> bool:
        files = self._load()
        if file_id not in files:
            return False
        del files[file_id]
        self._save(files)
        return True

    def list_all(self) -> List[CodeFile]:
        return list(self._load().values())
