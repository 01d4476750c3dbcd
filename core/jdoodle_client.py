"""
JDoodle API 비동기 클라이언트

코드 실행 요청 1회 (재시도 없음, 전송 계층 기본 타임아웃)
"""

import asyncio
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp
from dotenv import load_dotenv

from .config import JDOODLE_ENDPOINT
from .languages import LanguageSpec, resolve_language
from .types import ExecutionError, ExecutionFailure

load_dotenv()


@dataclass
class ExecutionRequest:
    """실행 요청"""
    script: str
    language: str
    version_index: str

    @staticmethod
    def for_language(script: str, spec: LanguageSpec) -> 'ExecutionRequest':
        return ExecutionRequest(script, spec.language_id, spec.version_index)


@dataclass
class ExecutionResult:
    """실행 결과 (output은 항상 존재, 나머지는 응답에 있을 때만)"""
    output: str
    status_code: Optional[int] = None
    memory: Optional[str] = None
    cpu_time: Optional[str] = None


def parse_execution_response(payload: Any) -> ExecutionResult:
    """
    응답 JSON → ExecutionResult

    Raises:
        ExecutionError(MALFORMED_RESPONSE): output 필드 없음
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("output"), str):
        raise ExecutionError(ExecutionFailure.MALFORMED_RESPONSE, "Unexpected response format")

    memory = payload.get("memory")
    cpu_time = payload.get("cpuTime")
    return ExecutionResult(
        output=payload["output"],
        status_code=payload.get("statusCode"),
        memory=str(memory) if memory is not None else None,
        cpu_time=str(cpu_time) if cpu_time is not None else None,
    )


class JDoodleClient:
    """
    JDoodle API 비동기 클라이언트

    1. 언어 키 확인 (실패 시 네트워크 호출 없음)
    2. POST /v1/execute
    3. 응답 검증 (HTTP 200 + output 필드)
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        endpoint: str = JDOODLE_ENDPOINT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.client_id = client_id or os.getenv('JDOODLE_CLIENT_ID')
        self.client_secret = client_secret or os.getenv('JDOODLE_CLIENT_SECRET')
        self.endpoint = endpoint
        self._session = session

        if not self.client_id or not self.client_secret:
            raise ValueError("JDoodle API credentials not found")

    def build_body(self, request: ExecutionRequest) -> Dict[str, str]:
        return {
            "clientId": self.client_id,
            "clientSecret": self.client_secret,
            "script": request.script,
            "language": request.language,
            "versionIndex": request.version_index,
        }

    async def _post(self, session: aiohttp.ClientSession, body: dict) -> tuple[int, bytes]:
        async with session.post(
            self.endpoint,
            json=body,
            headers={"Content-Type": "application/json"},
        ) as resp:
            return resp.status, await resp.read()

    async def send(self, request: ExecutionRequest) -> ExecutionResult:
        """
        실행 요청 전송

        Raises:
            ExecutionError: network / bad-status / malformed-response
        """
        body = self.build_body(request)

        try:
            if self._session is not None:
                status, body_bytes = await self._post(self._session, body)
            else:
                async with aiohttp.ClientSession() as session:
                    status, body_bytes = await self._post(session, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            print(f"[JDoodle] 요청 실패: {e}")
            raise ExecutionError(ExecutionFailure.NETWORK, "Request failed", cause=e)

        if status != 200:
            print(f"[JDoodle] 응답 상태 {status}")
            raise ExecutionError(
                ExecutionFailure.BAD_STATUS,
                f"Invalid response from server (status {status})",
                status=status,
            )

        try:
            payload = json.loads(body_bytes)
        except ValueError as e:
            raise ExecutionError(ExecutionFailure.MALFORMED_RESPONSE, "Response is not JSON", cause=e)

        return parse_execution_response(payload)

    async def execute(self, script: str, language_key: str) -> ExecutionResult:
        """
        코드 실행

        Args:
            script: 실행할 코드
            language_key: "Python 3", "Java", "C", "C++", "JavaScript"

        Raises:
            UnsupportedLanguageError: 언어 키가 매핑에 없음 (네트워크 호출 없음)
            ExecutionError: 전송/응답 실패
        """
        spec = resolve_language(language_key)
        return await self.send(ExecutionRequest.for_language(script, spec))
