"""
Tests for core/jdoodle_client.py and core/languages.py
"""

import asyncio
import json

import aiohttp
import pytest

from core.jdoodle_client import JDoodleClient, parse_execution_response
from core.languages import LANGUAGES, resolve_language, supported_languages, template_for
from core.types import ExecutionError, ExecutionFailure, UnsupportedLanguageError

from tests.fakes import FakeSession


def make_client(*responses) -> tuple:
    session = FakeSession(*responses)
    return JDoodleClient(client_id="id", client_secret="secret", session=session), session


class TestLanguages:
    def test_execution_mapping(self):
        expected = {
            "Python 3": ("python3", "3"),
            "Java": ("java", "4"),
            "C": ("c", "5"),
            "C++": ("cpp17", "0"),
            "JavaScript": ("nodejs", "4"),
        }
        actual = {key: (s.language_id, s.version_index) for key, s in LANGUAGES.items()}
        assert actual == expected

    def test_templates_contain_marker(self):
        for key in supported_languages():
            assert "Your code starts here" in template_for(key)

    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            resolve_language("Cobol")
        assert exc_info.value.language_key == "Cobol"


class TestExecute:
    def test_success(self):
        body = json.dumps({"output": "Hello, World!\n", "statusCode": 200, "memory": "7680", "cpuTime": "0.01"})
        client, session = make_client((200, body))

        result = asyncio.run(client.execute("print('Hello, World!')", "Python 3"))

        assert result.output == "Hello, World!\n"
        assert result.status_code == 200
        assert result.cpu_time == "0.01"
        assert len(session.calls) == 1
        assert session.calls[0]["json"] == {
            "clientId": "id",
            "clientSecret": "secret",
            "script": "print('Hello, World!')",
            "language": "python3",
            "versionIndex": "3",
        }

    def test_language_parameters(self):
        client, session = make_client((200, '{"output": ""}'))
        asyncio.run(client.execute("int main(){}", "C++"))
        assert session.calls[0]["json"]["language"] == "cpp17"
        assert session.calls[0]["json"]["versionIndex"] == "0"

    def test_unsupported_language_makes_no_call(self):
        client, session = make_client()
        with pytest.raises(UnsupportedLanguageError):
            asyncio.run(client.execute("x", "Unknown Language"))
        assert len(session.calls) == 0

    def test_bad_status(self):
        client, session = make_client((401, '{"error": "Unauthorized"}'))
        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(client.execute("x", "Python 3"))
        assert exc_info.value.kind == ExecutionFailure.BAD_STATUS
        assert exc_info.value.status == 401

    def test_missing_output(self):
        client, _ = make_client((200, '{"error": "quota"}'))
        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(client.execute("x", "Python 3"))
        assert exc_info.value.kind == ExecutionFailure.MALFORMED_RESPONSE

    def test_non_json(self):
        client, _ = make_client((200, "oops"))
        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(client.execute("x", "Python 3"))
        assert exc_info.value.kind == ExecutionFailure.MALFORMED_RESPONSE

    def test_undecodable_body(self):
        client, _ = make_client((200, b'{"output": "\xff\xfe"}'))
        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(client.execute("x", "Python 3"))
        assert exc_info.value.kind == ExecutionFailure.MALFORMED_RESPONSE

    def test_network_failure_single_attempt(self):
        client, session = make_client(aiohttp.ClientConnectionError("refused"))
        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(client.execute("x", "Java"))
        assert exc_info.value.kind == ExecutionFailure.NETWORK
        assert str(exc_info.value).startswith("network:")
        assert len(session.calls) == 1


class TestClientConfig:
    def test_missing_credentials(self):
        with pytest.raises(ValueError):
            JDoodleClient()

    def test_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("JDOODLE_CLIENT_ID", "env-id")
        monkeypatch.setenv("JDOODLE_CLIENT_SECRET", "env-secret")
        client = JDoodleClient()
        assert client.client_id == "env-id"
        assert client.client_secret == "env-secret"


class TestParseResponse:
    def test_output_must_be_string(self):
        with pytest.raises(ExecutionError):
            parse_execution_response({"output": 42})
        with pytest.raises(ExecutionError):
            parse_execution_response(["output"])

    def test_optional_fields(self):
        result = parse_execution_response({"output": "ok"})
        assert result.output == "ok"
        assert result.memory is None
        assert result.status_code is None
