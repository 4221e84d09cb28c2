"""
Tests for the JSON-RPC completion service.
"""

import io
import json
from unittest.mock import patch

import pytest

from conftest import WIDGETS_TXT, cursor_after, with_namespaces
from layoutassist.config import Config
from layoutassist.lsp.protocol import LSPErrorCodes
from layoutassist.service import CompletionService


@pytest.fixture
def service(provider):
    return CompletionService(provider=provider)


def complete_request(text, marker, request_id=1):
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "complete",
        "params": {"content": text, "offset": cursor_after(text, marker)},
    }


class TestHandleRequest:
    def test_complete(self, service):
        text = with_namespaces("LinearLayout", "<Button android:buttonT")

        response = service.handle_request(complete_request(text, "android:buttonT"))

        assert response["id"] == 1
        items = response["result"]["items"]
        assert items[0]["label"] == "buttonTint"
        assert items[0]["insertText"] == 'android:buttonTint="$0"'

    def test_complete_with_cursor_position(self, service):
        text = with_namespaces("LinearLayout", "<Button android:buttonT")
        line = text.splitlines()[1]
        request = {
            "id": 7,
            "method": "complete",
            "params": {"content": text, "cursor": {"line": 1, "character": len(line)}},
        }

        response = service.handle_request(request)

        assert response["result"]["items"][0]["label"] == "buttonTint"

    def test_invalid_offset_is_invalid_params(self, service):
        text = with_namespaces("LinearLayout", "<Button />")
        request = {"id": 2, "method": "complete", "params": {"content": text, "offset": 1}}

        response = service.handle_request(request)

        assert response["error"]["code"] == LSPErrorCodes.InvalidParams
        assert response["id"] == 2

    def test_missing_content(self, service):
        response = service.handle_request({"id": 3, "method": "complete", "params": {"offset": 0}})

        assert response["error"]["code"] == LSPErrorCodes.InvalidParams

    def test_unknown_method(self, service):
        response = service.handle_request({"id": 4, "method": "format"})

        assert response["error"]["code"] == LSPErrorCodes.MethodNotFound

    def test_non_object_request(self, service):
        response = service.handle_request(["complete"])

        assert response["error"]["code"] == LSPErrorCodes.InvalidRequest

    def test_ping(self, service):
        assert service.handle_request({"id": 5, "method": "ping"})["result"] == {"status": "ok"}

    def test_stats(self, service):
        text = with_namespaces("LinearLayout", "<Button android:te")
        service.handle_request(complete_request(text, "android:te"))

        stats = service.handle_request({"id": 6, "method": "getStats"})["result"]

        assert stats["widgets"] == 7
        assert stats["tables"] == 2
        assert stats["requests_served"] == 1

    def test_reload_failure_keeps_provider(self, service, tmp_path):
        service.config.widgets_path = str(tmp_path / "missing.txt")
        previous = service.provider

        result = service.handle_request({"id": 8, "method": "reload"})["result"]

        assert result["status"] == "error"
        assert service.provider is previous

    def test_reload_keeps_configured_paths(self, tmp_path, monkeypatch):
        for name in ("WIDGETS", "PLATFORM_RES", "MODULE_RES"):
            monkeypatch.delenv(f"LAYOUTASSIST_{name}", raising=False)
        widgets = tmp_path / "widgets.txt"
        widgets.write_text(WIDGETS_TXT, encoding="utf-8")
        config = Config()
        # Set the way command line options are applied
        config.widgets_path = str(widgets)
        service = CompletionService(config=config)

        result = service.handle_request({"id": 10, "method": "reload"})["result"]

        assert result == {"status": "ok", "widgets": 7}
        assert len(service.provider.widgets) == 7


class TestRunLoop:
    def test_one_response_per_line(self, service):
        text = with_namespaces("LinearLayout", "<Button android:buttonT")
        lines = [
            json.dumps(complete_request(text, "android:buttonT", request_id=1)),
            "",
            "{not json",
            json.dumps({"id": 2, "method": "ping"}),
        ]
        stdin = io.StringIO("\n".join(lines) + "\n")
        stdout = io.StringIO()

        service.run(stdin=stdin, stdout=stdout)

        responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
        assert len(responses) == 3
        assert responses[0]["result"]["items"][0]["label"] == "buttonTint"
        assert responses[1]["error"]["code"] == LSPErrorCodes.ParseError
        assert responses[2]["result"] == {"status": "ok"}


class TestInternalErrors:
    def test_unexpected_failure_is_internal_error(self, service):
        text = with_namespaces("LinearLayout", "<Button android:te")

        with patch.object(service.provider, "complete", side_effect=RuntimeError("boom")):
            response = service.handle_request(complete_request(text, "android:te", request_id=9))

        assert response["error"]["code"] == LSPErrorCodes.InternalError
        assert response["error"]["message"] == "boom"
        assert response["id"] == 9
