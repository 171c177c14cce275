import sys
import os
import json
import asyncio
import httpx
import pytest

# Add backend to path so we can import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from qa.remote_client import DEFAULT_TIMEOUT_SECONDS, RemoteAnswerClient, RemoteMalformed, RemoteUnavailable


def completion_body(*contents):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {"index": i, "finish_reason": "stop", "message": {"role": "assistant", "content": c}}
            for i, c in enumerate(contents)
        ],
    }


def make_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RemoteAnswerClient(api_key="test-key", model="test-model", http_client=http_client)


def test_remote_success_returns_trimmed_content():
    """Verify that the first choice's content is returned without surrounding whitespace."""
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers.get("authorization")
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion_body("  I build Go services.  ", "ignored"))

    answer = asyncio.run(make_client(handler).ask("What do you build?"))
    assert answer == "I build Go services."
    assert seen["auth"] == "Bearer test-key"
    assert seen["path"].endswith("/chat/completions")

    messages = seen["body"]["messages"]
    assert [m["role"] for m in messages] == ["system", "system", "user"]
    assert messages[1]["content"].startswith("PROFILE: ")
    assert messages[2]["content"] == "What do you build?"
    assert seen["body"]["model"] == "test-model"


def test_remote_non_2xx_is_unavailable():
    """Verify that an error status maps to RemoteUnavailable."""
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "boom"}})

    with pytest.raises(RemoteUnavailable) as exc_info:
        asyncio.run(make_client(handler).ask("hello"))
    assert exc_info.value.status_code == 500


def test_remote_unauthorized_is_unavailable():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with pytest.raises(RemoteUnavailable):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_transport_error_is_unavailable():
    """Verify that a connection failure maps to RemoteUnavailable."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteUnavailable):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_zero_choices_is_malformed():
    """Verify that a 2xx response without choices maps to RemoteMalformed."""
    def handler(request):
        return httpx.Response(200, json=completion_body())

    with pytest.raises(RemoteMalformed):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_choices_not_a_list_is_malformed():
    """Verify that a choices object instead of a list maps to RemoteMalformed."""
    def handler(request):
        body = completion_body()
        body["choices"] = {"a": 1}
        return httpx.Response(200, json=body)

    with pytest.raises(RemoteMalformed):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_non_json_body_is_malformed():
    """Verify that a 2xx body that is not JSON maps to RemoteMalformed."""
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>", headers={"content-type": "text/html"})

    with pytest.raises(RemoteMalformed):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_timeout_is_unavailable():
    """Verify that a read timeout maps to RemoteUnavailable."""
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RemoteUnavailable):
        asyncio.run(make_client(handler).ask("hello"))


def test_remote_client_single_attempt_with_fixed_timeout():
    """Verify that the SDK client is built with the 18 second timeout and no retries."""
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(503, json={"error": {"message": "busy"}})

    client = make_client(handler)
    assert client._client.timeout == DEFAULT_TIMEOUT_SECONDS == 18.0
    assert client._client.max_retries == 0

    with pytest.raises(RemoteUnavailable):
        asyncio.run(client.ask("hello"))
    assert len(attempts) == 1
