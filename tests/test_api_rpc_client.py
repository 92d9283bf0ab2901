import json

import httpx
import pytest

from routerpc.api.rpc.client import RouteClient, create_route_client
from routerpc.utils.exceptions import ErrorCategory, RPCError


def _client(handler, url="http://rpc.test/api/x", method="POST", **kwargs) -> RouteClient:
    return create_route_client(url, method, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_success_returns_parsed_json():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"sum": 3})

    result = await _client(handler)({"a": 1, "b": 2})
    assert result == {"sum": 3}
    assert seen == {"method": "POST", "content_type": "application/json", "body": {"a": 1, "b": 2}}


@pytest.mark.asyncio
async def test_no_body_is_sent_when_absent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.content == b""
        return httpx.Response(200, json="Hello, World!")

    assert await _client(handler, method="GET")() == "Hello, World!"


@pytest.mark.asyncio
async def test_falsy_body_is_still_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"echo": json.loads(request.content)})

    assert await _client(handler)(0) == {"echo": 0}


@pytest.mark.asyncio
async def test_no_content_returns_none():
    assert await _client(lambda request: httpx.Response(204))() is None


@pytest.mark.asyncio
async def test_url_supplier_is_evaluated_per_call():
    urls = iter(["http://rpc.test/one", "http://rpc.test/two"])
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json=None)

    client = _client(handler, url=lambda: next(urls))
    await client()
    await client()
    assert seen == ["/one", "/two"]


@pytest.mark.asyncio
async def test_relative_url_is_joined_to_base_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=1)

    await _client(handler, url="/api/hello", base_url="http://rpc.test/")()
    assert seen == ["http://rpc.test/api/hello"]


def test_request_options_carry_timeout_in_milliseconds():
    client = create_route_client("http://rpc.test/x", "PUT", 2.5)
    options = client.build_request_options({"a": 1})
    assert options["method"] == "PUT"
    assert options["timeout"] == 2500
    assert options["headers"]["Content-Type"] == "application/json"
    assert json.loads(options["content"]) == {"a": 1}
    assert "timeout" not in create_route_client("http://rpc.test/x").build_request_options(None)
    assert "content" not in create_route_client("http://rpc.test/x").build_request_options(None)


@pytest.mark.asyncio
async def test_timeout_reaches_transport_in_seconds():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.extensions["timeout"])
        return httpx.Response(200, json=True)

    assert await _client(handler, timeout_seconds=2.5)() is True
    assert seen["read"] == 2.5
    assert seen["connect"] == 2.5


@pytest.mark.asyncio
async def test_timed_out_call_is_a_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RPCError) as err:
        await _client(handler, timeout_seconds=0.01)()
    assert err.value.message == "timed out"
    assert err.value.category == ErrorCategory.TRANSPORT
    assert isinstance(err.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_404_raises_url_not_found():
    client = _client(lambda request: httpx.Response(404, text="no such route"))
    with pytest.raises(RPCError) as err:
        await client({"a": 1})
    assert err.value.code == 404
    assert err.value.message == "url not found: http://rpc.test/api/x"
    assert err.value.data == "no such route"
    assert err.value.category == ErrorCategory.CLIENT


@pytest.mark.asyncio
async def test_error_record_is_reconstructed():
    record = {"name": "RPCError", "message": "not yours", "code": 403, "data": {"owner": "someone"}}
    client = _client(lambda request: httpx.Response(403, json=record))
    with pytest.raises(RPCError) as err:
        await client()
    assert (err.value.message, err.value.code, err.value.data) == ("not yours", 403, {"owner": "someone"})


@pytest.mark.asyncio
async def test_error_record_without_code_takes_status():
    client = _client(lambda request: httpx.Response(500, json={"name": "RPCError", "message": "boom"}))
    with pytest.raises(RPCError) as err:
        await client()
    assert err.value.message == "boom"
    assert err.value.code == 500
    assert err.value.category == ErrorCategory.SERVER


@pytest.mark.asyncio
async def test_non_error_json_becomes_data():
    client = _client(lambda request: httpx.Response(422, json={"detail": "bad"}))
    with pytest.raises(RPCError) as err:
        await client()
    assert err.value.message == "Unknown Error"
    assert err.value.code == 422
    assert err.value.data == {"detail": "bad"}


@pytest.mark.asyncio
async def test_malformed_error_body_is_wrapped_as_data():
    client = _client(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))
    with pytest.raises(RPCError) as err:
        await client()
    assert err.value.code == 502
    assert err.value.data["responseText"] == "<html>bad gateway</html>"
    assert "parseError" in err.value.data
    assert err.value.category == ErrorCategory.TRANSPORT


@pytest.mark.asyncio
async def test_malformed_success_body_raises_rpc_error():
    client = _client(lambda request: httpx.Response(200, text="{oops"))
    with pytest.raises(RPCError) as err:
        await client()
    assert err.value.data["responseText"] == "{oops"
    assert err.value.category == ErrorCategory.TRANSPORT


@pytest.mark.asyncio
async def test_network_failure_is_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RPCError) as err:
        await _client(handler)()
    assert err.value.message == "connection refused"
    assert err.value.category == ErrorCategory.TRANSPORT
    assert isinstance(err.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_unencodable_body_is_normalized():
    client = _client(lambda request: httpx.Response(200, json=None))
    with pytest.raises(RPCError) as err:
        await client({"f": object()})
    assert isinstance(err.value.__cause__, TypeError)


@pytest.mark.asyncio
async def test_try_call_returns_tagged_results():
    ok_client = _client(lambda request: httpx.Response(200, json=[1, 2]))
    assert await ok_client.try_call() == (True, [1, 2], None)

    bad_client = _client(lambda request: httpx.Response(404, text="gone"))
    ok, value, error = await bad_client.try_call()
    assert ok is False
    assert value is None
    assert error == {
        "name": "RPCError",
        "message": "url not found: http://rpc.test/api/x",
        "code": 404,
        "data": "gone",
    }
