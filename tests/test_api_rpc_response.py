import pytest

from routerpc.api.rpc.response import BufferedResponse


def test_send_json_encodes_and_renders():
    res = BufferedResponse()
    res.set_status(200).send_json({"a": 1})
    assert res.json() == {"a": 1}
    rendered = res.to_starlette()
    assert rendered.status_code == 200
    assert rendered.body == b'{"a": 1}'
    assert rendered.media_type == "application/json"


def test_send_empty():
    res = BufferedResponse()
    res.set_status(204).send_empty()
    assert res.content == b""
    assert res.json() is None
    assert res.to_starlette().status_code == 204


def test_send_raw():
    res = BufferedResponse()
    res.set_status(405).send_raw("Method Not Allowed")
    assert res.text() == "Method Not Allowed"
    assert res.media_type.startswith("text/plain")


def test_unencodable_json_does_not_mark_sent():
    res = BufferedResponse()
    with pytest.raises(TypeError):
        res.send_json({"f": object()})
    assert res.sent is False
    res.send_json({"ok": True})
    assert res.json() == {"ok": True}


def test_second_send_is_rejected():
    res = BufferedResponse()
    res.send_empty()
    with pytest.raises(RuntimeError):
        res.send_raw("again")
