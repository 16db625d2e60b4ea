"""
Tests for content-type based request decoding.
"""

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from store_crud.decoding import content_kind, decode, filter_flags
from store_crud.errors import MalformedPayloadError, UnknownContentError


@pytest.fixture
def client():
    """Create a client for an app that echoes decoded bodies."""
    app = FastAPI()

    async def run(request: Request):
        try:
            return {"data": await decode(request)}
        except UnknownContentError as e:
            return JSONResponse({"error": e.msg}, status_code=415)
        except MalformedPayloadError as e:
            return JSONResponse({"error": e.msg}, status_code=422)

    app.add_api_route("/decode", run, methods=["GET", "POST", "PUT"])
    return TestClient(app)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("application/json; charset=utf-8", "application/json"),
        ("multipart/form-data; boundary=xyz", "multipart/form-data"),
        ("text/plain", "text/plain"),
        ("application/json charset", "application/json"),
        ("", ""),
    ],
)
def test_filter_flags(header, expected):
    """Parameters after a space or semicolon are stripped."""
    assert filter_flags(header) == expected


def test_content_kind():
    """Media types are classified into json, form and xml families."""
    assert content_kind("application/json") == "json"
    assert content_kind("application/vnd.api+json") == "json"
    assert content_kind("Application/JSON") == "json"
    assert content_kind("multipart/form-data") == "form"
    assert content_kind("application/x-www-form-urlencoded") == "form"
    assert content_kind("text/xml") == "xml"
    assert content_kind("application/what-the-hell") is None


def test_vendor_json_content_type(client):
    """A +json vendor media type decodes as JSON."""
    response = client.post(
        "/decode",
        content=b'{"hello": "world"}',
        headers={"Content-Type": "application/vid.api+json"},
    )
    assert response.status_code == 200
    assert response.json() == {"data": {"hello": "world"}}


def test_json_with_charset(client):
    """Content-Type parameters do not affect dispatch."""
    response = client.put(
        "/decode",
        content=b'[1, 2, 3]',
        headers={"Content-Type": "application/json; charset=utf-8"},
    )
    assert response.status_code == 200
    assert response.json() == {"data": [1, 2, 3]}


def test_multipart_form_data(client):
    """Multipart submissions decode into a dict, files by filename."""
    response = client.post(
        "/decode",
        files={"file": ("sample_success.csv", b"a,b\n1,2\n", "text/plain")},
        data={"name": "value"},
    )
    assert response.status_code == 200
    assert response.json() == {"data": {"file": "sample_success.csv", "name": "value"}}


def test_urlencoded_form_repeated_fields(client):
    """Repeated form fields are kept as lists."""
    response = client.post(
        "/decode",
        content=b"tag=a&tag=b&title=hi",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    assert response.json() == {"data": {"tag": ["a", "b"], "title": "hi"}}


def test_unknown_content_type(client):
    """An unrecognized media type is a content-type error."""
    response = client.post(
        "/decode",
        content=b'{"hello": "world"}',
        headers={"Content-Type": "application/what-the-hell"},
    )
    assert response.status_code == 415
    assert response.json() == {"error": "unknown content-type: application/what-the-hell"}


def test_xml_is_unimplemented(client):
    """XML bodies are recognised but not decoded."""
    response = client.post(
        "/decode",
        content=b"<a/>",
        headers={"Content-Type": "application/xml"},
    )
    assert response.status_code == 415
    assert response.json() == {"error": "unimplemented content-type: application/xml"}


def test_get_request_is_rejected(client):
    """GET requests never carry a decodable body."""
    response = client.get("/decode", headers={"Content-Type": "application/json"})
    assert response.status_code == 415
    assert response.json()["error"].startswith("unimplemented content-type")


def test_malformed_json(client):
    """A JSON media type with a broken body is a payload error."""
    response = client.post(
        "/decode",
        content=b'{"hello": ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error"].startswith("invalid JSON body")


@pytest.mark.parametrize("token", [b"NaN", b"Infinity", b"-Infinity"])
def test_non_finite_numbers_are_malformed(client, token):
    """NaN and Infinity are not JSON and are rejected by the decoder."""
    response = client.post(
        "/decode",
        content=b'{"a": ' + token + b"}",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert "is not valid JSON" in response.json()["error"]
