"""Content-type based request body decoding.

The decoder strips media type parameters from the Content-Type header
and dispatches on what is left:

- JSON and any ``+json`` vendor type -> JSON document
- multipart and urlencoded forms -> plain dict
- XML -> not implemented
- anything else -> unknown
"""

import json
import logging
from typing import Any

from starlette.datastructures import UploadFile
from starlette.requests import Request

from store_crud.errors import MalformedPayloadError, UnknownContentError

logger = logging.getLogger(__name__)

MIME_JSON = "application/json"
MIME_XML = "application/xml"
MIME_XML2 = "text/xml"
MIME_POST_FORM = "application/x-www-form-urlencoded"
MIME_MULTIPART_FORM = "multipart/form-data"

FORM_CONTENT = "form"
JSON_CONTENT = "json"
XML_CONTENT = "xml"


def filter_flags(content: str) -> str:
    """Cut a Content-Type header at the first space or semicolon."""
    for i, ch in enumerate(content):
        if ch in (" ", ";"):
            return content[:i]
    return content


def content_kind(content_type: str) -> str | None:
    """Classify a bare media type as json, form, xml or None."""
    ctype = content_type.lower()
    if ctype == MIME_JSON or ctype.endswith("+json"):
        return JSON_CONTENT
    if ctype in (MIME_POST_FORM, MIME_MULTIPART_FORM):
        return FORM_CONTENT
    if ctype in (MIME_XML, MIME_XML2) or ctype.endswith("+xml"):
        return XML_CONTENT
    return None


async def decode(request: Request) -> Any:
    """Decode the request body according to its Content-Type.

    Args:
        request: The incoming request

    Returns:
        The decoded JSON document, or a dict for form submissions

    Raises:
        UnknownContentError: For GET requests, XML and unknown media types
        MalformedPayloadError: If the body does not parse as its media type
    """
    ctype = filter_flags(request.headers.get("content-type", ""))

    if request.method == "GET":
        raise UnknownContentError(f"unimplemented content-type: {ctype}")

    kind = content_kind(ctype)
    if kind == JSON_CONTENT:
        return await _decode_json(request)
    if kind == FORM_CONTENT:
        return await _decode_form(request)
    if kind == XML_CONTENT:
        raise UnknownContentError(f"unimplemented content-type: {ctype}")

    logger.debug("Rejecting body with content-type %r", ctype)
    raise UnknownContentError(f"unknown content-type: {ctype}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


async def _decode_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise MalformedPayloadError(f"invalid JSON body: {e}") from e


async def _decode_form(request: Request) -> dict[str, Any]:
    try:
        form = await request.form()
    except Exception as e:
        raise MalformedPayloadError(f"invalid form body: {e}") from e

    data: dict[str, Any] = {}
    for name in form.keys():
        values = [_form_value(v) for v in form.getlist(name)]
        data[name] = values[0] if len(values) == 1 else values
    return data


def _form_value(value: Any) -> Any:
    # Uploaded files are reported by name; their content is not a record field
    if isinstance(value, UploadFile):
        return value.filename
    return value
