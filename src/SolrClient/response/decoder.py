"""Map a raw HTTP reply onto a JSON value or a classified error."""

from __future__ import annotations

import json
from typing import Any

from SolrClient.core.errors import (
    SolrNotFoundError,
    SolrSerializationError,
    SolrServerError,
    SolrSyntaxError,
)

NON_UTF8_BODY = "<non-utf-8 response body>"


def decode_response(status: int, body: bytes) -> Any:
    """Decode one reply of the search server.

    Success replies are parsed as generic JSON only; conversion to the
    caller's document type happens later, in `get_response`.

    Args:
        status: HTTP status code.
        body: Raw response body.

    Returns:
        Parsed JSON value of a successful reply (`{}` for an empty body).

    Raises:
        SolrNotFoundError: On 404.
        SolrSyntaxError: On other failures carrying `error.msg`.
        SolrServerError: On other failures without a readable message.
        SolrSerializationError: If a success body is not valid JSON.
    """
    if status == 200:
        return _parse_success(status, body)

    if status == 404:
        raise SolrNotFoundError(status=status)

    text = _decode_text(body)
    if text is None:
        raise SolrServerError(NON_UTF8_BODY, status=status, body_text=NON_UTF8_BODY)

    message = extract_error_message(text)
    if message is not None:
        raise SolrSyntaxError(message, status=status)
    raise SolrServerError(text, status=status, body_text=text)


def extract_error_message(text: str) -> str | None:
    """Return the string at `error.msg` of a JSON error body, if present.

    Args:
        text: Response body text.

    Returns:
        The message, or None when the body is not JSON or has no string message.
    """
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("msg")
    if not isinstance(message, str):
        return None
    return message


def _parse_success(status: int, body: bytes) -> Any:
    text = _decode_text(body)
    if text is None:
        raise SolrSerializationError(NON_UTF8_BODY, status=status)
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except ValueError as error:
        raise SolrSerializationError(f"response body is not valid JSON: {error}", status=status) from error


def _decode_text(body: bytes) -> str | None:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return None
