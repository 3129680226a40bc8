"""Decoding and validation of SABnzbd API responses."""

import json
from typing import Any, Dict, Optional, Tuple, Type, Union

from ..exceptions import DecodeError, ProtocolError, TransportError
from .encoder import OutputFormat


def decode_response(
    status: int, body: Union[bytes, str], output: OutputFormat = OutputFormat.JSON
) -> Any:
    """
    Decode a raw HTTP outcome.

    :param status: HTTP status code returned by the server
    :param body: Raw response body
    :param output: Encoding that was requested with the call
    :return: Parsed JSON document, or the body text for plain text output
    :raises TransportError: status is not 200; the body is left untouched
    :raises DecodeError: JSON output was requested but the body does not parse
    """
    if status != 200:
        raise TransportError(
            f"Error accessing SABnzbd host: HTTP status {status}", status=status
        )

    if output == OutputFormat.TEXT:
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        return body

    try:
        return json.loads(body)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Error parsing response as JSON: {e}") from e


def require_object(document: Any) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise ProtocolError(
            f"Invalid response from SABnzbd: expected a JSON object, "
            f"got {type(document).__name__}"
        )
    return document


def require_field(
    document: Any,
    name: str,
    expected_type: Optional[Union[Type, Tuple[Type, ...]]] = None,
) -> Any:
    """Return ``document[name]``, raising ProtocolError if it is missing or mistyped."""
    document = require_object(document)
    if name not in document or document[name] is None:
        raise ProtocolError(
            f"Invalid response from SABnzbd: missing '{name}' field", field=name
        )

    value = document[name]
    # bool is an int subclass but never a valid count
    if expected_type is not None and (
        not isinstance(value, expected_type)
        or (isinstance(value, bool) and expected_type in (int, (int, float)))
    ):
        raise ProtocolError(
            f"Invalid response from SABnzbd: '{name}' has type "
            f"{type(value).__name__}",
            field=name,
        )
    return value
