"""
Request encoding for the SABnzbd ``/api`` endpoint.

A ``CallDescriptor`` describes one pending call. A ``RequestEncoder`` turns
it into an ``EncodedRequest``: either a GET URL carrying the fields in its
query string, or a POST whose fields travel as a multipart form next to an
uploaded NZB. Both strategies build their field list through
``encode_fields`` so the mandatory ``mode``/``output``/``apikey`` trio is
always appended the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import IO, Any, Dict, List, Optional, Tuple, Union

import aiohttp
from yarl import URL

from ..exceptions import ConfigurationError


class OutputFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class FilePayload:
    """Binary NZB content sent as a file part of a multipart request."""

    field: str
    content: Union[bytes, IO[bytes]]
    filename: str
    content_type: str = "application/x-nzb"


@dataclass
class CallDescriptor:
    method: str
    args: Dict[str, Any] = field(default_factory=dict)
    output: OutputFormat = OutputFormat.JSON
    payload: Optional[FilePayload] = None


@dataclass
class EncodedRequest:
    http_method: str
    url: URL
    fields: List[Tuple[str, str]] = field(default_factory=list)
    payload: Optional[FilePayload] = None

    def form_data(self) -> aiohttp.FormData:
        """Build a fresh multipart body; a FormData can only be sent once."""
        form = aiohttp.FormData()
        if self.payload is not None:
            form.add_field(
                self.payload.field,
                self.payload.content,
                filename=self.payload.filename,
                content_type=self.payload.content_type,
            )
        for name, value in self.fields:
            form.add_field(name, value)
        return form


def is_present(value: Any) -> bool:
    """Whether an optional argument carries a value worth sending.

    ``None``, the empty string and empty collections are absent. Falsy values
    such as ``0`` and ``False`` are still sent.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        # SABnzbd takes id lists as one comma separated field
        return ",".join(encode_value(v) for v in value)
    return str(value)


def encode_fields(descriptor: CallDescriptor, api_key: str) -> List[Tuple[str, str]]:
    """Ordered (name, value) pairs: caller arguments first, then the mandatory fields."""
    fields = [
        (name, encode_value(value))
        for name, value in descriptor.args.items()
        if is_present(value)
    ]
    fields.append(("mode", descriptor.method))
    fields.append(("output", str(descriptor.output)))
    fields.append(("apikey", api_key))
    return fields


class RequestEncoder(ABC):
    def __init__(self, host: str, api_key: str):
        if not host:
            raise ConfigurationError("SABnzbd host is not configured")
        if not api_key:
            raise ConfigurationError("SABnzbd API key is not configured")

        try:
            endpoint = URL(f"{host.rstrip('/')}/api")
        except ValueError as e:
            raise ConfigurationError(f"Invalid SABnzbd host '{host}': {e}") from e
        if endpoint.scheme not in ("http", "https") or not endpoint.host:
            raise ConfigurationError(
                f"SABnzbd host must be an http(s) URL, got '{host}'"
            )
        self._endpoint = endpoint
        self._api_key = api_key

    @property
    def endpoint(self) -> URL:
        return self._endpoint

    @abstractmethod
    def encode(self, descriptor: CallDescriptor) -> EncodedRequest:
        """Turn a call descriptor into a transport-ready request."""


class QueryStringEncoder(RequestEncoder):
    def encode(self, descriptor: CallDescriptor) -> EncodedRequest:
        fields = encode_fields(descriptor, self._api_key)
        return EncodedRequest(
            http_method="GET",
            url=self._endpoint.with_query(fields),
        )


class MultipartEncoder(RequestEncoder):
    def encode(self, descriptor: CallDescriptor) -> EncodedRequest:
        return EncodedRequest(
            http_method="POST",
            url=self._endpoint,
            fields=encode_fields(descriptor, self._api_key),
            payload=descriptor.payload,
        )
