"""
pantheon/connectors/json_array_client.py

Clients for sources that answer with a bare JSON array.
"""

from __future__ import annotations

import json
from typing import Any

from pantheon.connectors.base import BaseSourceClient
from pantheon.domain.sources import ErrorKind, Failed, SourceOutcome, Success


class JsonArraySourceClient(BaseSourceClient):
    """
    Decodes a JSON array of strings. ``null`` elements are kept as ``None``.
    """

    def fetch(self, endpoint: str) -> SourceOutcome:
        response = self._get(endpoint)
        if isinstance(response, Failed):
            return response

        payload = _decode_array(response.text, endpoint)
        if isinstance(payload, Failed):
            return payload

        for index, element in enumerate(payload):
            if element is not None and not isinstance(element, str):
                return Failed(
                    reason=ErrorKind.DECODE,
                    detail=f"{endpoint}: element {index} is {type(element).__name__}, expected string.",
                )
        return Success(items=tuple(payload))


class JsonRecordsSourceClient(BaseSourceClient):
    """
    Decodes a JSON array whose elements are strings or objects.
    """

    def fetch(self, endpoint: str) -> SourceOutcome:
        response = self._get(endpoint)
        if isinstance(response, Failed):
            return response

        payload = _decode_array(response.text, endpoint)
        if isinstance(payload, Failed):
            return payload
        return Success(items=tuple(payload))


def _decode_array(body: str, endpoint: str) -> list[Any] | Failed:
    if not body or not body.strip():
        return Failed(reason=ErrorKind.DECODE, detail=f"{endpoint}: empty response body.")
    try:
        payload = json.loads(body)
    except ValueError as exc:
        return Failed(reason=ErrorKind.DECODE, detail=f"{endpoint}: response was not valid JSON ({exc}).")
    if not isinstance(payload, list):
        return Failed(
            reason=ErrorKind.DECODE,
            detail=f"{endpoint}: expected a JSON array, got {type(payload).__name__}.",
        )
    return payload
