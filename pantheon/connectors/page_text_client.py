"""
pantheon/connectors/page_text_client.py

Client for sources whose whole text body is the payload.
"""

from __future__ import annotations

from pantheon.connectors.base import BaseSourceClient
from pantheon.domain.sources import Failed, SourceOutcome, Success


class PageTextSourceClient(BaseSourceClient):
    """
    Returns the decoded page text as a single item.
    """

    def fetch(self, endpoint: str) -> SourceOutcome:
        response = self._get(endpoint)
        if isinstance(response, Failed):
            return response
        if response.encoding is None:
            response.encoding = "utf-8"
        return Success(items=(response.text,))
