"""
pantheon/connectors/base.py

Base source client abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests

from pantheon.config import SourceHTTPSettings
from pantheon.domain.sources import ErrorKind, Failed, SourceOutcome

logger = logging.getLogger(__name__)


class BaseSourceClient(ABC):
    """
    Performs one GET against one endpoint and returns an outcome value.

    Clients never retry and never raise for transport, status, or payload
    problems; every such failure is returned as ``Failed``.

    Fan-out calls ``fetch`` from many threads at once, so unless a session is
    injected each request opens and closes its own ``requests.Session``.
    """

    def __init__(
        self,
        *,
        http_settings: SourceHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session
        self._timeout_seconds = http_settings.timeout_seconds

    @abstractmethod
    def fetch(self, endpoint: str) -> SourceOutcome:
        """
        Fetch and decode one endpoint.
        """

    def _get(self, url: str) -> requests.Response | Failed:
        """
        Execute a GET and map transport failures and non-2xx statuses.
        """

        try:
            if self._session is not None:
                response = self._send(self._session, url)
            else:
                with requests.Session() as session:
                    response = self._send(session, url)
        except requests.Timeout as exc:
            logger.debug("Source request timed out url=%s error=%s", url, exc)
            return Failed(reason=ErrorKind.TIMEOUT, detail=str(exc))
        except requests.RequestException as exc:
            logger.debug("Source request failed url=%s error=%s", url, exc)
            return Failed(reason=ErrorKind.TRANSPORT, detail=str(exc))

        if not 200 <= response.status_code < 300:
            return Failed(
                reason=ErrorKind.HTTP_STATUS,
                detail=f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )
        return response

    def _send(self, session: requests.Session, url: str) -> requests.Response:
        return session.request(
            method="GET",
            url=url,
            headers={"Accept": "application/json, text/plain, */*"},
            timeout=self._timeout_seconds,
        )

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
