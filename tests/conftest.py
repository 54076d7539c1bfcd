from __future__ import annotations

from typing import Callable, Iterator

import pytest

from fake_sources import FakeSourceClient


@pytest.fixture()
def fake_client_factory() -> Iterator[Callable[..., FakeSourceClient]]:
    """Build fake clients and release any hanging calls after the test."""
    created: list[FakeSourceClient] = []

    def _build(responses: dict, delays: dict | None = None) -> FakeSourceClient:
        client = FakeSourceClient(responses, delays)
        created.append(client)
        return client

    yield _build

    for client in created:
        client.release()
