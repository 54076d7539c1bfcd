"""
pantheon/services/latency_service.py

Sum of encoded god names matching a prefix across every configured source.
"""

from __future__ import annotations

import logging
import operator
from functools import lru_cache
from typing import Mapping

from pantheon.aggregation import AggregationService, build_aggregation_service
from pantheon.config import get_latency_settings, get_source_http_settings
from pantheon.connectors import JsonArraySourceClient
from pantheon.domain.sources import SourceDescriptor
from pantheon.services.name_converter import name_to_decimal, starts_with_ignore_case

logger = logging.getLogger(__name__)


class GodNameSumService:
    """
    Fans out to every god list source and sums the decimal encoding of matching names.
    """

    def __init__(
        self,
        *,
        aggregation_service: AggregationService,
        endpoints: Mapping[str, str],
        timeout_seconds: float,
    ) -> None:
        self._aggregation_service = aggregation_service
        self._sources = [
            SourceDescriptor(name=name, endpoint=endpoint) for name, endpoint in endpoints.items()
        ]
        self._timeout_seconds = timeout_seconds

    def calculate_sum_for_gods_starting_with(self, prefix: str | None) -> int:
        total = self._aggregation_service.aggregate(
            self._sources,
            self._timeout_seconds,
            predicate=starts_with_ignore_case(prefix),
            transform=name_to_decimal,
            combine=operator.add,
            identity=0,
        )
        logger.info("Computed god name sum prefix=%r sources=%s", prefix, len(self._sources))
        return total


@lru_cache(maxsize=1)
def get_god_name_sum_service() -> GodNameSumService:
    """
    Build and cache the prefix-sum service from environment settings.
    """

    settings = get_latency_settings()
    client = JsonArraySourceClient(http_settings=get_source_http_settings())
    return GodNameSumService(
        aggregation_service=build_aggregation_service(client),
        endpoints=settings.sources,
        timeout_seconds=settings.timeout_seconds,
    )
