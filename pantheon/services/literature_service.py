"""
pantheon/services/literature_service.py

Ranks Greek gods by the length of their literature page.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from urllib.parse import quote

from pantheon.aggregation import (
    AggregationService,
    MaxGroup,
    build_aggregation_service,
    combine_max_group,
)
from pantheon.aggregation.pipeline import accept_all
from pantheon.config import LiteratureSettings, get_literature_settings, get_source_http_settings
from pantheon.connectors import JsonArraySourceClient, PageTextSourceClient
from pantheon.domain.sources import Failed, SourceDescriptor

logger = logging.getLogger(__name__)

GOD_PLACEHOLDER = "{god}"


def _page_length(labeled: tuple[str, str]) -> MaxGroup:
    god, text = labeled
    return MaxGroup.of(god, len(text))


class GreekGodsLiteratureAnalyzer:
    """
    Finds the gods with the most literature.

    One bounded call fetches the god list, then one page per god is fetched
    concurrently. Every god tied at the maximum page length is returned.
    """

    def __init__(
        self,
        *,
        gods_service: AggregationService,
        pages_service: AggregationService,
        settings: LiteratureSettings,
    ) -> None:
        if GOD_PLACEHOLDER not in settings.page_url_template:
            raise ValueError(
                f"LITERATURE_PAGE_URL_TEMPLATE must contain '{GOD_PLACEHOLDER}'."
            )
        self._gods_service = gods_service
        self._pages_service = pages_service
        self._settings = settings

    def solve(self) -> list[str]:
        gods = self._fetch_gods()
        if not gods:
            logger.info("No gods fetched from %s; nothing to rank", self._settings.gods_url)
            return []

        group: MaxGroup = self._pages_service.aggregate_labeled(
            [self._page_source(god) for god in gods],
            self._settings.timeout_seconds,
            predicate=accept_all,
            transform=_page_length,
            combine=combine_max_group,
            identity=MaxGroup.empty(),
        )

        if group.value <= 0:
            logger.info("No god had retrievable literature among %s candidates", len(gods))
            return []

        winners = sorted(str(key) for key in group.keys)
        logger.info("Gods with most literature length=%s gods=%s", group.value, winners)
        return winners

    def _fetch_gods(self) -> list[str]:
        (outcome,) = self._gods_service.collect(
            [SourceDescriptor(name="gods", endpoint=self._settings.gods_url)],
            self._settings.timeout_seconds,
        )
        if isinstance(outcome, Failed):
            return []

        unique: list[str] = []
        for name in outcome.items:
            if name and name not in unique:
                unique.append(name)
        return unique

    def _page_source(self, god: str) -> SourceDescriptor:
        endpoint = self._settings.page_url_template.replace(GOD_PLACEHOLDER, quote(god, safe=""))
        return SourceDescriptor(name=god, endpoint=endpoint)


@lru_cache(maxsize=1)
def get_literature_analyzer() -> GreekGodsLiteratureAnalyzer:
    """
    Build and cache the literature analyzer from environment settings.
    """

    http_settings = get_source_http_settings()
    return GreekGodsLiteratureAnalyzer(
        gods_service=build_aggregation_service(JsonArraySourceClient(http_settings=http_settings)),
        pages_service=build_aggregation_service(PageTextSourceClient(http_settings=http_settings)),
        settings=get_literature_settings(),
    )
