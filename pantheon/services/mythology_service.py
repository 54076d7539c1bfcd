"""
pantheon/services/mythology_service.py

Mythology gateway: every mythology as one tagged list, or one mythology strictly.
"""

from __future__ import annotations

import logging
import operator
from functools import lru_cache
from typing import Sequence

from pantheon.aggregation import AggregationService, build_aggregation_service
from pantheon.config import MythologySettings, get_mythology_settings, get_source_http_settings
from pantheon.connectors import JsonArraySourceClient
from pantheon.domain.gods import GodRecord, GodsByMythology, Mythology, MythologyUnavailableError
from pantheon.domain.sources import Failed, SourceDescriptor

logger = logging.getLogger(__name__)


def _has_name(labeled: tuple[str, str | None]) -> bool:
    return labeled[1] is not None


def _tag(labeled: tuple[str, str]) -> tuple[tuple[str, str], ...]:
    return (labeled,)


class MythologyGodsService:
    """
    Aggregates god names from one endpoint per mythology.
    """

    def __init__(
        self,
        *,
        aggregation_service: AggregationService,
        settings: MythologySettings,
    ) -> None:
        self._aggregation_service = aggregation_service
        self._settings = settings
        self._mythologies = self._resolve_mythologies(settings.mythologies)

    @property
    def mythologies(self) -> list[Mythology]:
        return list(self._mythologies)

    def get_all_gods(self) -> list[GodRecord]:
        """
        Return every god from every reachable mythology, ids numbered from 1.

        Records are ordered by mythology declaration order, then by the
        order each source listed them. Unreachable mythologies contribute
        nothing.
        """

        sources = [self._descriptor(mythology) for mythology in self._mythologies]
        tagged: tuple[tuple[str, str], ...] = self._aggregation_service.aggregate_labeled(
            sources,
            self._settings.timeout_seconds,
            predicate=_has_name,
            transform=_tag,
            combine=operator.add,
            identity=(),
        )

        ordered = sorted(tagged, key=lambda pair: Mythology(pair[0]).rank)
        records = [
            GodRecord(id=index, mythology=mythology, name=name)
            for index, (mythology, name) in enumerate(ordered, start=1)
        ]
        logger.info(
            "Aggregated %s gods from %s mythologies",
            len(records),
            len({record.mythology for record in records}),
        )
        return records

    def get_gods_by_mythology(self, mythology: Mythology | str) -> GodsByMythology:
        """
        Fetch one mythology. Raises MythologyUnavailableError if its source fails.
        """

        resolved = mythology if isinstance(mythology, Mythology) else Mythology.from_string(mythology)
        if resolved is None:
            allowed = ", ".join(member.value for member in Mythology)
            raise ValueError(f"Unsupported mythology '{mythology}'. Allowed mythologies: {allowed}.")

        (outcome,) = self._aggregation_service.collect(
            [self._descriptor(resolved)],
            self._settings.timeout_seconds,
        )
        if isinstance(outcome, Failed):
            raise MythologyUnavailableError(resolved.value, outcome.reason.value)

        gods = [name for name in outcome.items if name is not None]
        return GodsByMythology(mythology=resolved.value, gods=gods)

    def _descriptor(self, mythology: Mythology) -> SourceDescriptor:
        return SourceDescriptor(name=mythology.value, endpoint=self._settings.url_for(mythology.value))

    @staticmethod
    def _resolve_mythologies(names: Sequence[str]) -> list[Mythology]:
        resolved: list[Mythology] = []
        for name in names:
            mythology = Mythology.from_string(name)
            if mythology is None:
                logger.warning("Skipping unknown mythology %r", name)
                continue
            if mythology not in resolved:
                resolved.append(mythology)
        return resolved


@lru_cache(maxsize=1)
def get_mythology_gods_service() -> MythologyGodsService:
    """
    Build and cache the mythology gateway service.
    """

    client = JsonArraySourceClient(http_settings=get_source_http_settings())
    return MythologyGodsService(
        aggregation_service=build_aggregation_service(client),
        settings=get_mythology_settings(),
    )
