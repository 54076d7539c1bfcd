"""
pantheon/aggregation package marker.
"""

from pantheon.aggregation.coordinator import FanOutCoordinator
from pantheon.aggregation.invoker import BoundedInvoker, OutcomeSlot, SourceClient
from pantheon.aggregation.pipeline import MaxGroup, ResultPipeline, combine_max_group
from pantheon.aggregation.service import AggregationService, build_aggregation_service
from pantheon.aggregation.stats import AggregationStats, StatsSnapshot

__all__ = [
    "AggregationService",
    "AggregationStats",
    "BoundedInvoker",
    "FanOutCoordinator",
    "MaxGroup",
    "OutcomeSlot",
    "ResultPipeline",
    "SourceClient",
    "StatsSnapshot",
    "build_aggregation_service",
    "combine_max_group",
]
