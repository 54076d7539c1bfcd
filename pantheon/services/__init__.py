"""
pantheon/services package marker.
"""

from pantheon.services.latency_service import GodNameSumService, get_god_name_sum_service
from pantheon.services.literature_service import (
    GreekGodsLiteratureAnalyzer,
    get_literature_analyzer,
)
from pantheon.services.mythology_service import MythologyGodsService, get_mythology_gods_service

__all__ = [
    "GodNameSumService",
    "GreekGodsLiteratureAnalyzer",
    "MythologyGodsService",
    "get_god_name_sum_service",
    "get_literature_analyzer",
    "get_mythology_gods_service",
]
