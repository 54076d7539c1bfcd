"""
pantheon/connectors package marker.
"""

from pantheon.connectors.base import BaseSourceClient
from pantheon.connectors.json_array_client import JsonArraySourceClient, JsonRecordsSourceClient
from pantheon.connectors.page_text_client import PageTextSourceClient

__all__ = [
    "BaseSourceClient",
    "JsonArraySourceClient",
    "JsonRecordsSourceClient",
    "PageTextSourceClient",
]
