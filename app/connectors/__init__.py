"""
app/connectors package marker.
"""

from app.connectors.ads_connector import AdsConnector
from app.connectors.base import BaseConnector, ConnectorFetchResult, ConnectorRequestError, FeedConnector
from app.connectors.crm_connector import CRMConnector
from app.connectors.sink_client import ExportSinkClient

__all__ = [
    "AdsConnector",
    "BaseConnector",
    "CRMConnector",
    "ConnectorFetchResult",
    "ConnectorRequestError",
    "ExportSinkClient",
    "FeedConnector",
]
