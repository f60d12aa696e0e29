"""
app/api/routers package marker.
"""

from app.api.routers.export_router import router as export_router
from app.api.routers.health_router import router as health_router
from app.api.routers.ingestion_router import router as ingestion_router
from app.api.routers.metrics_router import router as metrics_router
from app.api.routers.quality_router import router as quality_router

__all__ = [
    "export_router",
    "health_router",
    "ingestion_router",
    "metrics_router",
    "quality_router",
]
