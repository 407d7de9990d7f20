"""
Request dependencies
"""

from fastapi import Request

from wearable_telemetry.core.config import Settings
from wearable_telemetry.storage.ingestion_store import IngestionStore

def get_store(request: Request) -> IngestionStore:
    """Get the ingestion store owned by the running application"""
    return request.app.state.store

def get_settings(request: Request) -> Settings:
    return request.app.state.settings
