"""
FastAPI dependency providers.

Each collaborator is built once per process and handed to the routes
through ``Depends`` so tests can swap them via ``dependency_overrides``.
"""

from functools import lru_cache

from ruru_nft.core.database import DatabaseManager
from ruru_nft.core.storage import StorageManager
from ruru_nft.services.pending_uploads import PendingUploadRegistry
from ruru_nft.services.pipeline_manager import PipelineManager


@lru_cache()
def get_database() -> DatabaseManager:
    return DatabaseManager()


@lru_cache()
def get_storage() -> StorageManager:
    return StorageManager()


@lru_cache()
def get_pending_uploads() -> PendingUploadRegistry:
    return PendingUploadRegistry()


@lru_cache()
def get_pipeline_manager() -> PipelineManager:
    return PipelineManager(
        storage=get_storage(),
        database=get_database(),
        pending=get_pending_uploads(),
    )
