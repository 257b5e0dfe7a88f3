"""
Ingestion - Batch orchestration of extraction and chunking

Quick Start:
    from ingestion import IngestionService, IngestionConfig

    service = IngestionService(IngestionConfig.from_env())
    report = service.process_batch([("upload.zip", data)], owner_key="tenant-a")
"""

from .config import IngestionConfig
from .logging_config import setup_logging, get_logger
from .models import UploadReport
from .service import ChunkSink, IngestionService

__all__ = [
    "IngestionConfig",
    "IngestionService",
    "ChunkSink",
    "UploadReport",
    "setup_logging",
    "get_logger",
]
