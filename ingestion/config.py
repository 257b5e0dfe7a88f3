from dataclasses import dataclass, field
import os

from chunking.config import chunking_config_from_env
from chunking.models import ChunkingConfig
from extraction.models import ExtractionConfig


@dataclass
class IngestionConfig:
    data_dir: str = "data/ingestion"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    save_results: bool = False

    @classmethod
    def from_env(cls) -> "IngestionConfig":
        save_results = os.environ.get("INGEST_SAVE_RESULTS")
        return cls(
            data_dir=os.environ.get("INGEST_DATA_DIR", cls.data_dir),
            chunking=chunking_config_from_env(),
            extraction=ExtractionConfig(
                archive_policy=os.environ.get("INGEST_ARCHIVE_POLICY", "all_or_nothing"),
            ),
            save_results=(
                save_results.strip().lower() in ("1", "true", "yes", "on")
                if save_results
                else cls.save_results
            ),
        )
