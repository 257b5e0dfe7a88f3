import os
from dataclasses import dataclass, field

from .models import (
    ChunkingConfig,
    DEFAULT_MAX_TOKENS_PER_CHUNK,
    DEFAULT_MODEL_ID,
    DEFAULT_STRIDE_DIVISOR,
)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


def chunking_config_from_env() -> ChunkingConfig:
    """Build a ChunkingConfig from INGEST_* variables, falling back to defaults."""
    return ChunkingConfig(
        max_tokens_per_chunk=_env_int("INGEST_MAX_TOKENS_PER_CHUNK", DEFAULT_MAX_TOKENS_PER_CHUNK),
        model_id=os.environ.get("INGEST_MODEL_ID") or DEFAULT_MODEL_ID,
        stride_divisor=_env_int("INGEST_STRIDE_DIVISOR", DEFAULT_STRIDE_DIVISOR),
    )


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        return cls(
            data_dir=os.environ.get("INGEST_DATA_DIR", cls.data_dir),
            chunking=chunking_config_from_env(),
        )
