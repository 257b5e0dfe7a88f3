import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import ChunkingResult

DEFAULT_OWNER = "default"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_component(value: str, fallback: str) -> str:
    cleaned = _UNSAFE_CHARS.sub("_", value).strip("._")
    return cleaned or fallback


@dataclass
class ChunkingPaths:
    owner_key: str
    document_id: str
    chunk_dir: Path
    chunk_file: Path


class ChunkingStorage:
    """
    Writes ChunkingResults as JSON below
    ``<data_dir>/<owner_key>/<document_id>/chunks/``.
    """

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def chunk_dir(self, document_id: str, owner_key: str = "") -> Path:
        owner = _safe_component(owner_key, DEFAULT_OWNER)
        doc = _safe_component(document_id, "document")
        return self.data_dir / owner / doc / "chunks"

    def build_paths(self, document_id: str, owner_key: str = "") -> ChunkingPaths:
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S_%f")
        chunk_dir = self.chunk_dir(document_id, owner_key)
        chunk_dir.mkdir(parents=True, exist_ok=True)
        return ChunkingPaths(
            owner_key=chunk_dir.parent.parent.name,
            document_id=chunk_dir.parent.name,
            chunk_dir=chunk_dir,
            chunk_file=chunk_dir / f"{chunk_dir.parent.name}_{timestamp}.json",
        )

    def save(self, result: ChunkingResult, owner_key: str = "") -> ChunkingPaths:
        paths = self.build_paths(result.document_id, owner_key)
        result.save(str(paths.chunk_file))
        return paths

    def load_latest(self, document_id: str, owner_key: str = "") -> Optional[ChunkingResult]:
        """Load the most recently saved result for a document, if any."""
        chunk_dir = self.chunk_dir(document_id, owner_key)
        if not chunk_dir.is_dir():
            return None
        files = sorted(chunk_dir.glob("*.json"))
        if not files:
            return None
        return ChunkingResult.load(str(files[-1]))
