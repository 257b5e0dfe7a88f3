from .config import ChunkingServiceConfig
from .chunker import Chunker
from .models import ChunkingResult
from .storage import ChunkingStorage


class ChunkingService:
    def __init__(self, config: ChunkingServiceConfig | None = None, chunker: Chunker | None = None):
        self.config = config or ChunkingServiceConfig()
        self.chunker = chunker or Chunker(self.config.chunking)
        self.storage = ChunkingStorage(self.config.data_dir)

    def chunk_text(self, text: str, title: str) -> ChunkingResult:
        return self.chunker.chunk_text(text, title)

    def chunk_and_save(self, text: str, title: str, owner_key: str = "") -> tuple[ChunkingResult, str]:
        result = self.chunk_text(text, title)
        paths = self.storage.save(result, owner_key)
        return result, str(paths.chunk_file)
