"""Tests for chunking.service and chunking.config."""

from pathlib import Path

from chunking import Chunker, ChunkingConfig, ChunkingService, ChunkingServiceConfig

from conftest import WhitespaceCounter


def _service(tmp_path: Path) -> ChunkingService:
    config = ChunkingServiceConfig(
        data_dir=str(tmp_path),
        chunking=ChunkingConfig(max_tokens_per_chunk=5),
    )
    return ChunkingService(config, chunker=Chunker(config.chunking, counter=WhitespaceCounter()))


class TestChunkingService:
    def test_chunk_text(self, tmp_path):
        result = _service(tmp_path).chunk_text("Red fish. Blue fish. Old fish.", "fish.txt")

        assert result.chunks[0].text == "Red fish. Blue fish."
        assert result.config.max_tokens_per_chunk == 5

    def test_chunk_and_save(self, tmp_path):
        service = _service(tmp_path)
        result, path = service.chunk_and_save("Red fish. Blue fish.", "fish.txt", owner_key="kid")

        assert Path(path).exists()
        assert Path(path).parent == tmp_path / "kid" / "fish" / "chunks"
        assert service.storage.load_latest("fish", owner_key="kid").texts() == result.texts()

    def test_default_chunker_follows_config(self, tmp_path):
        config = ChunkingServiceConfig(data_dir=str(tmp_path), chunking=ChunkingConfig(max_tokens_per_chunk=64))
        service = ChunkingService(config)

        assert service.chunker.config.max_tokens_per_chunk == 64


class TestChunkingServiceConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("INGEST_MAX_TOKENS_PER_CHUNK", "300")
        monkeypatch.setenv("INGEST_STRIDE_DIVISOR", "3")
        monkeypatch.setenv("INGEST_DATA_DIR", "/srv/chunks")
        monkeypatch.delenv("INGEST_MODEL_ID", raising=False)

        config = ChunkingServiceConfig.from_env()

        assert config.data_dir == "/srv/chunks"
        assert config.chunking.max_tokens_per_chunk == 300
        assert config.chunking.stride_divisor == 3
        assert config.chunking.model_id == "text-embedding-ada-002"

    def test_empty_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("INGEST_MAX_TOKENS_PER_CHUNK", "")
        monkeypatch.setenv("INGEST_MODEL_ID", "")
        monkeypatch.delenv("INGEST_STRIDE_DIVISOR", raising=False)
        monkeypatch.delenv("INGEST_DATA_DIR", raising=False)

        config = ChunkingServiceConfig.from_env()

        assert config.data_dir == "data/chunking"
        assert config.chunking.max_tokens_per_chunk == 1500
        assert config.chunking.model_id == "text-embedding-ada-002"
