"""
Data Models for the Chunking Pipeline

Defines:
1. SentenceSpan - One sentence located in its source text
2. ChunkingConfig - Token budget, tokenizer model and overlap stride
3. Chunk - A window of whole sentences ready for embedding
4. ChunkingResult - All chunks of one document with statistics

Design Principles:
- Pydantic v2 for validation and serialization (consistent with extraction)
- Sentence positions and token counts live in separate fields
- Save/load pattern matching ExtractionResult

Usage:
    config = ChunkingConfig(max_tokens_per_chunk=512)
    result = Chunker(config).chunk_text(text, title="notes.txt")
    result.save("chunks.json")
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_TOKENS_PER_CHUNK = 1500
DEFAULT_MODEL_ID = "text-embedding-ada-002"
DEFAULT_STRIDE_DIVISOR = 5


@dataclass(frozen=True)
class SentenceSpan:
    """
    A sentence as located by a sentence segmenter.

    Attributes:
        start: Offset of the first character in the source text
        end: Offset one past the last character (exclusive)
        text: The sentence text, equal to source[start:end]
    """

    start: int
    end: int
    text: str


class ChunkingConfig(BaseModel):
    """
    Configuration for the chunking pipeline.

    Controls the token budget per chunk, the tokenizer used to measure it
    and how far the window advances between chunks. With the default
    stride divisor of 5 the window moves by a fifth of the sentences it
    just consumed, so consecutive chunks overlap by roughly 80%.
    """

    model_config = ConfigDict(frozen=True)

    max_tokens_per_chunk: int = Field(
        DEFAULT_MAX_TOKENS_PER_CHUNK,
        description="Maximum tokens per chunk",
        gt=0,
    )
    model_id: str = Field(
        DEFAULT_MODEL_ID,
        description="Embedding model whose tokenizer measures chunk size",
        min_length=1,
    )
    stride_divisor: int = Field(
        DEFAULT_STRIDE_DIVISOR,
        description="Window advances by max(1, included_sentences // stride_divisor)",
        ge=1,
    )


class Chunk(BaseModel):
    """
    A window of whole sentences, ready for embedding and storage.

    Sentence positions (sentence_start, sentence_end) and the token count
    are separate fields; the ``end`` property reproduces the older
    combined offset for callers that still read it.
    """

    sentence_start: int = Field(
        ...,
        description="Index of the first sentence of the window",
        ge=0,
    )
    sentence_end: int = Field(
        ...,
        description="Index one past the last included sentence",
        ge=0,
    )
    sentence_count: int = Field(
        ...,
        description="Number of sentences included (skipped oversized sentences excluded)",
        ge=1,
    )
    token_count: int = Field(
        ...,
        description="Token count of text under the chunker's TokenCounter",
        ge=0,
    )
    title: str = Field(
        ...,
        description="Name of the source document or archive entry",
    )
    text: str = Field(
        ...,
        description="Space-joined, trimmed sentence text",
        min_length=1,
    )

    @property
    def start(self) -> int:
        return self.sentence_start

    @property
    def end(self) -> int:
        """Window start plus token count (mixes sentence and token units)."""
        return self.sentence_start + self.token_count

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    total_chunks: int = 0
    total_tokens: int = 0
    avg_chunk_tokens: float = 0.0
    min_chunk_tokens: int = 0
    max_chunk_tokens: int = 0
    total_sentences: int = 0
    skipped_sentences: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking one document.

    Contains all chunks in window order and processing statistics.
    Ready for downstream embedding and vector store ingestion.
    """
    title: str = Field(
        ...,
        description="Document or archive entry name",
    )
    config: ChunkingConfig = Field(
        ...,
        description="Configuration used for chunking",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="All chunks in window order",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def document_id(self) -> str:
        """
        File-system friendly identifier derived from the title.

        Directory parts of an archive entry path are kept, joined with "__",
        so "a/readme.txt" and "b/readme.txt" map to different identifiers.
        """
        parts = [p for p in self.title.replace("\\", "/").split("/") if p not in ("", ".", "..")]
        if not parts:
            return "document"
        parts[-1] = Path(parts[-1]).stem or parts[-1]
        return "__".join(parts)

    def texts(self) -> list[str]:
        return [c.text for c in self.chunks]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)
