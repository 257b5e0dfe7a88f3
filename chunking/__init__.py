"""
Chunking Module - Sentence-aligned sliding window chunking for embeddings

Splits extracted document text into overlapping windows of whole sentences,
each bounded by the token budget of the target embedding model.

Quick Start:
    from chunking import Chunker, ChunkingConfig

    chunker = Chunker(ChunkingConfig(max_tokens_per_chunk=1500))
    result = chunker.chunk_text(text, title="notes.txt")
    for chunk in result.chunks:
        print(chunk.sentence_start, chunk.token_count, chunk.text[:60])
"""

__version__ = "1.0.0"

from .chunker import Chunker
from .service import ChunkingService
from .config import ChunkingServiceConfig
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
    SentenceSpan,
    DEFAULT_MAX_TOKENS_PER_CHUNK,
    DEFAULT_MODEL_ID,
)
from .sentence_splitter import RegexSentenceSegmenter, SentenceSegmenter, split_sentences
from .token_counter import TiktokenCounter, TokenCounter, count_tokens
from .storage import ChunkingStorage

__all__ = [
    "__version__",
    "Chunker",
    "ChunkingService",
    "ChunkingServiceConfig",
    "ChunkingStorage",
    "Chunk",
    "ChunkingConfig",
    "ChunkingResult",
    "ChunkingStats",
    "SentenceSpan",
    "DEFAULT_MAX_TOKENS_PER_CHUNK",
    "DEFAULT_MODEL_ID",
    "SentenceSegmenter",
    "RegexSentenceSegmenter",
    "split_sentences",
    "TokenCounter",
    "TiktokenCounter",
    "count_tokens",
]
