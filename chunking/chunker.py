"""
Chunker - Core chunking logic for the ingestion pipeline

Takes the sentences of one extracted document and produces a
ChunkingResult of overlapping, token-bounded windows of whole sentences.

Algorithm:
1. Put a cursor on the first sentence.
2. From the cursor, accumulate sentences while they fit in
   max_tokens_per_chunk. A sentence that alone exceeds the budget is
   skipped (never emitted) and accumulation continues past it.
3. Join the sentences with spaces, trim, and count the joined text.
   Token counts need not add up across the join, so trailing sentences
   are dropped until the joined text fits; its count is the chunk size.
   Emit the text as a Chunk if it is non-empty.
4. Advance the cursor by max(1, included_sentences // stride_divisor),
   i.e. by about a fifth of the window by default.
5. Repeat until the cursor passes the last sentence.

The cursor moves forward by at least one sentence per window, so chunking
N sentences takes at most N windows. Zero emitted chunks is an error.

Usage:
    from chunking import Chunker, ChunkingConfig

    chunker = Chunker(ChunkingConfig(max_tokens_per_chunk=512))
    result = chunker.chunk_text(text, title="notes.txt")
"""

import logging
from typing import Optional, Sequence

from extraction.exceptions import NoChunksProducedError

from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
    SentenceSpan,
)
from .sentence_splitter import RegexSentenceSegmenter, SentenceSegmenter
from .token_counter import TiktokenCounter, TokenCounter

logger = logging.getLogger(__name__)


class Chunker:
    """
    Splits a document's sentences into overlapping, token-bounded chunks.

    Args:
        config: Token budget, tokenizer model and stride divisor.
        segmenter: Sentence boundary detector (regex based by default).
        counter: Token counter (tiktoken for config.model_id by default).
    """

    def __init__(
        self,
        config: Optional[ChunkingConfig] = None,
        segmenter: Optional[SentenceSegmenter] = None,
        counter: Optional[TokenCounter] = None,
    ):
        self.config = config or ChunkingConfig()
        self.segmenter = segmenter or RegexSentenceSegmenter()
        self.counter = counter or TiktokenCounter(self.config.model_id)

    def chunk_text(self, text: str, title: str) -> ChunkingResult:
        """
        Segment text into sentences and chunk them.

        Raises:
            NoChunksProducedError: The text yields no chunk.
        """
        return self.chunk(self.segmenter.segment(text), title)

    def chunk(self, sentences: Sequence[SentenceSpan], title: str) -> ChunkingResult:
        """
        Chunk an ordered sequence of sentence spans.

        Args:
            sentences: Sentences in document order.
            title: Document name copied onto every chunk.

        Returns:
            ChunkingResult with at least one chunk.

        Raises:
            NoChunksProducedError: No sentences, or every sentence exceeds
                the token budget.
        """
        max_tokens = self.config.max_tokens_per_chunk
        token_counts = [self.counter.count(s.text) for s in sentences]
        skipped = sum(1 for n in token_counts if n > max_tokens)

        chunks = list(self._windows(sentences, token_counts, title))

        if not chunks:
            logger.warning(
                "[%s] No chunks from %d sentences (%d over %d tokens)",
                title,
                len(sentences),
                skipped,
                max_tokens,
            )
            raise NoChunksProducedError(
                title,
                details=f"{len(sentences)} sentences, {skipped} over {max_tokens} tokens",
            )

        logger.info(
            "[%s] Split %d sentences into %d chunks (max_tokens=%d, skipped=%d)",
            title,
            len(sentences),
            len(chunks),
            max_tokens,
            skipped,
        )

        return ChunkingResult(
            title=title,
            config=self.config,
            chunks=chunks,
            stats=self._compute_stats(chunks, len(sentences), skipped),
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _windows(
        self,
        sentences: Sequence[SentenceSpan],
        token_counts: list[int],
        title: str,
    ):
        """Yield the chunk of every window, advancing by the dynamic stride."""
        max_tokens = self.config.max_tokens_per_chunk
        total = len(sentences)
        chunk_start = 0

        while chunk_start < total:
            included: list[int] = []
            running = 0

            for i in range(chunk_start, total):
                if running >= max_tokens:
                    break
                sentence_tokens = token_counts[i]

                if sentence_tokens > max_tokens:
                    continue  # oversized sentences never appear in a chunk

                if running + sentence_tokens > max_tokens:
                    break

                running += sentence_tokens
                included.append(i)

            # Counts need not add up across the join; the joined text is authoritative.
            text, token_count = self._measure(sentences, included)
            while included and token_count > max_tokens:
                included.pop()
                text, token_count = self._measure(sentences, included)

            if text:
                yield Chunk(
                    sentence_start=chunk_start,
                    sentence_end=included[-1] + 1,
                    sentence_count=len(included),
                    token_count=token_count,
                    title=title,
                    text=text,
                )
                logger.debug(
                    "[%s] Chunk at sentence %d: %d sentences, %d tokens",
                    title,
                    chunk_start,
                    len(included),
                    token_count,
                )

            stride = max(1, len(included) // self.config.stride_divisor)
            chunk_start += stride

    def _measure(self, sentences: Sequence[SentenceSpan], included: list[int]) -> tuple[str, int]:
        text = " ".join(sentences[i].text for i in included).strip()
        return text, (self.counter.count(text) if text else 0)

    def _compute_stats(
        self,
        chunks: list[Chunk],
        total_sentences: int,
        skipped_sentences: int,
    ) -> ChunkingStats:
        """Compute statistics about the chunking result."""
        token_counts = [c.token_count for c in chunks]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_tokens=sum(token_counts),
            avg_chunk_tokens=sum(token_counts) / len(token_counts),
            min_chunk_tokens=min(token_counts),
            max_chunk_tokens=max(token_counts),
            total_sentences=total_sentences,
            skipped_sentences=skipped_sentences,
        )
