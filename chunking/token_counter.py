"""
Token Counter for the Chunking Pipeline

Uses tiktoken with the tokenizer of the target embedding model, so chunk
budgets are measured in the same units the embedding API enforces. Model
names tiktoken does not know fall back to cl100k_base, the encoding of the
OpenAI embedding models.

Usage:
    from chunking.token_counter import TiktokenCounter, count_tokens

    counter = TiktokenCounter("text-embedding-ada-002")
    n = counter.count("This is an example sentence.")
    n = count_tokens("This is an example sentence.")
"""

import logging
from typing import Protocol, runtime_checkable

import tiktoken

from .models import DEFAULT_MODEL_ID

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "cl100k_base"

# Encoders are initialized once per model and reused across calls.
_encoders: dict[str, tiktoken.Encoding] = {}


@runtime_checkable
class TokenCounter(Protocol):
    """Counts subword tokens of a string for one fixed model."""

    def count(self, text: str) -> int:
        ...


def _get_encoder(model_id: str) -> tiktoken.Encoding:
    """Get or initialize the tiktoken encoder for a model."""
    encoder = _encoders.get(model_id)
    if encoder is None:
        try:
            encoder = tiktoken.encoding_for_model(model_id)
        except KeyError:
            logger.warning(
                "No tiktoken encoding registered for %r, using %s",
                model_id,
                FALLBACK_ENCODING,
            )
            encoder = tiktoken.get_encoding(FALLBACK_ENCODING)
        _encoders[model_id] = encoder
    return encoder


class TiktokenCounter:
    """TokenCounter backed by the tiktoken encoding of ``model_id``."""

    def __init__(self, model_id: str = DEFAULT_MODEL_ID) -> None:
        self.model_id = model_id
        self._encoder = _get_encoder(model_id)

    @property
    def encoding_name(self) -> str:
        return self._encoder.name

    def count(self, text: str) -> int:
        if not text:
            return 0
        # Uploaded text may contain literal special-token markers.
        return len(self._encoder.encode(text, disallowed_special=()))


def count_tokens(text: str, model_id: str = DEFAULT_MODEL_ID) -> int:
    """
    Count the number of tokens in a text string.

    Args:
        text: The text to tokenize.
        model_id: Embedding model whose tokenizer is used.

    Returns:
        Number of tokens.
    """
    return TiktokenCounter(model_id).count(text)


def count_tokens_batch(texts: list[str], model_id: str = DEFAULT_MODEL_ID) -> list[int]:
    """
    Count tokens for a list of texts.

    Args:
        texts: List of text strings.
        model_id: Embedding model whose tokenizer is used.

    Returns:
        List of token counts, one per input text.
    """
    counter = TiktokenCounter(model_id)
    return [counter.count(t) for t in texts]
