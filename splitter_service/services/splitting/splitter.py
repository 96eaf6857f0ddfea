"""
Splitter: text + config -> chunks. Resolve separators, split recursively, then
merge with overlap. Each chunk carries its start offset in the source text.
Pure and deterministic for the same input + config.
"""

from typing import Any

from splitter_service.config.logging import get_logger
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.services.splitting.length import get_length_function
from splitter_service.services.splitting.merger import TextChunk, merge_into_chunks
from splitter_service.services.splitting.recursive import split_into_pieces

logger = get_logger(__name__)


def build_split_config(**options: Any) -> SplitConfig:
    """Validate keyword options into a SplitConfig. Raises InvalidConfig on inconsistent sizes."""
    return SplitConfig(**options)


def split_text_chunks(text: str, config: SplitConfig) -> list[TextChunk]:
    """Split text into TextChunks with start offsets in the source text."""
    if not text:
        return []
    length = get_length_function(config)
    pieces = split_into_pieces(text, config, length)
    chunks = merge_into_chunks(pieces, config, length)
    logger.debug(
        "Split text",
        extra={"text_length": len(text), "piece_count": len(pieces), "chunk_count": len(chunks)},
    )
    return chunks


def split_text(text: str, config: SplitConfig) -> list[str]:
    """Split text into chunk strings."""
    return [chunk.content for chunk in split_text_chunks(text, config)]
