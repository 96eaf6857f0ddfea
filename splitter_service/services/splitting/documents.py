"""Document wrapper: split metadata-carrying records and copy metadata onto every chunk."""

from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from splitter_service.config.logging import get_logger
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.services.splitting.merger import TextChunk
from splitter_service.services.splitting.splitter import split_text_chunks

logger = get_logger(__name__)


class DocumentRecord(BaseModel):
    """A text document with arbitrary metadata, as produced by upstream loaders."""

    model_config = ConfigDict(frozen=True)

    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


def _line_span(text: str, chunk: TextChunk) -> dict[str, int]:
    """1-based first and last line of a located chunk."""
    first = text.count("\n", 0, chunk.start_offset) + 1
    return {"from": first, "to": first + chunk.content.count("\n")}


def _chunk_metadata(text: str, chunk: TextChunk, source: dict[str, Any], config: SplitConfig) -> dict[str, Any]:
    metadata = dict(source)
    if config.add_start_index:
        metadata["start_index"] = chunk.start_offset
    if config.add_line_locations and chunk.start_offset is not None:
        loc = metadata.get("loc")
        base = dict(loc) if isinstance(loc, dict) else {}
        metadata["loc"] = {**base, "lines": _line_span(text, chunk)}
    return metadata


def create_documents(
    texts: Sequence[str],
    config: SplitConfig,
    metadatas: Sequence[dict[str, Any]] | None = None,
) -> list[DocumentRecord]:
    """
    Split raw texts into chunked documents. metadatas, when given, pairs with texts
    by position; each chunk receives its own shallow copy.
    """
    if metadatas is not None and len(metadatas) != len(texts):
        raise ValueError(f"Got {len(metadatas)} metadatas for {len(texts)} texts")
    records: list[DocumentRecord] = []
    for i, text in enumerate(texts):
        source = metadatas[i] if metadatas is not None else {}
        for chunk in split_text_chunks(text, config):
            content = f"{config.chunk_header}{chunk.content}" if config.chunk_header else chunk.content
            records.append(
                DocumentRecord(page_content=content, metadata=_chunk_metadata(text, chunk, source, config))
            )
    return records


def split_documents(documents: Iterable[DocumentRecord], config: SplitConfig) -> list[DocumentRecord]:
    """Split each document's page_content; outputs keep a copy of the source metadata."""
    documents = list(documents)
    records = create_documents(
        [doc.page_content for doc in documents],
        config,
        metadatas=[doc.metadata for doc in documents],
    )
    logger.info(
        "Split documents",
        extra={"document_count": len(documents), "chunk_count": len(records)},
    )
    return records
