"""POST /split and /split/documents: split text or documents with a named profile plus inline overrides."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from splitter_service.config.logging import get_logger
from splitter_service.config.settings import get_settings
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.config.splitting.static import get_active_profile_name, resolve_split_config
from splitter_service.controllers.schema.split import (
    ChunkOut,
    DocumentIn,
    SplitDocumentsRequest,
    SplitDocumentsResponse,
    SplitOptions,
    SplitRequest,
    SplitResponse,
)
from splitter_service.errors import InvalidConfig, UnsupportedLanguage
from splitter_service.services.splitting.documents import DocumentRecord, split_documents
from splitter_service.services.splitting.separators import supported_languages
from splitter_service.services.splitting.splitter import split_text_chunks
from splitter_service.utils.ids import compute_chunk_hash, generate_chunk_id

logger = get_logger(__name__)

router = APIRouter(prefix="/split", tags=["splitting"])


def _resolve(options: SplitOptions) -> tuple[str, SplitConfig]:
    """Return (profile name, config). Maps config problems onto 4xx responses."""
    profile = options.profile or get_settings().split_profile
    if profile == "active":
        profile = get_active_profile_name()
    try:
        return profile, resolve_split_config(profile, options.overrides())
    except InvalidConfig as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/languages")
def list_languages() -> dict[str, list[str]]:
    """Language tags with a dedicated separator table."""
    return {"languages": supported_languages()}


@router.post("", response_model=SplitResponse)
def split(body: SplitRequest) -> SplitResponse:
    """Split one text. Chunk ids are deterministic for the same text, config and position."""
    profile, config = _resolve(body)
    try:
        chunks = split_text_chunks(body.text, config)
    except UnsupportedLanguage as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    source_key = compute_chunk_hash(body.text, config)
    out = []
    for i, chunk in enumerate(chunks):
        chunk_hash = compute_chunk_hash(chunk.content, config)
        out.append(
            ChunkOut(
                chunk_id=generate_chunk_id(source_key, i, chunk_hash),
                chunk_index=i,
                content=chunk.content,
                start_offset=chunk.start_offset,
                length=chunk.length,
                oversized=chunk.oversized,
            )
        )
    return SplitResponse(profile=profile, total_chunks=len(out), chunks=out)


@router.post("/documents", response_model=SplitDocumentsResponse)
def split_documents_route(body: SplitDocumentsRequest) -> SplitDocumentsResponse:
    """Split a batch of documents; every chunk carries a copy of its document's metadata."""
    limit = get_settings().max_documents_per_request
    if len(body.documents) > limit:
        raise HTTPException(status_code=413, detail=f"At most {limit} documents per request")
    profile, config = _resolve(body)
    records = [DocumentRecord(page_content=d.page_content, metadata=d.metadata) for d in body.documents]
    try:
        chunked = split_documents(records, config)
    except UnsupportedLanguage as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return SplitDocumentsResponse(
        profile=profile,
        documents_split=len(records),
        total_chunks=len(chunked),
        documents=[DocumentIn(page_content=r.page_content, metadata=r.metadata) for r in chunked],
    )
