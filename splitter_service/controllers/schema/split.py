"""Request/response schemas for the /split routes."""

from typing import Any

from pydantic import BaseModel, Field


class SplitOptions(BaseModel):
    """Profile selection plus the overrides most callers need. `config` takes any SplitConfig field."""

    profile: str | None = Field(default=None, description="Split profile; defaults to the configured one")
    chunk_size: int | None = Field(default=None, description="Override for chunk size")
    chunk_overlap: int | None = Field(default=None, description="Override for chunk overlap")
    language: str | None = Field(default=None, description="Override for the separator language")
    config: dict[str, Any] | None = Field(default=None, description="Further SplitConfig overrides")

    def overrides(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.config or {})
        for name in ("chunk_size", "chunk_overlap", "language"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


class SplitRequest(SplitOptions):
    """POST /split request body."""

    text: str = Field(..., description="Text to split")


class ChunkOut(BaseModel):
    chunk_id: str
    chunk_index: int = Field(..., ge=0)
    content: str
    start_offset: int | None = None
    length: int = Field(..., ge=0)
    oversized: bool = False


class SplitResponse(BaseModel):
    """POST /split response body."""

    profile: str
    total_chunks: int = Field(..., ge=0)
    chunks: list[ChunkOut] = Field(default_factory=list)


class DocumentIn(BaseModel):
    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class SplitDocumentsRequest(SplitOptions):
    """POST /split/documents request body."""

    documents: list[DocumentIn] = Field(..., min_length=1)


class SplitDocumentsResponse(BaseModel):
    """POST /split/documents response body."""

    profile: str
    documents_split: int = Field(..., ge=0)
    total_chunks: int = Field(..., ge=0)
    documents: list[DocumentIn] = Field(default_factory=list)
