"""Split configuration model. Read-only; no business logic beyond size validation."""

from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from splitter_service.errors import InvalidConfig

KeepSeparator = bool | Literal["start", "end"]


class SplitConfig(BaseModel):
    """Chunk size, overlap, separators and length measurement for one split call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    chunk_size: int = Field(default=1000, description="Maximum chunk length in length-function units")
    chunk_overlap: int = Field(default=200, description="Maximum overlap between consecutive chunks")
    separators: tuple[str, ...] | None = Field(
        default=None, description="Ordered separators, coarse to fine. None uses the language table or the default"
    )
    use_regex: bool = Field(default=False, description="Treat separators as regular expressions")
    language: str | None = Field(default=None, description="Language tag for the separator table")
    strict_language: bool = Field(default=False, description="Fail on unknown language tags instead of falling back")
    keep_separator: KeepSeparator = Field(
        default=False, description="false drops separators; true/start attaches to next piece; end to previous"
    )
    strip_whitespace: bool = Field(default=True, description="Trim leading/trailing whitespace of each chunk")
    add_start_index: bool = Field(default=False, description="Add start_index to chunked document metadata")
    add_line_locations: bool = Field(default=False, description="Add loc.lines to chunked document metadata")
    chunk_header: str | None = Field(default=None, description="Text prefixed to each chunked document")
    length_unit: Literal["chars", "tiktoken"] = Field(default="chars", description="chars|tiktoken")
    encoding_name: str = Field(default="cl100k_base", description="tiktoken encoding when length_unit is tiktoken")
    length_function: Callable[[str], int] | None = Field(
        default=None, exclude=True, description="Custom length function; overrides length_unit"
    )

    @model_validator(mode="after")
    def _check_sizes(self) -> "SplitConfig":
        if self.chunk_size <= 0:
            raise InvalidConfig(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise InvalidConfig(f"chunk_overlap must not be negative, got {self.chunk_overlap}")
        if self.chunk_overlap >= self.chunk_size:
            raise InvalidConfig(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})"
            )
        return self

    @property
    def keep_side(self) -> Literal["start", "end"] | None:
        """Side the separator is kept on, or None when separators are discarded."""
        if self.keep_separator is True:
            return "start"
        if self.keep_separator is False:
            return None
        return self.keep_separator
