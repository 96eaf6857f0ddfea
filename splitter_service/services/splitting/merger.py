"""Greedy chunk merging with overlap between consecutive chunks."""

import itertools
from dataclasses import dataclass
from operator import attrgetter

from splitter_service.config.logging import get_logger, log_extra
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.services.splitting.length import LengthFunction, get_length_function
from splitter_service.services.splitting.recursive import Piece

logger = get_logger(__name__)


@dataclass(frozen=True)
class TextChunk:
    """One output chunk. start_offset is None when the pieces carried no source position."""

    content: str
    start_offset: int | None = None
    oversized: bool = False

    @property
    def length(self) -> int:
        return len(self.content)


def _join(window: list[Piece], strip: bool) -> tuple[str, int | None]:
    """Joined content and its start in the source text, after stripping."""
    text = window[0].text + "".join(p.lead + p.text for p in window[1:])
    start = window[0].start
    if strip:
        stripped = text.lstrip()
        if start is not None:
            start += len(text) - len(stripped)
        text = stripped.rstrip()
    return text, start


def _merge_run(run: list[Piece], config: SplitConfig, length: LengthFunction) -> list[TextChunk]:
    """
    Pack the pieces of one run into chunks of at most chunk_size. After each flush
    the window keeps its longest suffix that is within chunk_overlap and still
    leaves room for the next piece.
    """
    chunks: list[TextChunk] = []
    window: list[Piece] = []
    total = 0

    def flush(pieces: list[Piece], oversized: bool = False) -> None:
        content, start = _join(pieces, config.strip_whitespace)
        if content:
            chunks.append(TextChunk(content, start_offset=start, oversized=oversized))

    for piece in run:
        size = length(piece.text)
        if size > config.chunk_size:
            if window:
                flush(window)
            logger.warning(
                "Created a chunk longer than chunk_size",
                **log_extra({"chunk_length": size, "chunk_size": config.chunk_size}),
            )
            flush([piece], oversized=True)
            window, total = [], 0
            continue

        joint = length(piece.lead) if window else 0
        if window and total + joint + size > config.chunk_size:
            flush(window)
            while window and (total > config.chunk_overlap or total + length(piece.lead) + size > config.chunk_size):
                dropped = window.pop(0)
                total -= length(dropped.text) + (length(window[0].lead) if window else 0)
        window.append(piece)
        total += size + (length(piece.lead) if len(window) > 1 else 0)

    if window:
        flush(window)
    return chunks


def merge_into_chunks(
    pieces: list[Piece], config: SplitConfig, length_function: LengthFunction | None = None
) -> list[TextChunk]:
    """Merge atomic pieces into chunks run by run. Runs never share a chunk."""
    length = length_function or get_length_function(config)
    chunks: list[TextChunk] = []
    for _, run in itertools.groupby(pieces, key=attrgetter("run")):
        chunks.extend(_merge_run(list(run), config, length))
    return chunks
