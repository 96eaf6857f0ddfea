"""
Recursive splitting: break text into atomic pieces no longer than chunk_size.

At each level the first separator that occurs in the text is used. Pieces that
fit are collected into the current run; a piece that is still too long ends the
run and is split again with the remaining, finer separators only. Once the
separators are exhausted the piece is accepted as-is and flagged oversized.
"""

import itertools
from dataclasses import dataclass
from typing import Iterator

from splitter_service.config.logging import get_logger
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.services.splitting.length import LengthFunction, get_length_function
from splitter_service.services.splitting.separators import SeparatorMatcher, separators_for_config

logger = get_logger(__name__)


@dataclass(frozen=True)
class Piece:
    """
    Atomic piece of text. Pieces sharing `run` came from one split level and are
    merged together; `lead` is the separator text to reinsert before the piece and
    `start` is where the piece begins in the source text.
    """

    text: str
    lead: str = ""
    run: int = 0
    oversized: bool = False
    start: int | None = None


def _choose_separator(
    text: str, matchers: list[SeparatorMatcher]
) -> tuple[SeparatorMatcher, list[SeparatorMatcher]]:
    """Return the first separator present in text and the finer separators after it."""
    for i, matcher in enumerate(matchers):
        if matcher.is_character_level:
            return matcher, []
        if matcher.found_in(text):
            return matcher, matchers[i + 1 :]
    return matchers[-1], []


def _split_recursive(
    text: str,
    base: int,
    matchers: list[SeparatorMatcher],
    config: SplitConfig,
    length: LengthFunction,
    runs: Iterator[int],
    out: list[Piece],
) -> None:
    matcher, remaining = _choose_separator(text, matchers)
    run = next(runs)
    for lead, piece, offset in matcher.split_with_offsets(text, config.keep_side):
        start = base + offset
        if length(piece) <= config.chunk_size:
            out.append(Piece(piece, lead, run, start=start))
            continue
        if remaining:
            _split_recursive(piece, start, remaining, config, length, runs, out)
        else:
            logger.debug(
                "Accepting oversized piece",
                extra={"piece_length": length(piece), "chunk_size": config.chunk_size},
            )
            out.append(Piece(piece, lead, next(runs), oversized=True, start=start))
        run = next(runs)


def split_into_pieces(text: str, config: SplitConfig, length_function: LengthFunction | None = None) -> list[Piece]:
    """Split text into ordered atomic pieces. No overlap is applied here."""
    if not text:
        return []
    length = length_function or get_length_function(config)
    separator_set = separators_for_config(config)
    matchers = [SeparatorMatcher(s, separator_set.is_regex) for s in separator_set.separators]
    pieces: list[Piece] = []
    _split_recursive(text, 0, matchers, config, length, itertools.count(), pieces)
    return pieces
