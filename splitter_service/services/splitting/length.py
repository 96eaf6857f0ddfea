"""Length functions for splitting. Characters by default; tiktoken token counts on request."""

from functools import partial
from typing import Callable

import tiktoken

from splitter_service.config.logging import get_logger
from splitter_service.config.splitting.models import SplitConfig

logger = get_logger(__name__)

LengthFunction = Callable[[str], int]

_encodings: dict[str, "tiktoken.Encoding"] = {}


def _get_encoding(encoding_name: str) -> "tiktoken.Encoding":
    """Lazy-load and cache a tiktoken encoding (cl100k_base is the OpenAI default)."""
    enc = _encodings.get(encoding_name)
    if enc is None:
        logger.debug("Loading tiktoken encoding", extra={"encoding": encoding_name})
        enc = tiktoken.get_encoding(encoding_name)
        _encodings[encoding_name] = enc
    return enc


def count_characters(text: str) -> int:
    return len(text)


def count_tokens(text: str, encoding_name: str = "cl100k_base") -> int:
    """Return token count for text. Special tokens are counted as plain text."""
    if not text:
        return 0
    return len(_get_encoding(encoding_name).encode(text, disallowed_special=()))


LENGTH_UNITS: dict[str, Callable[[SplitConfig], LengthFunction]] = {
    "chars": lambda _config: count_characters,
    "tiktoken": lambda config: partial(count_tokens, encoding_name=config.encoding_name),
}


def get_length_function(config: SplitConfig) -> LengthFunction:
    """Custom length_function wins; otherwise the function for config.length_unit."""
    if config.length_function is not None:
        return config.length_function
    return LENGTH_UNITS[config.length_unit](config)
