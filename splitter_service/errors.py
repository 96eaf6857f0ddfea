"""Errors raised by the splitting engine."""


class SplitterError(Exception):
    """Base class for splitter failures."""


class InvalidConfig(SplitterError):
    """Raised when chunk_size / chunk_overlap are inconsistent. Fails before any text is processed."""


class UnsupportedLanguage(SplitterError):
    """Raised by strict separator lookup when the language tag is unknown."""

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language!r}")
        self.language = language
