"""
Separator tables and matching for the recursive splitter.

Tables are ordered coarse to fine and always end with "" (split at every
character), so the recursive splitter can always make progress. Language
tables are regular expressions; the generic default is literal.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from splitter_service.config.logging import get_logger
from splitter_service.config.splitting.models import SplitConfig
from splitter_service.errors import UnsupportedLanguage

logger = get_logger(__name__)

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", " ", "")


class Language(str, Enum):
    """Languages with a dedicated separator table."""

    PYTHON = "python"
    JS = "js"
    TS = "ts"
    GO = "go"
    JAVA = "java"
    KOTLIN = "kotlin"
    RUST = "rust"
    CPP = "cpp"
    C = "c"
    CSHARP = "csharp"
    RUBY = "ruby"
    PHP = "php"
    SCALA = "scala"
    SWIFT = "swift"
    MARKDOWN = "markdown"
    LATEX = "latex"
    HTML = "html"
    RST = "rst"


_ALIASES: dict[str, Language] = {
    "py": Language.PYTHON,
    "javascript": Language.JS,
    "jsx": Language.JS,
    "typescript": Language.TS,
    "tsx": Language.TS,
    "golang": Language.GO,
    "kt": Language.KOTLIN,
    "rs": Language.RUST,
    "c++": Language.CPP,
    "cc": Language.CPP,
    "cxx": Language.CPP,
    "cs": Language.CSHARP,
    "c#": Language.CSHARP,
    "rb": Language.RUBY,
    "md": Language.MARKDOWN,
    "tex": Language.LATEX,
    "htm": Language.HTML,
    "restructuredtext": Language.RST,
}

_TAIL = ("\n\n", "\n", " ", "")

_C_FAMILY = (
    "\nclass ",
    "\nvoid ",
    "\nint ",
    "\nfloat ",
    "\ndouble ",
    "\nif ",
    "\nfor ",
    "\nwhile ",
    "\nswitch ",
    "\ncase ",
)

_LANGUAGE_SEPARATORS: dict[Language, tuple[str, ...]] = {
    Language.PYTHON: ("\nclass ", "\ndef ", "\n\tdef ", "\n    def ", *_TAIL),
    Language.JS: (
        "\nfunction ",
        "\nconst ",
        "\nlet ",
        "\nvar ",
        "\nclass ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        "\ndefault ",
        *_TAIL,
    ),
    Language.TS: (
        "\nenum ",
        "\ninterface ",
        "\nnamespace ",
        "\ntype ",
        "\nclass ",
        "\nfunction ",
        "\nconst ",
        "\nlet ",
        "\nvar ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        "\ndefault ",
        *_TAIL,
    ),
    Language.GO: (
        "\nfunc ",
        "\nvar ",
        "\nconst ",
        "\ntype ",
        "\nif ",
        "\nfor ",
        "\nswitch ",
        "\ncase ",
        *_TAIL,
    ),
    Language.JAVA: (
        "\nclass ",
        "\npublic ",
        "\nprotected ",
        "\nprivate ",
        "\nstatic ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        *_TAIL,
    ),
    Language.KOTLIN: (
        "\nclass ",
        "\npublic ",
        "\nprotected ",
        "\nprivate ",
        "\ninternal ",
        "\ncompanion ",
        "\nfun ",
        "\nval ",
        "\nvar ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nwhen ",
        "\nelse ",
        *_TAIL,
    ),
    Language.RUST: (
        "\nfn ",
        "\nconst ",
        "\nlet ",
        "\nif ",
        "\nwhile ",
        "\nfor ",
        "\nloop ",
        "\nmatch ",
        *_TAIL,
    ),
    Language.CPP: _C_FAMILY + _TAIL,
    Language.C: _C_FAMILY + _TAIL,
    Language.CSHARP: (
        "\ninterface ",
        "\nenum ",
        "\nimplements ",
        "\ndelegate ",
        "\nevent ",
        "\nclass ",
        "\nabstract ",
        "\npublic ",
        "\nprotected ",
        "\nprivate ",
        "\nstatic ",
        "\nreturn ",
        "\nif ",
        "\ncontinue ",
        "\nfor ",
        "\nforeach ",
        "\nwhile ",
        "\nswitch ",
        "\nbreak ",
        "\ncase ",
        "\nelse ",
        "\ntry ",
        "\nthrow ",
        "\nfinally ",
        "\ncatch ",
        *_TAIL,
    ),
    Language.RUBY: (
        "\ndef ",
        "\nclass ",
        "\nif ",
        "\nunless ",
        "\nwhile ",
        "\nfor ",
        "\ndo ",
        "\nbegin ",
        "\nrescue ",
        *_TAIL,
    ),
    Language.PHP: (
        "\nfunction ",
        "\nclass ",
        "\nif ",
        "\nforeach ",
        "\nwhile ",
        "\ndo ",
        "\nswitch ",
        "\ncase ",
        *_TAIL,
    ),
    Language.SCALA: (
        "\nclass ",
        "\nobject ",
        "\ndef ",
        "\nval ",
        "\nvar ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nmatch ",
        "\ncase ",
        *_TAIL,
    ),
    Language.SWIFT: (
        "\nfunc ",
        "\nclass ",
        "\nstruct ",
        "\nenum ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\ndo ",
        "\nswitch ",
        "\ncase ",
        *_TAIL,
    ),
    Language.MARKDOWN: (
        r"\n#{1,6} ",
        "```\n",
        r"\n\*\*\*+\n",
        r"\n---+\n",
        r"\n___+\n",
        *_TAIL,
    ),
    Language.LATEX: (
        r"\n\\chapter\{",
        r"\n\\section\{",
        r"\n\\subsection\{",
        r"\n\\subsubsection\{",
        r"\n\\begin\{enumerate\}",
        r"\n\\begin\{itemize\}",
        r"\n\\begin\{description\}",
        r"\n\\begin\{list\}",
        r"\n\\begin\{quote\}",
        r"\n\\begin\{quotation\}",
        r"\n\\begin\{verse\}",
        r"\n\\begin\{verbatim\}",
        r"\n\\begin\{align\}",
        r"\$\$",
        r"\$",
        " ",
        "",
    ),
    Language.HTML: (
        "<body",
        "<div",
        "<p",
        "<br",
        "<li",
        "<h1",
        "<h2",
        "<h3",
        "<h4",
        "<h5",
        "<h6",
        "<span",
        "<table",
        "<tr",
        "<td",
        "<th",
        "<ul",
        "<ol",
        "<header",
        "<footer",
        "<nav",
        "<head",
        "<style",
        "<script",
        "<meta",
        "<title",
        "",
    ),
    Language.RST: (
        r"\n=+\n",
        r"\n-+\n",
        r"\n\*+\n",
        r"\n\n\.\. *\n\n",
        *_TAIL,
    ),
}


@dataclass(frozen=True)
class SeparatorSet:
    """Ordered separators plus how to interpret them."""

    separators: tuple[str, ...]
    is_regex: bool = False
    language: Language | None = None


def parse_language(tag: str | Language | None) -> Language | None:
    """Map a language tag or alias (case-insensitive) to a Language, or None if unknown/absent."""
    if tag is None:
        return None
    if isinstance(tag, Language):
        return tag
    key = tag.strip().lower()
    if not key:
        return None
    try:
        return Language(key)
    except ValueError:
        return _ALIASES.get(key)


def supported_languages() -> list[str]:
    """Canonical language tags with a separator table."""
    return [lang.value for lang in Language]


def resolve_separators(language: str | Language | None = None, strict: bool = False) -> SeparatorSet:
    """
    Return the separator table for a language. Absent or unknown tags fall back to
    the generic default; with strict=True an unknown tag raises UnsupportedLanguage.
    """
    lang = parse_language(language)
    if lang is None:
        if language is not None and str(language).strip():
            if strict:
                raise UnsupportedLanguage(str(language))
            logger.debug("Unknown language, using default separators", extra={"language": str(language)})
        return SeparatorSet(DEFAULT_SEPARATORS)
    return SeparatorSet(_LANGUAGE_SEPARATORS[lang], is_regex=True, language=lang)


def separators_for_config(config: SplitConfig) -> SeparatorSet:
    """Explicit separators win; otherwise the language table; otherwise the default."""
    if config.separators:
        return SeparatorSet(tuple(config.separators), is_regex=config.use_regex)
    return resolve_separators(config.language, strict=config.strict_language)


class SeparatorMatcher:
    """
    One separator, literal or regex, behind a single interface.
    The empty separator matches between every pair of characters.
    """

    def __init__(self, separator: str, is_regex: bool = False):
        self.separator = separator
        self.pattern = re.compile(separator if is_regex else re.escape(separator)) if separator else None

    @property
    def is_character_level(self) -> bool:
        return self.pattern is None

    def _matches(self, text: str):
        # zero-width regex matches are not split points
        return (m for m in self.pattern.finditer(text) if m.end() > m.start())

    def found_in(self, text: str) -> bool:
        """True if splitting on this separator changes the text."""
        if self.pattern is None:
            return len(text) > 1
        return next(self._matches(text), None) is not None

    def split_with_offsets(
        self, text: str, keep: Literal["start", "end"] | None = None
    ) -> list[tuple[str, str, int]]:
        """
        Split text into (lead, piece, offset) triples. lead is the separator text
        dropped in front of the piece (empty when the separator is kept on a piece);
        offset is where the piece starts in text. Empty pieces are omitted.
        """
        if self.pattern is None:
            return [("", ch, i) for i, ch in enumerate(text)]
        out: list[tuple[str, str, int]] = []
        start = 0
        lead = ""
        for m in self._matches(text):
            if keep == "end":
                out.append(("", text[start : m.end()], start))
                start = m.end()
            elif keep == "start":
                out.append(("", text[start : m.start()], start))
                start = m.start()
            else:
                out.append((lead, text[start : m.start()], start))
                lead = m.group()
                start = m.end()
        out.append((lead, text[start:], start))
        return [(sep, piece, offset) for sep, piece, offset in out if piece]

    def split(self, text: str, keep: Literal["start", "end"] | None = None) -> list[tuple[str, str]]:
        """Split text into (lead, piece) pairs; see split_with_offsets."""
        return [(sep, piece) for sep, piece, _ in self.split_with_offsets(text, keep)]
