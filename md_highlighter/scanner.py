"""Lexical scanner for lines inside embedded-language fenced blocks."""

from __future__ import annotations

from .languages import LanguageDefinition
from .models import Category, Span
from .styles import StyleProfile

LINE_COMMENT = "//"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
QUOTES = "\"'"


def _is_letter(text: str, pos: int) -> bool:
    """Bounds-checked letter test; positions outside `text` are not letters."""
    return 0 <= pos < len(text) and text[pos].isalpha()


class EmbeddedLanguageScanner:
    """Single-pass token painter for C-family embedded languages.

    This is a lexical approximation: no nested comments, raw strings, or
    literals spanning lines. It only produces spans. Token tables are only
    consulted where a letter run starts, so a preprocessor directive is
    listed without its ``#``.

    Examples:
        scanner = EmbeddedLanguageScanner(default_profile())
        scanner.scan("int x = 1;", registry.lookup("cpp"))
    """

    def __init__(self, profile: StyleProfile):
        self.profile = profile

    def scan(self, text: str, language: LanguageDefinition) -> list[Span]:
        """Return token spans for one line of `language` source.

        Args:
            text: Line contents.
            language: Token tables used for letter runs.

        Returns:
            list[Span]: Spans in left-to-right order. Comments and unterminated
                literals extend to the end of the line and stop the scan.
        """
        spans: list[Span] = []
        length = len(text)
        i = 0

        while i < length:
            char = text[i]

            if char.isalpha():
                matched = self._match_token(text, i, language)
                if matched is not None:
                    spans.append(matched)
                    i = matched.end
                    continue
                while i < length and text[i].isalpha():
                    i += 1
                continue

            if text.startswith(LINE_COMMENT, i):
                spans.append(self._span(i, length - i, Category.CodeComment))
                return spans

            if text.startswith(BLOCK_COMMENT_OPEN, i):
                close = text.find(BLOCK_COMMENT_CLOSE, i + len(BLOCK_COMMENT_OPEN))
                if close == -1:
                    spans.append(self._span(i, length - i, Category.CodeComment))
                    return spans
                end = close + len(BLOCK_COMMENT_CLOSE)
                spans.append(self._span(i, end - i, Category.CodeComment))
                i = end
                continue

            if char.isdigit():
                if not _is_letter(text, i - 1) and not _is_letter(text, i + 1):
                    spans.append(self._span(i, 1, Category.CodeNumLiteral))
                i += 1
                continue

            if char in QUOTES:
                close = text.find(char, i + 1)
                if close == -1:
                    spans.append(self._span(i, length - i, Category.CodeString))
                    return spans
                spans.append(self._span(i, close + 1 - i, Category.CodeString))
                i = close + 1
                continue

            i += 1

        return spans

    def _match_token(self, text: str, pos: int, language: LanguageDefinition) -> Span | None:
        # a token must not touch another letter on either side
        if _is_letter(text, pos - 1):
            return None
        for category, words in language.token_tables():
            for word in words:
                if text.startswith(word, pos) and not _is_letter(text, pos + len(word)):
                    return self._span(pos, len(word), category)
        return None

    def _span(self, offset: int, length: int, category: Category) -> Span:
        return Span(offset, length, category, self.profile[category])
