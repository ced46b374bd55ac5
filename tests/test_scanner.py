from __future__ import annotations

import pytest

from md_highlighter.languages import LanguageRegistry
from md_highlighter.models import Category
from md_highlighter.scanner import EmbeddedLanguageScanner
from md_highlighter.styles import default_profile

REGISTRY = LanguageRegistry.with_builtins()
CPP = REGISTRY.lookup("cpp")
JS = REGISTRY.lookup("js")


def _scan(text: str, language=CPP) -> list[tuple[int, int, Category]]:
    scanner = EmbeddedLanguageScanner(default_profile())
    return [(span.offset, span.length, span.category) for span in scanner.scan(text, language)]


def test_types_and_numbers():
    assert _scan("int x = 1;") == [(0, 3, Category.CodeType), (8, 1, Category.CodeNumLiteral)]


def test_tokens_need_word_boundaries():
    assert _scan("interval printf") == []
    assert _scan("x1 = a2") == []


def test_longest_token_wins():
    assert _scan("const_cast<int>(x)") == [
        (0, 10, Category.CodeKeyword),
        (11, 3, Category.CodeType),
    ]


def test_preprocessor_directive():
    assert _scan("#include <vector>") == [
        (1, 7, Category.CodePreprocessor),
        (10, 6, Category.CodeType),
    ]


def test_line_comment_runs_to_end_of_line():
    assert _scan("x = 5; // int note") == [
        (4, 1, Category.CodeNumLiteral),
        (7, 11, Category.CodeComment),
    ]


def test_block_comment_on_one_line():
    assert _scan("a /* c */ int") == [
        (2, 7, Category.CodeComment),
        (10, 3, Category.CodeType),
    ]


def test_unclosed_block_comment_runs_to_end_of_line():
    assert _scan("f(); /* open int") == [(5, 11, Category.CodeComment)]


def test_string_and_char_literals():
    assert _scan('char c = \'a\';') == [(0, 4, Category.CodeType), (9, 3, Category.CodeString)]
    assert _scan('s = "int // x" + 1') == [
        (4, 10, Category.CodeString),
        (17, 1, Category.CodeNumLiteral),
    ]


def test_unterminated_string_runs_to_end_of_line():
    assert _scan('int x = "unterminated') == [
        (0, 3, Category.CodeType),
        (8, 13, Category.CodeString),
    ]


def test_each_digit_is_a_literal():
    assert _scan("a 42") == [(2, 1, Category.CodeNumLiteral), (3, 1, Category.CodeNumLiteral)]


def test_spans_carry_profile_styles():
    profile = default_profile()
    scanner = EmbeddedLanguageScanner(profile)

    (span,) = scanner.scan("return", CPP)

    assert span.category is Category.CodeKeyword
    assert span.style == profile[Category.CodeKeyword]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("let p = new Promise();", [
            (0, 3, Category.CodeKeyword),
            (8, 3, Category.CodeKeyword),
            (12, 7, Category.CodeType),
        ]),
        ("typeof x", [(0, 6, Category.CodeKeyword)]),
    ],
)
def test_js_tokens(text: str, expected):
    assert _scan(text, JS) == expected
