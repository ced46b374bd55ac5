from __future__ import annotations

import pytest

from md_highlighter.blocks import consists_of, fence_language_tag
from md_highlighter.config import HighlighterConfig
from md_highlighter.engine import ClassificationEngine
from md_highlighter.models import Category, LineInput
from md_highlighter.styles import default_profile


def _layout(spans) -> list[tuple[int, int, Category]]:
    return [(span.offset, span.length, span.category) for span in spans]


def _classify_lines(engine: ClassificationEngine, lines: list[str]) -> list:
    """Classify lines top to bottom, threading each state into the next line."""
    results = []
    state = Category.NoState
    for index, text in enumerate(lines):
        result = engine.classify(
            LineInput(
                text,
                previous_state=state,
                previous_text=lines[index - 1] if index else "",
                next_text=lines[index + 1] if index + 1 < len(lines) else "",
                first_text=lines[0],
                is_first=index == 0,
            )
        )
        results.append(result)
        state = result.state
    return results


@pytest.mark.parametrize(
    ("text", "char", "expected"),
    [("====", "=", True), ("", "=", False), ("==-", "=", False), ("-", "-", True)],
)
def test_consists_of(text: str, char: str, expected: bool):
    assert consists_of(text, char) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("```cpp", "cpp"),
        ("```` JS", "js"),
        ("``` Python title='x'", "python"),
        ("```", None),
        ("text", None),
    ],
)
def test_fence_language_tag(text: str, expected: str | None):
    assert fence_language_tag(text) == expected


def test_multi_line_comment(engine):
    results = _classify_lines(engine, ["<!-- start", "inside", "end -->", "after"])

    assert [result.state for result in results] == [
        Category.Comment,
        Category.Comment,
        Category.NoState,
        Category.NoState,
    ]
    assert _layout(results[0].spans) == [(0, 10, Category.Comment)]
    assert _layout(results[1].spans) == [(0, 6, Category.Comment)]
    assert _layout(results[2].spans) == [(0, 7, Category.Comment)]
    assert results[3].spans == ()


def test_comment_keeps_blank_lines(engine):
    results = _classify_lines(engine, ["<!--", "", "-->"])

    assert [result.state for result in results] == [
        Category.Comment,
        Category.Comment,
        Category.NoState,
    ]


def test_closing_marker_outside_comment_is_painted_without_state(engine):
    result = engine.classify(LineInput("arrow -->"))
    after = engine.classify(LineInput("next", previous_state=result.state))

    assert result.state == Category.NoState
    assert _layout(result.spans) == [(0, 9, Category.Comment)]
    assert after.spans == ()


def test_plain_fence(engine):
    results = _classify_lines(engine, ["```", "x = 1", "```", "after"])

    assert [result.state for result in results] == [
        Category.CodeBlock,
        Category.CodeBlock,
        Category.CodeBlockEnd,
        Category.NoState,
    ]
    assert _layout(results[0].spans) == [(0, 3, Category.MaskedSyntax)]
    assert _layout(results[1].spans) == [(0, 5, Category.CodeBlock)]
    assert _layout(results[2].spans) == [(0, 3, Category.MaskedSyntax)]
    assert results[3].spans == ()


def test_markdown_inside_fence_is_code(engine):
    results = _classify_lines(engine, ["```", "# not a heading", "```"])

    assert results[1].state == Category.CodeBlock
    assert _layout(results[1].spans) == [(0, 15, Category.CodeBlock)]


def test_cpp_fence(engine):
    results = _classify_lines(engine, ["```cpp", "int x = 1;", "```"])

    assert [result.state for result in results] == [
        Category.CodeCpp,
        Category.CodeCpp,
        Category.CodeBlockEnd,
    ]
    assert _layout(results[1].spans) == [
        (0, 3, Category.CodeType),
        (3, 5, Category.CodeBlock),
        (8, 1, Category.CodeNumLiteral),
        (9, 1, Category.CodeBlock),
    ]


def test_js_fence_alias(engine):
    results = _classify_lines(engine, ["```javascript", "const a = await f();", "```"])

    assert results[1].state == Category.CodeJs
    assert (0, 5, Category.CodeKeyword) in _layout(results[1].spans)
    assert (10, 5, Category.CodeKeyword) in _layout(results[1].spans)


def test_unknown_language_is_plain_code(engine):
    results = _classify_lines(engine, ["```brainfuck", "int x", "```"])

    assert results[0].state == Category.CodeBlock
    assert _layout(results[1].spans) == [(0, 5, Category.CodeBlock)]


def test_unterminated_string_stops_at_end_of_line(engine):
    results = _classify_lines(engine, ["```cpp", 'int x = "unterminated', "```"])

    assert _layout(results[1].spans)[-1] == (8, 13, Category.CodeString)
    assert results[2].state == Category.CodeBlockEnd


def test_unclosed_fence_runs_to_end_of_document(engine):
    results = _classify_lines(engine, ["```", "code", ""])

    assert results[-1].state == Category.CodeBlock


def test_configured_language_fence():
    config = HighlighterConfig(languages={"go": {"keywords": ["func", "package"]}})
    engine = ClassificationEngine(config, default_profile())

    assert engine.languages.lookup("go").state == 204

    results = _classify_lines(engine, ["```go", "func main() {", "```"])

    assert results[0].state == 204
    assert results[1].state == 204
    assert _layout(results[1].spans)[0] == (0, 4, Category.CodeKeyword)


def test_front_matter_at_first_line(engine):
    lines = ["---", "title: x", "---", "", "body", "", "---"]

    results = _classify_lines(engine, lines)

    assert [result.state for result in results[:3]] == [
        Category.FrontmatterBlock,
        Category.FrontmatterBlock,
        Category.FrontmatterBlockEnd,
    ]
    assert _layout(results[0].spans) == [(0, 3, Category.MaskedSyntax)]
    assert _layout(results[1].spans) == [(0, 8, Category.FrontmatterBlock)]
    assert _layout(results[2].spans) == [(0, 3, Category.MaskedSyntax)]
    assert results[6].state == Category.NoState
    assert _layout(results[6].spans) == [(0, 3, Category.HorizontalRuler)]


def test_front_matter_only_at_document_start(engine):
    results = _classify_lines(engine, ["intro", "---", "x: y", "---"])

    for result in results:
        assert result.state not in (Category.FrontmatterBlock, Category.FrontmatterBlockEnd)
        assert Category.FrontmatterBlock not in {span.category for span in result.spans}
