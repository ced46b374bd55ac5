from __future__ import annotations

from md_highlighter.models import Category, Span, Style
from md_highlighter.painter import SpanPainter

RED = Style(foreground="#ff0000")
BLUE = Style(foreground="#0000ff")


def test_unpainted_line_has_no_spans():
    assert SpanPainter("plain").spans() == ()
    assert SpanPainter("").spans() == ()


def test_last_write_wins():
    painter = SpanPainter("# Title")
    painter.paint(0, 7, Category.MaskedSyntax, RED)
    painter.paint(2, 5, Category.H1, BLUE)

    assert painter.spans() == (Span(0, 2, Category.MaskedSyntax), Span(2, 5, Category.H1))


def test_writes_are_clipped_to_the_line():
    painter = SpanPainter("abc")
    painter.paint(-2, 4, Category.Bold, RED)
    painter.paint(2, 10, Category.Italic, RED)
    painter.paint(5, 2, Category.Link, RED)

    assert painter.spans() == (Span(0, 2, Category.Bold), Span(2, 1, Category.Italic))


def test_adjacent_writes_merge_only_when_alike():
    painter = SpanPainter("abcdef")
    painter.paint(0, 2, Category.Bold, RED)
    painter.paint(2, 2, Category.Bold, RED)
    painter.paint(4, 2, Category.Bold, BLUE)

    spans = painter.spans()

    assert spans == (Span(0, 4, Category.Bold), Span(4, 2, Category.Bold))
    assert [span.style for span in spans] == [RED, BLUE]


def test_paint_span_keeps_style():
    painter = SpanPainter("int x")
    painter.paint_span(Span(0, 3, Category.CodeType, BLUE))

    (span,) = painter.spans()
    assert span.style == BLUE
