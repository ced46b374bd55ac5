"""Per-character paint buffer turning overlapping writes into spans."""

from __future__ import annotations

from .models import Category, Span, Style


class SpanPainter:
    """Collect paint operations for one line, last write wins.

    Writes are clipped to the line; `spans` flattens the buffer into ordered,
    non-overlapping spans, merging neighbouring characters painted alike.

    Examples:
        painter = SpanPainter("# Title")
        painter.paint(0, 7, Category.MaskedSyntax, masked)
        painter.paint(2, 5, Category.H1, h1)
        painter.spans()  # [Span(0, 2, MaskedSyntax), Span(2, 5, H1)]
    """

    def __init__(self, text: str):
        self._cells: list[tuple[Category, Style] | None] = [None] * len(text)

    def __len__(self) -> int:
        return len(self._cells)

    def paint(self, offset: int, length: int, category: Category, style: Style) -> None:
        start = max(offset, 0)
        end = min(offset + length, len(self._cells))
        if start >= end:
            return
        cell = (category, style)
        self._cells[start:end] = [cell] * (end - start)

    def paint_span(self, span: Span) -> None:
        self.paint(span.offset, span.length, span.category, span.style)

    def spans(self) -> tuple[Span, ...]:
        spans: list[Span] = []
        start = 0
        for index in range(1, len(self._cells) + 1):
            if index < len(self._cells) and self._cells[index] == self._cells[start]:
                continue
            cell = self._cells[start]
            if cell is not None:
                spans.append(Span(start, index - start, cell[0], cell[1]))
            start = index
        return tuple(spans)
