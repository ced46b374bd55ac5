"""Data models for md-highlighter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

# Block states at or above this value mean "inside an embedded-language code
# block". Languages occupy even codes from here on.
EMBEDDED_LANGUAGE_THRESHOLD = 200


class Category(IntEnum):
    """Semantic categories assigned to spans and carried as block states.

    Values below `EMBEDDED_LANGUAGE_THRESHOLD` are plain Markdown categories;
    values at or above it name the embedded language of an open fenced code
    block. New languages must take fresh even codes above the existing ones.
    """

    NoState = -1
    Link = 0
    Image = 3
    CodeBlock = 4
    Italic = 7
    Bold = 8
    List = 9
    Comment = 11
    H1 = 12
    H2 = 13
    H3 = 14
    H4 = 15
    H5 = 16
    H6 = 17
    BlockQuote = 18
    HorizontalRuler = 21
    Table = 22
    InlineCodeBlock = 23
    MaskedSyntax = 24
    FrontmatterBlock = 27
    TrailingSpace = 28

    # Embedded-language tokens
    CodeKeyword = 40
    CodeType = 41
    CodePreprocessor = 42
    CodeString = 43
    CodeNumLiteral = 44
    CodeComment = 45

    # Internal block states
    CodeBlockEnd = 100
    HeadlineEnd = 101
    FrontmatterBlockEnd = 102

    # Embedded languages
    CodeCpp = 200
    CodeJs = 202


HEADING_CATEGORIES = (
    Category.H1,
    Category.H2,
    Category.H3,
    Category.H4,
    Category.H5,
    Category.H6,
)


def is_heading_state(state: int) -> bool:
    """Return True when `state` is one of the H1..H6 categories."""
    return Category.H1 <= state <= Category.H6


def is_code_state(state: int) -> bool:
    """Return True when a line in `state` leaves the next line inside a fence.

    Examples:
        is_code_state(Category.CodeBlock)  # True
        is_code_state(Category.CodeBlockEnd)  # False
    """
    return state == Category.CodeBlock or state >= EMBEDDED_LANGUAGE_THRESHOLD


def heading_for_level(level: int) -> Category:
    """Map a heading level (1-6) to its category."""
    return HEADING_CATEGORIES[level - 1]


def state_name(state: int) -> str:
    """Render a block state for display, including unnamed language codes."""
    try:
        return Category(state).name
    except ValueError:
        return f"Code<{state}>"


@dataclass(frozen=True)
class Style:
    """Opaque visual attributes the host renders for a category.

    Attributes:
        foreground: Text colour as a ``#rrggbb`` string, or None to inherit.
        background: Background colour, or None to inherit.
        bold: Whether the text is bold.
        italic: Whether the text is italic.
        underline: Whether the text is underlined.
        font_size: Point size, or None to keep the host's default.
        monospace: Whether a fixed-width font is requested.
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font_size: float | None = None
    monospace: bool = False


@dataclass(frozen=True)
class Span:
    """A styled region of one line.

    Attributes:
        offset: Zero-based start column.
        length: Number of characters covered.
        category: Semantic category of the region.
        style: Style resolved for the region at classification time.
    """

    offset: int
    length: int
    category: Category
    style: Style = field(default_factory=Style, compare=False)

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class LineInput:
    """Snapshot of a line and the neighbours classification may consult.

    Attributes:
        text: Text of the line being classified.
        previous_state: Block state committed by the previous line.
        previous_text: Text of the previous line, empty for the first line.
        next_text: Text of the next line, empty for the last line.
        first_text: Text of the document's first line.
        is_first: Whether this line is the document's first line.
    """

    text: str
    previous_state: int = Category.NoState
    previous_text: str = ""
    next_text: str = ""
    first_text: str = ""
    is_first: bool = False


@dataclass(frozen=True)
class Classification:
    """Result of classifying one line.

    Attributes:
        spans: Ordered, non-overlapping spans covering the styled regions.
        state: Block state carried into the next line.
        promote_previous: Heading category to store on the previous line when
            the current line is a setext underline, otherwise None.
        requeue_previous: Whether the previous line must be reclassified.
    """

    spans: tuple[Span, ...]
    state: int
    promote_previous: Category | None = None
    requeue_previous: bool = False


@dataclass
class Block:
    """Arena record for one line of a document.

    Blocks never reference their neighbours; the owning `Document` resolves
    previous and next lines through stable handles.

    Attributes:
        handle: Stable identifier assigned by the document.
        text: Current text of the line.
        state: Persistent block state carried into the next line.
        spans: Spans produced by the latest classification.
        revision: Number of times the block has been classified.
    """

    handle: int
    text: str = ""
    state: int = Category.NoState
    spans: tuple[Span, ...] = ()
    revision: int = 0
