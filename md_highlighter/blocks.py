"""Cross-line state machine: headings, comments, fenced code, front matter.

Each resolver inspects the line held by a `LineContext`, paints it, and
updates the context's block state. Resolvers never touch other lines; the
setext look-behind only records a request on the context.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    ATX_HEADING_PATTERN,
    CODE_FENCE_PATTERN,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    FRONTMATTER_DELIMITER,
)
from .languages import LanguageRegistry
from .models import Category, LineInput, heading_for_level, is_code_state
from .painter import SpanPainter
from .scanner import EmbeddedLanguageScanner
from .styles import StyleProfile

SETEXT_UNDERLINES = (("=", Category.H1), ("-", Category.H2))


@dataclass
class LineContext:
    """Mutable state of one classification pass.

    Attributes:
        line: Snapshot of the line and its neighbours.
        painter: Paint buffer for the line.
        state: Block state assigned so far.
        promote_previous: Heading to store on the previous line, if any.
        requeue_previous: Whether the previous line must be reclassified.
    """

    line: LineInput
    painter: SpanPainter = field(init=False)
    state: int = Category.NoState
    promote_previous: Category | None = None
    requeue_previous: bool = False

    def __post_init__(self) -> None:
        self.painter = SpanPainter(self.line.text)

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def previous_state(self) -> int:
        return self.line.previous_state


def consists_of(text: str, char: str) -> bool:
    """Return True when `text` is non-empty and made only of `char`.

    Examples:
        consists_of("====", "=")  # True
        consists_of("", "=")  # False
    """
    return bool(text) and text.count(char) == len(text)


def fence_language_tag(text: str) -> str | None:
    """Extract the lower-cased language tag of an opening fence line.

    Examples:
        fence_language_tag("```cpp")  # "cpp"
        fence_language_tag("``` Python title='x'")  # "python"
        fence_language_tag("```")  # None
    """
    match = CODE_FENCE_PATTERN.match(text)
    if not match:
        return None
    words = match.group("info").split()
    return words[0].lower() if words else None


def setext_heading_for(text: str) -> Category | None:
    """Heading level underlined by `text`, or None if it is not an underline.

    Examples:
        setext_heading_for("===")  # Category.H1
        setext_heading_for("- item")  # None
    """
    for char, heading in SETEXT_UNDERLINES:
        if consists_of(text, char):
            return heading
    return None


def resolve_headline(ctx: LineContext, profile: StyleProfile) -> None:
    """Resolve ATX and setext headings for a non-empty line.

    Precedence: ATX marker, then the line being a setext underline, then the
    next line being one. A line made only of ``=`` or ``-`` never takes the
    look-ahead branch, and never becomes heading text for the line below.
    """
    text = ctx.text
    painter = ctx.painter

    atx = ATX_HEADING_PATTERN.match(text)
    if atx:
        heading = heading_for_level(len(atx.group(1)))
        painter.paint(0, len(text), Category.MaskedSyntax, profile.masked_for(heading))
        start = atx.end()
        painter.paint(start, len(text) - start, heading, profile[heading])
        ctx.state = heading
        return

    underlined = setext_heading_for(text)
    if underlined is not None:
        previous_text = ctx.line.previous_text
        if (
            previous_text
            and setext_heading_for(previous_text) is None
            and ctx.previous_state in (underlined, Category.NoState)
        ):
            painter.paint(0, len(text), Category.MaskedSyntax, profile.masked_for(underlined))
            ctx.state = Category.HeadlineEnd
            ctx.promote_previous = underlined
            ctx.requeue_previous = True
        return

    heading = setext_heading_for(ctx.line.next_text)
    if heading is not None:
        painter.paint(0, len(text), heading, profile[heading])
        ctx.state = heading


def resolve_comment_block(ctx: LineContext, profile: StyleProfile) -> None:
    """Track ``<!-- ... -->`` comments spanning several lines.

    A line opening and closing a comment is left to the inline comment rule.
    A line ending with ``-->`` is painted as a comment without carrying the
    state on, whether or not a comment block is open.
    """
    trimmed = ctx.text.strip()
    in_comment = ctx.previous_state == Category.Comment

    if trimmed.startswith(COMMENT_OPEN) and COMMENT_CLOSE in trimmed:
        return

    if trimmed.startswith(COMMENT_OPEN) or (in_comment and not trimmed.endswith(COMMENT_CLOSE)):
        ctx.state = Category.Comment
    elif not trimmed.endswith(COMMENT_CLOSE):
        return

    ctx.painter.paint(0, len(ctx.text), Category.Comment, profile[Category.Comment])


def resolve_code_block(
    ctx: LineContext,
    profile: StyleProfile,
    languages: LanguageRegistry,
    scanner: EmbeddedLanguageScanner,
) -> None:
    """Open, continue, and close fenced code blocks.

    Fence lines are painted as masked syntax. Lines inside a fence inherit the
    fence's state; lines of a known embedded language are additionally run
    through `scanner`.
    """
    text = ctx.text
    previous_state = ctx.previous_state

    if CODE_FENCE_PATTERN.match(text):
        if is_code_state(previous_state):
            ctx.state = Category.CodeBlockEnd
        else:
            tag = fence_language_tag(text)
            language = languages.lookup(tag) if tag else None
            ctx.state = language.state if language else Category.CodeBlock
        ctx.painter.paint(
            0, len(text), Category.MaskedSyntax, profile.masked_for(Category.CodeBlock)
        )
        return

    if not is_code_state(previous_state):
        return

    ctx.state = previous_state
    ctx.painter.paint(0, len(text), Category.CodeBlock, profile[Category.CodeBlock])
    language = languages.by_state(previous_state)
    if language is not None:
        for span in scanner.scan(text, language):
            ctx.painter.paint_span(span)


def resolve_frontmatter_block(ctx: LineContext, profile: StyleProfile) -> None:
    """Track the front-matter block, recognised only at the top of a document."""
    if ctx.line.first_text != FRONTMATTER_DELIMITER:
        return

    text = ctx.text
    in_frontmatter = ctx.previous_state == Category.FrontmatterBlock

    if text == FRONTMATTER_DELIMITER:
        # only one front-matter block exists: it opens on the first line
        if not in_frontmatter and not ctx.line.is_first:
            return
        ctx.state = Category.FrontmatterBlockEnd if in_frontmatter else Category.FrontmatterBlock
        ctx.painter.paint(0, len(text), Category.MaskedSyntax, profile[Category.MaskedSyntax])
    elif in_frontmatter:
        ctx.state = Category.FrontmatterBlock
        ctx.painter.paint(
            0, len(text), Category.FrontmatterBlock, profile[Category.FrontmatterBlock]
        )
