"""Style profiles mapping categories to visual attributes."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType

from .models import Category, Style, is_heading_state

_PLAIN = Style()


class StyleProfile(Mapping[Category, Style]):
    """Immutable mapping from `Category` to `Style`.

    The host supplies the profile; the engine only looks styles up and derives
    size-adjusted variants from them. Unknown categories resolve to a plain
    `Style`.

    Examples:
        profile = StyleProfile({Category.Bold: Style(bold=True)})
        profile[Category.Bold].bold  # True
        profile[Category.Table]  # Style()
    """

    def __init__(self, styles: Mapping[Category, Style] | None = None):
        self._styles = MappingProxyType(dict(styles or {}))

    def __getitem__(self, category: Category) -> Style:
        return self._styles.get(category, _PLAIN)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, category: object) -> bool:
        return category in self._styles

    def __repr__(self) -> str:
        return f"StyleProfile({dict(self._styles)!r})"

    def with_style(self, category: Category, style: Style) -> StyleProfile:
        """Return a copy of the profile with `category` mapped to `style`."""
        styles = dict(self._styles)
        styles[category] = style
        return StyleProfile(styles)

    def masked_for(self, category: int) -> Style:
        """Masked-syntax style sized like the category it masks.

        Args:
            category: Category whose markup characters are being masked.

        Returns:
            Style: The `MaskedSyntax` style with the target's font size, when
                the target defines one.
        """
        masked = self[Category.MaskedSyntax]
        font_size = self._styles.get(category, _PLAIN).font_size
        if font_size:
            return replace(masked, font_size=font_size)
        return masked

    def heading_blend(self, heading: int, category: Category) -> Style | None:
        """Blend an inline category into the enclosing heading's style.

        Italic keeps the heading style and adds italics, bold keeps the heading
        style, and links take the link style at the heading's size. Other
        categories are not painted inside headings.

        Args:
            heading: Heading category of the current line.
            category: Inline category being applied.

        Returns:
            Style | None: The blended style, or None when the category is not
                drawn inside headings.
        """
        if not is_heading_state(heading):
            return None
        heading_style = self[Category(heading)]
        if category is Category.Italic:
            return replace(heading_style, italic=True)
        if category is Category.Bold:
            return heading_style
        if category is Category.Link:
            return replace(self[Category.Link], font_size=heading_style.font_size)
        return None


def default_profile(font_size: float = 12.0) -> StyleProfile:
    """Build the stock light-theme profile.

    Headings scale from 1.6x (H1) down to 1.1x (H6) of `font_size`; code uses
    a fixed-width font on a grey background.

    Args:
        font_size: Base point size of body text.

    Returns:
        StyleProfile: Profile covering every category the engine emits.

    Examples:
        default_profile(14)[Category.H1].font_size  # 22.4
    """
    heading = Style(foreground="#00316e", bold=True)
    code = Style(background="#dcdcdc", monospace=True)
    styles: dict[Category, Style] = {
        Category.H1: replace(heading, font_size=font_size * 1.6),
        Category.H2: replace(heading, font_size=font_size * 1.5),
        Category.H3: replace(heading, font_size=font_size * 1.4),
        Category.H4: replace(heading, font_size=font_size * 1.3),
        Category.H5: replace(heading, font_size=font_size * 1.2),
        Category.H6: replace(heading, font_size=font_size * 1.1),
        Category.HorizontalRuler: Style(foreground="#808080", background="#c0c0c0"),
        Category.List: Style(foreground="#a3007b"),
        Category.Link: Style(foreground="#0080ff", underline=True),
        Category.Image: Style(foreground="#00bf00", background="#e4ffe4"),
        Category.CodeBlock: code,
        Category.InlineCodeBlock: code,
        Category.Italic: Style(italic=True),
        Category.Bold: Style(bold=True),
        Category.Comment: Style(foreground="#a0a0a4"),
        Category.MaskedSyntax: Style(foreground="#cccccc"),
        Category.Table: Style(foreground="#649449", monospace=True),
        Category.BlockQuote: Style(foreground="#800000"),
        Category.TrailingSpace: Style(background="#fce4e4"),
        Category.FrontmatterBlock: Style(foreground="#cccccc"),
        Category.CodeType: replace(code, foreground="#000080"),
        Category.CodeKeyword: replace(code, foreground="#00aaaa"),
        Category.CodePreprocessor: replace(code, foreground="#aa00aa"),
        Category.CodeString: replace(code, foreground="#008000"),
        Category.CodeNumLiteral: replace(code, foreground="#808000"),
        Category.CodeComment: replace(code, foreground="#808080"),
    }
    return StyleProfile(styles)
