"""Pattern-based highlighting rules for the pre and post passes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .config import RULE_PASSES, HighlighterConfig, validate_config
from .exceptions import RuleCompileError
from .logger import get_logger
from .models import EMBEDDED_LANGUAGE_THRESHOLD, Category

logger = get_logger(__name__)

BLOCK_QUOTE_MARKERS = r"^\s*(>\s*)+"
BLOCK_QUOTE_FULL_LINE = r"^\s*(>\s*.+)"


@dataclass(frozen=True)
class Rule:
    """A single pattern rule.

    Attributes:
        category: Category painted over the capturing group.
        pattern: Compiled regular expression, applied with `finditer`.
        capturing_group: Group painted with the category (0 = whole match).
        masked_group: Group painted as masked syntax first; only used when
            `capturing_group` is not 0.
        disable_if_state_set: Skip the rule when the line already carries a
            block state.
        sets_block_state: Store `category` as the line's state when the rule
            matches at least once.
    """

    category: Category
    pattern: re.Pattern[str]
    capturing_group: int = 0
    masked_group: int = 0
    disable_if_state_set: bool = False
    sets_block_state: bool = False


@dataclass(frozen=True)
class RuleSet:
    """Rules split by pass, each applied in declaration order.

    Attributes:
        pre: Line-start structural rules run before heading resolution.
        post: Inline rules run after heading resolution.
    """

    pre: tuple[Rule, ...]
    post: tuple[Rule, ...]


def compile_rule(
    category: Category,
    pattern: str,
    *,
    capturing_group: int = 0,
    masked_group: int = 0,
    disable_if_state_set: bool = False,
    sets_block_state: bool = False,
) -> Rule:
    """Compile a pattern into a `Rule`.

    Args:
        category: Category painted by the rule.
        pattern: Regular expression source.
        capturing_group: Group painted with `category`.
        masked_group: Group painted as masked syntax.
        disable_if_state_set: Yield to lines that already carry a state.
        sets_block_state: Make `category` the line's block state on match.

    Returns:
        Rule: The compiled rule.

    Raises:
        RuleCompileError: If the pattern does not compile or a group index is
            larger than the number of groups in the pattern.

    Examples:
        compile_rule(Category.Bold, r"\\*\\*(.+?)\\*\\*", capturing_group=1)
    """
    try:
        compiled = re.compile(pattern)
    except re.error as error:
        raise RuleCompileError(pattern, str(error)) from error

    for name, group in (("capturing_group", capturing_group), ("masked_group", masked_group)):
        if group < 0 or group > compiled.groups:
            raise RuleCompileError(
                pattern, f"`{name}` {group} exceeds the {compiled.groups} group(s) in the pattern"
            )

    return Rule(
        category=category,
        pattern=compiled,
        capturing_group=capturing_group,
        masked_group=masked_group,
        disable_if_state_set=disable_if_state_set,
        sets_block_state=sets_block_state,
    )


def _pre_rules(config: HighlighterConfig) -> list[Rule]:
    block_quote = (
        BLOCK_QUOTE_FULL_LINE if config.fully_highlighted_block_quote else BLOCK_QUOTE_MARKERS
    )
    return [
        # reference link index lines: [1]: https://example.com
        compile_rule(Category.MaskedSyntax, r"^\[.+?\]: \w+://.+$"),
        compile_rule(Category.List, r"^\s*[-*+]\s", sets_block_state=True),
        compile_rule(Category.List, r"^\s*\d+\.\s", sets_block_state=True),
        compile_rule(Category.BlockQuote, block_quote),
        compile_rule(Category.HorizontalRuler, r"^([*\-_]\s?){3,}$"),
    ]


def _post_rules() -> list[Rule]:
    return [
        # italic goes before bold so that bold can overwrite it; no space is
        # allowed after the opening * so list markers are left alone
        compile_rule(
            Category.Italic,
            r"(?:^|[^\*\b])(?:\*([^\* ][^\*]*?)\*)(?:[^\*\b]|$)",
            capturing_group=1,
        ),
        compile_rule(Category.Italic, r"\b_([^_]+)_\b", capturing_group=1),
        compile_rule(Category.Bold, r"\B\*{2}(.+?)\*{2}\B", capturing_group=1),
        compile_rule(Category.Bold, r"\b__(.+?)__\b", capturing_group=1),
        # strike through
        compile_rule(Category.MaskedSyntax, r"~{2}(.+?)~{2}", capturing_group=1),
        # bare urls
        compile_rule(Category.Link, r"\b\w+?://[^\s]+"),
        compile_rule(Category.Link, r"<(\w+?://[^\s]+)>", capturing_group=1),
        compile_rule(Category.Link, r"<([^\s`][^`]*?\.[^`]*?[^\s`])>", capturing_group=1),
        compile_rule(Category.Link, r"\[([^\[\]]+)\]\((\S+|.+?)\)\B", capturing_group=1),
        compile_rule(Category.Link, r"\[\]\((.+?)\)", capturing_group=1),
        # email links
        compile_rule(Category.Link, r"<(.+?@.+?)>", capturing_group=1),
        # reference links
        compile_rule(Category.Link, r"\[(.+?)\]\[.+?\]", capturing_group=1),
        compile_rule(Category.Image, r"!\[(.+?)\]\(.+?\)", capturing_group=1),
        compile_rule(Category.Image, r"!\[\]\((.+?)\)", capturing_group=1),
        # image links
        compile_rule(Category.Link, r"\[!\[(.+?)\]\(.+?\)\]\(.+?\)", capturing_group=1),
        compile_rule(Category.Link, r"\[!\[\]\(.+?\)\]\((.+?)\)", capturing_group=1),
        compile_rule(Category.TrailingSpace, r"( +)$", capturing_group=1),
        compile_rule(Category.InlineCodeBlock, r"`(.+?)`", capturing_group=1),
        # indented code, unless a list item or similar already claimed the line
        compile_rule(Category.CodeBlock, r"^((\t)|( {4,})).+$", disable_if_state_set=True),
        compile_rule(Category.Comment, r"<!--(.+?)-->", capturing_group=1),
        # R Markdown comments: [note]: # (text)
        compile_rule(Category.Comment, r"^\[.+?\]: # \(.+?\)$"),
        compile_rule(Category.Table, r"^\|.+?\|$"),
    ]


def _configured_rule(raw: dict[str, object]) -> tuple[str, Rule]:
    pattern = str(raw["pattern"])
    name = str(raw["category"])
    try:
        category = Category[name]
    except KeyError as error:
        raise RuleCompileError(pattern, f"unknown category `{name}`") from error
    if category is Category.NoState or category >= EMBEDDED_LANGUAGE_THRESHOLD:
        raise RuleCompileError(pattern, f"category `{name}` cannot be painted by a rule")

    rule_pass = str(raw.get("pass", "post"))
    if rule_pass not in RULE_PASSES:
        raise RuleCompileError(pattern, f"unknown pass `{rule_pass}`")

    rule = compile_rule(
        category,
        pattern,
        capturing_group=int(raw.get("capturing_group", 0)),
        masked_group=int(raw.get("masked_group", 0)),
        disable_if_state_set=bool(raw.get("disable_if_state_set", False)),
        sets_block_state=bool(raw.get("sets_block_state", False)),
    )
    return rule_pass, rule


def build_rule_set(config: HighlighterConfig | None = None) -> RuleSet:
    """Compile the built-in rules followed by configured ones.

    Args:
        config: Options affecting the built-in patterns and carrying extra
            rules in `HighlighterConfig.rules`.

    Returns:
        RuleSet: Pre and post rules ready for the engine.

    Raises:
        ConfigError: If a configured rule table is malformed.
        RuleCompileError: If a configured rule does not compile.

    Examples:
        build_rule_set(HighlighterConfig(fully_highlighted_block_quote=True))
    """
    config = config or HighlighterConfig()
    validate_config(config)
    pre = _pre_rules(config)
    post = _post_rules()

    for raw in config.rules:
        rule_pass, rule = _configured_rule(raw)
        (pre if rule_pass == "pre" else post).append(rule)

    logger.debug("Compiled %d pre and %d post highlighting rules", len(pre), len(post))
    return RuleSet(pre=tuple(pre), post=tuple(post))
