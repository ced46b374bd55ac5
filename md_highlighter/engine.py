"""Per-line classification pipeline."""

from __future__ import annotations

from .blocks import (
    LineContext,
    resolve_code_block,
    resolve_comment_block,
    resolve_frontmatter_block,
    resolve_headline,
)
from .config import HighlighterConfig, validate_config
from .languages import LanguageRegistry, build_language_registry
from .models import Category, Classification, LineInput, is_heading_state
from .rules import Rule, RuleSet, build_rule_set
from .scanner import EmbeddedLanguageScanner
from .styles import StyleProfile


class ClassificationEngine:
    """Classify single lines of Markdown into styled spans.

    The engine is stateless between calls: everything a line depends on comes
    in through `LineInput`, and the only cross-line effect, promoting the
    previous line to a setext heading, is returned to the caller rather than
    applied.

    Args:
        config: Options and extension tables. Defaults to `HighlighterConfig()`.
        profile: Style profile supplied by the host.

    Raises:
        ConfigError: If `config` is invalid or one of its rules or languages
            cannot be compiled.

    Examples:
        engine = ClassificationEngine(HighlighterConfig(), default_profile())
        result = engine.classify(LineInput("# Title", is_first=True))
        result.state  # Category.H1
    """

    def __init__(self, config: HighlighterConfig | None, profile: StyleProfile):
        self._config = config or HighlighterConfig()
        validate_config(self._config)
        self._rules: RuleSet = build_rule_set(self._config)
        self._languages: LanguageRegistry = build_language_registry(self._config.languages)
        self._profile = profile
        self._scanner = EmbeddedLanguageScanner(profile)

    @property
    def config(self) -> HighlighterConfig:
        return self._config

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def languages(self) -> LanguageRegistry:
        return self._languages

    @property
    def profile(self) -> StyleProfile:
        return self._profile

    def set_profile(self, profile: StyleProfile) -> None:
        """Swap the style profile used for subsequent classifications."""
        self._profile = profile
        self._scanner.profile = profile

    def classify(self, line: LineInput) -> Classification:
        """Classify one line.

        Runs, in order: pre rules, heading resolution and post rules (for
        non-empty lines only), then comment, code and front-matter resolution
        for every line.

        Args:
            line: The line's text with its neighbours' text and the state
                committed by the previous line.

        Returns:
            Classification: Spans, the state carried into the next line, and
                any request concerning the previous line.
        """
        ctx = LineContext(line)
        profile = self._profile

        if line.text:
            self._apply_rules(ctx, self._rules.pre)
            resolve_headline(ctx, profile)
            self._apply_rules(ctx, self._rules.post)

        resolve_comment_block(ctx, profile)
        resolve_code_block(ctx, profile, self._languages, self._scanner)
        resolve_frontmatter_block(ctx, profile)

        return Classification(
            spans=ctx.painter.spans(),
            state=ctx.state,
            promote_previous=ctx.promote_previous,
            requeue_previous=ctx.requeue_previous,
        )

    def _apply_rules(self, ctx: LineContext, rules: tuple[Rule, ...]) -> None:
        profile = self._profile
        painter = ctx.painter

        for rule in rules:
            if rule.disable_if_state_set and ctx.state != Category.NoState:
                continue

            matches = list(rule.pattern.finditer(ctx.text))
            if matches and rule.sets_block_state:
                ctx.state = rule.category

            style = profile[rule.category]
            for match in matches:
                # inline formatting inside headings keeps the heading's size
                in_heading = (
                    is_heading_state(ctx.state) and rule.category is not Category.InlineCodeBlock
                )

                if in_heading:
                    blended = profile.heading_blend(ctx.state, rule.category)
                    if blended is None:
                        continue
                    if rule.category is Category.Link and rule.capturing_group != 1:
                        continue
                    start, end = match.span(rule.capturing_group)
                    painter.paint(start, end - start, rule.category, blended)
                    continue

                if rule.capturing_group > 0:
                    start, end = match.span(rule.masked_group)
                    painter.paint(
                        start,
                        end - start,
                        Category.MaskedSyntax,
                        profile.masked_for(rule.category),
                    )

                start, end = match.span(rule.capturing_group)
                painter.paint(start, end - start, rule.category, style)
