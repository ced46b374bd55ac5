"""
md-highlighter: incremental syntax classification for Markdown editors.

This package can be used both as a library behind an editor and as a CLI
tool for inspecting classifications.

CLI Usage:
    md-highlighter README.md

Library Usage:
    from md_highlighter import HighlighterConfig, MarkdownHighlighter, default_profile

    highlighter = MarkdownHighlighter(HighlighterConfig(), default_profile())
    highlighter.set_content("Title\\n=====\\n\\nSome *text*")
    highlighter.add_listener(editor.refresh)
    # call on a one-second timer
    highlighter.tick()
    spans = highlighter.document.at(0).spans
"""

from .config import HighlighterConfig, build_config, load_config
from .document import Document
from .engine import ClassificationEngine
from .exceptions import ConfigError, HighlighterError, RuleCompileError, UnknownBlockError
from .highlighter import MarkdownHighlighter
from .languages import LanguageDefinition, LanguageRegistry
from .models import (
    EMBEDDED_LANGUAGE_THRESHOLD,
    Block,
    Category,
    Classification,
    LineInput,
    Span,
    Style,
    is_code_state,
    is_heading_state,
    state_name,
)
from .rules import Rule, RuleSet, build_rule_set, compile_rule
from .scanner import EmbeddedLanguageScanner
from .scheduler import DirtyBlockScheduler
from .styles import StyleProfile, default_profile

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "ClassificationEngine",
    "MarkdownHighlighter",
    "DirtyBlockScheduler",
    "EmbeddedLanguageScanner",
    "Document",
    # Rules and languages
    "Rule",
    "RuleSet",
    "build_rule_set",
    "compile_rule",
    "LanguageDefinition",
    "LanguageRegistry",
    # Data models
    "Block",
    "Category",
    "Classification",
    "LineInput",
    "Span",
    "Style",
    "EMBEDDED_LANGUAGE_THRESHOLD",
    "is_code_state",
    "is_heading_state",
    "state_name",
    # Configuration and styling
    "HighlighterConfig",
    "build_config",
    "load_config",
    "StyleProfile",
    "default_profile",
    # Exceptions
    "ConfigError",
    "HighlighterError",
    "RuleCompileError",
    "UnknownBlockError",
    # Version
    "__version__",
]
