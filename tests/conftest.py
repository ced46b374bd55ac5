import pytest
from click.testing import CliRunner

from md_highlighter.config import HighlighterConfig
from md_highlighter.engine import ClassificationEngine
from md_highlighter.highlighter import MarkdownHighlighter
from md_highlighter.styles import default_profile


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def engine() -> ClassificationEngine:
    """Engine with default options and the stock style profile."""
    return ClassificationEngine(HighlighterConfig(), default_profile())


@pytest.fixture()
def highlighter() -> MarkdownHighlighter:
    """Highlighter over an empty document with a frozen clock."""
    return MarkdownHighlighter(HighlighterConfig(), default_profile(), clock=lambda: 0.0)
