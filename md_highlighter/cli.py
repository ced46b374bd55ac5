"""
Classifies every line of a Markdown file and prints the resulting spans.
Useful to inspect what a host editor will receive from the highlighter.
"""

from __future__ import annotations

import json
import logging

import click

from .config import build_config
from .exceptions import ConfigError
from .filesystem import get_max_file_size, read_markdown, resolve_markdown_path
from .highlighter import MarkdownHighlighter
from .models import Block, state_name
from .styles import default_profile

__all__ = ["cli"]


def _format_block(number: int, block: Block) -> str:
    spans = " ".join(
        f"{span.category.name}[{span.offset}:{span.end}]" for span in block.spans
    )
    return f"{number:>5}  {state_name(block.state):<20} {spans}".rstrip()


def _block_to_dict(number: int, block: Block) -> dict[str, object]:
    return {
        "line": number,
        "text": block.text,
        "state": state_name(block.state),
        "spans": [
            {"offset": span.offset, "length": span.length, "category": span.category.name}
            for span in block.spans
        ],
    }


@click.command()
@click.version_option(package_name="md-highlighter")
@click.option(
    "--fully-highlighted-block-quote",
    is_flag=True,
    help="Highlight whole quoted lines instead of only the > markers",
)
@click.option("--font-size", type=float, help="Base font size of the default style profile")
@click.option("--json", "as_json", is_flag=True, help="Print the classification as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Log scheduling details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    fully_highlighted_block_quote: bool = False,
    font_size: float | None = None,
    as_json: bool = False,
    verbose: bool = False,
):
    """
    Classify a Markdown file line by line.

    Args:
        filepath: Path to the Markdown file to classify.
        fully_highlighted_block_quote: Highlight whole quoted lines.
        font_size: Override for the base font size of the style profile.
        as_json: Emit JSON instead of the tabular listing.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path is not a Markdown file or the
            configuration is invalid.
        click.ClickException: If the file cannot be read.

    Examples:
        md-highlighter README.md --json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        path = resolve_markdown_path(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            path.parent,
            fully_highlighted_block_quote=True if fully_highlighted_block_quote else None,
            base_font_size=font_size,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        content = read_markdown(path, get_max_file_size())
    except (IOError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    try:
        highlighter = MarkdownHighlighter(config, default_profile(config.base_font_size))
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error
    highlighter.set_content(content)
    highlighter.highlight_all()

    blocks = list(highlighter.document)
    if as_json:
        rows = [_block_to_dict(number, block) for number, block in enumerate(blocks, start=1)]
        click.echo(json.dumps(rows, indent=2))
        return

    for number, block in enumerate(blocks, start=1):
        click.echo(_format_block(number, block))


if __name__ == "__main__":
    cli()
