"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from .exceptions import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

TOOL_NAME = "md-highlighter"
RULE_PASSES = ("pre", "post")
LANGUAGE_TABLE_KEYS = frozenset({"types", "keywords", "preprocessor", "aliases"})
RULE_KEYS = frozenset(
    {
        "category",
        "pattern",
        "pass",
        "capturing_group",
        "masked_group",
        "disable_if_state_set",
        "sets_block_state",
    }
)


@dataclass
class HighlighterConfig:
    """Options the host may set on the highlighter.

    Attributes:
        fully_highlighted_block_quote: Highlight the whole quoted line instead
            of only the ``>`` markers.
        tick_interval: Seconds between two drains of the dirty-block queue.
        base_font_size: Body text size used when building the default style
            profile.
        max_lines_per_drain: Upper bound of lines reclassified in one drain;
            remaining lines stay queued for the next tick.
        languages: Extra embedded-language token tables keyed by language
            name. Each table may hold ``types``, ``keywords``,
            ``preprocessor`` and ``aliases`` string lists.
        rules: Extra highlighting rules appended after the built-in ones.
            Each rule is a table with ``category``, ``pattern`` and optional
            ``pass`` (``"pre"`` or ``"post"``), ``capturing_group``,
            ``masked_group``, ``disable_if_state_set`` and
            ``sets_block_state``.

    Examples:
        HighlighterConfig(fully_highlighted_block_quote=True, tick_interval=0.5)
    """

    # Rule options
    fully_highlighted_block_quote: bool = False

    # Scheduling
    tick_interval: float = 1.0
    max_lines_per_drain: int = 10_000

    # Styling
    base_font_size: float = 12.0

    # Extensions
    languages: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    rules: list[dict[str, object]] = field(default_factory=list)


def load_config(search_path: Path) -> HighlighterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-highlighter]`` table from `pyproject.toml` and the
    ``[md-highlighter]`` or ``[tool.md-highlighter]`` table from
    `.md-highlighter.toml` when present. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        HighlighterConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If a table exists but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", TOOL_NAME)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / f".{TOOL_NAME}.toml",
            table_paths=[(TOOL_NAME,), ("tool", TOOL_NAME)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return HighlighterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> HighlighterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Loaded configuration from %s", config_file)
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> HighlighterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return HighlighterConfig()

    try:
        return HighlighterConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: HighlighterConfig) -> None:
    """Validate a `HighlighterConfig` instance.

    Only the shape of the extension tables is checked here; rule patterns are
    compiled, and their errors reported, when the rule set is built.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a flag is not a boolean, a limit is not positive, or a
            language or rule table is malformed.

    Examples:
        validate_config(HighlighterConfig(tick_interval=0.25))
    """
    if not isinstance(config.fully_highlighted_block_quote, bool):
        raise ConfigError("`fully_highlighted_block_quote` must be a boolean")

    _ensure_positive_number("tick_interval", config.tick_interval)
    _ensure_positive_number("base_font_size", config.base_font_size)
    if isinstance(config.max_lines_per_drain, bool) or not isinstance(
        config.max_lines_per_drain, int
    ):
        raise ConfigError("`max_lines_per_drain` must be an integer")
    if config.max_lines_per_drain <= 0:
        raise ConfigError("`max_lines_per_drain` must be a positive integer")

    if not isinstance(config.languages, dict):
        raise ConfigError("`languages` must be a table")
    for name, table in config.languages.items():
        _validate_language_table(name, table)

    if not isinstance(config.rules, list):
        raise ConfigError("`rules` must be an array of tables")
    for index, rule in enumerate(config.rules):
        _validate_rule_table(index, rule)


def _validate_language_table(name: object, table: object) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("language names must be non-empty strings")
    if not isinstance(table, dict):
        raise ConfigError(f"`languages.{name}` must be a table")

    unknown = set(table) - LANGUAGE_TABLE_KEYS
    if unknown:
        raise ConfigError(f"`languages.{name}` has unsupported keys: {', '.join(sorted(unknown))}")

    for key, words in table.items():
        if not isinstance(words, list) or not all(
            isinstance(word, str) and word for word in words
        ):
            raise ConfigError(f"`languages.{name}.{key}` must be a list of non-empty strings")
        if key != "aliases":
            # tokens are only looked up where a letter run starts
            for word in words:
                if not word[0].isalpha():
                    raise ConfigError(
                        f"`languages.{name}.{key}` entry {word!r} must start with a letter"
                    )


def _validate_rule_table(index: int, rule: object) -> None:
    if not isinstance(rule, dict):
        raise ConfigError(f"`rules[{index}]` must be a table")

    unknown = set(rule) - RULE_KEYS
    if unknown:
        raise ConfigError(f"`rules[{index}]` has unsupported keys: {', '.join(sorted(unknown))}")

    for key in ("category", "pattern"):
        if not isinstance(rule.get(key), str) or not rule[key]:
            raise ConfigError(f"`rules[{index}].{key}` must be a non-empty string")

    if rule.get("pass", "post") not in RULE_PASSES:
        raise ConfigError(f"`rules[{index}].pass` must be one of: {', '.join(RULE_PASSES)}")

    for key in ("capturing_group", "masked_group"):
        value = rule.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"`rules[{index}].{key}` must be a non-negative integer")

    for key in ("disable_if_state_set", "sets_block_state"):
        if not isinstance(rule.get(key, False), bool):
            raise ConfigError(f"`rules[{index}].{key}` must be a boolean")


def apply_overrides(config: HighlighterConfig, **overrides: object) -> HighlighterConfig:
    """Apply override values to a `HighlighterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        HighlighterConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `HighlighterConfig`.

    Examples:
        updated = apply_overrides(config, fully_highlighted_block_quote=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> HighlighterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        HighlighterConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), base_font_size=14.0)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive_number(key: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"`{key}` must be a number")
    if value <= 0:
        raise ConfigError(f"`{key}` must be positive")
