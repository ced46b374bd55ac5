"""Embedded-language token tables and the registry resolving fence tags."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .exceptions import ConfigError
from .logger import get_logger
from .models import EMBEDDED_LANGUAGE_THRESHOLD, Category

logger = get_logger(__name__)

CPP_TYPES = (
    "QString", "QList", "QVector", "QHash", "QMap",
    "int", "float", "string", "double", "long", "vector",
    "short", "char", "void", "bool", "wchar_t",
    "class", "struct", "union", "enum",
)  # fmt: skip

CPP_KEYWORDS = (
    "while", "if", "for", "do", "return", "else", "switch",
    "case", "break", "continue",
    "namespace", "using",
    "unsigned", "const", "static", "mutable", "auto",
    "asm", "volatile",
    "static_cast", "dynamic_cast", "reinterpret_cast", "const_cast",
    "nullptr",
    "public", "private", "protected", "signal", "slot",
    "new", "delete", "operator", "template", "this",
    "false", "true", "explicit", "sizeof",
    "try", "catch", "throw",
)  # fmt: skip

CPP_PREPROCESSOR = ("ifndef", "ifdef", "include", "define", "endif", "pragma")

JS_TYPES = (
    "Array", "Boolean", "Date", "Error", "Function", "Map", "Number",
    "Object", "Promise", "RegExp", "Set", "String", "Symbol",
)  # fmt: skip

JS_KEYWORDS = (
    "async", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "export", "extends",
    "false", "finally", "for", "function", "if", "import", "in", "instanceof",
    "let", "new", "null", "return", "super", "switch", "this", "throw",
    "true", "try", "typeof", "undefined", "var", "void", "while", "yield",
)  # fmt: skip


def _longest_first(words: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(words), key=lambda word: (-len(word), word)))


@dataclass(frozen=True)
class LanguageDefinition:
    """Token tables of one embedded language.

    Each table is stored longest-first so a longer token (``const_cast``)
    is tried before one of its prefixes (``const``).

    Attributes:
        name: Canonical fence tag, lower-case.
        state: Block state of lines inside a fence tagged with this language.
        types: Type names.
        keywords: Keywords.
        preprocessor: Preprocessor directives.
        aliases: Additional fence tags resolving to this language.
    """

    name: str
    state: int
    types: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    preprocessor: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        name: str,
        state: int,
        *,
        types: Iterable[str] = (),
        keywords: Iterable[str] = (),
        preprocessor: Iterable[str] = (),
        aliases: Iterable[str] = (),
    ) -> LanguageDefinition:
        return cls(
            name=name.lower(),
            state=state,
            types=_longest_first(types),
            keywords=_longest_first(keywords),
            preprocessor=_longest_first(preprocessor),
            aliases=tuple(alias.lower() for alias in aliases),
        )

    def token_tables(self) -> tuple[tuple[Category, tuple[str, ...]], ...]:
        """Token tables in lookup order paired with the category they paint."""
        return (
            (Category.CodeType, self.types),
            (Category.CodeKeyword, self.keywords),
            (Category.CodePreprocessor, self.preprocessor),
        )


class LanguageRegistry:
    """Resolves fence tags to embedded languages and block states.

    Built-in languages keep their fixed `Category` codes. Languages registered
    later receive the next free even code, so existing codes never move.

    Examples:
        registry = LanguageRegistry.with_builtins()
        registry.lookup("cpp").state  # Category.CodeCpp
        registry.register("go", keywords=["func", "package"]).state  # 204
    """

    def __init__(self) -> None:
        self._by_state: dict[int, LanguageDefinition] = {}
        self._by_tag: dict[str, LanguageDefinition] = {}

    @classmethod
    def with_builtins(cls) -> LanguageRegistry:
        registry = cls()
        registry.add(
            LanguageDefinition.create(
                "cpp",
                Category.CodeCpp,
                types=CPP_TYPES,
                keywords=CPP_KEYWORDS,
                preprocessor=CPP_PREPROCESSOR,
                aliases=("c++", "cxx", "c"),
            )
        )
        registry.add(
            LanguageDefinition.create(
                "js",
                Category.CodeJs,
                types=JS_TYPES,
                keywords=JS_KEYWORDS,
                aliases=("javascript",),
            )
        )
        return registry

    def __iter__(self) -> Iterator[LanguageDefinition]:
        return iter(self._by_state.values())

    def __len__(self) -> int:
        return len(self._by_state)

    def add(self, language: LanguageDefinition) -> LanguageDefinition:
        """Register a fully built language definition.

        Raises:
            ConfigError: If the state is below the embedded-language threshold
                or already taken, or a tag is already registered.
        """
        if language.state < EMBEDDED_LANGUAGE_THRESHOLD:
            raise ConfigError(
                f"Language `{language.name}` needs a state >= {EMBEDDED_LANGUAGE_THRESHOLD}"
            )
        if language.state in self._by_state:
            raise ConfigError(f"Language state {language.state} is already registered")

        tags = (language.name, *language.aliases)
        for tag in tags:
            if tag in self._by_tag:
                raise ConfigError(f"Language tag `{tag}` is already registered")

        self._by_state[language.state] = language
        for tag in tags:
            self._by_tag[tag] = language
        return language

    def register(
        self,
        name: str,
        *,
        types: Iterable[str] = (),
        keywords: Iterable[str] = (),
        preprocessor: Iterable[str] = (),
        aliases: Iterable[str] = (),
    ) -> LanguageDefinition:
        """Register a language under the next free state code.

        Args:
            name: Fence tag of the language.
            types: Type names painted as `Category.CodeType`.
            keywords: Keywords painted as `Category.CodeKeyword`.
            preprocessor: Directives painted as `Category.CodePreprocessor`.
            aliases: Additional fence tags.

        Returns:
            LanguageDefinition: The registered language.

        Raises:
            ConfigError: If the name or an alias is already registered.
        """
        language = LanguageDefinition.create(
            name,
            self._next_state(),
            types=types,
            keywords=keywords,
            preprocessor=preprocessor,
            aliases=aliases,
        )
        logger.debug("Registered embedded language %s as state %d", language.name, language.state)
        return self.add(language)

    def lookup(self, tag: str) -> LanguageDefinition | None:
        """Resolve a fence tag (case-insensitive) to a language."""
        return self._by_tag.get(tag.lower())

    def by_state(self, state: int) -> LanguageDefinition | None:
        """Return the language whose fenced lines carry `state`."""
        return self._by_state.get(state)

    def _next_state(self) -> int:
        highest = max(self._by_state, default=EMBEDDED_LANGUAGE_THRESHOLD - 2)
        return highest + 2 - highest % 2


def build_language_registry(languages: dict[str, dict[str, list[str]]]) -> LanguageRegistry:
    """Create a registry holding the built-ins plus configured languages.

    Args:
        languages: Token tables keyed by language name, as found in
            `HighlighterConfig.languages`.

    Returns:
        LanguageRegistry: Registry ready for the scanner.

    Raises:
        ConfigError: If a configured language collides with a registered tag.
    """
    registry = LanguageRegistry.with_builtins()
    for name, table in languages.items():
        registry.register(
            name,
            types=table.get("types", ()),
            keywords=table.get("keywords", ()),
            preprocessor=table.get("preprocessor", ()),
            aliases=table.get("aliases", ()),
        )
    return registry
