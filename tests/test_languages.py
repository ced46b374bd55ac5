from __future__ import annotations

import pytest

from md_highlighter.exceptions import ConfigError
from md_highlighter.languages import (
    LanguageDefinition,
    LanguageRegistry,
    build_language_registry,
)
from md_highlighter.models import EMBEDDED_LANGUAGE_THRESHOLD, Category


def test_builtins_keep_fixed_codes():
    registry = LanguageRegistry.with_builtins()

    assert registry.lookup("cpp").state == Category.CodeCpp
    assert registry.lookup("js").state == Category.CodeJs
    assert len(registry) == 2


@pytest.mark.parametrize("tag", ["CPP", "c++", "cxx", "c"])
def test_cpp_aliases_are_case_insensitive(tag: str):
    registry = LanguageRegistry.with_builtins()

    assert registry.lookup(tag).name == "cpp"


def test_lookup_unknown_tag():
    assert LanguageRegistry.with_builtins().lookup("cobol") is None


def test_by_state():
    registry = LanguageRegistry.with_builtins()

    assert registry.by_state(Category.CodeJs).name == "js"
    assert registry.by_state(Category.CodeBlock) is None


def test_token_tables_are_longest_first():
    language = LanguageDefinition.create(
        "x", 300, keywords=["const", "const_cast", "co", "const"]
    )

    assert language.keywords == ("const_cast", "const", "co")
    assert [category for category, _ in language.token_tables()] == [
        Category.CodeType,
        Category.CodeKeyword,
        Category.CodePreprocessor,
    ]


def test_register_assigns_next_even_code():
    registry = LanguageRegistry.with_builtins()

    go = registry.register("Go", keywords=["func"])
    rust = registry.register("rust", aliases=["rs"])

    assert go.name == "go"
    assert go.state == 204
    assert rust.state == 206
    assert registry.lookup("RS") is rust
    assert [language.name for language in registry] == ["cpp", "js", "go", "rust"]


def test_register_on_empty_registry_starts_at_threshold():
    assert LanguageRegistry().register("go").state == EMBEDDED_LANGUAGE_THRESHOLD


def test_add_rejects_state_below_threshold():
    with pytest.raises(ConfigError, match=">= 200"):
        LanguageRegistry().add(LanguageDefinition.create("go", Category.CodeBlock))


def test_add_rejects_taken_state():
    registry = LanguageRegistry.with_builtins()

    with pytest.raises(ConfigError, match="already registered"):
        registry.add(LanguageDefinition.create("go", Category.CodeCpp))


def test_register_rejects_taken_tag():
    registry = LanguageRegistry.with_builtins()

    with pytest.raises(ConfigError, match="`c` is already registered"):
        registry.register("clang", aliases=["c"])


def test_build_language_registry_from_config_tables():
    registry = build_language_registry(
        {"go": {"types": ["string"], "keywords": ["func"], "aliases": ["golang"]}}
    )

    go = registry.lookup("golang")
    assert go.state == 204
    assert go.types == ("string",)
