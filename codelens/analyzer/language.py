"""Heuristic source-language detection.

The classifier is an ordered cascade of substring rules evaluated against the
whole document. The first matching rule decides the language; text that no
rule recognizes falls back to TypeScript. It is not a lexer: the rules only
need to be good enough to pick a highlighting grammar.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class LanguageTag(Enum):
    JSX = "jsx"
    TSX = "tsx"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    JAVA = "java"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    MARKUP = "markup"
    CSS = "css"
    JSON = "json"
    GO = "go"
    RUST = "rust"
    BASH = "bash"
    YAML = "yaml"


DEFAULT_LANGUAGE: LanguageTag = LanguageTag.TYPESCRIPT


@dataclass(frozen=True)
class LanguageRule:
    name: str
    matches: Callable[[str], bool]
    resolve: Callable[[str], LanguageTag]


def _contains_all(text: str, *needles: str) -> bool:
    return all(needle in text for needle in needles)


def _contains_any(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


def _tag(language: LanguageTag) -> Callable[[str], LanguageTag]:
    return lambda _text: language


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def _is_react(text: str) -> bool:
    return _contains_any(text, "import React", "export interface", "<React.", "</>")


def _resolve_react(text: str) -> LanguageTag:
    if ":" in text and _contains_any(text, "interface", "type "):
        return LanguageTag.TSX
    return LanguageTag.JSX


def _is_typescript(text: str) -> bool:
    return _contains_all(text, "export", "interface") or _contains_all(text, "type ", "=", ":")


def _is_javascript(text: str) -> bool:
    return _contains_all(text, "import ", "from ") or _contains_all(text, "const ", "=>")


def _is_python(text: str) -> bool:
    return (
        (_contains_all(text, "def ", ":") and "=>" not in text)
        or (_contains_all(text, "import ", "as ") and "from '" not in text)
        or (_contains_all(text, "class ", ":") and "{" not in text)
    )


def _is_java(text: str) -> bool:
    return _contains_any(text, "public class", "private", "protected") and _contains_all(text, "{", ";")


def _is_c_family(text: str) -> bool:
    return "#include <" in text or _contains_all(text, "int ", ";", "{", "}")


def _resolve_c_family(text: str) -> LanguageTag:
    if _contains_any(text, "::", "template<"):
        return LanguageTag.CPP
    return LanguageTag.C


def _is_csharp(text: str) -> bool:
    return _contains_all(text, "namespace ", "using ", ";")


def _is_markup(text: str) -> bool:
    return "<!DOCTYPE html>" in text or (
        _contains_all(text, "<", ">") and _contains_any(text, "<div", "<span", "<html")
    )


def _is_css(text: str) -> bool:
    return (
        _contains_all(text, "{", "}", ":")
        and "=>" not in text
        and _contains_any(text, ";", "px", "em", "rem")
    )


def _is_json(text: str) -> bool:
    delimited = (text.startswith("{") and text.endswith("}")) or (text.startswith("[") and text.endswith("]"))
    return delimited and _contains_all(text, '"', ":")


def _is_go(text: str) -> bool:
    return _contains_all(text, "package ", "import (") or _contains_all(text, "func ", "() {")


def _is_rust(text: str) -> bool:
    return _contains_all(text, "fn ", "-> ") or _contains_any(text, "let mut ", "impl ")


def _is_bash(text: str) -> bool:
    return (
        "#!/bin/" in text
        or _contains_all(text, "echo ", "$")
        or _contains_all(text, "while ", "do", "done")
    )


def _is_yaml(text: str) -> bool:
    return (
        (":" in text and "{" not in text and ";" not in text)
        or (_contains_all(text, "- ", ":") and "{" not in text)
    )


# Order matters: the first matching rule wins.
LANGUAGE_RULES: List[LanguageRule] = [
    LanguageRule("react", _is_react, _resolve_react),
    LanguageRule("typescript", _is_typescript, _tag(LanguageTag.TYPESCRIPT)),
    LanguageRule("javascript", _is_javascript, _tag(LanguageTag.JAVASCRIPT)),
    LanguageRule("python", _is_python, _tag(LanguageTag.PYTHON)),
    LanguageRule("java", _is_java, _tag(LanguageTag.JAVA)),
    LanguageRule("c-family", _is_c_family, _resolve_c_family),
    LanguageRule("csharp", _is_csharp, _tag(LanguageTag.CSHARP)),
    LanguageRule("markup", _is_markup, _tag(LanguageTag.MARKUP)),
    LanguageRule("css", _is_css, _tag(LanguageTag.CSS)),
    LanguageRule("json", _is_json, _tag(LanguageTag.JSON)),
    LanguageRule("go", _is_go, _tag(LanguageTag.GO)),
    LanguageRule("rust", _is_rust, _tag(LanguageTag.RUST)),
    LanguageRule("bash", _is_bash, _tag(LanguageTag.BASH)),
    LanguageRule("yaml", _is_yaml, _tag(LanguageTag.YAML)),
]


def classify(source_text: str) -> LanguageTag:
    """Guess the language of ``source_text``. Never fails; unknown text maps to TypeScript."""
    for rule in LANGUAGE_RULES:
        if rule.matches(source_text):
            language = rule.resolve(source_text)
            logger.debug("Language rule '%s' matched, classified as %s", rule.name, language.value)
            return language

    return DEFAULT_LANGUAGE
