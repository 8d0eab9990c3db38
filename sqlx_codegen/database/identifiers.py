"""Identifier rules for generated Rust code."""

import re

# Rust 1.70 strict and reserved keywords
RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "Self", "self", "static", "struct", "super",
    "trait", "true", "type", "union", "unsafe", "use", "where", "while", "abstract",
    "become", "box", "do", "final", "macro", "override", "priv", "try", "typeof",
    "unsized", "virtual", "yield",
})

RAW_IDENTIFIER_PREFIX = "r#"

# Words split on separators and case boundaries: HTTPServer -> HTTP, Server
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def is_multi_word(name: str) -> bool:
    """Check whether a name is made of several words (contains ``_`` or ``-``)."""
    return "_" in name or "-" in name


def escape_if_reserved(name: str) -> str:
    """Return ``name`` as a raw identifier if it is a Rust keyword.

    Matching is exact and case-sensitive, so ``Type`` is left alone while
    ``type`` becomes ``r#type``.
    """
    if name in RUST_KEYWORDS:
        return f"{RAW_IDENTIFIER_PREFIX}{name}"
    return name


def to_upper_camel_case(name: str) -> str:
    """Convert a table name to a struct name (``user_orders`` -> ``UserOrders``)."""
    words = _WORD_PATTERN.findall(name)
    return "".join(word.capitalize() for word in words)
