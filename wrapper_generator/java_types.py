"""Type definitions that are common in Java type descriptors."""

from __future__ import annotations

PRIMITIVE_TYPES = frozenset(
    {
        "boolean",
        "byte",
        "char",
        "short",
        "int",
        "long",
        "float",
        "double",
    }
)

VOID = "void"

# Namespaces whose members are usable by simple name without an import.
ALWAYS_AVAILABLE_NAMESPACES: tuple[str, ...] = ("java.lang",)

NAMESPACE_SEPARATOR = "."
GENERIC_OPEN = "<"
GENERIC_CLOSE = ">"
ARGUMENT_SEPARATOR = ","
ARRAY_SUFFIX = "[]"
WILDCARD = "?"

GETTER_PREFIX = "get"
SETTER_PREFIX = "set"


class WildcardBound:
    """Kinds of wildcard bounds."""

    EXTENDS = "extends"
    SUPER = "super"


class ElementKind:
    """Kinds of declared classes."""

    CLASS = "class"
    ENUM = "enum"


class MemberKind:
    """Classification of a method by the accessor naming convention."""

    GETTER = "getter"
    SETTER = "setter"
    METHOD = "method"


def is_primitive(name: str) -> bool:
    """Whether a descriptor names a primitive type or void."""
    return name == VOID or name in PRIMITIVE_TYPES
