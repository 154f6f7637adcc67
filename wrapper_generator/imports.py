"""Tracking of the imports that a generated file needs."""

from __future__ import annotations

from collections.abc import Iterator

from wrapper_generator import helper, java_types


def same_namespace(namespace: str, qualified_name: str) -> bool:
    """Whether a qualified name is declared directly in a namespace.

    `a.b.Foo` is in `a.b`, but neither `a.bc.Foo` nor `a.b.c.Foo` are.

    Args:
        namespace (str): The namespace, e.g. the package of the file being generated.
        qualified_name (str): The fully qualified name to test.

    Returns:
        bool: True, if the name is a direct member of the namespace.
    """
    if not qualified_name.startswith(namespace):
        return False

    if len(qualified_name) <= len(namespace) or qualified_name[len(namespace)] != java_types.NAMESPACE_SEPARATOR:
        return False

    return java_types.NAMESPACE_SEPARATOR not in qualified_name[len(namespace) + 1 :]


def is_always_available(qualified_name: str, always_available: tuple[str, ...]) -> bool:
    """Whether a qualified name is usable without an import in any file.

    An entry that ends with the separator is a prefix and covers every namespace below it, e.g.
    `java.` covers `java.util.List`. Any other entry is a namespace and covers only its direct
    members, so `java.lang` covers `java.lang.String` but not `java.lang.reflect.Method`, which
    still needs an import in Java.

    Args:
        qualified_name (str): The fully qualified name.
        always_available (tuple[str, ...]): Namespaces and prefixes whose members never need an import.

    Returns:
        bool: True, if the name needs no import.
    """
    for entry in always_available:
        if entry.endswith(java_types.NAMESPACE_SEPARATOR):
            if qualified_name.startswith(entry):
                return True

        elif same_namespace(entry, qualified_name):
            return True

    return False


def should_import(
    qualified_name: str | None,
    current_namespace: str,
    always_available: tuple[str, ...] = java_types.ALWAYS_AVAILABLE_NAMESPACES,
) -> bool:
    """Decide whether a qualified name must be imported into a file of the current namespace.

    Args:
        qualified_name (str | None): The fully qualified name, None for primitives and void.
        current_namespace (str): The namespace of the file being generated.
        always_available (tuple[str, ...]): Namespaces and prefixes whose members never need an
            import, see `is_always_available`.

    Returns:
        bool: True, if an import is required.
    """
    if qualified_name is None:
        return False

    if java_types.NAMESPACE_SEPARATOR not in qualified_name:
        # Type variables and default namespace members cannot be imported.
        return False

    if is_always_available(qualified_name, always_available):
        return False

    return not same_namespace(current_namespace, qualified_name)


class ImportRegistry:
    """A deduplicating collection of qualified names to import.

    The registry also knows which qualified name every simple name in the generated file refers
    to, including names that are usable without an import (same namespace, always available).
    A simple name refers to one qualified name only: importing or binding a different qualified
    name with a taken simple name is refused, so the caller can fall back to the qualified spelling.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._by_simple_name: dict[str, str] = {}
        self._bound: dict[str, str] = {}

    def _claim(self, qualified_name: str) -> bool:
        simple_name = helper.simple_name_of(qualified_name)
        existing = self._bound.setdefault(simple_name, qualified_name)
        return existing == qualified_name

    def register(self, qualified_name: str) -> bool:
        """Add a qualified name, if its simple name does not refer to another name yet.

        Args:
            qualified_name (str): The name to import.

        Returns:
            bool: True, if the name is (now or already) imported, False if the simple name
                belongs to another import or to another name used without an import.
        """
        if not self._claim(qualified_name):
            return False

        self._by_simple_name[helper.simple_name_of(qualified_name)] = qualified_name
        return True

    def bind(self, qualified_name: str) -> bool:
        """Record that a name is used by its simple name without an import.

        E.g. `java.lang.String` or a class of the current namespace. Names without a namespace,
        such as type variables, bind to themselves.

        Args:
            qualified_name (str): The name that is used unqualified.

        Returns:
            bool: True, if the simple name refers to this name, False if it already refers to
                another name.
        """
        return self._claim(qualified_name)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._by_simple_name.values()

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._by_simple_name.values()))

    def __len__(self) -> int:
        return len(self._by_simple_name)

    def __repr__(self) -> str:
        return f"ImportRegistry({sorted(self._by_simple_name.values())})"

    def lines(self) -> list[str]:
        """The import declarations, sorted for deterministic output."""
        return [helper.new_import_line(name) for name in self]
