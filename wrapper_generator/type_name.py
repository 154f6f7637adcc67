"""Parsing of type descriptors.

A type descriptor is the textual form of a (possibly parameterized) type, as
produced by the class model, e.g. `java.util.Map<java.lang.String, java.util.List<org.example.Item>>`.

The grammar is:

    Name         ::= Identifier ('.' Identifier)*
    Type         ::= Name ['<' TypeArgList '>'] ('[]')*
                   | Primitive ('[]')*
                   | '?' [('extends' | 'super') Type]
    TypeArgList  ::= Type (',' Type)*

Whitespace around separators is insignificant. Malformed descriptors are never
guessed at, they raise a `MalformedTypeError` naming the offending fragment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from wrapper_generator import helper, java_types
from wrapper_generator.errors import MalformedTypeError
from wrapper_generator.imports import should_import

_IDENTIFIER = r"[A-Za-z_$][\w$]*"
_NAME_PATTERN = re.compile(rf"{_IDENTIFIER}(?:\.{_IDENTIFIER})*")


@dataclass(frozen=True)
class TypeDescriptor:
    """A node of a parsed type descriptor.

    Attributes:
        raw_name: The simple name, as it appears in rendered output (e.g. `Map`).
        qualified_name: The fully qualified name without type arguments (e.g. `java.util.Map`).
            None for primitives, void and unbounded wildcards.
        type_arguments: The type arguments, in declaration order.
        array_dimensions: The number of array dimensions (`Foo[][]` has two).
        bound_kind: For bounded wildcards, `extends` or `super`.
        bound: For bounded wildcards, the bounding type.
    """

    raw_name: str
    qualified_name: str | None = None
    type_arguments: tuple[TypeDescriptor, ...] = ()
    array_dimensions: int = 0
    bound_kind: str | None = None
    bound: TypeDescriptor | None = None

    @property
    def is_primitive(self) -> bool:
        """Whether this is a primitive type or void."""
        return java_types.is_primitive(self.raw_name)

    @property
    def is_wildcard(self) -> bool:
        """Whether this is a wildcard type argument."""
        return self.raw_name == java_types.WILDCARD

    @property
    def is_generic(self) -> bool:
        """Whether this type carries type arguments."""
        return bool(self.type_arguments)

    @property
    def namespace(self) -> str:
        """The namespace of the qualified name, or an empty string if there is none."""
        if self.qualified_name is None or java_types.NAMESPACE_SEPARATOR not in self.qualified_name:
            return ""

        return helper.namespace_of(self.qualified_name)

    def requires_import(
        self,
        current_namespace: str,
        always_available: tuple[str, ...] = java_types.ALWAYS_AVAILABLE_NAMESPACES,
    ) -> bool:
        """Whether this node (not its arguments) needs an import in the given namespace."""
        return should_import(self.qualified_name, current_namespace, always_available)

    def __str__(self) -> str:
        """The canonical, fully qualified descriptor of this node."""
        if self.is_wildcard:
            if self.bound is None:
                return java_types.WILDCARD

            return f"{java_types.WILDCARD} {self.bound_kind} {self.bound}"

        name = self.qualified_name or self.raw_name
        if self.is_generic:
            name += f"<{', '.join(str(argument) for argument in self.type_arguments)}>"

        return name + java_types.ARRAY_SUFFIX * self.array_dimensions


def non_generic(descriptor: str) -> str:
    """Return the descriptor without its type arguments.

    E.g. `java.util.List<java.lang.String>` becomes `java.util.List`.
    """
    return descriptor.split(java_types.GENERIC_OPEN, 1)[0].strip()


def check_balance(descriptor: str) -> None:
    """Verify that the generic brackets of a descriptor are balanced and correctly nested.

    Args:
        descriptor (str): The descriptor to check.

    Raises:
        MalformedTypeError: On a closing bracket without an opening bracket, or an opening bracket
            that is never closed.
    """
    open_positions: list[int] = []

    for pos, char in enumerate(descriptor):
        if char == java_types.GENERIC_OPEN:
            open_positions.append(pos)

        elif char == java_types.GENERIC_CLOSE:
            if not open_positions:
                raise MalformedTypeError("Unmatched closing bracket", descriptor[: pos + 1])

            open_positions.pop()

    if open_positions:
        raise MalformedTypeError("Unclosed bracket", descriptor[open_positions[0] :])


def split_type_arguments(argument_list: str) -> list[str]:
    """Split the text between the outermost generic brackets into its top-level arguments.

    Commas nested inside deeper brackets do not split, so `String, List<Pair<X, Y>>` yields
    two arguments.

    Args:
        argument_list (str): The raw argument list text, without the enclosing brackets.

    Raises:
        MalformedTypeError: If the nesting is inconsistent, or an argument is empty.

    Returns:
        list[str]: The trimmed top-level arguments. Empty for an empty argument list.
    """
    if not argument_list.strip():
        return []

    arguments: list[str] = []
    depth = 0
    start = 0

    for pos, char in enumerate(argument_list):
        if char == java_types.GENERIC_OPEN:
            depth += 1

        elif char == java_types.GENERIC_CLOSE:
            depth -= 1
            if depth < 0:
                raise MalformedTypeError("Unmatched closing bracket", argument_list[: pos + 1])

        elif char == java_types.ARGUMENT_SEPARATOR and depth == 0:
            arguments.append(argument_list[start:pos].strip())
            start = pos + 1

    if depth != 0:
        raise MalformedTypeError("Unclosed bracket", argument_list)

    arguments.append(argument_list[start:].strip())

    if not all(arguments):
        raise MalformedTypeError("Empty type argument", argument_list)

    return arguments


def _matching_open(text: str) -> int:
    """Find the opening bracket that matches the closing bracket at the end of `text`."""
    depth = 0

    for pos in range(len(text) - 1, -1, -1):
        if text[pos] == java_types.GENERIC_CLOSE:
            depth += 1

        elif text[pos] == java_types.GENERIC_OPEN:
            depth -= 1
            if depth == 0:
                return pos

    raise MalformedTypeError("Unmatched closing bracket", text)


def _parse_wildcard(text: str) -> TypeDescriptor:
    rest = text[len(java_types.WILDCARD) :]
    if not rest.strip():
        return TypeDescriptor(raw_name=java_types.WILDCARD)

    if not rest[0].isspace():
        raise MalformedTypeError("Invalid wildcard", text)

    parts = rest.split(None, 1)
    if len(parts) != 2 or parts[0] not in (java_types.WildcardBound.EXTENDS, java_types.WildcardBound.SUPER):
        raise MalformedTypeError("Invalid wildcard", text)

    return TypeDescriptor(raw_name=java_types.WILDCARD, bound_kind=parts[0], bound=_parse_type(parts[1]))


def _parse_type(text: str) -> TypeDescriptor:
    text = text.strip()

    if text.startswith(java_types.WILDCARD):
        return _parse_wildcard(text)

    dimensions = 0
    while text.endswith(java_types.ARRAY_SUFFIX):
        dimensions += 1
        text = text[: -len(java_types.ARRAY_SUFFIX)].rstrip()

    arguments: tuple[TypeDescriptor, ...] = ()
    name = text
    generic = text.endswith(java_types.GENERIC_CLOSE)

    if generic:
        open_pos = _matching_open(text)
        name = text[:open_pos].strip()
        arguments = tuple(_parse_type(argument) for argument in split_type_arguments(text[open_pos + 1 : -1]))

    if java_types.is_primitive(name):
        if generic:
            raise MalformedTypeError("Primitive types take no type arguments", text)

        return TypeDescriptor(raw_name=name, array_dimensions=dimensions)

    if not _NAME_PATTERN.fullmatch(name):
        raise MalformedTypeError("Invalid type name", name or text)

    return TypeDescriptor(
        raw_name=helper.simple_name_of(name),
        qualified_name=name,
        type_arguments=arguments,
        array_dimensions=dimensions,
    )


def parse(descriptor: str) -> TypeDescriptor:
    """Parse a type descriptor into a tree of `TypeDescriptor` nodes.

    Args:
        descriptor (str): The descriptor, e.g. `a.b.Map<a.c.String, a.d.List<a.e.X>>`.

    Raises:
        MalformedTypeError: If the descriptor is empty, its brackets are unbalanced, or
            any name or argument is invalid.

    Returns:
        TypeDescriptor: The root node.
    """
    text = descriptor.strip()
    if not text:
        raise MalformedTypeError("Empty type descriptor", descriptor)

    check_balance(text)
    return _parse_type(text)
