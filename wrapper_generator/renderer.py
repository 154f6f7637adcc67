"""Rendering of parsed type descriptors to minimally qualified names."""

from __future__ import annotations

from wrapper_generator import java_types
from wrapper_generator.imports import ImportRegistry
from wrapper_generator.type_name import TypeDescriptor, parse


def render(
    descriptor: TypeDescriptor,
    current_namespace: str,
    registry: ImportRegistry,
    always_available: tuple[str, ...] = java_types.ALWAYS_AVAILABLE_NAMESPACES,
) -> str:
    """Render a type descriptor for use in a file of the current namespace.

    Every node that needs an import is registered in `registry`, every other named node is bound
    to its simple name. If the simple name of a node already refers to another qualified name in
    the file, the node is rendered with its qualified name instead.

    Args:
        descriptor (TypeDescriptor): The parsed type.
        current_namespace (str): The namespace of the file being generated.
        registry (ImportRegistry): The imports of the file being generated.
        always_available (tuple[str, ...]): Namespaces and prefixes whose members never need an import.

    Returns:
        str: The rendered type, e.g. `Map<String, List<Item>>`.
    """
    if descriptor.is_wildcard:
        if descriptor.bound is None:
            return java_types.WILDCARD

        bound = render(descriptor.bound, current_namespace, registry, always_available)
        return f"{java_types.WILDCARD} {descriptor.bound_kind} {bound}"

    name = descriptor.raw_name

    if descriptor.qualified_name is not None:
        if descriptor.requires_import(current_namespace, always_available):
            claimed = registry.register(descriptor.qualified_name)

        else:
            claimed = registry.bind(descriptor.qualified_name)

        if not claimed:
            name = descriptor.qualified_name

    if descriptor.is_generic:
        arguments = [
            render(argument, current_namespace, registry, always_available) for argument in descriptor.type_arguments
        ]
        name += f"{java_types.GENERIC_OPEN}{', '.join(arguments)}{java_types.GENERIC_CLOSE}"

    return name + java_types.ARRAY_SUFFIX * descriptor.array_dimensions


def render_type(
    descriptor: str,
    current_namespace: str,
    registry: ImportRegistry,
    always_available: tuple[str, ...] = java_types.ALWAYS_AVAILABLE_NAMESPACES,
) -> str:
    """Parse and render a textual type descriptor.

    Raises:
        MalformedTypeError: If the descriptor cannot be parsed.
    """
    return render(parse(descriptor), current_namespace, registry, always_available)
