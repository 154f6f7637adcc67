"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

from wrapper_generator import java_types
from wrapper_generator.errors import InvalidIdentifierError

INDENT = "  "


def namespace_of(qualified_name: str) -> str:
    """Extract the namespace (package) of a fully qualified name.

    E.g. `org.example.Person` becomes `org.example`.

    Args:
        qualified_name (str): The fully qualified name.

    Raises:
        InvalidIdentifierError: If the name has no namespace separator.

    Returns:
        str: Everything up to, but not including, the last separator.
    """
    pos = qualified_name.rfind(java_types.NAMESPACE_SEPARATOR)
    if pos < 0:
        raise InvalidIdentifierError(f"Invalid class name: {qualified_name}")

    return qualified_name[:pos]


def simple_name_of(qualified_name: str) -> str:
    """Strip the namespace from a qualified name.

    Names without a namespace are returned unchanged.

    Args:
        qualified_name (str): The (possibly) qualified name.

    Returns:
        str: The simple name.
    """
    return qualified_name.rsplit(java_types.NAMESPACE_SEPARATOR, 1)[-1]


def namespace_path(namespace: str) -> str:
    """Convert a namespace to the relative directory path of its source files.

    E.g. `org.example` becomes `org/example`.
    """
    return namespace.replace(java_types.NAMESPACE_SEPARATOR, "/")


def join_parameters(parameters: list[str] | None, separator: str = ", ") -> str:
    """Joins parameters by means of a separator, skipping empty ones.

    Args:
        parameters (list[str] | None): The parameters to join.
        separator (str): The separator. Defaults to ', '.

    Returns:
        str: The joined parameters.
    """
    if parameters:
        return separator.join(p for p in parameters if p)

    else:
        return ""


def make_call_getter(obj_ref: str, uc_field_name: str) -> str:
    """Generate a call to a getter.

    E.g. for `entity` and `Name`, the output is `entity.getName()`.

    Args:
        obj_ref (str): The reference to the object holding the getter.
        uc_field_name (str): The name of the field, with the first character upper cased.

    Returns:
        str: The getter call.
    """
    return f"{obj_ref}.{java_types.GETTER_PREFIX}{uc_field_name}()"


def make_call_setter(obj_ref: str, uc_field_name: str, value: object) -> str:
    """Generate a call to a setter.

    E.g. for `entity`, `Name` and `val`, the output is `entity.setName(val)`.

    Args:
        obj_ref (str): The reference to the object holding the setter.
        uc_field_name (str): The name of the field, with the first character upper cased.
        value (object): Represents the value to set.

    Returns:
        str: The setter call.
    """
    return f"{obj_ref}.{java_types.SETTER_PREFIX}{uc_field_name}({value})"


def make_call(obj_ref: str, method_name: str, arguments: list[str] | None = None) -> str:
    """Generate a plain method call, e.g. `entity.doIt(a, b)`."""
    return f"{obj_ref}.{method_name}({join_parameters(arguments)})"


def new_package_line(namespace: str) -> str:
    """Create the package declaration for a namespace."""
    return f"package {namespace};"


def new_import_line(qualified_name: str) -> str:
    """Create an import declaration for a qualified name."""
    return f"import {qualified_name};"


def new_class_declaration(name: str, modifiers: str = "public") -> str:
    """Creates the opening line of a class declaration.

    For example, for a name of 'PersonWrapper' the output will be 'public class PersonWrapper {'.

    Args:
        name (str): The class name.
        modifiers (str, optional): The class modifiers. Defaults to "public".

    Returns:
        str: The class declaration.
    """
    if modifiers:
        return f"{modifiers} class {name} {{"

    else:
        return f"class {name} {{"


def new_block(heading: str, body: list[str], indent: str = INDENT) -> str:
    """Create a braced block of code.

    The heading must already end with an opening brace. Body lines are indented
    one level deeper than the heading, the closing brace is at heading level.

    Args:
        heading (str): The first line(s) of the block, e.g. a method signature.
        body (list[str]): The statements of the block.
        indent (str, optional): The indentation of the heading. Defaults to two spaces.

    Returns:
        str: The block.
    """
    lines = [heading]
    lines.extend(f"{indent}{INDENT}{statement}" for statement in body)
    lines.append(f"{indent}}}")
    return "\n".join(lines)
