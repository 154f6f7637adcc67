"""Assembly of generated classes.

Note: The fragments of a class are stored until `end` is called, so that imports can still be
added while the members of the class are processed.
"""

from __future__ import annotations

import logging
import pathlib
from typing import TextIO

from wrapper_generator import helper, java_types
from wrapper_generator.elements import ParameterDecl, TypeRef
from wrapper_generator.errors import OutputAcquisitionError
from wrapper_generator.imports import ImportRegistry, should_import
from wrapper_generator.renderer import render
from wrapper_generator.type_name import TypeDescriptor, parse

logger = logging.getLogger(__name__)

JAVA_SUFFIX = ".java"
THROWS_INDENT = 8 * " "


class ClassWriter:
    """A class that assembles one generated class and writes it to its output."""

    def __init__(
        self,
        class_name: str,
        out: TextIO | None = None,
        always_available: tuple[str, ...] = java_types.ALWAYS_AVAILABLE_NAMESPACES,
    ):
        """Initialize an empty generated class.

        Args:
            class_name (str): The simple name of the generated class.
            out (TextIO | None, optional): The output that `end` writes to. Defaults to None.
            always_available (tuple[str, ...], optional): Namespaces and prefixes whose
                members never need an import.
        """
        self.class_name = class_name
        self.imports = ImportRegistry()
        self.always_available = always_available
        self.output_path: pathlib.Path | None = None

        self._out = out
        self._namespace: str | None = None
        self._class_start: str | None = None
        self._fields: set[str] = set()
        self._constructors: list[str] = []
        self._methods: list[str] = []
        self._ended = False

    @classmethod
    def create(cls, output_path: str | pathlib.Path, class_name: str | None = None) -> ClassWriter:
        """Create a writer together with its output file.

        Args:
            output_path (str | pathlib.Path): The file to generate.
            class_name (str | None, optional): The generated class name. Defaults to the file stem.

        Raises:
            OutputAcquisitionError: If the output file cannot be created.

        Returns:
            ClassWriter: The writer, which owns the opened output file.
        """
        output_path = pathlib.Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            out = open(output_path, "w", encoding="utf8")

        except OSError as e:
            raise OutputAcquisitionError(f"Could not create output file '{output_path}': {e}") from e

        writer = cls(class_name or output_path.name.removesuffix(JAVA_SUFFIX), out)
        writer.output_path = output_path
        return writer

    def __enter__(self) -> ClassWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def namespace(self) -> str | None:
        """The namespace of the generated class, None if not started yet."""
        return self._namespace

    @property
    def methods(self) -> tuple[str, ...]:
        """The methods added so far, in order."""
        return tuple(self._methods)

    @property
    def ended(self) -> bool:
        """Whether the class was written."""
        return self._ended

    def _check_not_ended(self):
        if self._ended:
            raise RuntimeError(f"The class '{self.class_name}' was already written.")

    def start_namespace(self, name: str):
        """Set the namespace (package) of the generated class.

        Args:
            name (str): The namespace.

        Raises:
            RuntimeError: If a different namespace was started before.
        """
        self._check_not_ended()

        if self._namespace is not None and self._namespace != name:
            raise RuntimeError(f"The namespace of '{self.class_name}' is already '{self._namespace}'.")

        self._namespace = name

    def start_class(self, declaration: str):
        """Set the line that opens the generated class, e.g. `public class Foo {`."""
        self._check_not_ended()
        self._class_start = declaration

    def register_import(self, qualified_name: str) -> bool:
        """Import a qualified name, unless it is usable without an import.

        Args:
            qualified_name (str): The name to import.

        Returns:
            bool: True, if the name is imported.
        """
        self._check_not_ended()

        if not should_import(qualified_name, self._namespace or "", self.always_available):
            return False

        return self.imports.register(qualified_name)

    def render_type(self, type_ref: TypeRef | TypeDescriptor | str) -> str:
        """Render a type for the generated class, registering the imports it needs.

        Raises:
            MalformedTypeError: If the type descriptor is malformed.
        """
        self._check_not_ended()

        if isinstance(type_ref, TypeRef):
            descriptor = type_ref.parse()

        elif isinstance(type_ref, str):
            descriptor = parse(type_ref)

        else:
            descriptor = type_ref

        return render(descriptor, self._namespace or "", self.imports, self.always_available)

    def add_field(self, declaration: str):
        """Add a field declaration. Identical declarations are written once."""
        self._check_not_ended()
        self._fields.add(declaration)

    def add_constructor(self, definition: str):
        """Add a constructor. Constructors are written in the order they are added."""
        self._check_not_ended()
        self._constructors.append(definition)

    def add_method(self, definition: str):
        """Add a method. Methods are written in the order they are added, duplicates included."""
        self._check_not_ended()
        self._methods.append(definition)

    def generate_class_start(self, source_type: TypeRef, entity_name: str = "entity"):
        """Start a class that wraps an instance of the source type.

        The generated class goes to the namespace of the source type. It gets a field for the
        wrapped instance and a constructor that takes it. The simple names of the generated class
        and of the source type are taken, so other types with these names are rendered qualified.

        Args:
            source_type (TypeRef): The type to wrap.
            entity_name (str, optional): The name of the wrapped instance. Defaults to "entity".

        Raises:
            InvalidIdentifierError: If the source type has no namespace.
        """
        self.start_namespace(source_type.namespace)
        self.start_class(helper.new_class_declaration(self.class_name))
        self.imports.bind(f"{source_type.namespace}{java_types.NAMESPACE_SEPARATOR}{self.class_name}")

        entity_type = self.render_type(source_type.qualified_name)
        self.add_field(f"{helper.INDENT}private final {entity_type} {entity_name};")
        self.add_constructor(
            helper.new_block(
                f"{helper.INDENT}public {self.class_name}(final {entity_type} {entity_name}) {{",
                [f"this.{entity_name} = {entity_name};"],
            )
        )

    def generate_signature(
        self,
        method_name: str,
        parameters: list[ParameterDecl],
        return_type: TypeRef,
        thrown_types: list[TypeRef] | None = None,
        modifiers: str = "public",
    ) -> str:
        """Generate the signature of a method, up to and including the opening brace.

        The return type is rendered first, then the parameter types in order, then the thrown
        types, so imports are registered in that order. Parameters after the first are put on
        continuation lines that align with the opening parenthesis.

        Args:
            method_name (str): The name of the method.
            parameters (list[ParameterDecl]): The parameters, in order.
            return_type (TypeRef): The return type.
            thrown_types (list[TypeRef] | None, optional): The declared thrown types. Defaults to None.
            modifiers (str, optional): The method modifiers. Defaults to "public".

        Returns:
            str: The signature.
        """
        rendered_return = self.render_type(return_type)

        prefix = f"{helper.INDENT}{modifiers} {rendered_return} {method_name}("
        pad = " " * len(prefix)

        rendered_parameters = [f"{self.render_type(parameter.type)} {parameter.name}" for parameter in parameters]
        signature = prefix + helper.join_parameters(rendered_parameters, f",\n{pad}") + ")"

        if thrown_types:
            rendered_thrown = [self.render_type(thrown) for thrown in thrown_types]
            signature += f"\n{THROWS_INDENT}throws {helper.join_parameters(rendered_thrown)}"

        return signature + " {"

    def dumps(self) -> str:
        """Generates the source text of the class.

        The package line is followed by a blank line, then the sorted imports and another blank
        line. Without imports, that block and its blank line are left out. The fields come right
        after the class declaration and are separated from the constructors and methods by one
        blank line, which is left out if there are no constructors or methods.

        Returns:
            str: The source text, or an empty string if no namespace was started.
        """
        if self._namespace is None:
            return ""

        out = [helper.new_package_line(self._namespace), ""]

        import_lines = self.imports.lines()
        if import_lines:
            out.extend(import_lines)
            out.append("")

        out.append(self._class_start or helper.new_class_declaration(self.class_name))
        out.extend(sorted(self._fields))

        blocks = self._constructors + self._methods
        if blocks:
            if self._fields:
                out.append("")

            out.append("\n\n".join(blocks))

        out.append("}")
        return "\n".join(out) + "\n"

    def end(self):
        """Write the class to the output. No further changes are possible afterwards.

        Nothing is written if no namespace was started.

        Raises:
            RuntimeError: If the class was already written.
        """
        self._check_not_ended()
        self._ended = True

        if self._namespace is None:
            logger.debug("Nothing to generate for '%s'.", self.class_name)
            return

        if self._out is not None:
            self._out.write(self.dumps())

    def close(self):
        """Close the output, if any."""
        if self._out is not None:
            self._out.close()
            self._out = None
