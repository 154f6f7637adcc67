"""A generator for wrapper classes that delegate to a wrapped instance.

For a source class `org.example.Person`, the generator writes `org/example/PersonWrapper.java`:

    package org.example;

    public class PersonWrapper {
      private final Person entity;

      public PersonWrapper(final Person entity) {
        this.entity = entity;
      }

      public String getName() {
        return entity.getName();
      }
    }
"""

from __future__ import annotations

import logging
import pathlib

from wrapper_generator import helper, java_types
from wrapper_generator.elements import ClassDecl, MethodDecl
from wrapper_generator.processor import Generator
from wrapper_generator.state import ProcessState, SuperclassAction, SuperclassPolicy, namespace_prefix
from wrapper_generator.template import Template
from wrapper_generator.walker import VisitContext
from wrapper_generator.writer import JAVA_SUFFIX, ClassWriter

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "Wrapper"
ENTITY_NAME = "entity"

SUFFIX_OPTION = "wrapperSuffix"
TEMPLATE_OPTION = "template"
SUPERCLASS_PREFIX_OPTION = "superclassPrefix"


class WrapperGenerator(Generator):
    """Generates one delegating wrapper class per source class.

    Options:
        wrapperSuffix: Appended to the source class name to name the wrapper. Defaults to `Wrapper`.
        template: A template file, resolved against the resource path. Its lines before the first
            marker go in front of the delegating methods, the remaining lines after them.
        superclassPrefix: Superclasses whose qualified name starts with this prefix have their
            methods folded into the wrapper.
    """

    def __init__(self, suffix: str = DEFAULT_SUFFIX, superclass_policy: SuperclassPolicy | None = None):
        """Initialize the generator.

        Args:
            suffix (str, optional): The wrapper name suffix. Defaults to "Wrapper".
            superclass_policy (SuperclassPolicy | None, optional): How superclasses are handled.
                Defaults to ignoring superclasses.
        """
        self.suffix = suffix
        self.template_name: str | None = None

        if superclass_policy is not None:
            self.superclass_policy = superclass_policy

    def option(self, name: str, value: str):
        if name == SUFFIX_OPTION:
            self.suffix = value

        elif name == TEMPLATE_OPTION:
            self.template_name = value

        elif name == SUPERCLASS_PREFIX_OPTION:
            self.superclass_policy = SuperclassPolicy(namespace_prefix(value), SuperclassAction.FOLD_METHODS)

        else:
            super().option(name, value)

    def wrapper_name(self, class_decl: ClassDecl) -> str:
        """The simple name of the wrapper for a source class."""
        return f"{class_decl.simple_name}{self.suffix}"

    def output_path(self, class_decl: ClassDecl, context: VisitContext) -> pathlib.Path:
        """The file that the wrapper for a source class is written to.

        Raises:
            InvalidIdentifierError: If the source class has no namespace.
        """
        return (
            context.output_directory
            / helper.namespace_path(class_decl.namespace)
            / f"{self.wrapper_name(class_decl)}{JAVA_SUFFIX}"
        )

    def start_class(self, class_decl: ClassDecl, state: ProcessState, context: VisitContext) -> ClassWriter | None:
        if class_decl.kind == java_types.ElementKind.ENUM:
            state.note("Not wrapping enum: %s", class_decl.name)
            return None

        output_path = self.output_path(class_decl, context)
        writer = ClassWriter.create(output_path, self.wrapper_name(class_decl))

        try:
            writer.generate_class_start(class_decl.type, ENTITY_NAME)

            if self.template_name:
                with Template(state.resource(self.template_name)) as template:
                    lines, _ = template.read_section()

                self._add_template_lines(writer, lines)

        except BaseException:
            writer.close()
            raise

        logger.debug("Generating '%s' for '%s'.", output_path, class_decl.name)
        return writer

    def process_executable(self, method: MethodDecl, state: ProcessState, context: VisitContext):
        if not method.is_public or method.is_static:
            return

        writer: ClassWriter = context.handler
        writer.add_method(self.generate_delegate(method, writer))

    def process_method(self, method: MethodDecl, state: ProcessState, context: VisitContext):
        if not method.is_public or method.is_static:
            return

        writer: ClassWriter = context.handler
        definition = self.generate_delegate(method, writer)

        # Methods that the class overrides are already delegated.
        if definition in writer.methods:
            state.note("Skipping overridden method: %s", method.name)
            return

        writer.add_method(definition)

    def end_class(self, class_decl: ClassDecl, state: ProcessState, context: VisitContext):
        writer: ClassWriter = context.handler

        if self.template_name:
            with Template(state.resource(self.template_name)) as template:
                template.emit_section(lambda line: None)

                found_marker = True
                while found_marker:
                    lines, found_marker = template.read_section()
                    self._add_template_lines(writer, lines)

        writer.end()

    def generate_delegate(self, method: MethodDecl, writer: ClassWriter) -> str:
        """Generate a method that delegates to the wrapped instance.

        Args:
            method (MethodDecl): The method to delegate to.
            writer (ClassWriter): The writer of the wrapper, for rendering types.

        Returns:
            str: The method definition.
        """
        signature = writer.generate_signature(method.name, method.parameters, method.return_type, method.thrown_types)
        kind = method.kind

        if kind == java_types.MemberKind.GETTER and not method.parameters:
            call = helper.make_call_getter(ENTITY_NAME, method.accessor().uc_field_name)

        elif kind == java_types.MemberKind.SETTER and len(method.parameters) == 1:
            call = helper.make_call_setter(ENTITY_NAME, method.accessor().uc_field_name, method.parameters[0].name)

        else:
            call = helper.make_call(ENTITY_NAME, method.name, [parameter.name for parameter in method.parameters])

        statement = f"{call};" if method.return_type.is_void else f"return {call};"
        return helper.new_block(signature, [statement])

    @staticmethod
    def _add_template_lines(writer: ClassWriter, lines: list[str]):
        text = "\n".join(lines).strip("\n")
        if text:
            writer.add_method(text)
