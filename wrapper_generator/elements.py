"""Declared classes and their members, as described by a class model.

The elements form a closed set of kinds: `ClassDecl`, `MethodDecl` and `FieldDecl`.
Code that handles elements dispatches explicitly over these kinds, see `walker.visit`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wrapper_generator import helper, java_types
from wrapper_generator.errors import InvalidMemberNameError
from wrapper_generator.type_name import TypeDescriptor, non_generic, parse


@dataclass(frozen=True)
class TypeRef:
    """A handle to a type, as referenced by a declaration."""

    descriptor: str

    @property
    def is_primitive(self) -> bool:
        """Whether the type is a primitive type or void."""
        return java_types.is_primitive(self.descriptor.strip())

    @property
    def is_void(self) -> bool:
        """Whether the type is void."""
        return self.descriptor.strip() == java_types.VOID

    @property
    def qualified_name(self) -> str:
        """The descriptor without type arguments."""
        return non_generic(self.descriptor)

    @property
    def simple_name(self) -> str:
        """The qualified name without its namespace."""
        return helper.simple_name_of(self.qualified_name)

    @property
    def namespace(self) -> str:
        """The namespace that owns the type.

        Raises:
            InvalidIdentifierError: If the type has no namespace.
        """
        return helper.namespace_of(self.qualified_name)

    def parse(self) -> TypeDescriptor:
        """Parse the descriptor.

        Raises:
            MalformedTypeError: If the descriptor is malformed.
        """
        return parse(self.descriptor)

    def __str__(self) -> str:
        return self.descriptor


VOID_TYPE = TypeRef(java_types.VOID)


@dataclass(frozen=True)
class Accessor:
    """The parts of a getter or setter name.

    Attributes:
        setter: True for a setter, False for a getter.
        uc_field_name: The name of the associated field, first character upper cased.
        method_name: The full method name.
    """

    setter: bool
    uc_field_name: str
    method_name: str

    @property
    def field_name(self) -> str:
        """The name of the associated field, first character lower cased."""
        return self.uc_field_name[0].lower() + self.uc_field_name[1:]


def split_method_name(name: str) -> Accessor:
    """Split an accessor name into its parts.

    E.g. `getName` becomes `Accessor(setter=False, uc_field_name="Name", method_name="getName")`.

    Args:
        name (str): The method name.

    Raises:
        InvalidMemberNameError: If the name is not `get` or `set`, followed by an upper case character.

    Returns:
        Accessor: The accessor parts.
    """
    if not name.startswith((java_types.GETTER_PREFIX, java_types.SETTER_PREFIX)):
        raise InvalidMemberNameError(f"Invalid method for accessor: {name}")

    field_name = name[len(java_types.GETTER_PREFIX) :]
    if not field_name or not field_name[0].isupper():
        raise InvalidMemberNameError(f"Invalid method for accessor: {name}")

    return Accessor(
        setter=name.startswith(java_types.SETTER_PREFIX),
        uc_field_name=field_name,
        method_name=name,
    )


@dataclass(frozen=True)
class ParameterDecl:
    """A method parameter."""

    name: str
    type: TypeRef


@dataclass
class MethodDecl:
    """A declared method."""

    name: str
    return_type: TypeRef = VOID_TYPE
    parameters: list[ParameterDecl] = field(default_factory=list)
    thrown_types: list[TypeRef] = field(default_factory=list)
    modifiers: tuple[str, ...] = ("public",)

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def kind(self) -> str:
        """Classify the method as getter, setter or plain method, by its name."""
        try:
            accessor = split_method_name(self.name)

        except InvalidMemberNameError:
            return java_types.MemberKind.METHOD

        if accessor.setter:
            return java_types.MemberKind.SETTER

        return java_types.MemberKind.GETTER

    def accessor(self) -> Accessor:
        """The accessor parts of this method's name.

        Raises:
            InvalidMemberNameError: If the method is no getter or setter by name.
        """
        return split_method_name(self.name)


@dataclass
class FieldDecl:
    """A declared field."""

    name: str
    type: TypeRef
    modifiers: tuple[str, ...] = ("private",)


@dataclass
class ClassDecl:
    """A declared class, with its members in declaration order.

    Nested classes appear as `ClassDecl` members.
    """

    name: str
    kind: str = java_types.ElementKind.CLASS
    members: list[Element] = field(default_factory=list)
    superclass: TypeRef | None = None
    modifiers: tuple[str, ...] = ("public",)

    @property
    def type(self) -> TypeRef:
        """A handle to the type this class declares."""
        return TypeRef(self.name)

    @property
    def simple_name(self) -> str:
        return helper.simple_name_of(non_generic(self.name))

    @property
    def namespace(self) -> str:
        """The namespace that owns the class.

        Raises:
            InvalidIdentifierError: If the class is declared without a namespace.
        """
        return helper.namespace_of(non_generic(self.name))

    @property
    def methods(self) -> list[MethodDecl]:
        return [member for member in self.members if isinstance(member, MethodDecl)]

    @property
    def fields(self) -> list[FieldDecl]:
        return [member for member in self.members if isinstance(member, FieldDecl)]


Element = ClassDecl | MethodDecl | FieldDecl
