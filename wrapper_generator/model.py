"""Loading of class model documents.

A class model is a JSON document that describes declared classes, e.g.

    {
      "classes": [
        {
          "name": "org.example.model.Person",
          "superclass": "org.example.model.Entity",
          "members": [
            {"element": "method", "name": "getName", "returns": "java.lang.String"},
            {"element": "method", "name": "setName",
             "parameters": [{"name": "val", "type": "java.lang.String"}]},
            {"element": "field", "name": "name", "type": "java.lang.String"}
          ]
        }
      ]
    }

The documents are validated with pydantic and converted to the elements of `elements.py`.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wrapper_generator import java_types
from wrapper_generator.elements import ClassDecl, FieldDecl, MethodDecl, ParameterDecl, TypeRef
from wrapper_generator.errors import ModelError
from wrapper_generator.type_name import non_generic

logger = logging.getLogger(__name__)

MODEL_SUFFIX = ".model.json"


class ParameterSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)

    def to_element(self) -> ParameterDecl:
        return ParameterDecl(name=self.name, type=TypeRef(self.type))


class MethodSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    element: Literal["method"]
    name: str = Field(min_length=1)
    returns: str = java_types.VOID
    parameters: list[ParameterSpec] = Field(default_factory=list)
    throws: list[str] = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=lambda: ["public"])

    def to_element(self) -> MethodDecl:
        return MethodDecl(
            name=self.name,
            return_type=TypeRef(self.returns),
            parameters=[parameter.to_element() for parameter in self.parameters],
            thrown_types=[TypeRef(thrown) for thrown in self.throws],
            modifiers=tuple(self.modifiers),
        )


class FieldSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    element: Literal["field"]
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    modifiers: list[str] = Field(default_factory=lambda: ["private"])

    def to_element(self) -> FieldDecl:
        return FieldDecl(name=self.name, type=TypeRef(self.type), modifiers=tuple(self.modifiers))


class ClassSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    element: Literal["class"] = "class"
    name: str = Field(min_length=1)
    kind: Literal["class", "interface", "enum", "record"] = "class"
    superclass: str | None = None
    modifiers: list[str] = Field(default_factory=lambda: ["public"])
    members: list[MemberSpec] = Field(default_factory=list)

    def to_element(self) -> ClassDecl:
        return ClassDecl(
            name=self.name,
            kind=self.kind,
            members=[member.to_element() for member in self.members],
            superclass=TypeRef(self.superclass) if self.superclass else None,
            modifiers=tuple(self.modifiers),
        )


MemberSpec = Annotated[ClassSpec | MethodSpec | FieldSpec, Field(discriminator="element")]

ClassSpec.model_rebuild()


class ModelDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    classes: list[ClassSpec] = Field(default_factory=list)


ModelRegistryType = dict[str, list[ClassDecl]]


def load_model(path: str | pathlib.Path) -> list[ClassDecl]:
    """Load the top-level classes that a class model document declares.

    Args:
        path (str | pathlib.Path): The path of the document.

    Raises:
        ModelError: If the document cannot be read or is invalid.

    Returns:
        list[ClassDecl]: The declared top-level classes, in document order.
    """
    try:
        text = pathlib.Path(path).read_text(encoding="utf8")

    except OSError as e:
        raise ModelError(f"Could not read class model '{path}': {e}") from e

    try:
        document = ModelDocument.model_validate_json(text)

    except ValidationError as e:
        raise ModelError(f"Invalid class model '{path}': {e}") from e

    classes = [class_spec.to_element() for class_spec in document.classes]
    logger.debug("Loaded %d class(es) from '%s'.", len(classes), path)
    return classes


class DeclarationIndex:
    """Lookup of declared classes by qualified name, including nested classes."""

    def __init__(self, classes: list[ClassDecl] | None = None) -> None:
        """Initialize the index.

        Args:
            classes (list[ClassDecl] | None, optional): Classes to add. Defaults to None.
        """
        self._classes: dict[str, ClassDecl] = {}

        for class_decl in classes or []:
            self.add(class_decl)

    def add(self, class_decl: ClassDecl) -> None:
        """Add a class and, recursively, its nested classes."""
        name = non_generic(class_decl.name)
        if name in self._classes:
            logger.warning("Class '%s' is declared more than once, keeping the last declaration.", name)

        self._classes[name] = class_decl

        for member in class_decl.members:
            if isinstance(member, ClassDecl):
                self.add(member)

    def lookup(self, type_ref: TypeRef) -> ClassDecl | None:
        """Find the declaration of a type, if the model declares it."""
        return self._classes.get(type_ref.qualified_name)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)
