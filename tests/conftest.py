"""Pytest configuration and fixtures for wrapper generator tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wrapper_generator.elements import ClassDecl
from wrapper_generator.model import MODEL_SUFFIX, load_model

# A class model with a superclass, a nested class, an enum and members that are not delegated.
PERSON_MODEL = {
    "classes": [
        {
            "name": "org.example.model.Entity",
            "members": [
                {"element": "method", "name": "getId", "returns": "long"},
                {"element": "method", "name": "getName", "returns": "java.lang.String"},
            ],
        },
        {
            "name": "org.example.model.Person",
            "superclass": "org.example.model.Entity",
            "members": [
                {"element": "method", "name": "getName", "returns": "java.lang.String"},
                {
                    "element": "method",
                    "name": "setName",
                    "parameters": [{"name": "val", "type": "java.lang.String"}],
                },
                {"element": "method", "name": "getTags", "returns": "java.util.List<java.lang.String>"},
                {
                    "element": "method",
                    "name": "findFriends",
                    "returns": "java.util.List<org.example.model.Person>",
                    "parameters": [
                        {"name": "filter", "type": "java.util.Map<java.lang.String, org.example.other.Filter>"},
                        {"name": "limit", "type": "int"},
                    ],
                    "throws": ["java.io.IOException"],
                },
                {
                    "element": "method",
                    "name": "of",
                    "returns": "org.example.model.Person",
                    "modifiers": ["public", "static"],
                },
                {"element": "method", "name": "validate", "modifiers": ["protected"]},
                {"element": "field", "name": "name", "type": "java.lang.String"},
                {
                    "element": "class",
                    "name": "org.example.model.Person.Address",
                    "members": [{"element": "method", "name": "getStreet", "returns": "java.lang.String"}],
                },
            ],
        },
        {"name": "org.example.model.Color", "kind": "enum"},
    ]
}

PERSON_WRAPPER_PATH = Path("org", "example", "model", "PersonWrapper.java")


def write_model(directory: Path, model: dict, name: str = "person") -> Path:
    """Write a class model document and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}{MODEL_SUFFIX}"
    path.write_text(json.dumps(model, indent=2), encoding="utf8")
    return path


def find_class(classes: list[ClassDecl], name: str) -> ClassDecl:
    """Find a top-level class by qualified name."""
    return next(class_decl for class_decl in classes if class_decl.name == name)


@pytest.fixture
def person_model(tmp_path) -> Path:
    """The person class model, written to a temporary models directory."""
    return write_model(tmp_path / "models", PERSON_MODEL)


@pytest.fixture
def person_classes(person_model) -> list[ClassDecl]:
    """The classes that the person class model declares."""
    return load_model(person_model)
