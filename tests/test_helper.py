"""Unit tests for the code generation helpers."""

from __future__ import annotations

import pytest

from wrapper_generator import helper
from wrapper_generator.errors import InvalidIdentifierError


class TestNames:
    """Splitting qualified names."""

    def test_namespace_of(self):
        assert helper.namespace_of("org.example.Person") == "org.example"

    def test_namespace_of_nested_class(self):
        assert helper.namespace_of("org.example.Person.Address") == "org.example.Person"

    def test_namespace_of_bare_name(self):
        with pytest.raises(InvalidIdentifierError, match="Invalid class name: Person"):
            helper.namespace_of("Person")

    def test_simple_name_of(self):
        assert helper.simple_name_of("org.example.Person") == "Person"
        assert helper.simple_name_of("Person") == "Person"

    def test_namespace_path(self):
        assert helper.namespace_path("org.example.model") == "org/example/model"


class TestCalls:
    """Generated delegation calls."""

    def test_make_call_getter(self):
        assert helper.make_call_getter("entity", "Name") == "entity.getName()"

    def test_make_call_setter(self):
        assert helper.make_call_setter("entity", "Name", "val") == "entity.setName(val)"

    def test_make_call(self):
        assert helper.make_call("entity", "find", ["a", "b"]) == "entity.find(a, b)"
        assert helper.make_call("entity", "reset") == "entity.reset()"

    def test_join_parameters_skips_empty(self):
        assert helper.join_parameters(["a", "", "b"]) == "a, b"
        assert helper.join_parameters(None) == ""


class TestDeclarations:
    """Generated declaration lines and blocks."""

    def test_package_and_import_lines(self):
        assert helper.new_package_line("org.example") == "package org.example;"
        assert helper.new_import_line("java.util.List") == "import java.util.List;"

    def test_class_declaration(self):
        assert helper.new_class_declaration("PersonWrapper") == "public class PersonWrapper {"
        assert helper.new_class_declaration("PersonWrapper", "") == "class PersonWrapper {"

    def test_block(self):
        block = helper.new_block("  public void run() {", ["first();", "second();"])

        assert block == "  public void run() {\n    first();\n    second();\n  }"
