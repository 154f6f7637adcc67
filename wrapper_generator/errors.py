"""Exceptions raised while generating wrapper classes."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for failures that abort generation of the current class."""


class MalformedTypeError(GeneratorError):
    """Raised when a type descriptor has unbalanced or inconsistent nesting."""

    def __init__(self, message: str, fragment: str):
        super().__init__(f"{message}: '{fragment}'")
        self.fragment = fragment


class InvalidMemberNameError(GeneratorError):
    """Raised when an accessor query is applied to a method that is no getter or setter."""


class InvalidIdentifierError(GeneratorError):
    """Raised when a fully qualified name is expected but the name has no namespace."""


class OutputAcquisitionError(GeneratorError):
    """Raised when an output file or template could not be opened."""


class ModelError(GeneratorError):
    """Raised when a class model document is invalid."""
