"""Traversal of declared classes and their members."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from wrapper_generator.elements import ClassDecl, Element, FieldDecl, MethodDecl, TypeRef
from wrapper_generator.state import ProcessState

if TYPE_CHECKING:
    from wrapper_generator.processor import Generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisitContext:
    """Where the traversal currently is.

    Attributes:
        output_directory: The root directory of generated files.
        class_name: The qualified name of the class being generated, empty outside of a class.
        depth: The class nesting depth. 0 is outside of any class, 1 is a top-level class.
        handler: The handler that `Generator.start_class` returned for the current class.
    """

    output_directory: pathlib.Path
    class_name: str = ""
    depth: int = 0
    handler: Any = None


def visit(element: Element, generator: Generator, state: ProcessState, context: VisitContext) -> None:
    """Dispatch an element to the matching visit function.

    Args:
        element (Element): The element to visit.
        generator (Generator): The generator that receives the elements.
        state (ProcessState): The processing state.
        context (VisitContext): The current position of the traversal.

    Raises:
        AssertionError: If the element is of an unknown kind.
    """
    if isinstance(element, ClassDecl):
        visit_class(element, generator, state, context)

    elif isinstance(element, MethodDecl):
        visit_method(element, generator, state, context)

    elif isinstance(element, FieldDecl):
        visit_field(element, generator, state, context)

    else:
        raise AssertionError(element)


def visit_class(class_decl: ClassDecl, generator: Generator, state: ProcessState, context: VisitContext) -> None:
    """Generate a class from its declaration.

    Nested classes are not generated. After the members, the superclass is handled as the
    generator's superclass policy requires. A superclass that is generated on its own is queued
    in `state.pending`, so it fails or succeeds independently of this class.
    """
    depth = context.depth + 1

    if depth > 1:
        state.note("Skipping nested class: %s depth: %d", class_decl.name, depth)
        return

    if class_decl.name in state.generated:
        state.note("Already generated: %s", class_decl.name)
        return

    state.note("Start class: %s depth: %d", class_decl.name, depth)

    handler = generator.start_class(class_decl, state, context)
    if handler is None:
        state.note("Skipping class: %s", class_decl.name)
        return

    class_context = replace(context, class_name=class_decl.name, depth=depth, handler=handler)
    policy = generator.superclass_policy

    with handler:
        for member in class_decl.members:
            visit(member, generator, state, class_context)

        if policy.folds(class_decl.superclass):
            assert class_decl.superclass is not None
            fold_superclass_methods(class_decl.superclass, generator, state, class_context)

        generator.end_class(class_decl, state, class_context)

    state.generated.add(class_decl.name)
    state.note("End class: %s depth: %d", class_decl.name, context.depth)

    if policy.separates(class_decl.superclass):
        assert class_decl.superclass is not None
        superclass_decl = state.index.lookup(class_decl.superclass)

        if superclass_decl is None:
            logger.warning(
                "Superclass '%s' of '%s' is not declared in the class model.", class_decl.superclass, class_decl.name
            )

        elif superclass_decl.name not in state.generated:
            state.pending.append(superclass_decl)


def fold_superclass_methods(
    superclass: TypeRef,
    generator: Generator,
    state: ProcessState,
    context: VisitContext,
    visited: set[str] | None = None,
) -> None:
    """Process the methods of a superclass as methods of the current class.

    Continues up the inheritance chain as long as the superclass policy folds.

    Args:
        superclass (TypeRef): The superclass to fold.
        generator (Generator): The generator that receives the methods.
        state (ProcessState): The processing state.
        context (VisitContext): The context of the current class.
        visited (set[str] | None, optional): Superclasses folded so far. Defaults to None.
    """
    if visited is None:
        visited = set()

    if superclass.qualified_name in visited:
        # Circular inheritance, shouldn't happen in a valid model.
        return

    visited.add(superclass.qualified_name)

    superclass_decl = state.index.lookup(superclass)
    if superclass_decl is None:
        logger.warning("Superclass '%s' of '%s' is not declared in the class model.", superclass, context.class_name)
        return

    state.note("Process super: %s", superclass_decl.name)

    for method in superclass_decl.methods:
        generator.process_method(method, state, context)

    if generator.superclass_policy.folds(superclass_decl.superclass):
        assert superclass_decl.superclass is not None
        fold_superclass_methods(superclass_decl.superclass, generator, state, context, visited)


def visit_method(method: MethodDecl, generator: Generator, state: ProcessState, context: VisitContext) -> None:
    """Hand a method of the current class to the generator."""
    if context.depth != 1:
        return

    generator.process_executable(method, state, context)


def visit_field(field: FieldDecl, generator: Generator, state: ProcessState, context: VisitContext) -> None:
    """Hand a field of the current class to the generator."""
    if context.depth != 1:
        return

    generator.process_variable(field, state, context)
