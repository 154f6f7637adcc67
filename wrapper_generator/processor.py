"""Processing of declared classes by a generator."""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from wrapper_generator.elements import ClassDecl, FieldDecl, MethodDecl
from wrapper_generator.errors import GeneratorError
from wrapper_generator.model import DeclarationIndex
from wrapper_generator.state import DEBUG_OPTION, RESOURCE_PATH_OPTION, ProcessState, SuperclassPolicy
from wrapper_generator.walker import VisitContext, visit

logger = logging.getLogger(__name__)


class Generator:
    """Base class for generators. Override the hooks that a concrete generator needs.

    The superclass policy decides whether superclass methods are folded into a class, and
    whether a superclass is generated as its own class.
    """

    superclass_policy: SuperclassPolicy = SuperclassPolicy()

    def option(self, name: str, value: str):
        """Process a generator specific option.

        Args:
            name (str): The name of the option.
            value (str): The value of the option.
        """
        logger.warning("Ignoring unknown option '%s'.", name)

    def start_class(
        self, class_decl: ClassDecl, state: ProcessState, context: VisitContext
    ) -> AbstractContextManager | None:
        """Start generating a class.

        Returns:
            AbstractContextManager | None: A handler that owns the resources of the class, or None
                to skip the class. The handler is exited once the class is done, also on failure.
        """
        return None

    def process_executable(self, method: MethodDecl, state: ProcessState, context: VisitContext):
        """Process a method that the current class declares."""

    def process_method(self, method: MethodDecl, state: ProcessState, context: VisitContext):
        """Process a method that is folded in from a superclass."""
        self.process_executable(method, state, context)

    def process_variable(self, field: FieldDecl, state: ProcessState, context: VisitContext):
        """Process a field that the current class declares."""

    def end_class(self, class_decl: ClassDecl, state: ProcessState, context: VisitContext):
        """Finish generating a class."""

    def processing_over(self, state: ProcessState):
        """Called once after the last class was processed."""


@dataclass
class RoundResult:
    """The outcome of processing a set of classes.

    Attributes:
        generated: The qualified names of the generated classes.
        failures: The errors of the classes whose generation was aborted, by qualified name.
    """

    generated: list[str] = field(default_factory=list)
    failures: dict[str, GeneratorError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether all classes were processed without errors."""
        return not self.failures


class Processor:
    """Feeds declared classes to a generator, one class at a time."""

    def __init__(self, generator: Generator, index: DeclarationIndex | None = None):
        """Initialize the processor.

        Args:
            generator (Generator): The generator to drive.
            index (DeclarationIndex | None, optional): All declared classes. Defaults to None.
        """
        self.generator = generator
        self.state = ProcessState(index=index if index is not None else DeclarationIndex())

    def init(self, options: Mapping[str, str]) -> ProcessState:
        """Apply the processing options.

        `resourcePath` and `debug` are handled here, any other option is passed to the generator.

        Args:
            options (Mapping[str, str]): The options, by name.

        Returns:
            ProcessState: The configured state.
        """
        for name, value in options.items():
            logger.info("Option: %s=%s", name, value)

            if name == RESOURCE_PATH_OPTION:
                self.state.resource_path = value

            elif name == DEBUG_OPTION:
                self.state.debug = value == "true"

            else:
                self.generator.option(name, value)

        return self.state

    def process(self, classes: Iterable[ClassDecl], output_directory: str | pathlib.Path) -> RoundResult:
        """Generate classes.

        A failure aborts the generation of the failing class only. It is logged and reported in
        the result, the remaining classes are still processed. Superclasses that the superclass
        policy generates on their own are processed right after the class that queued them, each
        with its own failure isolation.

        Args:
            classes (Iterable[ClassDecl]): The classes to process.
            output_directory (str | pathlib.Path): The root directory of generated files.

        Returns:
            RoundResult: The generated and the failed classes.
        """
        result = RoundResult()
        context = VisitContext(output_directory=pathlib.Path(output_directory))

        for class_decl in classes:
            self._process_class(class_decl, context, result)

            while self.state.pending:
                self._process_class(self.state.pending.pop(0), context, result)

        return result

    def _process_class(self, class_decl: ClassDecl, context: VisitContext, result: RoundResult):
        if class_decl.name in result.failures:
            return

        self.state.note("Processing %s", class_decl.name)
        generated_before = set(self.state.generated)

        try:
            visit(class_decl, self.generator, self.state, context)

        except GeneratorError as e:
            logger.error("Generation of '%s' failed: %s", class_decl.name, e)
            result.failures[class_decl.name] = e

        result.generated.extend(sorted(self.state.generated - generated_before))

    def finish(self):
        """Signal the generator that processing is over."""
        self.generator.processing_over(self.state)
