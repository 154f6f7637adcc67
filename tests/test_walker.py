"""Tests for walking declared classes and processing them with a generator."""

from __future__ import annotations

import logging
import pathlib

import pytest

from wrapper_generator.elements import ClassDecl, FieldDecl, MethodDecl, TypeRef
from wrapper_generator.errors import MalformedTypeError
from wrapper_generator.model import DeclarationIndex
from wrapper_generator.processor import Generator, Processor
from wrapper_generator.state import ProcessState, SuperclassAction, SuperclassPolicy, namespace_prefix, never
from wrapper_generator.walker import VisitContext, visit


class Handler:
    """A class handler that records whether it was exited."""

    def __init__(self, name: str):
        self.name = name
        self.exited = False

    def __enter__(self) -> Handler:
        return self

    def __exit__(self, *exc_info) -> None:
        self.exited = True


class RecordingGenerator(Generator):
    """Records the hooks that are called, in order."""

    def __init__(self, superclass_policy: SuperclassPolicy | None = None, skip: set[str] | None = None):
        self.events: list[tuple[str, str]] = []
        self.handlers: dict[str, Handler] = {}
        self.options: dict[str, str] = {}
        self.skip = skip or set()
        self.failing: set[str] = set()

        if superclass_policy is not None:
            self.superclass_policy = superclass_policy

    def option(self, name, value):
        self.options[name] = value

    def start_class(self, class_decl, state, context):
        self.events.append(("start", class_decl.name))
        if class_decl.name in self.skip:
            return None

        handler = Handler(class_decl.name)
        self.handlers[class_decl.name] = handler
        return handler

    def process_executable(self, method, state, context):
        if context.class_name in self.failing:
            raise MalformedTypeError("Unclosed bracket", "<")

        self.events.append(("executable", f"{context.class_name}#{method.name}"))

    def process_method(self, method, state, context):
        self.events.append(("super", f"{context.class_name}#{method.name}"))

    def process_variable(self, field, state, context):
        self.events.append(("variable", f"{context.class_name}#{field.name}"))

    def end_class(self, class_decl, state, context):
        self.events.append(("end", class_decl.name))

    def processing_over(self, state):
        self.events.append(("over", ""))


def make_class(name: str, *method_names: str, superclass: str | None = None, members=None) -> ClassDecl:
    return ClassDecl(
        name,
        members=[MethodDecl(method_name) for method_name in method_names] + (members or []),
        superclass=TypeRef(superclass) if superclass else None,
    )


@pytest.fixture
def context(tmp_path) -> VisitContext:
    return VisitContext(output_directory=tmp_path)


@pytest.fixture
def hierarchy() -> list[ClassDecl]:
    """Person extends Entity extends Base, and Base extends a class outside of the model."""
    return [
        make_class("org.example.Base", "getVersion", superclass="com.other.Root"),
        make_class("org.example.Entity", "getId", superclass="org.example.Base"),
        make_class("org.example.Person", "getName", superclass="org.example.Entity"),
    ]


class TestVisit:
    """Dispatch over the element kinds."""

    def test_members_in_order(self, context):
        class_decl = make_class("a.B", "getX", members=[FieldDecl("x", TypeRef("int")), MethodDecl("reset")])
        generator = RecordingGenerator()

        visit(class_decl, generator, ProcessState(), context)

        assert generator.events == [
            ("start", "a.B"),
            ("executable", "a.B#getX"),
            ("variable", "a.B#x"),
            ("executable", "a.B#reset"),
            ("end", "a.B"),
        ]
        assert generator.handlers["a.B"].exited

    def test_unknown_element(self, context):
        with pytest.raises(AssertionError):
            visit("a.B", RecordingGenerator(), ProcessState(), context)

    def test_members_outside_of_a_class_are_ignored(self, context):
        generator = RecordingGenerator()

        visit(MethodDecl("getX"), generator, ProcessState(), context)
        visit(FieldDecl("x", TypeRef("int")), generator, ProcessState(), context)

        assert generator.events == []

    def test_nested_classes_are_skipped(self, context):
        nested = make_class("a.B.Inner", "getInner")
        generator = RecordingGenerator()

        visit(make_class("a.B", "getX", members=[nested]), generator, ProcessState(), context)

        assert ("start", "a.B.Inner") not in generator.events
        assert ("executable", "a.B.Inner#getInner") not in generator.events
        assert ("executable", "a.B#getX") in generator.events

    def test_skipped_class(self, context):
        generator = RecordingGenerator(skip={"a.B"})
        state = ProcessState()

        visit(make_class("a.B", "getX"), generator, state, context)

        assert generator.events == [("start", "a.B")]
        assert "a.B" not in state.generated

    def test_class_is_generated_once(self, context):
        generator = RecordingGenerator()
        state = ProcessState()
        class_decl = make_class("a.B", "getX")

        visit(class_decl, generator, state, context)
        visit(class_decl, generator, state, context)

        assert generator.events.count(("start", "a.B")) == 1
        assert state.generated == {"a.B"}

    def test_context_is_not_changed(self, context):
        visit(make_class("a.B", "getX"), RecordingGenerator(), ProcessState(), context)

        assert context.depth == 0
        assert context.class_name == ""
        assert context.handler is None


class TestSuperclassPolicy:
    """Folding superclass methods and generating superclasses separately."""

    def test_default_policy_ignores_superclasses(self, context, hierarchy):
        generator = RecordingGenerator()

        visit(hierarchy[2], generator, ProcessState(index=DeclarationIndex(hierarchy)), context)

        assert [event for event in generator.events if event[0] == "super"] == []
        assert SuperclassPolicy().predicate is never

    def test_fold_methods_up_the_chain(self, context, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.FOLD_METHODS)
        generator = RecordingGenerator(policy)

        visit(hierarchy[2], generator, ProcessState(index=DeclarationIndex(hierarchy)), context)

        assert generator.events == [
            ("start", "org.example.Person"),
            ("executable", "org.example.Person#getName"),
            ("super", "org.example.Person#getId"),
            ("super", "org.example.Person#getVersion"),
            ("end", "org.example.Person"),
        ]

    def test_fold_stops_where_the_predicate_fails(self, context, hierarchy):
        policy = SuperclassPolicy(lambda type_ref: type_ref.simple_name == "Entity", SuperclassAction.FOLD_METHODS)
        generator = RecordingGenerator(policy)

        visit(hierarchy[2], generator, ProcessState(index=DeclarationIndex(hierarchy)), context)

        assert [event for event in generator.events if event[0] == "super"] == [("super", "org.example.Person#getId")]

    def test_fold_undeclared_superclass(self, context, caplog):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.FOLD_METHODS)
        generator = RecordingGenerator(policy)

        visit(make_class("org.example.A", superclass="org.example.Missing"), generator, ProcessState(), context)

        assert ("end", "org.example.A") in generator.events
        assert "not declared in the class model" in caplog.text

    def test_circular_inheritance_terminates(self, context):
        classes = [
            make_class("org.example.A", "getA", superclass="org.example.B"),
            make_class("org.example.B", "getB", superclass="org.example.A"),
        ]
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.FOLD_METHODS)
        generator = RecordingGenerator(policy)

        visit(classes[0], generator, ProcessState(index=DeclarationIndex(classes)), context)

        assert [event for event in generator.events if event[0] == "super"] == [
            ("super", "org.example.A#getB"),
            ("super", "org.example.A#getA"),
        ]

    def test_separate_file_queues_the_superclass(self, context, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)
        generator = RecordingGenerator(policy)
        state = ProcessState(index=DeclarationIndex(hierarchy))

        visit(hierarchy[2], generator, state, context)

        assert [event for event in generator.events if event[0] == "start"] == [("start", "org.example.Person")]
        assert [class_decl.name for class_decl in state.pending] == ["org.example.Entity"]
        assert state.generated == {"org.example.Person"}

    def test_separate_file(self, tmp_path, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)
        generator = RecordingGenerator(policy)
        processor = Processor(generator, DeclarationIndex(hierarchy))

        result = processor.process([hierarchy[2]], tmp_path)

        assert [event for event in generator.events if event[0] == "start"] == [
            ("start", "org.example.Person"),
            ("start", "org.example.Entity"),
            ("start", "org.example.Base"),
        ]
        assert [event for event in generator.events if event[0] == "super"] == []
        assert result.generated == ["org.example.Person", "org.example.Entity", "org.example.Base"]
        assert processor.state.pending == []

    def test_both(self, tmp_path, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.BOTH)
        generator = RecordingGenerator(policy)
        processor = Processor(generator, DeclarationIndex(hierarchy))

        result = processor.process([hierarchy[2]], tmp_path)

        assert ("super", "org.example.Person#getId") in generator.events
        assert ("super", "org.example.Entity#getVersion") in generator.events
        assert "org.example.Base" in result.generated


    def test_folds_and_separates(self):
        entity = TypeRef("org.example.Entity")
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)

        assert policy.separates(entity)
        assert not policy.folds(entity)
        assert not policy.separates(None)
        assert not policy.separates(TypeRef("com.other.Root"))


class TestProcessor:
    """Options and rounds of classes."""

    def test_init_options(self, caplog):
        caplog.set_level(logging.INFO)
        generator = RecordingGenerator()
        processor = Processor(generator)

        state = processor.init({"resourcePath": "/templates", "debug": "true", "wrapperSuffix": "Adapter"})

        assert state.resource_path == "/templates"
        assert state.debug
        assert generator.options == {"wrapperSuffix": "Adapter"}
        assert "Option: resourcePath=/templates" in caplog.text

    def test_debug_is_only_enabled_by_true(self):
        assert not Processor(RecordingGenerator()).init({"debug": "yes"}).debug

    def test_unknown_option_is_ignored_by_default(self, caplog):
        Processor(Generator()).init({"flavour": "plain"})

        assert "Ignoring unknown option 'flavour'" in caplog.text

    def test_failure_is_isolated_to_its_class(self, tmp_path, caplog):
        generator = RecordingGenerator()
        generator.failing.add("a.Broken")
        processor = Processor(generator)

        result = processor.process(
            [make_class("a.First", "getX"), make_class("a.Broken", "getY"), make_class("a.Last", "getZ")],
            tmp_path,
        )

        assert result.generated == ["a.First", "a.Last"]
        assert list(result.failures) == ["a.Broken"]
        assert isinstance(result.failures["a.Broken"], MalformedTypeError)
        assert not result.ok
        assert generator.handlers["a.Broken"].exited
        assert ("end", "a.Broken") not in generator.events
        assert "Generation of 'a.Broken' failed" in caplog.text

    def test_separated_superclass_is_reported_once(self, tmp_path, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)
        processor = Processor(RecordingGenerator(policy), DeclarationIndex(hierarchy))

        result = processor.process(reversed(hierarchy), tmp_path)

        assert sorted(result.generated) == ["org.example.Base", "org.example.Entity", "org.example.Person"]
        assert result.ok

    def test_failing_superclass_is_reported_as_itself(self, tmp_path, hierarchy):
        """A separated superclass that fails does not take down the subclasses that queued it."""
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)
        generator = RecordingGenerator(policy)
        generator.failing.add("org.example.Base")
        processor = Processor(generator, DeclarationIndex(hierarchy))

        result = processor.process([hierarchy[2]], tmp_path)

        assert list(result.failures) == ["org.example.Base"]
        assert result.generated == ["org.example.Person", "org.example.Entity"]
        assert ("end", "org.example.Person") in generator.events
        assert ("end", "org.example.Entity") in generator.events

    def test_failed_superclass_is_not_retried(self, tmp_path, hierarchy):
        policy = SuperclassPolicy(namespace_prefix("org.example"), SuperclassAction.SEPARATE_FILE)
        generator = RecordingGenerator(policy)
        generator.failing.add("org.example.Base")
        processor = Processor(generator, DeclarationIndex(hierarchy))

        result = processor.process(hierarchy, tmp_path)

        assert list(result.failures) == ["org.example.Base"]
        assert sorted(result.generated) == ["org.example.Entity", "org.example.Person"]
        assert generator.events.count(("start", "org.example.Base")) == 1


    def test_output_directory_in_context(self, tmp_path):
        directories = []

        class DirectoryGenerator(RecordingGenerator):
            def start_class(self, class_decl, state, context):
                directories.append(context.output_directory)
                return super().start_class(class_decl, state, context)

        Processor(DirectoryGenerator()).process([make_class("a.B")], str(tmp_path))

        assert directories == [pathlib.Path(tmp_path)]

    def test_finish(self):
        generator = RecordingGenerator()

        Processor(generator).finish()

        assert generator.events == [("over", "")]


class TestProcessState:
    """Resources and debug notes."""

    def test_resource(self):
        assert ProcessState(resource_path="/templates").resource("a.template") == pathlib.Path("/templates/a.template")
        assert ProcessState().resource("a.template") == pathlib.Path("a.template")

    def test_notes_are_promoted_when_debugging(self, caplog):
        caplog.set_level(logging.INFO, logger="wrapper_generator.state")

        ProcessState().note("hidden %s", "note")
        ProcessState(debug=True).note("shown %s", "note")

        assert "shown note" in caplog.text
        assert "hidden note" not in caplog.text
