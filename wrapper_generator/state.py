"""Processing state and policies that are shared by all classes of a processing run."""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Callable
from dataclasses import dataclass, field

from wrapper_generator.elements import ClassDecl, TypeRef
from wrapper_generator.model import DeclarationIndex

logger = logging.getLogger(__name__)

RESOURCE_PATH_OPTION = "resourcePath"
DEBUG_OPTION = "debug"


class SuperclassAction:
    """What to do with the superclass of a processed class."""

    FOLD_METHODS = "fold"
    SEPARATE_FILE = "separate"
    BOTH = "both"


def never(type_ref: TypeRef) -> bool:
    """A superclass predicate that matches nothing."""
    return False


def namespace_prefix(prefix: str) -> Callable[[TypeRef], bool]:
    """Create a superclass predicate that matches qualified names starting with a prefix.

    E.g. `namespace_prefix("org.example")` matches `org.example.model.Entity`.

    Args:
        prefix (str): The prefix to match.

    Returns:
        Callable[[TypeRef], bool]: The predicate.
    """

    def predicate(type_ref: TypeRef) -> bool:
        return type_ref.qualified_name.startswith(prefix)

    return predicate


@dataclass(frozen=True)
class SuperclassPolicy:
    """Decides how the superclass of a processed class is handled.

    Attributes:
        predicate: Selects the superclasses the action applies to.
        action: Fold the superclass methods into the current class, generate the superclass as
            its own class, or both.
    """

    predicate: Callable[[TypeRef], bool] = never
    action: str = SuperclassAction.FOLD_METHODS

    def folds(self, superclass: TypeRef | None) -> bool:
        """Whether the methods of the superclass go into the current class."""
        if superclass is None or self.action not in (SuperclassAction.FOLD_METHODS, SuperclassAction.BOTH):
            return False

        return self.predicate(superclass)

    def separates(self, superclass: TypeRef | None) -> bool:
        """Whether the superclass is generated as its own class."""
        if superclass is None or self.action not in (SuperclassAction.SEPARATE_FILE, SuperclassAction.BOTH):
            return False

        return self.predicate(superclass)


@dataclass
class ProcessState:
    """Configuration and bookkeeping of a processing run.

    Attributes:
        index: The declared classes, for resolving superclasses.
        resource_path: The directory that resources such as templates are resolved against.
        debug: Whether debug notes are logged.
        generated: The qualified names of the classes generated so far.
        pending: Superclasses that are still to be generated as classes of their own.
    """

    index: DeclarationIndex = field(default_factory=DeclarationIndex)
    resource_path: str | None = None
    debug: bool = False
    generated: set[str] = field(default_factory=set)
    pending: list[ClassDecl] = field(default_factory=list)

    def resource(self, name: str) -> pathlib.Path:
        """Resolve a resource name against the resource path, if one is set."""
        if self.resource_path:
            return pathlib.Path(self.resource_path) / name

        return pathlib.Path(name)

    def note(self, message: str, *args: object):
        """Log a debug note. Notes are promoted to INFO when debugging is switched on."""
        logger.log(logging.INFO if self.debug else logging.DEBUG, message, *args)
