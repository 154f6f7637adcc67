"""Top-level module for wrapper generation."""

from __future__ import annotations

import argparse
import glob
import logging
import os.path

from wrapper_generator.errors import ModelError
from wrapper_generator.model import MODEL_SUFFIX, DeclarationIndex, ModelRegistryType, load_model
from wrapper_generator.processor import Processor
from wrapper_generator.state import DEBUG_OPTION, RESOURCE_PATH_OPTION
from wrapper_generator.wrapper import WrapperGenerator

logger = logging.getLogger(__name__)


def find_model_paths(paths: list[str], excludes: list[str], root_directory: str, recursive: bool) -> list[str]:
    """Resolve paths, directories and glob expressions to class model files.

    Args:
        paths (list[str]): Paths, directories or glob expressions, relative to the root directory.
        excludes (list[str]): Paths or glob expressions to exclude.
        root_directory (str): The directory that relative paths are resolved against.
        recursive (bool): Whether directories and `**` globs are searched recursively.

    Returns:
        list[str]: The model files, sorted.
    """
    excluded_paths: set[str] = set()
    for exclude in excludes:
        exclude_path = os.path.join(root_directory, exclude)
        # Handle both specific files and glob patterns
        if os.path.isfile(exclude_path):
            excluded_paths.add(exclude_path)
        else:
            excluded_paths = excluded_paths.union(glob.glob(exclude_path, recursive=recursive))

    search_paths: set[str] = set()
    for path in paths:
        search_path = os.path.join(root_directory, path)

        # If recursive flag is set and path is a directory, find all model files recursively
        if recursive and os.path.isdir(search_path):
            for root, _, files in os.walk(search_path):
                for file in files:
                    if file.endswith(MODEL_SUFFIX):
                        search_paths.add(os.path.join(root, file))
        # If path is a directory without recursive flag, find only direct children
        elif os.path.isdir(search_path):
            for file in os.listdir(search_path):
                file_path = os.path.join(search_path, file)
                if os.path.isfile(file_path) and file.endswith(MODEL_SUFFIX):
                    search_paths.add(file_path)
        # Otherwise use glob for patterns or specific files
        else:
            search_paths = search_paths.union(glob.glob(search_path, recursive=recursive))

    return sorted(search_paths - excluded_paths)


def collect_options(args: argparse.Namespace) -> dict[str, str]:
    """Merge the `-A name=value` options with the dedicated command line flags."""
    options: dict[str, str] = dict(getattr(args, "options", None) or [])

    if getattr(args, "resource_path", None):
        options[RESOURCE_PATH_OPTION] = args.resource_path

    if getattr(args, "debug", False):
        options[DEBUG_OPTION] = "true"

    return options


def run(args: argparse.Namespace, root_directory: str) -> int:
    """Run the wrapper generator on a set of paths that point to class models.

    Every model is loaded first, so that superclasses can be resolved across models. Then the
    classes of each model are generated, into the output directory or alongside the model.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
        root_directory (str): The directory, from which the generator is executed.

    Returns:
        int: The number of models and classes that failed.
    """
    output_dir: str = getattr(args, "output_dir", "")
    valid_paths = find_model_paths(args.paths, args.excludes, root_directory, args.recursive)

    if not valid_paths:
        logger.warning("No class models found for %s.", args.paths)

    failures = 0
    model_registry: ModelRegistryType = {}
    index = DeclarationIndex()

    for path in valid_paths:
        try:
            classes = load_model(path)

        except ModelError as e:
            logger.error("%s", e)
            failures += 1
            continue

        model_registry[path] = classes
        for class_decl in classes:
            index.add(class_decl)

    processor = Processor(WrapperGenerator(), index)
    processor.init(collect_options(args))

    for path, classes in model_registry.items():
        if output_dir:
            output_directory = os.path.join(root_directory, output_dir)
        else:
            # No output_dir specified: place generated classes next to the model
            output_directory = os.path.dirname(path)

        result = processor.process(classes, output_directory)
        failures += len(result.failures)

        logger.info("Generated %d class(es) from '%s' into '%s'.", len(result.generated), path, output_directory)

    processor.finish()
    return failures
