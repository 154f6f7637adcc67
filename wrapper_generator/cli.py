"""Command-line interface for generating wrapper classes from class models.

Notes:
    - Class models are JSON documents with the suffix `.model.json`, see `wrapper_generator.model`.
"""

from __future__ import annotations

import argparse
import logging
import os.path
from collections.abc import Sequence

from wrapper_generator.run import run

logger = logging.getLogger(__name__)


def parse_option(text: str) -> tuple[str, str]:
    """Split a `name=value` option.

    Args:
        text (str): The option text.

    Raises:
        argparse.ArgumentTypeError: If the text has no name, or no `=`.

    Returns:
        tuple[str, str]: The name and the value.
    """
    name, separator, value = text.partition("=")

    if not separator or not name:
        raise argparse.ArgumentTypeError(f"expected an option of the form name=value, got '{text}'")

    return name, value


def _add_recursive_argument(parser: argparse.ArgumentParser):
    """Add a recursive argument to a parser.

    Args:
        parser (argparse.ArgumentParser): The parser to add the argument to.
    """
    parser.add_argument(
        "-r",
        "--recursive",
        dest="recursive",
        default=False,
        action="store_true",
        help="recursively search for *.model.json files with a given glob expression.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate wrapper classes from class models.")

    parser.add_argument(
        "-p",
        "--paths",
        type=str,
        nargs="+",
        default=["**/*.model.json"],
        help="path or glob expressions that match *.model.json files for wrapper generation.",
    )

    parser.add_argument(
        "-e",
        "--excludes",
        type=str,
        nargs="+",
        default=[],
        help="path or glob expressions to exclude from path matches.",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default="",
        help="directory to write all generated classes to; defaults to alongside each model if omitted.",
    )

    parser.add_argument(
        "-A",
        "--option",
        dest="options",
        type=parse_option,
        action="append",
        default=[],
        help="processing option as name=value, e.g. -A wrapperSuffix=Adapter. May be repeated.",
    )

    parser.add_argument(
        "--resource-path",
        dest="resource_path",
        type=str,
        default="",
        help="directory that templates are resolved against; same as -A resourcePath=<dir>.",
    )

    parser.add_argument(
        "--debug",
        dest="debug",
        default=False,
        action="store_true",
        help="log debug notes; same as -A debug=true.",
    )

    _add_recursive_argument(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the wrapper generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    logging.basicConfig(level=logging.INFO)

    root_directory = os.getcwd()
    logging.info("Working from root directory: %s", root_directory)

    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.debug or ("debug", "true") in args.options:
        logging.getLogger().setLevel(logging.DEBUG)

    failures = run(args, root_directory)

    if failures:
        logger.error("Generation failed for %d model(s) or class(es).", failures)
        return 1

    return 0
