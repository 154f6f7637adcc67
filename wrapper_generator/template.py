"""Line oriented templates with marked insertion points."""

from __future__ import annotations

import pathlib
from collections.abc import Callable
from typing import TextIO

from wrapper_generator.errors import OutputAcquisitionError

SECTION_MARKER = "++++"


class Template:
    """A template file, split into sections by lines starting with `++++`.

    Generated code is inserted where the markers are: emit a section, insert the generated
    code, emit the next section and so on.
    """

    def __init__(self, path: str | pathlib.Path):
        """Open the template.

        Args:
            path (str | pathlib.Path): The template file.

        Raises:
            OutputAcquisitionError: If the template cannot be opened.
        """
        self.path = pathlib.Path(path)

        try:
            self._reader: TextIO | None = open(self.path, encoding="utf8")

        except OSError as e:
            raise OutputAcquisitionError(f"Could not open template '{self.path}': {e}") from e

    def __enter__(self) -> Template:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self):
        """Close the template reader."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def emit_section(self, sink: Callable[[str], object]) -> bool:
        """Emit a section of the template up to the next marker, or to the end of the file.

        Args:
            sink (Callable[[str], object]): Receives every line of the section, without line ending.

        Returns:
            bool: True, if a marker was read, False at the end of the file.
        """
        assert self._reader is not None, "The template was closed."

        for line in self._reader:
            line = line.rstrip("\r\n")

            if line.startswith(SECTION_MARKER):
                return True

            sink(line)

        return False

    def read_section(self) -> tuple[list[str], bool]:
        """Read a section of the template into a list of lines.

        Returns:
            tuple[list[str], bool]: The lines, and whether a marker ended the section.
        """
        lines: list[str] = []
        found_marker = self.emit_section(lines.append)
        return lines, found_marker
