"""Font file writing.

This module validates the destination of a generated font and writes the
compiled font bytes atomically.
"""

import logging
import os
import tempfile
from pathlib import Path

from glacon.exceptions import FontIOError, InvalidDestinationError

logger = logging.getLogger(__name__)


def get_font_name(destination: Path, extension: str = "ttf") -> str:
    """Derive the font name from the destination file name.

    Examples:
        >>> get_font_name(Path("assets/app-icons.ttf"))
        'app-icons'

    Args:
        destination: Path of the font file to create
        extension: Required file extension, without the dot

    Returns:
        File stem of the destination

    Raises:
        InvalidDestinationError: If the extension does not match or the
            file name has no stem
    """
    if destination.suffix.lower() != f".{extension.lower()}":
        raise InvalidDestinationError(
            str(destination), f"destination file must have .{extension} extension"
        )

    name = destination.stem
    if not name or name.startswith("."):
        raise InvalidDestinationError(str(destination), "invalid font name in destination path")
    return name


class FontWriter:
    """Writes compiled fonts without leaving partial files behind.

    The data goes to a temporary file in the destination directory which
    then replaces the destination in one step.

    Example:
        writer = FontWriter(Path("assets/app-icons.ttf"))
        writer.write(data)
    """

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def write(self, data: bytes) -> int:
        """Write the font file.

        Args:
            data: Complete font file contents

        Returns:
            Number of bytes written

        Raises:
            FontIOError: If the file cannot be written
        """
        directory = self._output_path.parent
        temp_name: str | None = None

        try:
            with tempfile.NamedTemporaryFile(
                dir=directory,
                prefix=f".{self._output_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._output_path)
        except OSError as e:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise FontIOError(str(self._output_path), str(e)) from e

        logger.debug("Wrote %d bytes to %s", len(data), self._output_path)
        return len(data)


def write_font_file(destination: Path, data: bytes) -> int:
    """Convenience wrapper around FontWriter.write()."""
    return FontWriter(destination).write(data)
