"""Icon source discovery.

This module finds the SVG files of an icon set and derives the icon
identifiers from their paths relative to the source directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from glacon.exceptions import FontIOError, NoIconsFoundError

logger = logging.getLogger(__name__)

SVG_EXTENSION = ".svg"


@dataclass(frozen=True)
class IconSource:
    """An SVG file of the icon set.

    Attributes:
        name: Path relative to the source directory, without extension,
            directories separated by "/"
        path: Location of the SVG file
    """

    name: str
    path: Path

    def read(self) -> bytes:
        """Read the SVG document.

        Raises:
            FontIOError: If the file cannot be read
        """
        return read_svg_file(self.path)


def read_svg_file(path: Path) -> bytes:
    """Read the raw contents of an SVG file.

    Raises:
        FontIOError: If the file cannot be read
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise FontIOError(str(path), str(e)) from e


def icon_name(path: Path, source_dir: Path) -> str:
    """Derive the icon identifier of an SVG file.

    Examples:
        >>> icon_name(Path("icons/jam/book.svg"), Path("icons"))
        'jam/book'
    """
    return path.relative_to(source_dir).with_suffix("").as_posix()


def collect_svg_paths(source_dir: Path) -> list[IconSource]:
    """Find all SVG files below a directory.

    Directories are walked with an explicit stack; symbolic links to
    directories are not followed. The result is sorted by icon name so that
    codepoint assignment does not depend on directory listing order.

    Args:
        source_dir: Root directory of the icon set

    Returns:
        Icon sources sorted by name

    Raises:
        FontIOError: If source_dir is not a readable directory
        NoIconsFoundError: If no SVG file is found
    """
    if not source_dir.is_dir():
        raise FontIOError(str(source_dir), "not a directory")

    sources: list[IconSource] = []
    stack = [source_dir]

    while stack:
        directory = stack.pop()
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise FontIOError(str(directory), str(e)) from e

        for entry in entries:
            if entry.is_dir() and not entry.is_symlink():
                stack.append(entry)
            elif entry.is_file() and entry.suffix.lower() == SVG_EXTENSION:
                sources.append(IconSource(icon_name(entry, source_dir), entry))

    if not sources:
        raise NoIconsFoundError(str(source_dir))

    sources.sort(key=lambda source: source.name)
    logger.debug("Collected %d SVG files from %s", len(sources), source_dir)
    return sources
