# SPDX-License-Identifier: MIT
"""Filename conventions for served package archives.

Archives are expected to be named ``{name}-{version}[-{extra}]{extension}``,
for example ``lyra-1.2.0.tar.gz`` or ``lyra-1.2.0-x86_64.tar.gz``.

Parsing is shortest-name-wins: the name ends at the first hyphen, so
``my-tool-2.0.0.tar.gz`` is package ``my`` at version ``tool``. Names with
internal hyphens are therefore not supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Default archive extension served by the index
ARCHIVE_EXTENSION = ".tar.gz"


class FilenameError(Exception):
    """Raised when an archive filename cannot be parsed."""

    pass


@dataclass(frozen=True, slots=True)
class ParsedArchiveFilename:
    """Parsed components of an archive filename.

    Attributes:
        name: Package name
        version: Version string, exactly as it appears in the filename
        extra: Trailing qualifier such as an architecture, if any
    """

    name: str
    version: str
    extra: Optional[str] = None


def is_archive_filename(filename: str, extension: str = ARCHIVE_EXTENSION) -> bool:
    """Check whether a filename carries the archive extension.

    Args:
        filename: Filename to check
        extension: Required suffix (case-sensitive)

    Returns:
        True if the filename ends with the extension and has a base name
    """
    return len(filename) > len(extension) and filename.endswith(extension)


def _split_first_hyphen(text: str) -> tuple[str, Optional[str]]:
    """Split at the first hyphen that is not the leading character."""
    index = text.find("-", 1)
    if index == -1:
        return text, None
    return text[:index], text[index + 1 :]


def parse_archive_filename(
    filename: str, extension: str = ARCHIVE_EXTENSION
) -> ParsedArchiveFilename:
    """Parse an archive filename into its components.

    Args:
        filename: Archive filename to parse (no directory part)
        extension: Archive extension the filename must end with

    Returns:
        ParsedArchiveFilename with extracted components

    Raises:
        FilenameError: If the filename doesn't match expected format

    Examples:
        >>> parse_archive_filename("lyra-1.2.0.tar.gz")
        ParsedArchiveFilename(name='lyra', version='1.2.0', extra=None)
        >>> parse_archive_filename("lyra-1.2.0-x86_64.tar.gz").version
        '1.2.0'
    """
    if not is_archive_filename(filename, extension):
        raise FilenameError(f"Not a {extension} archive: {filename}")

    base = filename[: -len(extension)]

    name, remainder = _split_first_hyphen(base)
    if not remainder:
        raise FilenameError(f"Invalid archive filename: {filename}")

    version, extra = _split_first_hyphen(remainder)

    return ParsedArchiveFilename(name=name, version=version, extra=extra)


def try_parse_archive_filename(
    filename: str, extension: str = ARCHIVE_EXTENSION
) -> Optional[ParsedArchiveFilename]:
    """Parse an archive filename, returning None instead of raising."""
    try:
        return parse_archive_filename(filename, extension)
    except FilenameError:
        return None
