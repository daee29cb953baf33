"""Naming helpers for namespace files."""

import uuid
from pathlib import Path
from typing import Final

from server.apps.namespace.exceptions import InvalidNameError

_RESERVED_NAMES: Final = frozenset(('.', '..'))
_FORBIDDEN_CHARS: Final = ('/', '\x00')


def split_source_name(source_path: Path) -> tuple[str, str]:
    """Derive display name and extension from a source file path.

    Example: '/tmp/report.final.pdf' -> ('report.final.pdf', 'pdf').
    Names without a suffix, dotfiles and names ending in a dot get an
    empty extension. Case is preserved.

    Args:
        source_path: Path of the file being imported.

    Returns:
        Tuple of (display name, extension without dot).
    """
    return source_path.name, source_path.suffix.lstrip('.')


def generate_physical_name(extension: str) -> str:
    """Generate a collision-free storage name.

    Args:
        extension: Extension without dot, may be empty.

    Returns:
        Name like '1b4e28ba-2fa1-11d2-883f-0016d3cca427.pdf'.
    """
    name = str(uuid.uuid4())
    if extension:
        return f'{name}.{extension}'
    return name


def validate_display_name(name: str) -> str:
    """Validate a user-facing name.

    Args:
        name: Proposed display name.

    Returns:
        The name with surrounding whitespace removed.

    Names are single path segments: '/' separates logical path parts,
    and the names '.' and '..' would escape an export directory.

    Raises:
        InvalidNameError: If the name is blank or not a single segment.
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidNameError('Display name cannot be empty')
    if cleaned in _RESERVED_NAMES:
        raise InvalidNameError(f'Display name is reserved: {cleaned}')
    if any(char in cleaned for char in _FORBIDDEN_CHARS):
        raise InvalidNameError(
            f"Display name cannot contain '/' or NUL: {cleaned!r}",
        )
    return cleaned
