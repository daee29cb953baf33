"""Database models for namespace app.

Two independent record tables back the logical namespace:

- ``FileRecord``: one physical content object in blob storage.
- ``Link``: one node of the logical tree (root, folder, file, trash).

References between records are plain UUID columns on purpose. The
namespace logic keeps them consistent; the database never cascades.
"""

import uuid
from typing import Final, final, override

from django.db import models

_NAME_MAX_LENGTH: Final = 255
_EXTENSION_MAX_LENGTH: Final = 32
_LOCATION_MAX_LENGTH: Final = 512
_KIND_MAX_LENGTH: Final = 16


class LinkKind(models.TextChoices):
    """Closed set of link kinds."""

    ROOT = 'ROOT', 'Root'
    FOLDER = 'FOLDER', 'Folder'
    FILE = 'FILE', 'File'
    TRASH = 'TRASH', 'Trash'


# Kinds that may hold children
CONTAINER_KINDS: Final = frozenset({
    LinkKind.ROOT,
    LinkKind.FOLDER,
    LinkKind.TRASH,
})


@final
class FileRecord(models.Model):
    """Physical content item stored in blob storage.

    The ``physical_location`` is a generated storage name. It never
    changes after creation; renames only touch ``display_name``.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    display_name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    extension = models.CharField(
        max_length=_EXTENSION_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Suffix without the dot, set once at creation',
    )

    physical_location = models.CharField(
        max_length=_LOCATION_MAX_LENGTH,
        editable=False,
        help_text='Name of the object in blob storage',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File record'  # type: ignore[mutable-override]
        verbose_name_plural = 'File records'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.display_name} ({self.physical_location})'

    @property
    def file_name(self) -> str:
        """Display name with the extension appended when missing.

        Example: display name 'report', extension 'pdf' -> 'report.pdf'.
        A display name already ending with '.pdf' is kept as is.
        """
        if not self.extension:
            return self.display_name
        suffix = f'.{self.extension}'
        if self.display_name.lower().endswith(suffix.lower()):
            return self.display_name
        return f'{self.display_name}{suffix}'


@final
class Link(models.Model):
    """Node of the logical namespace tree."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    kind = models.CharField(
        max_length=_KIND_MAX_LENGTH,
        choices=LinkKind.choices,
    )

    display_name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    # Null only for the root link
    parent_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
    )

    # Set only for FILE links
    target_file_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Link'  # type: ignore[mutable-override]
        verbose_name_plural = 'Links'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.display_name or self.kind

    @property
    def is_container(self) -> bool:
        """Whether this link may hold children."""
        return self.kind in CONTAINER_KINDS

    @property
    def is_structural(self) -> bool:
        """Whether this link is the root or the trash singleton."""
        return self.kind in {LinkKind.ROOT, LinkKind.TRASH}
