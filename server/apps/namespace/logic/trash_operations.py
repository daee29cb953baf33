"""Business logic for trash and permanent deletion."""

import logging
from uuid import UUID

from django.core.exceptions import SuspiciousFileOperation
from django.db import transaction

from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.logic.move_operations import move
from server.apps.namespace.logic.navigation_operations import (
    get_children,
    get_file_for_link,
    get_file_link,
    walk_subtree,
)
from server.apps.namespace.models import FileRecord, Link, LinkKind

logger = logging.getLogger(__name__)


def move_to_trash(context: NamespaceContext, file_link_id: UUID) -> Link:
    """Move a file link into the trash.

    The file record and its bytes are left untouched, so moving the
    link back out restores the file as it was.

    Args:
        context: Namespace collaborators.
        file_link_id: File link to trash.

    Returns:
        Updated link.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        WrongKindError: If the link is not a file link.
    """
    get_file_link(context, file_link_id)
    link = move(context, file_link_id, context.trash_id)
    logger.info('File moved to trash: %s (ID: %s)', link.display_name, link.id)
    return link


def list_trash(context: NamespaceContext) -> list[Link]:
    """List links directly inside the trash."""
    return get_children(context, context.trash_id)


def _delete_physical(context: NamespaceContext, record: FileRecord) -> None:
    """Delete stored bytes, best effort.

    A missing object, a failed delete and an unusable stored name are
    logged, never raised; the records are removed either way.
    """
    location = record.physical_location
    try:
        if context.storage.exists(location):
            context.storage.delete(location)
        else:
            logger.warning(
                'Object not found in storage (already deleted?): %s',
                location,
            )
    except (OSError, ValueError, SuspiciousFileOperation):
        logger.warning(
            'Failed to delete object from storage (stray bytes): %r',
            location,
            exc_info=True,
        )


def delete_file_permanently(context: NamespaceContext, file_link_id: UUID) -> None:
    """Delete a file link, its file record and its bytes.

    Order: bytes, then record, then link. The link is deleted even when
    its record no longer resolves or the record delete fails; that
    failure is raised after the link is gone. There is no undo.

    Args:
        context: Namespace collaborators.
        file_link_id: File link to delete.

    Raises:
        LinkNotFoundError: If the id does not resolve (already deleted).
        WrongKindError: If the link is not a file link.
    """
    link = get_file_link(context, file_link_id)
    record = get_file_for_link(context, link)

    try:
        if record is not None:
            _delete_physical(context, record)
            context.files.delete(record.id)
        else:
            logger.warning(
                'File record %s missing for link %s, deleting link only',
                link.target_file_id,
                link.id,
            )
    finally:
        context.links.delete(link.id)

    logger.info(
        'File permanently deleted: %s (ID: %s)',
        link.display_name,
        link.id,
    )


def empty_trash(context: NamespaceContext) -> int:
    """Permanently delete everything inside the trash.

    File links anywhere below the trash are deleted with their records
    and bytes; folder links left behind are removed afterwards.

    Args:
        context: Namespace collaborators.

    Returns:
        Number of files deleted.
    """
    descendants = list(walk_subtree(context, context.trash_id))
    count = 0

    for link in descendants:
        if link.kind != LinkKind.FILE:
            continue
        try:
            delete_file_permanently(context, link.id)
        except Exception:
            logger.exception('Failed to permanently delete file: %s', link.id)
            raise
        count += 1

    # Parents come before children in the walk, so reverse it
    with transaction.atomic():
        for link in reversed(descendants):
            if link.kind == LinkKind.FOLDER:
                context.links.delete(link.id)

    logger.info('Trash emptied: %d files deleted', count)
    return count
