"""Business logic for moving links within the namespace."""

import logging
from uuid import UUID

from server.apps.namespace.exceptions import InvalidTargetError, WrongKindError
from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.logic.navigation_operations import (
    get_link,
    iter_ancestors,
)
from server.apps.namespace.models import Link, LinkKind

logger = logging.getLogger(__name__)


def move(context: NamespaceContext, link_id: UUID, new_parent_id: UUID) -> Link:
    """Move a file or folder link under a new container.

    Validation happens before anything is written, so a rejected move
    leaves the tree unchanged.

    Args:
        context: Namespace collaborators.
        link_id: Link to move.
        new_parent_id: Destination container.

    Returns:
        Updated link.

    Raises:
        LinkNotFoundError: If the link does not resolve.
        WrongKindError: If the link is the root or the trash.
        InvalidTargetError: If the destination is missing, the link
            itself, not a container, or one of the link's descendants.
        BrokenChainError: If the destination's ancestors are corrupted.
    """
    link = get_link(context, link_id)
    if link.is_structural:
        raise WrongKindError(
            link.id,
            link.kind,
            (LinkKind.FOLDER, LinkKind.FILE),
        )

    _validate_destination(context, link, new_parent_id)

    old_parent_id = link.parent_id
    link.parent_id = new_parent_id
    context.links.save(link)

    logger.info(
        'Moved link %s (%s): %s -> %s',
        link.id,
        link.display_name,
        old_parent_id,
        new_parent_id,
    )
    return link


def _validate_destination(
    context: NamespaceContext,
    link: Link,
    new_parent_id: UUID,
) -> None:
    if new_parent_id == link.id:
        raise InvalidTargetError(f'Cannot move link {link.id} into itself')

    destination = context.links.find_by_id(new_parent_id)
    if destination is None:
        raise InvalidTargetError(f'Destination not found: {new_parent_id}')
    if not destination.is_container:
        raise InvalidTargetError(
            f'Destination {new_parent_id} is {destination.kind} '
            f'and cannot hold children',
        )

    # File links have no descendants; only containers can form a cycle
    if not link.is_container:
        return
    for ancestor in iter_ancestors(context, destination):
        if ancestor.id == link.id:
            raise InvalidTargetError(
                f'Cannot move link {link.id} into its own '
                f'descendant {new_parent_id}',
            )
