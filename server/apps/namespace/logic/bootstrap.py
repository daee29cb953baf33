"""Start-up guarantees for the root and trash singletons."""

import logging
from typing import Final
from uuid import UUID

from server.apps.namespace.infrastructure.record_store import RecordStore
from server.apps.namespace.models import Link, LinkKind

DEFAULT_ROOT_NAME: Final = 'ROOT'
DEFAULT_TRASH_NAME: Final = 'Trash'

logger = logging.getLogger(__name__)


def _oldest_of_kind(links: RecordStore[Link], kind: LinkKind) -> Link | None:
    candidates = [link for link in links.find_all() if link.kind == kind]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            'Found %d %s links, using the oldest one',
            len(candidates),
            kind,
        )
    return min(candidates, key=lambda link: link.created_at)


def ensure_root(
    links: RecordStore[Link],
    name: str = DEFAULT_ROOT_NAME,
) -> Link:
    """Return the root link, creating it on first start-up.

    Safe to call on every start-up.

    Args:
        links: Link record store.
        name: Display name for a newly created root.

    Returns:
        The root link.
    """
    root = _oldest_of_kind(links, LinkKind.ROOT)
    if root is not None:
        if root.parent_id is not None:
            logger.warning('Root link %s had a parent, clearing it', root.id)
            root.parent_id = None
            root = links.save(root)
        return root

    root = links.save(Link(kind=LinkKind.ROOT, display_name=name))
    logger.info('Created root link: %s', root.id)
    return root


def ensure_trash(
    links: RecordStore[Link],
    root_id: UUID,
    name: str = DEFAULT_TRASH_NAME,
) -> Link:
    """Return the trash link, creating it under the root if missing.

    A trash link found elsewhere in the tree is moved back directly
    under the root.

    Args:
        links: Link record store.
        root_id: Id of the root link.
        name: Display name for a newly created trash.

    Returns:
        The trash link.
    """
    trash = _oldest_of_kind(links, LinkKind.TRASH)
    if trash is None:
        trash = links.save(Link(
            kind=LinkKind.TRASH,
            display_name=name,
            parent_id=root_id,
        ))
        logger.info('Created trash link: %s', trash.id)
        return trash

    if trash.parent_id != root_id:
        logger.warning(
            'Trash link %s was under %s, moving it back under root',
            trash.id,
            trash.parent_id,
        )
        trash.parent_id = root_id
        trash = links.save(trash)
    return trash
