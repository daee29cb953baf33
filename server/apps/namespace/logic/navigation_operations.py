"""Business logic for tree navigation and logical path resolution."""

import enum
import logging
from collections.abc import Iterator
from typing import Final
from uuid import UUID

from server.apps.namespace.exceptions import (
    BrokenChainError,
    InvalidTargetError,
    LinkNotFoundError,
    NotFoundError,
    WrongKindError,
)
from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.models import FileRecord, Link, LinkKind

_PATH_SEPARATOR: Final = '/'

logger = logging.getLogger(__name__)


class LinkState(enum.Enum):
    """Placement state of a link."""

    ACTIVE = 'active'
    TRASHED = 'trashed'


def get_children(context: NamespaceContext, parent_id: UUID) -> list[Link]:
    """List links directly under a parent.

    Args:
        context: Namespace collaborators.
        parent_id: Parent link id.

    Returns:
        Child links in store order (callers sort for display).
    """
    return context.links.find_children(parent_id)


def find_link(context: NamespaceContext, link_id: UUID) -> Link | None:
    """Look up a link, returning None when absent."""
    return context.links.find_by_id(link_id)


def get_link(context: NamespaceContext, link_id: UUID) -> Link:
    """Look up a link.

    Args:
        context: Namespace collaborators.
        link_id: Link id.

    Returns:
        Link instance.

    Raises:
        LinkNotFoundError: If the id does not resolve.
    """
    link = context.links.find_by_id(link_id)
    if link is None:
        raise LinkNotFoundError(link_id)
    return link


def get_file_for_link(
    context: NamespaceContext,
    link: Link,
) -> FileRecord | None:
    """Return the file record a FILE link points at.

    Args:
        context: Namespace collaborators.
        link: Any link.

    Returns:
        FileRecord, or None for non-file links, unset targets and
        dangling references.
    """
    if link.kind != LinkKind.FILE or link.target_file_id is None:
        return None
    return context.files.find_by_id(link.target_file_id)


def iter_ancestors(context: NamespaceContext, link: Link) -> Iterator[Link]:
    """Yield ancestors of a link, nearest first, up to the root.

    Args:
        context: Namespace collaborators.
        link: Starting link (not yielded).

    Yields:
        Each ancestor link.

    Raises:
        BrokenChainError: If a parent reference does not resolve or the
            walk revisits a link.
    """
    seen = {link.id}
    parent_id = link.parent_id
    while parent_id is not None:
        if parent_id in seen:
            logger.error(
                'Cycle in parent chain of link %s at %s',
                link.id,
                parent_id,
            )
            raise BrokenChainError(link.id, parent_id)
        parent = context.links.find_by_id(parent_id)
        if parent is None:
            logger.error(
                'Broken parent chain for link %s: %s does not exist',
                link.id,
                parent_id,
            )
            raise BrokenChainError(link.id, parent_id)
        seen.add(parent_id)
        yield parent
        parent_id = parent.parent_id


def resolve_logical_path(context: NamespaceContext, link_id: UUID) -> str:
    """Build the absolute logical path of a link.

    The root's own name is never part of a path, so a file 'doc.txt'
    in folder 'A' under the root resolves to '/A/doc.txt' and the root
    itself resolves to '/'.

    Args:
        context: Namespace collaborators.
        link_id: Link id.

    Returns:
        Absolute path starting with '/'.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        BrokenChainError: If an ancestor reference does not resolve.
    """
    link = get_link(context, link_id)
    parts = [
        node.display_name
        for node in (link, *iter_ancestors(context, link))
        if node.kind != LinkKind.ROOT
    ]
    parts.reverse()
    return _PATH_SEPARATOR + _PATH_SEPARATOR.join(parts)


def link_state(context: NamespaceContext, link_id: UUID) -> LinkState:
    """Tell whether a link sits inside the trash.

    Args:
        context: Namespace collaborators.
        link_id: Link id.

    Returns:
        TRASHED when the trash node is an ancestor, otherwise ACTIVE.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        BrokenChainError: If an ancestor reference does not resolve.
    """
    link = get_link(context, link_id)
    for ancestor in iter_ancestors(context, link):
        if ancestor.kind == LinkKind.TRASH:
            return LinkState.TRASHED
    return LinkState.ACTIVE


def find_link_by_path(context: NamespaceContext, logical_path: str) -> Link:
    """Resolve a logical path such as '/A/doc.txt' to a link.

    Sibling names are not unique; the oldest matching sibling wins.

    Args:
        context: Namespace collaborators.
        logical_path: Absolute or relative path; '' and '/' mean root.

    Returns:
        Link found at the path.

    Raises:
        NotFoundError: If any path component has no matching child.
    """
    current = get_link(context, context.root_id)
    for name in logical_path.strip(_PATH_SEPARATOR).split(_PATH_SEPARATOR):
        if not name:
            continue
        matches = [
            child
            for child in get_children(context, current.id)
            if child.display_name == name
        ]
        if not matches:
            raise NotFoundError(f'No link at logical path: {logical_path}')
        current = min(matches, key=lambda child: child.created_at)
    return current


def walk_subtree(context: NamespaceContext, link_id: UUID) -> Iterator[Link]:
    """Yield every link below a link, depth first, parents before children.

    Args:
        context: Namespace collaborators.
        link_id: Subtree root (not yielded).

    Yields:
        Descendant links.
    """
    seen = {link_id}
    pending = [link_id]
    while pending:
        for child in get_children(context, pending.pop()):
            if child.id in seen:
                continue
            seen.add(child.id)
            yield child
            pending.append(child.id)


def get_file_link(context: NamespaceContext, link_id: UUID) -> Link:
    """Look up a link that must be of kind FILE.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        WrongKindError: If the link is not a file link.
    """
    link = get_link(context, link_id)
    if link.kind != LinkKind.FILE:
        raise WrongKindError(link.id, link.kind, (LinkKind.FILE,))
    return link


def get_container(context: NamespaceContext, link_id: UUID) -> Link:
    """Look up a link that may hold children.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        InvalidTargetError: If the link is a file link.
    """
    link = get_link(context, link_id)
    if not link.is_container:
        raise InvalidTargetError(
            f'Link {link.id} is {link.kind} and cannot hold children',
        )
    return link
