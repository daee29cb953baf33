"""Repair passes between links and file records.

Operations write the file record and its link separately and never
cascade deletes, so the two tables can drift apart after a crash or
after records are edited out of band. These passes restore:

- every FILE link points at an existing file record;
- every file record is reachable through some FILE link.

Both passes are idempotent. They run at start-up, not after each
mutation.
"""

import logging
from dataclasses import dataclass, field
from typing import final
from uuid import UUID

from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.models import FileRecord, Link, LinkKind

logger = logging.getLogger(__name__)


@final
@dataclass
class ReconciliationReport:
    """What a reconciliation pass changed."""

    removed_link_ids: list[UUID] = field(default_factory=list)
    attached_links: list[Link] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Whether anything was repaired."""
        return bool(self.removed_link_ids or self.attached_links)


def find_dangling_file_links(context: NamespaceContext) -> list[Link]:
    """List FILE links whose target is unset or missing."""
    existing_ids = {record.id for record in context.files.find_all()}
    return [
        link
        for link in context.links.find_all()
        if link.kind == LinkKind.FILE
        and (link.target_file_id is None or link.target_file_id not in existing_ids)
    ]


def find_orphan_file_records(context: NamespaceContext) -> list[FileRecord]:
    """List file records no FILE link points at."""
    linked_ids = {
        link.target_file_id
        for link in context.links.find_all()
        if link.kind == LinkKind.FILE and link.target_file_id is not None
    }
    return [
        record
        for record in context.files.find_all()
        if record.id not in linked_ids
    ]


def cleanup_dangling_file_links(context: NamespaceContext) -> list[UUID]:
    """Delete FILE links whose file record does not exist.

    Args:
        context: Namespace collaborators.

    Returns:
        Ids of the deleted links.
    """
    removed = []
    for link in find_dangling_file_links(context):
        logger.warning(
            'Removing dangling file link %s (%s): target %s missing',
            link.id,
            link.display_name,
            link.target_file_id,
        )
        context.links.delete(link.id)
        removed.append(link.id)
    return removed


def attach_orphan_files_to_root(context: NamespaceContext) -> list[Link]:
    """Link every unreferenced file record directly under the root.

    Args:
        context: Namespace collaborators.

    Returns:
        Newly created file links.
    """
    attached = []
    for record in find_orphan_file_records(context):
        link = context.links.save(Link(
            kind=LinkKind.FILE,
            display_name=record.display_name,
            parent_id=context.root_id,
            target_file_id=record.id,
        ))
        logger.warning(
            'Attached orphan file record %s (%s) to root as link %s',
            record.id,
            record.display_name,
            link.id,
        )
        attached.append(link)
    return attached


def reconcile(context: NamespaceContext) -> ReconciliationReport:
    """Run both repair passes: dangling links first, then orphans.

    Args:
        context: Namespace collaborators.

    Returns:
        Report of removed and attached links.
    """
    report = ReconciliationReport(
        removed_link_ids=cleanup_dangling_file_links(context),
        attached_links=attach_orphan_files_to_root(context),
    )
    if report.changed:
        logger.info(
            'Reconciliation: removed %d dangling links, attached %d orphans',
            len(report.removed_link_ids),
            len(report.attached_links),
        )
    else:
        logger.debug('Reconciliation: namespace is consistent')
    return report
