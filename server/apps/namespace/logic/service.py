"""Namespace service: the single entry point for callers.

Binds the record stores, blob storage and the root/trash ids resolved
by bootstrap, and exposes every namespace operation as a method.
Mutating methods run one at a time per process; reads do not lock.
"""

import functools
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Final, ParamSpec, TypeVar, final
from uuid import UUID

from django.conf import settings
from django.core.files.storage import storages

from server.apps.namespace.infrastructure.record_store import (
    FileRecordStore,
    LinkStore,
)
from server.apps.namespace.infrastructure.storage import BlobStorage
from server.apps.namespace.logic import (
    file_operations,
    move_operations,
    navigation_operations,
    reconciliation,
    trash_operations,
)
from server.apps.namespace.logic.bootstrap import ensure_root, ensure_trash
from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.models import FileRecord, Link

_P = ParamSpec('_P')
_R = TypeVar('_R')

# Record stores have no locking of their own
_WRITE_LOCK: Final = threading.RLock()

logger = logging.getLogger(__name__)


def _serialized(method: Callable[_P, _R]) -> Callable[_P, _R]:
    @functools.wraps(method)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        with _WRITE_LOCK:
            return method(*args, **kwargs)
    return wrapper


@final
class NamespaceService:  # noqa: WPS214
    """Operations on the logical namespace."""

    def __init__(self, context: NamespaceContext) -> None:
        """Initialize service.

        Args:
            context: Stores, storage and structural ids.
        """
        self._context = context

    @property
    def root_id(self) -> UUID:
        """Id of the root link."""
        return self._context.root_id

    @property
    def trash_id(self) -> UUID:
        """Id of the trash link."""
        return self._context.trash_id

    # Navigation

    def get_children(self, parent_id: UUID) -> list[Link]:
        """List links directly under a parent (unsorted)."""
        return navigation_operations.get_children(self._context, parent_id)

    def find_link(self, link_id: UUID) -> Link | None:
        """Look up a link, None when absent."""
        return navigation_operations.find_link(self._context, link_id)

    def get_link(self, link_id: UUID) -> Link:
        """Look up a link, raising LinkNotFoundError when absent."""
        return navigation_operations.get_link(self._context, link_id)

    def find_link_by_path(self, logical_path: str) -> Link:
        """Resolve a logical path like '/A/doc.txt' to a link."""
        return navigation_operations.find_link_by_path(
            self._context,
            logical_path,
        )

    def get_file_for_link(self, link: Link) -> FileRecord | None:
        """Return the file record behind a FILE link, if any."""
        return navigation_operations.get_file_for_link(self._context, link)

    def resolve_logical_path(self, link_id: UUID) -> str:
        """Build the absolute logical path of a link."""
        return navigation_operations.resolve_logical_path(
            self._context,
            link_id,
        )

    def link_state(self, link_id: UUID) -> navigation_operations.LinkState:
        """Tell whether a link is active or inside the trash."""
        return navigation_operations.link_state(self._context, link_id)

    def walk_subtree(self, link_id: UUID) -> list[Link]:
        """List every link below a link, parents before children."""
        return list(navigation_operations.walk_subtree(self._context, link_id))

    def list_trash(self) -> list[Link]:
        """List links directly inside the trash."""
        return trash_operations.list_trash(self._context)

    # Creation and import

    @_serialized
    def create_folder(self, parent_id: UUID, name: str) -> Link:
        """Create a folder link under a container."""
        return file_operations.create_folder(self._context, parent_id, name)

    @_serialized
    def create_managed_file(
        self,
        parent_folder_id: UUID,
        display_name: str,
        extension: str,
    ) -> Link:
        """Create an empty stored file and link it under a container."""
        return file_operations.create_managed_file(
            self._context,
            parent_folder_id,
            display_name,
            extension,
        )

    @_serialized
    def import_existing_file(
        self,
        parent_folder_id: UUID,
        source_path: Path | str,
    ) -> Link:
        """Copy an external file in and link it under a container."""
        return file_operations.import_existing_file(
            self._context,
            parent_folder_id,
            source_path,
        )

    @_serialized
    def import_directory_recursive(
        self,
        parent_folder_id: UUID,
        source_directory: Path | str,
        cancel_event: threading.Event | None = None,
    ) -> file_operations.ImportReport:
        """Mirror an external directory tree under a container."""
        return file_operations.import_directory_recursive(
            self._context,
            parent_folder_id,
            source_directory,
            cancel_event,
        )

    @_serialized
    def rename_link(self, link_id: UUID, new_name: str) -> Link:
        """Rename a link, keeping its file record's name in sync."""
        return file_operations.rename_link(self._context, link_id, new_name)

    def export_file(
        self,
        file_link_id: UUID,
        destination_directory: Path | str,
    ) -> Path:
        """Copy a file's bytes out to a directory."""
        return file_operations.export_file(
            self._context,
            file_link_id,
            destination_directory,
        )

    # Move, trash and deletion

    @_serialized
    def move(self, link_id: UUID, new_parent_id: UUID) -> Link:
        """Move a file or folder link under a new container."""
        return move_operations.move(self._context, link_id, new_parent_id)

    @_serialized
    def move_to_trash(self, file_link_id: UUID) -> Link:
        """Move a file link into the trash."""
        return trash_operations.move_to_trash(self._context, file_link_id)

    @_serialized
    def delete_file_permanently(self, file_link_id: UUID) -> None:
        """Delete a file link, its record and its bytes."""
        trash_operations.delete_file_permanently(self._context, file_link_id)

    @_serialized
    def empty_trash(self) -> int:
        """Permanently delete everything inside the trash."""
        return trash_operations.empty_trash(self._context)

    # Reconciliation

    @_serialized
    def cleanup_dangling_file_links(self) -> list[UUID]:
        """Delete FILE links whose record is missing."""
        return reconciliation.cleanup_dangling_file_links(self._context)

    @_serialized
    def attach_orphan_files_to_root(self) -> list[Link]:
        """Link unreferenced file records under the root."""
        return reconciliation.attach_orphan_files_to_root(self._context)

    @_serialized
    def reconcile(self) -> reconciliation.ReconciliationReport:
        """Run both repair passes."""
        return reconciliation.reconcile(self._context)

    def find_dangling_file_links(self) -> list[Link]:
        """List FILE links whose record is missing, without changes."""
        return reconciliation.find_dangling_file_links(self._context)

    def find_orphan_file_records(self) -> list[FileRecord]:
        """List unreferenced file records, without changes."""
        return reconciliation.find_orphan_file_records(self._context)

    # Accessor save path for detached copies

    @_serialized
    def save_link(self, link: Link) -> Link:
        """Persist an externally modified link."""
        return self._context.links.save(link)

    @_serialized
    def save_file_record(self, record: FileRecord) -> FileRecord:
        """Persist an externally modified file record."""
        return self._context.files.save(record)


def open_namespace(
    storage: BlobStorage | None = None,
    *,
    reconcile: bool = True,
    root_name: str | None = None,
    trash_name: str | None = None,
) -> NamespaceService:
    """Bootstrap the namespace and build a service for it.

    Ensures the root and trash links exist, then optionally runs a
    reconciliation pass before the service is handed out.

    Args:
        storage: Blob storage; defaults to ``storages['default']``.
        reconcile: Whether to repair links and records first.
        root_name: Name for a newly created root (default from settings).
        trash_name: Name for a newly created trash (default from settings).

    Returns:
        Ready-to-use service.
    """
    links = LinkStore()
    files = FileRecordStore()

    with _WRITE_LOCK:
        root = ensure_root(links, root_name or settings.NAMESPACE_ROOT_NAME)
        trash = ensure_trash(
            links,
            root.id,
            trash_name or settings.NAMESPACE_TRASH_NAME,
        )

    service = NamespaceService(NamespaceContext(
        links=links,
        files=files,
        storage=storage or storages['default'],
        root_id=root.id,
        trash_id=trash.id,
    ))
    logger.debug('Namespace opened: root=%s trash=%s', root.id, trash.id)

    if reconcile:
        service.reconcile()
    return service
