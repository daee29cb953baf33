"""Collaborators shared by every namespace operation."""

from dataclasses import dataclass
from typing import final
from uuid import UUID

from server.apps.namespace.infrastructure.record_store import (
    FileRecordStore,
    LinkStore,
)
from server.apps.namespace.infrastructure.storage import BlobStorage


@final
@dataclass(frozen=True, slots=True)
class NamespaceContext:
    """Stores, blob storage and the structural ids resolved at start-up.

    Root and trash ids are looked up once by bootstrap and passed
    explicitly from then on.
    """

    links: LinkStore
    files: FileRecordStore
    storage: BlobStorage
    root_id: UUID
    trash_id: UUID
