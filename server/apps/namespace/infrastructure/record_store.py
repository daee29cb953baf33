"""Keyed record stores for links and file records.

A record store only holds data: save, look up by id, list, delete.
It never interprets references between records; the namespace logic
owns every invariant.
"""

from typing import Generic, Protocol, TypeVar, final
from uuid import UUID

from django.db import models

from server.apps.namespace.models import FileRecord, Link, LinkKind

_RecordT = TypeVar('_RecordT')
_ModelT = TypeVar('_ModelT', bound=models.Model)


class RecordStore(Protocol[_RecordT]):
    """Contract every record store implements."""

    def save(self, record: _RecordT) -> _RecordT:
        """Insert or replace a record."""

    def find_by_id(self, record_id: UUID) -> _RecordT | None:
        """Return the record with this id, or None."""

    def find_all(self) -> list[_RecordT]:
        """Return every record, in no particular order."""

    def delete(self, record_id: UUID) -> None:
        """Remove the record. Absent ids are ignored."""


class ModelRecordStore(Generic[_ModelT]):
    """Record store backed by a Django model table."""

    def __init__(self, model: type[_ModelT]) -> None:
        """Initialize store for a model.

        Args:
            model: Model class whose default manager holds the records.
        """
        self._model = model

    def save(self, record: _ModelT) -> _ModelT:
        """Insert or update a record.

        Args:
            record: Model instance, possibly a detached copy.

        Returns:
            The saved record.
        """
        record.save()
        return record

    def find_by_id(self, record_id: UUID) -> _ModelT | None:
        """Look up a record by primary key.

        Args:
            record_id: Record id.

        Returns:
            Record instance or None when absent.
        """
        return self._model._default_manager.filter(pk=record_id).first()

    def find_all(self) -> list[_ModelT]:
        """Load every record."""
        return list(self._model._default_manager.all())

    def delete(self, record_id: UUID) -> None:
        """Delete a record by id (no error when already absent).

        Args:
            record_id: Record id.
        """
        self._model._default_manager.filter(pk=record_id).delete()


@final
class FileRecordStore(ModelRecordStore[FileRecord]):
    """Store for physical file records."""

    def __init__(self) -> None:
        """Initialize store over the FileRecord table."""
        super().__init__(FileRecord)


@final
class LinkStore(ModelRecordStore[Link]):
    """Store for namespace links, with child and kind lookups."""

    def __init__(self) -> None:
        """Initialize store over the Link table."""
        super().__init__(Link)

    def find_children(self, parent_id: UUID) -> list[Link]:
        """Return all links directly under a parent.

        Args:
            parent_id: Parent link id.

        Returns:
            Child links in table order (unsorted).
        """
        return list(Link.objects.filter(parent_id=parent_id))

    def find_by_kind(self, kind: LinkKind) -> list[Link]:
        """Return all links of one kind."""
        return list(Link.objects.filter(kind=kind))
