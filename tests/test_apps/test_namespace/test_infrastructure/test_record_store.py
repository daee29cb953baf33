"""Tests for ORM-backed record stores."""

import uuid

import pytest

from server.apps.namespace.infrastructure.record_store import (
    FileRecordStore,
    LinkStore,
)
from server.apps.namespace.models import FileRecord, Link, LinkKind


@pytest.mark.django_db
class TestFileRecordStore:
    """Tests for FileRecordStore."""

    def test_save_and_find(self):
        """Test saved record is found by id."""
        store = FileRecordStore()
        record = store.save(FileRecord(
            display_name='a.txt',
            extension='txt',
            physical_location='abc.txt',
        ))

        found = store.find_by_id(record.id)

        assert found == record
        assert found.physical_location == 'abc.txt'

    def test_find_missing_returns_none(self):
        """Test unknown id gives None."""
        assert FileRecordStore().find_by_id(uuid.uuid4()) is None

    def test_save_detached_copy_updates(self):
        """Test saving a modified copy replaces the stored record."""
        store = FileRecordStore()
        record = store.save(FileRecord(
            display_name='a.txt',
            extension='txt',
            physical_location='abc.txt',
        ))
        detached = FileRecord.objects.get(id=record.id)
        detached.display_name = 'b.txt'

        store.save(detached)

        assert store.find_by_id(record.id).display_name == 'b.txt'
        assert len(store.find_all()) == 1

    def test_delete_is_idempotent(self):
        """Test deleting twice is not an error."""
        store = FileRecordStore()
        record = store.save(FileRecord(
            display_name='a.txt',
            extension='txt',
            physical_location='abc.txt',
        ))

        store.delete(record.id)
        store.delete(record.id)

        assert store.find_all() == []


@pytest.mark.django_db
class TestLinkStore:
    """Tests for LinkStore."""

    def test_find_children(self):
        """Test only direct children are returned."""
        store = LinkStore()
        parent = store.save(Link(kind=LinkKind.FOLDER, display_name='p'))
        child = store.save(Link(
            kind=LinkKind.FOLDER,
            display_name='c',
            parent_id=parent.id,
        ))
        store.save(Link(
            kind=LinkKind.FOLDER,
            display_name='g',
            parent_id=child.id,
        ))

        assert store.find_children(parent.id) == [child]

    def test_find_by_kind(self):
        """Test links are filtered by kind."""
        store = LinkStore()
        root = store.save(Link(kind=LinkKind.ROOT, display_name='ROOT'))
        store.save(Link(
            kind=LinkKind.FOLDER,
            display_name='f',
            parent_id=root.id,
        ))

        assert store.find_by_kind(LinkKind.ROOT) == [root]

    def test_references_are_not_enforced(self):
        """Test the store accepts dangling references as plain data."""
        store = LinkStore()
        link = store.save(Link(
            kind=LinkKind.FILE,
            display_name='dangling',
            parent_id=uuid.uuid4(),
            target_file_id=uuid.uuid4(),
        ))

        assert store.find_by_id(link.id) is not None
