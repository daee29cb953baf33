"""Tests for trash and permanent deletion."""

import logging
import uuid

import pytest
from django.db import DatabaseError

from server.apps.namespace.exceptions import LinkNotFoundError, WrongKindError
from server.apps.namespace.logic.file_operations import (
    create_folder,
    create_managed_file,
    import_existing_file,
)
from server.apps.namespace.logic.move_operations import move
from server.apps.namespace.logic.navigation_operations import (
    get_children,
    get_file_for_link,
)
from server.apps.namespace.logic.trash_operations import (
    delete_file_permanently,
    empty_trash,
    list_trash,
    move_to_trash,
)
from server.apps.namespace.models import FileRecord, Link


@pytest.fixture
def imported(context, make_source_file):
    """Import /Docs/report.txt with known bytes.

    Returns:
        Tuple of (folder link, file link).
    """
    folder = create_folder(context, context.root_id, 'Docs')
    source = make_source_file('report.txt', b'quarterly numbers')
    return folder, import_existing_file(context, folder.id, source)


@pytest.mark.django_db
class TestMoveToTrash:
    """Tests for move_to_trash function."""

    def test_moves_into_trash(self, context, imported):
        """Test file link ends up directly under the trash."""
        _, link = imported

        move_to_trash(context, link.id)

        assert [child.id for child in list_trash(context)] == [link.id]

    def test_round_trip_keeps_content(self, context, imported, blob_root):
        """Test trash and restore leave record, bytes and name untouched."""
        folder, link = imported
        record_before = get_file_for_link(context, link)

        move_to_trash(context, link.id)
        move(context, link.id, folder.id)

        restored = Link.objects.get(id=link.id)
        record_after = get_file_for_link(context, restored)
        assert restored.parent_id == folder.id
        assert restored.display_name == 'report.txt'
        assert record_after.display_name == record_before.display_name
        assert record_after.physical_location == record_before.physical_location
        assert (blob_root / record_after.physical_location).read_bytes() == (
            b'quarterly numbers'
        )

    def test_folder_rejected(self, context, imported):
        """Test only file links can be trashed this way."""
        folder, _ = imported

        with pytest.raises(WrongKindError):
            move_to_trash(context, folder.id)

        assert Link.objects.get(id=folder.id).parent_id == context.root_id

    def test_missing_link(self, context):
        """Test unknown id raises not found."""
        with pytest.raises(LinkNotFoundError):
            move_to_trash(context, uuid.uuid4())


@pytest.mark.django_db
class TestDeleteFilePermanently:
    """Tests for delete_file_permanently function."""

    def test_removes_link_record_and_bytes(self, context, imported, blob_root):
        """Test every trace of the file is gone."""
        _, link = imported
        record = get_file_for_link(context, link)

        delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()
        assert not FileRecord.objects.filter(id=record.id).exists()
        assert not (blob_root / record.physical_location).exists()

    def test_second_call_is_not_found(self, context, imported, stored_names):
        """Test deleting twice fails cleanly without side effects."""
        _, link = imported
        delete_file_permanently(context, link.id)
        links_before = Link.objects.count()
        names_before = stored_names()

        with pytest.raises(LinkNotFoundError):
            delete_file_permanently(context, link.id)

        assert Link.objects.count() == links_before
        assert stored_names() == names_before

    def test_folder_rejected(self, context, imported):
        """Test folders are not deleted by this operation."""
        folder, _ = imported

        with pytest.raises(WrongKindError):
            delete_file_permanently(context, folder.id)

        assert Link.objects.filter(id=folder.id).exists()

    def test_missing_bytes_tolerated(self, context, imported, blob_root, caplog):
        """Test records are removed even when the object is gone."""
        _, link = imported
        record = get_file_for_link(context, link)
        (blob_root / record.physical_location).unlink()

        with caplog.at_level(logging.WARNING):
            delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()
        assert not FileRecord.objects.filter(id=record.id).exists()
        assert 'Object not found in storage' in caplog.text

    def test_storage_failure_tolerated(self, context, imported, monkeypatch):
        """Test a failing delete does not keep the records alive."""
        _, link = imported

        def failing_delete(name):
            raise PermissionError('read-only')

        monkeypatch.setattr(context.storage, 'delete', failing_delete)

        delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()
        assert FileRecord.objects.count() == 0

    @pytest.mark.parametrize('location', ['', '../outside.txt'])
    def test_unusable_location_tolerated(self, context, imported, location):
        """Test a corrupted stored name does not keep the records alive."""
        _, link = imported
        FileRecord.objects.filter(id=link.target_file_id).update(
            physical_location=location,
        )

        delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()
        assert FileRecord.objects.count() == 0

    def test_record_delete_failure_still_removes_link(
        self,
        context,
        imported,
        monkeypatch,
    ):
        """Test the link goes even when the record delete fails."""
        _, link = imported

        def failing_delete(record_id):
            raise DatabaseError('database is locked')

        monkeypatch.setattr(context.files, 'delete', failing_delete)

        with pytest.raises(DatabaseError):
            delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()

    def test_dangling_link_still_deleted(self, context, imported):
        """Test link goes even when its record is already gone."""
        _, link = imported
        FileRecord.objects.filter(id=link.target_file_id).delete()

        delete_file_permanently(context, link.id)

        assert not Link.objects.filter(id=link.id).exists()


@pytest.mark.django_db
class TestEmptyTrash:
    """Tests for empty_trash function."""

    def test_purges_trash_subtree(self, context, imported, stored_names):
        """Test files and folders inside the trash are deleted."""
        _, kept = imported
        trashed = create_managed_file(context, context.root_id, 'a', 'txt')
        move_to_trash(context, trashed.id)
        old = create_folder(context, context.trash_id, 'old')
        nested = create_folder(context, old.id, 'nested')
        create_managed_file(context, nested.id, 'b', 'txt')

        count = empty_trash(context)

        assert count == 2
        assert get_children(context, context.trash_id) == []
        assert not Link.objects.filter(id__in=[old.id, nested.id]).exists()
        assert FileRecord.objects.count() == 1
        assert get_file_for_link(context, kept) is not None
        assert len(stored_names()) == 1

    def test_empty_trash_is_noop(self, context, imported):
        """Test emptying an empty trash deletes nothing."""
        assert empty_trash(context) == 0
        assert FileRecord.objects.count() == 1
