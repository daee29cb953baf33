"""Tests for namespace models."""

import pytest

from server.apps.namespace.models import FileRecord, Link, LinkKind


class TestFileRecordFileName:
    """Tests for FileRecord.file_name."""

    @pytest.mark.parametrize(('display_name', 'extension', 'expected'), [
        ('report', 'pdf', 'report.pdf'),
        ('report.pdf', 'pdf', 'report.pdf'),
        ('REPORT.PDF', 'pdf', 'REPORT.PDF'),
        ('notes', '', 'notes'),
        ('archive.tar', 'gz', 'archive.tar.gz'),
    ])
    def test_file_name(self, display_name, extension, expected):
        """Test extension is appended only when missing."""
        record = FileRecord(
            display_name=display_name,
            extension=extension,
            physical_location='x',
        )

        assert record.file_name == expected


class TestLinkKinds:
    """Tests for Link kind helpers."""

    @pytest.mark.parametrize(('kind', 'is_container', 'is_structural'), [
        (LinkKind.ROOT, True, True),
        (LinkKind.TRASH, True, True),
        (LinkKind.FOLDER, True, False),
        (LinkKind.FILE, False, False),
    ])
    def test_kind_helpers(self, kind, is_container, is_structural):
        """Test container and structural flags per kind."""
        link = Link(kind=kind, display_name='x')

        assert link.is_container is is_container
        assert link.is_structural is is_structural

    def test_str_uses_display_name(self):
        """Test string representation prefers display name."""
        assert str(Link(kind=LinkKind.FOLDER, display_name='Docs')) == 'Docs'
        assert str(Link(kind=LinkKind.FOLDER, display_name='')) == 'FOLDER'

    def test_new_links_get_unique_ids(self):
        """Test ids are generated on instantiation."""
        first = Link(kind=LinkKind.FOLDER, display_name='a')
        second = Link(kind=LinkKind.FOLDER, display_name='a')

        assert first.id != second.id
