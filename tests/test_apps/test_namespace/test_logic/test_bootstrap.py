"""Tests for root and trash bootstrap."""

import uuid

import pytest

from server.apps.namespace.infrastructure.record_store import LinkStore
from server.apps.namespace.logic.bootstrap import ensure_root, ensure_trash
from server.apps.namespace.models import Link, LinkKind


@pytest.mark.django_db
class TestEnsureRoot:
    """Tests for ensure_root function."""

    def test_creates_root(self):
        """Test root is created with no parent."""
        root = ensure_root(LinkStore())

        assert root.kind == LinkKind.ROOT
        assert root.parent_id is None
        assert root.display_name == 'ROOT'

    def test_idempotent(self):
        """Test repeated calls return the same root."""
        links = LinkStore()

        first = ensure_root(links)
        second = ensure_root(links)

        assert first.id == second.id
        assert Link.objects.filter(kind=LinkKind.ROOT).count() == 1

    def test_custom_name(self):
        """Test name is used only when the root is created."""
        links = LinkStore()

        root = ensure_root(links, 'Home')
        again = ensure_root(links, 'Other')

        assert root.display_name == 'Home'
        assert again.display_name == 'Home'

    def test_clears_parent_of_existing_root(self):
        """Test a root with a parent reference is repaired."""
        Link.objects.create(
            kind=LinkKind.ROOT,
            display_name='ROOT',
            parent_id=uuid.uuid4(),
        )

        root = ensure_root(LinkStore())

        root.refresh_from_db()
        assert root.parent_id is None


@pytest.mark.django_db
class TestEnsureTrash:
    """Tests for ensure_trash function."""

    def test_creates_trash_under_root(self):
        """Test trash is a direct child of root."""
        links = LinkStore()
        root = ensure_root(links)

        trash = ensure_trash(links, root.id)

        assert trash.kind == LinkKind.TRASH
        assert trash.parent_id == root.id
        assert trash.display_name == 'Trash'

    def test_idempotent(self):
        """Test repeated calls return the same trash."""
        links = LinkStore()
        root = ensure_root(links)

        first = ensure_trash(links, root.id)
        second = ensure_trash(links, root.id)

        assert first.id == second.id
        assert Link.objects.filter(kind=LinkKind.TRASH).count() == 1

    def test_moves_misplaced_trash_back_under_root(self):
        """Test trash found elsewhere is re-parented to root."""
        links = LinkStore()
        root = ensure_root(links)
        folder = Link.objects.create(
            kind=LinkKind.FOLDER,
            display_name='Docs',
            parent_id=root.id,
        )
        misplaced = Link.objects.create(
            kind=LinkKind.TRASH,
            display_name='Trash',
            parent_id=folder.id,
        )

        trash = ensure_trash(links, root.id)

        assert trash.id == misplaced.id
        misplaced.refresh_from_db()
        assert misplaced.parent_id == root.id
