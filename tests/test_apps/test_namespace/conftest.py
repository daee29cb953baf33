"""Shared fixtures for namespace app tests."""

import os
from pathlib import Path

import pytest

from server.apps.namespace.infrastructure.record_store import (
    FileRecordStore,
    LinkStore,
)
from server.apps.namespace.infrastructure.storage import BlobStorage
from server.apps.namespace.logic.bootstrap import ensure_root, ensure_trash
from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.logic.service import open_namespace

_BLOB_STORAGE_BACKEND = (
    'server.apps.namespace.infrastructure.storage.BlobStorage'
)


@pytest.fixture
def blob_root(tmp_path):
    """Directory holding physical objects.

    Returns:
        Path of the blob storage directory.
    """
    return tmp_path / 'blobs'


@pytest.fixture
def blob_storage(blob_root):
    """Blob storage rooted in a temporary directory.

    Returns:
        BlobStorage instance.
    """
    return BlobStorage(location=str(blob_root))


@pytest.fixture
def stored_names(blob_root):
    """List object names currently in blob storage.

    Returns:
        Callable returning sorted object names.
    """
    def _list() -> list[str]:
        if not blob_root.exists():
            return []
        return sorted(os.listdir(blob_root))
    return _list


@pytest.fixture
def context(db, blob_storage):
    """Bootstrapped namespace collaborators.

    Returns:
        NamespaceContext with root and trash in place.
    """
    links = LinkStore()
    root = ensure_root(links)
    trash = ensure_trash(links, root.id)
    return NamespaceContext(
        links=links,
        files=FileRecordStore(),
        storage=blob_storage,
        root_id=root.id,
        trash_id=trash.id,
    )


@pytest.fixture
def service(db, blob_storage):
    """Namespace service over temporary storage.

    Returns:
        NamespaceService instance.
    """
    return open_namespace(blob_storage)


@pytest.fixture
def source_dir(tmp_path):
    """Directory for external files to import.

    Returns:
        Path of an existing empty directory.
    """
    directory = tmp_path / 'source'
    directory.mkdir()
    return directory


@pytest.fixture
def make_source_file(source_dir):
    """Factory writing external files to import.

    Returns:
        Callable taking a relative path and content, returning the path.
    """
    def _make(relative_path: str, content: bytes = b'content') -> Path:
        path = source_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def storage_settings(settings, blob_root):
    """Point the default storage at the temporary blob directory.

    Returns:
        Path of the blob storage directory.
    """
    settings.STORAGES = {
        'default': {
            'BACKEND': _BLOB_STORAGE_BACKEND,
            'OPTIONS': {'location': str(blob_root)},
        },
    }
    return blob_root
