"""Storage backend for physical file content."""

import logging
import shutil
from pathlib import Path
from typing import Any, final, override

from django.core.files import File
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

logger = logging.getLogger(__name__)


@final
class BlobStorage(FileSystemStorage):
    """Directory of opaque objects addressed by generated names.

    Objects sit flat under ``location``; their names carry no folder
    structure, which lives in links only. Writes and deletes are logged
    at debug level and failures at error level before they propagate.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Write an object, logging the outcome.

        Django may adjust the name when it is taken, so callers must
        record the returned name, not the requested one.

        Args:
            name: Requested object name.
            content: File-like object with the bytes.
            max_length: Optional limit for the final name.

        Returns:
            Name the object was stored under.

        Raises:
            OSError: If the object cannot be written.
        """
        logger.debug('Writing object: %s', name)
        try:
            saved_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Object write failed: %s', name)
            raise
        logger.debug('Object written: %s', saved_name)
        return saved_name

    @override
    def delete(self, name: str) -> None:
        """Remove an object, logging the outcome.

        Removing a name that is not present is a no-op, as in
        FileSystemStorage.

        Args:
            name: Object name.

        Raises:
            OSError: If the object exists but cannot be removed.
            ValueError: If the name is empty.
        """
        logger.debug('Removing object: %s', name)
        try:
            super().delete(name)
        except Exception:
            logger.exception('Object removal failed: %r', name)
            raise
        logger.debug('Object removed: %s', name)

    def create_empty(self, name: str) -> str:
        """Create an empty object.

        Args:
            name: Storage name for the new object.

        Returns:
            Actual storage name used.
        """
        return self.save(name, ContentFile(b''))

    def copy_in(self, name: str, source_path: Path) -> str:
        """Copy bytes of an external file into storage.

        Args:
            name: Storage name for the new object.
            source_path: Path of the file to copy.

        Returns:
            Actual storage name used.

        Raises:
            OSError: If the source cannot be read or the write fails.
        """
        with source_path.open('rb') as source:
            return self.save(name, File(source, name=source_path.name))

    def copy_out(self, name: str, destination_path: Path) -> None:
        """Copy an object to an external path, overwriting it.

        Args:
            name: Storage name of the object.
            destination_path: Target file path.

        Raises:
            OSError: If the object is missing or the copy fails.
        """
        with self.open(name, 'rb') as source:
            with destination_path.open('wb') as destination:
                shutil.copyfileobj(source, destination)

    def rollback_upload(self, name: str) -> None:
        """Remove an object whose file record was never committed.

        Never raises: the caller is already handling the record failure.
        An object left behind here has no record, so reconciliation
        cannot find it; the error log is the only trace.

        Args:
            name: Object name returned by the earlier write.
        """
        logger.warning('Removing uncommitted object: %s', name)
        try:
            self.delete(name)
        except Exception:
            logger.exception('Uncommitted object left in storage: %s', name)
