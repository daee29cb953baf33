"""Business logic for folder creation, file import, rename and export."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, final
from uuid import UUID

from django.db import transaction

from server.apps.namespace.exceptions import (
    FileRecordNotFoundError,
    NamespaceError,
    PhysicalStorageError,
    WrongKindError,
)
from server.apps.namespace.infrastructure.metadata import (
    generate_physical_name,
    split_source_name,
    validate_display_name,
)
from server.apps.namespace.logic.context import NamespaceContext
from server.apps.namespace.logic.navigation_operations import (
    get_container,
    get_file_for_link,
    get_file_link,
    get_link,
)
from server.apps.namespace.models import FileRecord, Link, LinkKind

logger = logging.getLogger(__name__)


class ImportFailure(NamedTuple):
    """One entry skipped during a directory import."""

    path: Path
    reason: str


@final
@dataclass
class ImportReport:
    """Outcome of a recursive directory import."""

    root_folder: Link | None = None
    folders: list[Link] = field(default_factory=list)
    files: list[Link] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        """Whether every entry was imported."""
        return not self.failures and not self.cancelled


def create_folder(
    context: NamespaceContext,
    parent_id: UUID,
    name: str,
) -> Link:
    """Create a folder link. No physical storage is touched.

    Args:
        context: Namespace collaborators.
        parent_id: Id of the container link to create the folder in.
        name: Folder display name.

    Returns:
        Created folder link.

    Raises:
        InvalidNameError: If the name is blank.
        LinkNotFoundError: If the parent does not resolve.
        InvalidTargetError: If the parent cannot hold children.
    """
    name = validate_display_name(name)
    parent = get_container(context, parent_id)

    folder = context.links.save(Link(
        kind=LinkKind.FOLDER,
        display_name=name,
        parent_id=parent.id,
    ))
    logger.info('Folder created: %s (ID: %s)', name, folder.id)
    return folder


def _persist_file(  # noqa: WPS211
    context: NamespaceContext,
    parent: Link,
    display_name: str,
    extension: str,
    physical_location: str,
) -> Link:
    """Create the file record and its link for an already written object.

    Bytes are written first, records second. If the record writes fail,
    the object is deleted again (rollback).
    """
    try:
        with transaction.atomic():
            record = context.files.save(FileRecord(
                display_name=display_name,
                extension=extension,
                physical_location=physical_location,
            ))
            link = context.links.save(Link(
                kind=LinkKind.FILE,
                display_name=display_name,
                parent_id=parent.id,
                target_file_id=record.id,
            ))
    except Exception:
        logger.exception(
            'Failed to persist records, rolling back object: %s',
            physical_location,
        )
        context.storage.rollback_upload(physical_location)
        raise

    logger.info(
        'File created: %s -> %s (link: %s)',
        display_name,
        physical_location,
        link.id,
    )
    return link


def create_managed_file(
    context: NamespaceContext,
    parent_folder_id: UUID,
    display_name: str,
    extension: str,
) -> Link:
    """Create an empty file in storage and link it into a folder.

    Args:
        context: Namespace collaborators.
        parent_folder_id: Id of the container link.
        display_name: Name shown in the namespace.
        extension: File type suffix, with or without the leading dot.

    Returns:
        Created file link.

    Raises:
        InvalidNameError: If the name is blank.
        LinkNotFoundError: If the parent does not resolve.
        InvalidTargetError: If the parent cannot hold children.
        PhysicalStorageError: If the empty object cannot be created.
    """
    display_name = validate_display_name(display_name)
    extension = extension.strip().lstrip('.')
    parent = get_container(context, parent_folder_id)

    physical_name = generate_physical_name(extension)
    try:
        saved_name = context.storage.create_empty(physical_name)
    except OSError as error:
        raise PhysicalStorageError(
            f'Failed to create empty object {physical_name}: {error}',
        ) from error

    return _persist_file(context, parent, display_name, extension, saved_name)


def import_existing_file(
    context: NamespaceContext,
    parent_folder_id: UUID,
    source_path: Path | str,
) -> Link:
    """Copy an external file into storage and link it into a folder.

    The copy happens before any record is written, so a failed copy
    leaves no record behind.

    Args:
        context: Namespace collaborators.
        parent_folder_id: Id of the container link.
        source_path: Path of the file to import.

    Returns:
        Created file link, named after the source file.

    Raises:
        LinkNotFoundError: If the parent does not resolve.
        InvalidTargetError: If the parent cannot hold children.
        PhysicalStorageError: If the source cannot be copied.
    """
    source_path = Path(source_path)
    parent = get_container(context, parent_folder_id)
    display_name, extension = split_source_name(source_path)

    if not source_path.is_file():
        raise PhysicalStorageError(f'Not a regular file: {source_path}')

    physical_name = generate_physical_name(extension)
    logger.info('Importing file: %s -> %s', source_path, physical_name)
    try:
        saved_name = context.storage.copy_in(physical_name, source_path)
    except OSError as error:
        raise PhysicalStorageError(
            f'Failed to copy {source_path}: {error}',
        ) from error

    return _persist_file(context, parent, display_name, extension, saved_name)


def import_directory_recursive(
    context: NamespaceContext,
    parent_folder_id: UUID,
    source_directory: Path | str,
    cancel_event: threading.Event | None = None,
) -> ImportReport:
    """Mirror an external directory tree into the namespace.

    A folder named after the directory is created under the parent.
    Subdirectories become folders, files are imported. An entry that
    fails is skipped and reported; the walk continues. Setting
    ``cancel_event`` stops the walk before the next entry, keeping what
    was already imported.

    Args:
        context: Namespace collaborators.
        parent_folder_id: Id of the container link.
        source_directory: Directory to import.
        cancel_event: Optional event checked before every entry.

    Returns:
        Report of created folders, imported files and skipped entries.

    Raises:
        LinkNotFoundError: If the parent does not resolve.
        InvalidTargetError: If the parent cannot hold children.
        PhysicalStorageError: If the source is not a directory.
    """
    source_directory = Path(source_directory)
    if not source_directory.is_dir():
        raise PhysicalStorageError(f'Not a directory: {source_directory}')

    report = ImportReport()
    folder = create_folder(context, parent_folder_id, source_directory.name)
    report.root_folder = folder
    report.folders.append(folder)

    _import_entries(context, source_directory, folder, report, cancel_event)

    logger.info(
        'Imported directory %s: %d folders, %d files, %d failures%s',
        source_directory,
        len(report.folders),
        len(report.files),
        len(report.failures),
        ' (cancelled)' if report.cancelled else '',
    )
    return report


def _import_entries(  # noqa: WPS211
    context: NamespaceContext,
    directory: Path,
    folder: Link,
    report: ImportReport,
    cancel_event: threading.Event | None,
) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as error:
        logger.warning('Cannot list directory %s: %s', directory, error)
        report.failures.append(ImportFailure(directory, str(error)))
        return

    for entry in entries:
        if cancel_event is not None and cancel_event.is_set():
            logger.info('Import cancelled before %s', entry)
            report.cancelled = True
            return

        try:
            _import_entry(context, entry, folder, report, cancel_event)
        except (NamespaceError, OSError) as error:
            logger.warning('Skipping %s during import: %s', entry, error)
            report.failures.append(ImportFailure(entry, str(error)))


def _import_entry(  # noqa: WPS211
    context: NamespaceContext,
    entry: Path,
    folder: Link,
    report: ImportReport,
    cancel_event: threading.Event | None,
) -> None:
    if entry.is_symlink() and entry.is_dir():
        # Following directory links could loop forever
        raise PhysicalStorageError(f'Symbolic link to directory: {entry}')

    if entry.is_dir():
        subfolder = create_folder(context, folder.id, entry.name)
        report.folders.append(subfolder)
        _import_entries(context, entry, subfolder, report, cancel_event)
    else:
        report.files.append(import_existing_file(context, folder.id, entry))


def rename_link(context: NamespaceContext, link_id: UUID, new_name: str) -> Link:
    """Rename a folder or file link.

    For file links the file record's display name follows, so both
    stay in sync. The physical object keeps its generated name.

    Args:
        context: Namespace collaborators.
        link_id: Link to rename.
        new_name: New display name.

    Returns:
        Updated link.

    Raises:
        InvalidNameError: If the name is blank.
        LinkNotFoundError: If the id does not resolve.
        WrongKindError: If the link is the root or the trash.
    """
    new_name = validate_display_name(new_name)
    link = get_link(context, link_id)
    if link.is_structural:
        raise WrongKindError(
            link.id,
            link.kind,
            (LinkKind.FOLDER, LinkKind.FILE),
        )

    old_name = link.display_name
    record = get_file_for_link(context, link)
    with transaction.atomic():
        if record is not None:
            record.display_name = new_name
            context.files.save(record)
        link.display_name = new_name
        context.links.save(link)

    logger.info('Renamed link %s: %s -> %s', link.id, old_name, new_name)
    return link


def export_file(
    context: NamespaceContext,
    file_link_id: UUID,
    destination_directory: Path | str,
) -> Path:
    """Copy the bytes behind a file link out of storage.

    The copy is named after the record (display name plus extension)
    and overwrites an existing file of that name.

    Args:
        context: Namespace collaborators.
        file_link_id: File link to export.
        destination_directory: Directory receiving the copy.

    Returns:
        Path of the written copy.

    Raises:
        LinkNotFoundError: If the id does not resolve.
        WrongKindError: If the link is not a file link.
        FileRecordNotFoundError: If the link's record does not resolve.
        InvalidNameError: If the record's name leaves no usable file name.
        PhysicalStorageError: If the bytes are missing or the copy fails.
    """
    link = get_file_link(context, file_link_id)
    record = get_file_for_link(context, link)
    if record is None:
        raise FileRecordNotFoundError(link.target_file_id)

    # Records saved out of band may carry path parts; keep the last one
    file_name = validate_display_name(Path(record.file_name).name)
    destination = Path(destination_directory) / file_name
    try:
        context.storage.copy_out(record.physical_location, destination)
    except OSError as error:
        raise PhysicalStorageError(
            f'Failed to export {record.physical_location} '
            f'to {destination}: {error}',
        ) from error

    logger.info('Exported file: %s -> %s', record.physical_location, destination)
    return destination
