"""Management command to import files and directories."""

import logging
from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from server.apps.namespace.exceptions import NamespaceError, NotFoundError
from server.apps.namespace.logic.service import open_namespace

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Import external files and directory trees into a folder."""

    help = 'Import files and directories into the namespace'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            'sources',
            nargs='+',
            type=Path,
            help='Files or directories to import',
        )
        parser.add_argument(
            '--folder',
            default='/',
            help='Logical path of the destination folder (default: /)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the import command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        service = open_namespace()
        try:
            folder = service.find_link_by_path(options['folder'])
        except NotFoundError as exc:
            raise CommandError(str(exc)) from exc

        imported = 0
        failed = 0

        for source in options['sources']:
            try:
                if source.is_dir():
                    report = service.import_directory_recursive(
                        folder.id,
                        source,
                    )
                    imported += len(report.files)
                    failed += len(report.failures)
                    for failure in report.failures:
                        self.stderr.write(
                            f'Failed to import {failure.path}: {failure.reason}',
                        )
                else:
                    service.import_existing_file(folder.id, source)
                    imported += 1
            except NamespaceError as exc:
                self.stderr.write(f'Failed to import {source}: {exc}')
                logger.warning('Failed to import %s: %s', source, exc)
                failed += 1

        destination = service.resolve_logical_path(folder.id)
        self.stdout.write(self.style.SUCCESS(
            f'Imported {imported} files into {destination}, {failed} failed',
        ))
