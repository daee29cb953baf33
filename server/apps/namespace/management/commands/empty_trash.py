"""Management command to purge the trash."""

import logging
from typing import Any

from django.core.management.base import BaseCommand

from server.apps.namespace.logic.service import open_namespace
from server.apps.namespace.models import LinkKind

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Permanently delete every file in the trash."""

    help = 'Permanently delete everything in the trash'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the purge command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        service = open_namespace()

        if options['dry_run']:
            files = [
                link
                for link in service.walk_subtree(service.trash_id)
                if link.kind == LinkKind.FILE
            ]
            for link in files:
                self.stdout.write(
                    f'Would delete: {service.resolve_logical_path(link.id)} '
                    f'(ID: {link.id})',
                )
            self.stdout.write(self.style.SUCCESS(
                f'Would purge {len(files)} files from trash',
            ))
            return

        count = service.empty_trash()
        logger.info('Purged %d files from trash', count)
        self.stdout.write(self.style.SUCCESS(
            f'Purged {count} files from trash',
        ))
