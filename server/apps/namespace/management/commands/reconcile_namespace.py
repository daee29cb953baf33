"""Management command to repair links and file records."""

import logging
from typing import Any

from django.core.management.base import BaseCommand

from server.apps.namespace.logic.service import open_namespace

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Remove dangling file links and attach orphan file records."""

    help = 'Repair the namespace: dangling file links and orphan files'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be repaired without changing anything',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the reconciliation command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        service = open_namespace(reconcile=False)

        if options['dry_run']:
            dangling = service.find_dangling_file_links()
            orphans = service.find_orphan_file_records()
            for link in dangling:
                self.stdout.write(
                    f'Would remove dangling link: {link.display_name} '
                    f'(ID: {link.id}, target: {link.target_file_id})',
                )
            for record in orphans:
                self.stdout.write(
                    f'Would attach orphan file: {record.display_name} '
                    f'(ID: {record.id})',
                )
            self.stdout.write(self.style.SUCCESS(
                f'Would remove {len(dangling)} dangling links, '
                f'attach {len(orphans)} orphan files',
            ))
            return

        report = service.reconcile()
        self.stdout.write(self.style.SUCCESS(
            f'Removed {len(report.removed_link_ids)} dangling links, '
            f'attached {len(report.attached_links)} orphan files',
        ))
