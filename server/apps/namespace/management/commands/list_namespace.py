"""Management command to print the namespace tree."""

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from server.apps.namespace.exceptions import NamespaceError, NotFoundError
from server.apps.namespace.logic.service import NamespaceService, open_namespace
from server.apps.namespace.models import Link, LinkKind


class Command(BaseCommand):
    """Print every link below a folder with its logical path."""

    help = 'List the namespace tree'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--path',
            default='/',
            help='Logical path to list (default: /)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the listing command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        service = open_namespace(reconcile=False)
        try:
            start = service.find_link_by_path(options['path'])
        except NotFoundError as exc:
            raise CommandError(str(exc)) from exc

        try:
            self._write_tree(service, start)
        except NamespaceError as exc:
            raise CommandError(
                f'Namespace is inconsistent, run reconcile_namespace: {exc}',
            ) from exc

    def _write_tree(self, service: NamespaceService, link: Link) -> None:
        children = sorted(
            service.get_children(link.id),
            key=lambda child: (child.kind != LinkKind.FOLDER, child.display_name),
        )
        for child in children:
            path = service.resolve_logical_path(child.id)
            self.stdout.write(f'{child.kind:<6} {path}')
            self._write_tree(service, child)
