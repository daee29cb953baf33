"""Django app configuration for namespace app."""

from django.apps import AppConfig


class NamespaceConfig(AppConfig):
    """Configuration for namespace app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.namespace'
    verbose_name = 'Namespace'
