"""Core Django settings."""

from pathlib import Path
from typing import Final

from server.settings.components import BASE_DIR, config

SECRET_KEY = config(
    'DJANGO_SECRET_KEY',
    default='namespace-insecure-development-key',
)

DEBUG = config('DJANGO_DEBUG', cast=bool, default=False)

ALLOWED_HOSTS: Final[list[str]] = []

INSTALLED_APPS: Final = [
    'server.apps.namespace',
]

# Both record tables (links and file records) live in one SQLite file
DATABASES: Final = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': Path(config(
            'NAMESPACE_DATABASE_PATH',
            default=str(BASE_DIR.joinpath('data', 'namespace.sqlite3')),
        )),
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

USE_TZ = True
TIME_ZONE = 'UTC'
