"""Django storage configuration for physical file content.

File bytes live in a flat local directory. Objects are addressed by
generated names, never by the names users see in the namespace.
"""

from typing import Any, Final

from server.settings.components import BASE_DIR, config

NAMESPACE_STORAGE_ROOT = config(
    'NAMESPACE_STORAGE_ROOT',
    default=str(BASE_DIR.joinpath('data', 'files')),
)

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.namespace.infrastructure.storage.BlobStorage',
        'OPTIONS': {
            'location': NAMESPACE_STORAGE_ROOT,
        },
    },
}
