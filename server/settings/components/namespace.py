"""Logical namespace settings."""

from server.settings.components import config

# Display names given to the structural singletons on first start-up
NAMESPACE_ROOT_NAME = config('NAMESPACE_ROOT_NAME', default='ROOT')
NAMESPACE_TRASH_NAME = config('NAMESPACE_TRASH_NAME', default='Trash')
