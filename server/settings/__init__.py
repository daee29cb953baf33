"""Main settings file.

Settings are split into components and combined here with
``django-split-settings``. Values come from ``config/.env`` or
the environment, see ``server.settings.components.config``.
"""

from split_settings.tools import include, optional

include(
    'components/common.py',
    'components/logging.py',
    'components/storages.py',
    'components/namespace.py',
    # Local overrides, never committed
    optional('components/local.py'),
)
