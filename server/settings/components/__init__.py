"""Shared helpers for settings components."""

from pathlib import Path

from decouple import AutoConfig

# Project root: the directory holding ``server/`` and ``config/``
BASE_DIR = Path(__file__).parent.parent.parent.parent

# Reads ``config/.env`` first, then falls back to environment variables
config = AutoConfig(search_path=BASE_DIR.joinpath('config'))
