"""Tests for namespace naming helpers."""

import uuid
from pathlib import Path

import pytest

from server.apps.namespace.exceptions import InvalidNameError
from server.apps.namespace.infrastructure.metadata import (
    generate_physical_name,
    split_source_name,
    validate_display_name,
)


@pytest.mark.parametrize(('source', 'expected'), [
    ('/tmp/report.pdf', ('report.pdf', 'pdf')),
    ('/tmp/archive.tar.gz', ('archive.tar.gz', 'gz')),
    ('/tmp/Photo.JPG', ('Photo.JPG', 'JPG')),
    ('/tmp/Makefile', ('Makefile', '')),
    ('/tmp/.bashrc', ('.bashrc', '')),
    ('/tmp/trailing.', ('trailing.', '')),
])
def test_split_source_name(source, expected):
    """Test display name keeps the full base name, extension the suffix."""
    assert split_source_name(Path(source)) == expected


def test_generate_physical_name_with_extension():
    """Test generated name is a UUID followed by the extension."""
    name = generate_physical_name('pdf')

    stem, _, extension = name.partition('.')
    assert extension == 'pdf'
    assert uuid.UUID(stem)


def test_generate_physical_name_without_extension():
    """Test generated name has no dot when extension is empty."""
    name = generate_physical_name('')

    assert '.' not in name
    assert uuid.UUID(name)


def test_generate_physical_name_unique():
    """Test two calls never produce the same name."""
    assert generate_physical_name('txt') != generate_physical_name('txt')


def test_validate_display_name_strips():
    """Test surrounding whitespace is removed."""
    assert validate_display_name('  Docs ') == 'Docs'


@pytest.mark.parametrize('name', ['', '   ', '\t\n'])
def test_validate_display_name_rejects_blank(name):
    """Test blank names are rejected."""
    with pytest.raises(InvalidNameError):
        validate_display_name(name)


@pytest.mark.parametrize(
    'name',
    ['.', '..', ' .. ', 'a/b', '../escaped', 'a\x00b'],
)
def test_validate_display_name_rejects_path_parts(name):
    """Test names must be a single path segment."""
    with pytest.raises(InvalidNameError):
        validate_display_name(name)


def test_validate_display_name_allows_dots_inside():
    """Test dots inside a name are fine."""
    assert validate_display_name('..hidden.tar.gz') == '..hidden.tar.gz'
