"""Infrastructure layer for namespace app.

This package contains integrations with external systems:
- Record stores over the Django ORM (links and file records)
- Blob storage backend for physical file content
- Naming helpers for imported and generated files

Keep infrastructure concerns separate from business logic.
"""
