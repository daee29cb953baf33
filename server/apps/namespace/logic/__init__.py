"""Business logic layer for namespace app.

This package contains all business logic for the logical namespace:
- Bootstrap of the root and trash singletons
- Navigation and logical path resolution
- Folder creation and file import
- Move, trash and permanent deletion
- Reconciliation of links and file records

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
