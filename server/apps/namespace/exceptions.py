"""Exceptions for namespace app."""

from uuid import UUID


class NamespaceError(Exception):
    """Base class for namespace operation failures."""


class NotFoundError(NamespaceError):
    """Raised when a referenced record does not exist."""


class LinkNotFoundError(NotFoundError):
    """Raised when a link id does not resolve."""

    def __init__(self, link_id: UUID) -> None:
        """Initialize LinkNotFoundError.

        Args:
            link_id: Id that failed to resolve.
        """
        self.link_id = link_id
        super().__init__(f'Link not found: {link_id}')


class FileRecordNotFoundError(NotFoundError):
    """Raised when a file record id does not resolve."""

    def __init__(self, file_id: UUID | None) -> None:
        """Initialize FileRecordNotFoundError.

        Args:
            file_id: Id that failed to resolve (None if never set).
        """
        self.file_id = file_id
        super().__init__(f'File record not found: {file_id}')


class WrongKindError(NamespaceError):
    """Raised when an operation gets a link of the wrong kind."""

    def __init__(
        self,
        link_id: UUID,
        actual: str,
        expected: tuple[str, ...],
    ) -> None:
        """Initialize WrongKindError.

        Args:
            link_id: Id of the offending link.
            actual: Kind the link has.
            expected: Kinds the operation accepts.
        """
        self.link_id = link_id
        self.actual = actual
        self.expected = expected
        super().__init__(
            f'Link {link_id} is {actual}, '
            f'expected one of: {", ".join(expected)}',
        )


class InvalidTargetError(NamespaceError):
    """Raised when a destination link is missing, self, or a descendant."""


class InvalidNameError(NamespaceError):
    """Raised when a display name is empty."""


class BrokenChainError(NamespaceError):
    """Raised when an ancestor walk hits a dangling parent reference.

    This signals corrupted persisted state. Callers should run a
    reconciliation pass instead of retrying.
    """

    def __init__(self, link_id: UUID, missing_id: UUID) -> None:
        """Initialize BrokenChainError.

        Args:
            link_id: Link whose ancestors were being walked.
            missing_id: Ancestor reference that failed (or repeated).
        """
        self.link_id = link_id
        self.missing_id = missing_id
        super().__init__(
            f'Broken parent chain for link {link_id} at {missing_id}',
        )


class PhysicalStorageError(NamespaceError):
    """Raised when creating, copying or reading stored bytes fails."""
