class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is rejected before any store call is attempted."""


class StoreError(DomainError):
    """Raised when the remote record store fails or rejects an operation."""


class CameraError(DomainError):
    """Raised when cameras cannot be enumerated or a stream cannot be acquired."""


class ScanSessionError(DomainError):
    """Raised when a QR capture session is driven through an illegal transition."""
