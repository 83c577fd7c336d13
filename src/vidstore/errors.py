"""Error taxonomy shared by the store, the service and every surface."""


class VidStoreError(Exception):
    """Base class for all vidstore errors."""


class StoreUnavailable(VidStoreError):
    """Raised when the persisted document cannot be read or written."""


class ValidationError(VidStoreError):
    """Raised when a required input field is missing or empty."""


class NotFoundError(VidStoreError):
    """Raised when a referenced media item or comment does not exist."""


class AccessDenied(VidStoreError):
    """Raised when the access gate rejects a privileged request."""


class UploadFailed(VidStoreError):
    """Raised when the media upload bridge cannot store a payload."""
