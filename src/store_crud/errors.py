"""Typed errors raised by the decoder, the stores and marshal callbacks."""

from typing import Any, Protocol, runtime_checkable


class UnknownContentError(Exception):
    """Raised when a request body has an unsupported or unknown content type."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(msg)


class MalformedPayloadError(Exception):
    """Raised when a request body cannot be decoded for its content type."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(msg)


class StoreError(Exception):
    """Base class for object store failures."""

    def __init__(self, message: str, bucket: str | None = None, key: str | None = None) -> None:
        self.message = message
        self.bucket = bucket
        self.key = key
        super().__init__(message)


class KeyNotFoundError(StoreError):
    """Raised when a key does not exist in a bucket."""

    def __init__(self, key: str, bucket: str) -> None:
        super().__init__(f"{key} not found in {bucket}", bucket=bucket, key=key)


@runtime_checkable
class JSONError(Protocol):
    """Errors that can describe themselves as a JSON object.

    A marshal callback raising such an error gets its details
    rendered into the 400 response body.
    """

    def serialize(self) -> dict[str, Any]:
        """Serialize the error to a JSON-compatible dict."""
        ...


class ValidationFailed(Exception):
    """Ready-made JSONError for marshal callbacks.

    Example:
        ```python
        def marshal(request):
            raise ValidationFailed({"title": "required"})
        ```
    """

    def __init__(self, errors: dict[str, Any], msg: str = "validation failed") -> None:
        self.errors = errors
        super().__init__(msg)

    def serialize(self) -> dict[str, Any]:
        return dict(self.errors)
