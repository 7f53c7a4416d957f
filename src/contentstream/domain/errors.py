"""Typed errors raised by the content stream core."""

from __future__ import annotations


class ContentStreamError(Exception):
    """Base exception for all contentstream errors."""


class DependencyFetchError(ContentStreamError):
    """A referenced payload could not be fetched.

    Recoverable: the dependency-first merger drops the reference and carries on.
    """

    def __init__(self, reference: str, message: str) -> None:
        self.reference = reference
        super().__init__(message)


class ContentNotFoundError(DependencyFetchError):
    """Raised when an address has no payload in the content store."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(address, f"Content not found: {address}")


class ContentUnavailableError(DependencyFetchError):
    """Raised when the content store cannot be read right now, e.g. a locked database."""

    def __init__(self, address: str, reason: str) -> None:
        self.address = address
        super().__init__(address, f"Content {address} unavailable: {reason}")


class BlobNotFoundError(DependencyFetchError):
    """Raised by blob stores when a blob reference cannot be resolved."""

    def __init__(self, reference: str) -> None:
        super().__init__(reference, f"Blob not found: {reference}")


class PayloadTooLargeError(DependencyFetchError):
    """Raised when a payload exceeds the size limit of a fetch."""

    def __init__(self, reference: str, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(reference, f"Payload {reference} is {size} bytes, limit is {max_size}")


class ContentIntegrityError(DependencyFetchError):
    """Raised when stored bytes do not hash to the address they are stored under."""

    def __init__(self, address: str, actual: str) -> None:
        self.address = address
        self.actual = actual
        super().__init__(
            address, f"Content integrity check failed for {address}: payload hashes to {actual}"
        )


class AddressMismatchError(ContentStreamError):
    """Raised when a payload is written under an address it does not hash to."""

    def __init__(self, address: str, actual: str) -> None:
        self.address = address
        self.actual = actual
        super().__init__(f"Address mismatch: expected {address}, payload hashes to {actual}")


class MissingDependencyError(ContentStreamError):
    """Raised when an entry arrives before the payload it references."""

    def __init__(self, address: str, *, entry_key: str | None = None) -> None:
        self.address = address
        self.entry_key = entry_key
        super().__init__(
            f"entries from the content stream must contain content (missing {address}"
            + (f" for {entry_key})" if entry_key else ")")
        )


class UnmatchedPayloadError(ContentStreamError):
    """Raised at the end of a reconciliation pass when payloads were never claimed."""

    def __init__(self, addresses: tuple[str, ...]) -> None:
        self.addresses = addresses
        super().__init__(
            f"{len(addresses)} payload(s) were not referenced by any entry: {', '.join(addresses)}"
        )


class SerializationError(ContentStreamError):
    """Raised when content cannot be encoded to canonical bytes."""
