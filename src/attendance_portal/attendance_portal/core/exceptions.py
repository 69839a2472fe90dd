class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the stable error name returned to callers, ``http_status``
    the status code the controllers answer with.
    """

    kind = "DomainError"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class IdentityNotFound(DomainError):
    kind = "IdentityNotFound"
    http_status = 404


class EvidenceRequired(DomainError):
    """Every time-in/time-out must carry a fresh photo."""

    kind = "EvidenceRequired"


class PayloadTooLarge(DomainError):
    kind = "PayloadTooLarge"
    http_status = 413


class AlreadyTimedIn(DomainError):
    kind = "AlreadyTimedIn"
    http_status = 409


class AlreadyTimedOut(DomainError):
    kind = "AlreadyTimedOut"
    http_status = 409


class NoActiveEntry(DomainError):
    kind = "NoActiveEntry"
    http_status = 409


class DuplicateEntry(DomainError):
    """Unique (person, date) constraint hit by a concurrent insert."""

    kind = "DuplicateEntry"
    http_status = 409


class RecordNotFound(DomainError):
    kind = "RecordNotFound"
    http_status = 404


class UploadFailed(DomainError):
    kind = "UploadFailed"
    http_status = 502


class Timeout(DomainError):
    """A storage or database call did not answer in time."""

    kind = "Timeout"
    http_status = 504
