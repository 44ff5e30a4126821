"""Typed failures raised by the application use cases."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for expected, caller-facing failures."""


class NotFoundError(DomainError):
    """The referenced entity does not exist."""


class ForbiddenError(DomainError):
    """The principal may not act on this specific resource instance."""


class InvalidSpecError(DomainError):
    """Malformed domain input."""


class ConflictError(DomainError):
    """The request clashes with the current state of the resource."""


class AlreadyRegisteredError(ConflictError):
    """The principal is already a participant of the contest."""


class ContestFullError(ConflictError):
    """The contest reached its participant limit."""


class RegistrationClosedError(ConflictError):
    """The contest no longer accepts registrations."""


class InvalidSignatureError(DomainError):
    """A payment provider signature failed verification."""


class UpstreamFailureError(DomainError):
    """The payment provider could not fulfil the request."""


__all__ = [
    "DomainError",
    "NotFoundError",
    "ForbiddenError",
    "InvalidSpecError",
    "ConflictError",
    "AlreadyRegisteredError",
    "ContestFullError",
    "RegistrationClosedError",
    "InvalidSignatureError",
    "UpstreamFailureError",
]
