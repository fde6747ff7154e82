"""Provisioning error taxonomy.

Each error carries the HTTP status the API layer answers with.
"""

from http import HTTPStatus


class ProvisioningError(Exception):
    """Base class for every failure the orchestrator reports."""

    http_status: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ProvisioningError):
    """Mandatory request fields are missing."""

    http_status = HTTPStatus.BAD_REQUEST


class NotFoundError(ProvisioningError):
    """No stored project exists for the key."""

    http_status = HTTPStatus.NOT_FOUND


class ConflictError(ProvisioningError):
    """A project with this key is already stored."""

    http_status = HTTPStatus.CONFLICT


class UpgradeNotAllowedError(ProvisioningError):
    """Bugtracker-only project cannot be upgraded to a platform project."""

    http_status = HTTPStatus.CONFLICT


class IdentityPolicyViolationError(ProvisioningError):
    """Requested access-control settings are invalid."""

    http_status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, violations: dict[str, str] | None = None):
        super().__init__(message)
        self.violations = violations or {}


class AdapterFailureError(ProvisioningError):
    """A collaborator failed or returned an incomplete result."""
