"""Request validation and normalization."""

from ..contracts import ProjectRecord
from ..contracts.project import DESCRIPTION_MAX_LENGTH, DESCRIPTION_TRUNCATED_LENGTH
from ..errors import InvalidRequestError


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate(request: ProjectRecord | None, require_name: bool = True) -> ProjectRecord:
    """Check mandatory fields: key always, name on create."""
    if request is None or _blank(request.key):
        raise InvalidRequestError("Project key is mandatory")
    if require_name and _blank(request.name):
        raise InvalidRequestError("Project key and name are mandatory fields to create a project")
    return request


def normalize_key(request: ProjectRecord) -> ProjectRecord:
    request.key = request.key.upper()
    return request


def truncate_description(request: ProjectRecord) -> ProjectRecord:
    if request.description and len(request.description) > DESCRIPTION_MAX_LENGTH:
        request.description = request.description[:DESCRIPTION_TRUNCATED_LENGTH]
    return request
