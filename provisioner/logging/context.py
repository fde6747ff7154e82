"""Per-request context threaded explicitly through the provisioning pipeline."""

from dataclasses import dataclass, field
import uuid

import structlog


def new_correlation_id() -> str:
    return f"req_{uuid.uuid4().hex[:8]}"


@dataclass
class RequestContext:
    """Correlation data for one orchestrator call.

    Every collaborator receives the context as its last argument and logs
    through ``ctx.log`` so events carry the correlation id and project key.
    ``token`` is filled while a request session is open.
    """

    correlation_id: str = field(default_factory=new_correlation_id)
    project_key: str | None = None
    token: str | None = None

    @property
    def log(self) -> structlog.stdlib.BoundLogger:
        bindings = {"correlation_id": self.correlation_id}
        if self.project_key:
            bindings["project_key"] = self.project_key
        return structlog.get_logger("provisioner").bind(**bindings)
