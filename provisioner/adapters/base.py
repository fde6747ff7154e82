"""Collaborator contracts consumed by the orchestrator.

The orchestrator only sees these protocols; every method takes the request
context as its last argument.
"""

from typing import Protocol, runtime_checkable

from ..contracts import ExecutionsData, JobDefinition, ProjectRecord
from ..logging import RequestContext


@runtime_checkable
class BugtrackerAdapter(Protocol):
    """Issue tracker: projects, components, shortcuts, key rules."""

    async def create_project(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        """Create the tracker project; must set ``bugtracker_url``."""
        ...

    async def add_shortcuts(self, project: ProjectRecord, ctx: RequestContext) -> int: ...

    async def create_components_for_repositories(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> dict[str, str]: ...

    async def project_key_exists(self, key_or_name: str, ctx: RequestContext) -> bool: ...

    def build_project_key(self, name: str) -> str: ...

    def template_for(self, project_type: str | None) -> tuple[str, str]:
        """Return ``(template_type_key, template_key)``."""
        ...


@runtime_checkable
class CollaborationAdapter(Protocol):
    """Wiki: one collaboration space per project."""

    async def create_space(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        """Create the space; must set ``collaboration_space_url``."""
        ...

    def template_for(self, project_type: str | None) -> str: ...


@runtime_checkable
class SCMAdapter(Protocol):
    """Source-control host: project grouping and repositories."""

    async def create_project(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        """Create the SCM project; must set ``scm_url``."""
        ...

    async def create_auxiliary_repositories(
        self, project: ProjectRecord, names: list[str], ctx: RequestContext
    ) -> ProjectRecord: ...

    async def create_component_repositories(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> ProjectRecord: ...


@runtime_checkable
class JobExecutionAdapter(Protocol):
    """Automation platform: platform projects and quickstarter jobs."""

    async def create_platform_projects(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> ProjectRecord: ...

    async def provision_quickstarters(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> list[ExecutionsData]: ...

    async def refresh_job_definitions(self, ctx: RequestContext) -> list[JobDefinition]:
        """Reload job definitions into the job definition store."""
        ...


@runtime_checkable
class IdentityPolicyAdapter(Protocol):
    """Identity directory; raises IdentityPolicyViolationError on bad settings."""

    async def validate(self, project: ProjectRecord, ctx: RequestContext) -> None: ...


@runtime_checkable
class ProjectStorage(Protocol):
    async def get(self, key: str) -> ProjectRecord | None: ...
    async def store(self, project: ProjectRecord) -> str: ...
    async def update(self, project: ProjectRecord) -> bool: ...


@runtime_checkable
class Notifier(Protocol):
    async def notify_users(self, project: ProjectRecord, ctx: RequestContext) -> bool: ...


@runtime_checkable
class JobDefinitionStore(Protocol):
    def lookup(self, component_type: str) -> JobDefinition | None: ...


@runtime_checkable
class SessionProvider(Protocol):
    """Per-request authentication handle."""

    async def acquire(self, ctx: RequestContext) -> str: ...
    async def release(self, token: str) -> None: ...
