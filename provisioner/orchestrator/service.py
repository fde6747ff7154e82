"""Provisioning orchestrator: the entry points behind the project API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..adapters import (
    BugtrackerAdapter,
    CollaborationAdapter,
    JobDefinitionStore,
    JobExecutionAdapter,
    Notifier,
    ProjectStorage,
    SessionProvider,
)
from ..contracts import ExistsResult, ProjectRecord, ProjectTemplates
from ..errors import (
    AdapterFailureError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    ProvisioningError,
)
from ..logging import RequestContext
from . import validation
from .delivery_chain import DeliveryChainBuilder
from .identity import IdentityPolicyChecker
from .reconciler import UpdateReconciler


class ProvisioningOrchestrator:
    """Sequences validation, collaborator calls, persistence and notification.

    ``create`` and ``update`` run as one sequential chain of awaited calls.
    Typed ``ProvisioningError`` subclasses raised by validation and policy
    checks pass through untouched; anything else is logged once here and
    surfaced as ``AdapterFailureError`` carrying the underlying message. Artifacts
    created before a failure are left in place; once the SCM project exists the
    partial record is persisted so a retried update resumes after that step.
    """

    def __init__(
        self,
        bugtracker: BugtrackerAdapter,
        collaboration: CollaborationAdapter,
        storage: ProjectStorage,
        notifier: Notifier,
        jobs: JobExecutionAdapter,
        job_store: JobDefinitionStore,
        sessions: SessionProvider,
        identity_checker: IdentityPolicyChecker,
        delivery_chain: DeliveryChainBuilder,
        reconciler: UpdateReconciler,
        template_keys: list[str],
    ) -> None:
        self.bugtracker = bugtracker
        self.collaboration = collaboration
        self.storage = storage
        self.notifier = notifier
        self.jobs = jobs
        self.job_store = job_store
        self.sessions = sessions
        self.identity_checker = identity_checker
        self.delivery_chain = delivery_chain
        self.reconciler = reconciler
        self.template_keys = list(template_keys)

    @asynccontextmanager
    async def request_session(self, ctx: RequestContext) -> AsyncIterator[RequestContext]:
        """Hold an authentication session for the duration of one operation."""
        ctx.token = await self.sessions.acquire(ctx)
        try:
            yield ctx
        finally:
            token, ctx.token = ctx.token, None
            await self.sessions.release(token)

    async def _save_progress(self, project: ProjectRecord, ctx: RequestContext) -> None:
        """Persist the artifacts a failed run already created.

        With ``scm_url`` stored, a retried update skips the SCM project step.
        """
        try:
            if not await self.storage.update(project):
                await self.storage.store(project)
        except Exception:
            ctx.log.exception("project_progress_not_saved")
            return
        ctx.log.warning("project_progress_saved", scm_url=project.scm_url)

    async def create(
        self, request: ProjectRecord | None, ctx: RequestContext | None = None
    ) -> ProjectRecord:
        ctx = ctx or RequestContext()
        async with self.request_session(ctx):
            project = validation.validate(request)
            validation.truncate_description(project)
            validation.normalize_key(project)
            ctx.project_key = project.key
            requested_scm_url = project.scm_url

            try:
                ctx.log.debug(
                    "project_create_requested", project=project.model_dump(by_alias=True)
                )
                await self.identity_checker.check_if_requested(project, ctx)

                if project.bugtracker_space:
                    if await self.storage.get(project.key) is not None:
                        raise ConflictError(f"Project with key ({project.key}) already exists")
                    project = await self._create_bugtracker_space(project, ctx)

                project = await self.delivery_chain.build(project, ctx)
                await self.bugtracker.add_shortcuts(project, ctx)

                location = await self.storage.store(project)
                ctx.log.info("project_created", location=location)

                await self.notifier.notify_users(project, ctx)
                return project
            except ProvisioningError:
                raise
            except Exception as e:
                ctx.log.exception("project_create_failed", error=str(e))
                if project.scm_url and project.scm_url != requested_scm_url:
                    await self._save_progress(project, ctx)
                raise AdapterFailureError(str(e)) from e

    async def _create_bugtracker_space(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> ProjectRecord:
        project = await self.bugtracker.create_project(project, ctx)
        if not project.bugtracker_url:
            raise AdapterFailureError(
                f"{type(self.bugtracker).__name__} did not return bugtracker url"
            )

        project = await self.collaboration.create_space(project, ctx)
        if not project.collaboration_space_url:
            raise AdapterFailureError(
                f"{type(self.collaboration).__name__} did not return collaboration space url"
            )
        return project

    async def update(
        self, request: ProjectRecord | None, ctx: RequestContext | None = None
    ) -> ProjectRecord:
        ctx = ctx or RequestContext()
        async with self.request_session(ctx):
            incoming = validation.validate(request, require_name=False)
            validation.normalize_key(incoming)
            ctx.project_key = incoming.key
            existing: ProjectRecord | None = None
            stored_scm_url: str | None = None

            try:
                ctx.log.debug(
                    "project_update_requested", project=incoming.model_dump(by_alias=True)
                )
                existing = await self.storage.get(incoming.key)
                if existing is not None:
                    stored_scm_url = existing.scm_url
                project = await self.reconciler.reconcile(existing, incoming, ctx)

                if not await self.storage.update(project):
                    raise NotFoundError(f"Project with key {project.key} was removed during update")
                ctx.log.info("project_updated")

                await self.notifier.notify_users(project, ctx)
                return project
            except ProvisioningError:
                raise
            except Exception as e:
                ctx.log.exception("project_update_failed", error=str(e))
                if existing is not None and existing.scm_url != stored_scm_url:
                    await self._save_progress(existing, ctx)
                raise AdapterFailureError(str(e)) from e

    async def _describe_quickstarters(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> None:
        quickstarters = project.quickstarters or []
        types = {q.get("component_type", "") for q in quickstarters}
        if any(self.job_store.lookup(t) is None for t in types):
            try:
                async with self.request_session(ctx):
                    await self.jobs.refresh_job_definitions(ctx)
            except Exception as e:
                ctx.log.warning("job_definitions_refresh_failed", error=str(e))

        for quickstarter in quickstarters:
            job = self.job_store.lookup(quickstarter.get("component_type", ""))
            if job is not None and job.description:
                quickstarter["component_description"] = job.description

    async def get(self, key: str, ctx: RequestContext | None = None) -> ProjectRecord:
        """Stored project, with job descriptions attached to its quickstarters."""
        ctx = ctx or RequestContext(project_key=key.upper() if key else None)
        project = await self.storage.get(key.upper()) if key else None
        if project is None:
            raise NotFoundError(f"Project with key {key} does not exist")

        project = project.model_copy(deep=True)
        await self._describe_quickstarters(project, ctx)
        return project

    async def _exists(self, value: str, message: str, ctx: RequestContext) -> ExistsResult | None:
        async with self.request_session(ctx):
            try:
                exists = await self.bugtracker.project_key_exists(value, ctx)
            except Exception as e:
                ctx.log.exception("project_existence_check_failed", value=value, error=str(e))
                raise AdapterFailureError(str(e)) from e
        if exists:
            return ExistsResult(error_message=message)
        return None

    async def validate_name(
        self, name: str, ctx: RequestContext | None = None
    ) -> ExistsResult | None:
        """``ExistsResult`` if the tracker already knows the name, else None."""
        return await self._exists(name, "A project with this name exists", ctx or RequestContext())

    async def validate_key(
        self, key: str, ctx: RequestContext | None = None
    ) -> ExistsResult | None:
        return await self._exists(key, "A key with this name exists", ctx or RequestContext())

    def generate_key(self, name: str) -> str:
        return self.bugtracker.build_project_key(name)

    def list_template_keys(self) -> list[str]:
        return list(self.template_keys)

    def get_templates_for_key(self, key: str | None) -> ProjectTemplates:
        if key is None or not key.strip():
            raise InvalidRequestError("Null template key is not allowed")

        type_key, template_key = self.bugtracker.template_for(key)
        return ProjectTemplates(
            bug_tracker_template=f"{type_key}#{template_key}",
            collab_space_template=self.collaboration.template_for(key),
        )
