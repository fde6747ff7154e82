"""Rundeck-style job execution adapter and its job definition store."""

from ..config import Settings
from ..contracts import ExecutionsData, JobDefinition, ProjectRecord
from ..logging import RequestContext
from .http import ClientRegistry, RestAdapter

# quickstarter keys that describe the request and are not job options
NON_OPTION_KEYS = {"component_type", "component_description"}


class RundeckJobStore:
    """Job definitions by job id; quickstarters reference jobs via component_type."""

    def __init__(self) -> None:
        self._jobs: dict[str, JobDefinition] = {}

    def add_jobs(self, jobs: list[JobDefinition]) -> None:
        for job in jobs:
            self._jobs[job.id] = job

    def lookup(self, component_type: str) -> JobDefinition | None:
        return self._jobs.get(component_type)

    def jobs(self) -> list[JobDefinition]:
        return list(self._jobs.values())


class RundeckAdapter(RestAdapter):
    service_name = "rundeck"

    def __init__(
        self, settings: Settings, registry: ClientRegistry, job_store: RundeckJobStore
    ) -> None:
        super().__init__(settings.rundeck_url, registry)
        self._api = f"/api/{settings.rundeck_api_version}"
        self._project = settings.rundeck_project
        self._quickstarter_group = settings.rundeck_quickstarter_group
        self._create_projects_job = settings.rundeck_create_projects_job
        self.job_store = job_store

    async def _list_jobs(self, ctx: RequestContext, **params: str) -> list[JobDefinition]:
        data = await self._get_json(f"{self._api}/project/{self._project}/jobs", ctx, params=params)
        return [JobDefinition.model_validate(job) for job in data or []]

    async def refresh_job_definitions(self, ctx: RequestContext) -> list[JobDefinition]:
        """Load the quickstarter jobs into the job store."""
        jobs = await self._list_jobs(ctx, groupPath=self._quickstarter_group)
        self.job_store.add_jobs(jobs)
        ctx.log.debug("job_definitions_refreshed", count=len(jobs))
        return jobs

    async def _run_job(
        self, job: JobDefinition, options: dict[str, str], ctx: RequestContext
    ) -> ExecutionsData:
        data = await self._post_json(
            f"{self._api}/job/{job.id}/run", ctx, json={"options": options}
        )
        execution = ExecutionsData.model_validate(data)
        ctx.log.info("job_triggered", job=job.name, permalink=execution.permalink)
        return execution

    async def create_platform_projects(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> ProjectRecord:
        jobs = await self._list_jobs(ctx, jobExactFilter=self._create_projects_job)
        if not jobs:
            raise RuntimeError(f"Job {self._create_projects_job} not found in {self._project}")

        options = {"project_id": project.key.lower()}
        if project.special_permission_set:
            options["project_admin"] = project.admin_user or ""
            options["project_groups"] = (
                f"ADMINGROUP={project.admin_group},"
                f"USERGROUP={project.user_group},"
                f"READONLYGROUP={project.readonly_group}"
            )
        await self._run_job(jobs[0], options, ctx)
        return project

    async def provision_quickstarters(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> list[ExecutionsData]:
        if not project.quickstarters:
            return []

        executions = []
        for quickstarter in project.quickstarters:
            component_type = quickstarter.get("component_type", "")
            job = self.job_store.lookup(component_type)
            if job is None:
                await self.refresh_job_definitions(ctx)
                job = self.job_store.lookup(component_type)
            if job is None:
                raise ValueError(f"No provisioning job for quickstarter {component_type}")

            options = {k: v for k, v in quickstarter.items() if k not in NON_OPTION_KEYS}
            options["project_id"] = project.key.lower()
            executions.append(await self._run_job(job, options, ctx))
        return executions
