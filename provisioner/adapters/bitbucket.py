"""Bitbucket-style source-control adapter."""

from typing import Any

from ..config import Settings
from ..contracts import ProjectRecord, RepositoryData
from ..logging import RequestContext
from .http import ClientRegistry, RestAdapter

# quickstarter keys filled in for the job runner
GIT_URL_HTTP = "git_url_http"
GIT_URL_SSH = "git_url_ssh"


def repository_name(project_key: str, component: str) -> str:
    return f"{project_key}-{component}".lower()


def _link(links: dict[str, Any], kind: str, name: str | None = None) -> str | None:
    for link in links.get(kind, []):
        if name is None or link.get("name") == name:
            return link.get("href")
    return None


class BitbucketAdapter(RestAdapter):
    service_name = "bitbucket"

    def __init__(self, settings: Settings, registry: ClientRegistry) -> None:
        super().__init__(settings.bitbucket_url, registry)

    async def create_project(self, project: ProjectRecord, ctx: RequestContext) -> ProjectRecord:
        payload = {
            "key": project.key,
            "name": project.name,
            "description": project.description or "",
        }
        data = await self._post_json("/rest/api/1.0/projects", ctx, json=payload) or {}
        project.scm_url = _link(data.get("links", {}), "self")

        if project.special_permission_set:
            await self._grant_group_permissions(project, ctx)

        ctx.log.info("scm_project_created", url=project.scm_url)
        return project

    async def _grant_group_permissions(self, project: ProjectRecord, ctx: RequestContext) -> None:
        grants = [
            (project.admin_group, "PROJECT_ADMIN"),
            (project.user_group, "PROJECT_WRITE"),
            (project.readonly_group, "PROJECT_READ"),
        ]
        for group, permission in grants:
            if not group:
                continue
            await self._request(
                "PUT",
                f"/rest/api/1.0/projects/{project.key}/permissions/groups",
                ctx,
                params={"permission": permission, "name": group},
            )
            ctx.log.debug("scm_permission_granted", group=group, permission=permission)

    async def _create_repository(
        self, project: ProjectRecord, name: str, ctx: RequestContext
    ) -> RepositoryData:
        data = (
            await self._post_json(
                f"/rest/api/1.0/projects/{project.key}/repos",
                ctx,
                json={"name": name, "scmId": "git", "forkable": True},
            )
            or {}
        )
        links = data.get("links", {})
        repo = RepositoryData(
            name=data.get("name", name),
            url=_link(links, "self"),
            http_url=_link(links, "clone", "http"),
            ssh_url=_link(links, "clone", "ssh"),
        )
        ctx.log.info("scm_repository_created", repository=repo.name, url=repo.url)
        return repo

    async def create_auxiliary_repositories(
        self, project: ProjectRecord, names: list[str], ctx: RequestContext
    ) -> ProjectRecord:
        repositories = dict(project.repositories or {})
        for name in names:
            repo = await self._create_repository(project, repository_name(project.key, name), ctx)
            repositories[repo.name] = repo
        project.repositories = repositories
        return project

    async def create_component_repositories(
        self, project: ProjectRecord, ctx: RequestContext
    ) -> ProjectRecord:
        if not project.quickstarters:
            return project

        repositories = dict(project.repositories or {})
        for quickstarter in project.quickstarters:
            component_id = quickstarter.get("component_id")
            if not component_id:
                raise ValueError(
                    f"Quickstarter {quickstarter.get('component_type')} has no component_id"
                )
            repo = await self._create_repository(
                project, repository_name(project.key, component_id), ctx
            )
            repositories[repo.name] = repo
            if repo.http_url:
                quickstarter[GIT_URL_HTTP] = repo.http_url
            if repo.ssh_url:
                quickstarter[GIT_URL_SSH] = repo.ssh_url
        project.repositories = repositories
        return project
