"""Crowd-style identity directory adapter."""

import httpx

from ..config import Settings
from ..contracts import ProjectRecord
from ..errors import IdentityPolicyViolationError
from ..logging import RequestContext
from .http import ClientRegistry, RestAdapter


class CrowdIdentityAdapter(RestAdapter):
    """Checks that the requested admin user and groups exist."""

    service_name = "crowd"

    def __init__(self, settings: Settings, registry: ClientRegistry) -> None:
        super().__init__(settings.crowd_url, registry)

    async def _exists(self, resource: str, param: str, value: str, ctx: RequestContext) -> bool:
        resp = await self._client(ctx).get(
            f"/rest/usermanagement/1/{resource}", params={param: value}
        )
        if resp.status_code == httpx.codes.NOT_FOUND:
            return False
        resp.raise_for_status()
        return True

    async def validate(self, project: ProjectRecord, ctx: RequestContext) -> None:
        violations: dict[str, str] = {}

        groups = {
            "projectAdminGroup": project.admin_group,
            "projectUserGroup": project.user_group,
            "projectReadonlyGroup": project.readonly_group,
        }
        for setting, group in groups.items():
            if group and not await self._exists("group", "groupname", group, ctx):
                violations[setting] = f"Group {group} does not exist"

        if project.admin_user and not await self._exists(
            "user", "username", project.admin_user, ctx
        ):
            violations["projectAdminUser"] = f"User {project.admin_user} does not exist"

        if violations:
            ctx.log.warning("identity_settings_rejected", violations=violations)
            raise IdentityPolicyViolationError(
                "Identity settings of project are invalid: "
                + ", ".join(f"{k}: {v}" for k, v in violations.items()),
                violations,
            )
