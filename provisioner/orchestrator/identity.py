"""Access-control checks that run before any side effect."""

from ..adapters import IdentityPolicyAdapter
from ..contracts import ProjectRecord
from ..errors import IdentityPolicyViolationError
from ..logging import RequestContext

REQUIRED_SETTINGS = {
    "projectAdminUser": "admin_user",
    "projectAdminGroup": "admin_group",
    "projectUserGroup": "user_group",
    "projectReadonlyGroup": "readonly_group",
}


class IdentityPolicyChecker:
    def __init__(self, adapter: IdentityPolicyAdapter) -> None:
        self.adapter = adapter

    async def check_if_requested(self, request: ProjectRecord, ctx: RequestContext) -> None:
        """Validate special permission settings; no-op unless they were requested."""
        if not request.special_permission_set:
            return

        missing = {
            setting: "must be set when special permissions are requested"
            for setting, attr in REQUIRED_SETTINGS.items()
            if not getattr(request, attr)
        }
        if missing:
            raise IdentityPolicyViolationError(
                "Missing identity settings: " + ", ".join(sorted(missing)), missing
            )

        await self.adapter.validate(request, ctx)
        ctx.log.debug("identity_settings_valid")
