"""Project notifications.

Posts a summary of the provisioned project, with links to every created
artifact, to a chat/mail relay webhook. Delivery problems are logged and never
fail the provisioning request.
"""

import httpx

from .contracts import ProjectRecord
from .logging import RequestContext


def render_project_message(project: ProjectRecord) -> str:
    """Markdown summary of a project and its links."""
    lines = [f"*Project {project.key}* ({project.name}) was provisioned."]
    links = [
        ("Bugtracker", project.bugtracker_url),
        ("Collaboration space", project.collaboration_space_url),
        ("Source code", project.scm_url),
    ]
    lines.extend(f"- {label}: {url}" for label, url in links if url)
    for name in sorted(project.repositories or {}):
        repo = project.repositories[name]
        lines.append(f"- Repository {name}: {repo.url or repo.http_url or '-'}")
    for permalink in project.last_execution_jobs or []:
        lines.append(f"- Job: {permalink}")
    return "\n".join(lines)


class WebhookNotifier:
    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout

    def _recipients(self, project: ProjectRecord) -> list[str]:
        return [
            r for r in (project.admin_user, project.admin_group, project.user_group) if r
        ]

    async def notify_users(self, project: ProjectRecord, ctx: RequestContext) -> bool:
        """Send the project summary; returns True if the webhook accepted it."""
        log = ctx.log
        if not self.webhook_url:
            log.warning("notification_webhook_missing", action="skip_notification")
            return False

        payload = {
            "project_key": project.key,
            "recipients": self._recipients(project),
            "text": render_project_message(project),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.webhook_url, json=payload)
            if resp.is_success:
                log.info("notification_sent", recipients=payload["recipients"])
                return True
            log.error("notification_failed", status=resp.status_code, error=resp.text)
            return False
        except httpx.TimeoutException:
            log.error("notification_timeout")
            return False
        except httpx.HTTPError as e:
            log.error("notification_error", error=str(e))
            return False
