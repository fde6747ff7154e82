import pytest

from provisioner.adapters import ClientRegistry
from provisioner.config import Settings
from provisioner.logging import RequestContext

JIRA = "https://jira.example.com"
CONFLUENCE = "https://wiki.example.com"
BITBUCKET = "https://scm.example.com"
RUNDECK = "https://jobs.example.com"
CROWD = "https://crowd.example.com"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        service_user="svc",
        service_password="secret",  # noqa: S106
        jira_url=JIRA,
        confluence_url=CONFLUENCE,
        bitbucket_url=BITBUCKET,
        rundeck_url=RUNDECK,
        crowd_url=CROWD,
    )


@pytest.fixture
async def registry(settings):
    registry = ClientRegistry(settings.service_user, settings.service_password)
    yield registry
    for token in registry.open_sessions():
        await registry.remove_client(token)


@pytest.fixture
def ctx():
    return RequestContext(project_key="ABC", token="sess_test")
