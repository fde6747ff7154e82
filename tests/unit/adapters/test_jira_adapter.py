import json

import httpx
import pytest
import respx

from provisioner.adapters import JiraAdapter
from provisioner.contracts import ProjectRecord, RepositoryData
from provisioner.logging import RequestContext

JIRA = "https://jira.example.com"


@pytest.fixture
def jira(settings, registry):
    return JiraAdapter(settings, registry)


@pytest.fixture
def project():
    return ProjectRecord(
        key="ABC",
        name="Demo",
        description="Demo project",
        bugtracker_space=True,
        collaboration_space_url="https://wiki.example.com/display/ABC",
        scm_url="https://scm.example.com/projects/ABC",
    )


class TestBuildProjectKey:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("demo", "DEMO"),
            ("My App", "MYAPP"),
            ("customer portal", "CUSAL"),
            ("a-b_c!", "ABC"),
            ("", ""),
        ],
    )
    def test_build_project_key(self, jira, name, expected):
        assert jira.build_project_key(name) == expected


def test_template_for_falls_back_to_default(jira):
    assert jira.template_for("unknown") == (
        "software",
        "com.pyxis.greenhopper.jira:gh-scrum-template",
    )


@pytest.mark.asyncio
async def test_create_project_sets_browse_url(jira, project, ctx):
    async with respx.mock(base_url=JIRA) as respx_mock:
        route = respx_mock.post("/rest/api/2/project").mock(
            return_value=httpx.Response(httpx.codes.CREATED, json={"id": 10, "key": "ABC"})
        )

        result = await jira.create_project(project, ctx)

        body = json.loads(route.calls.last.request.content)
        assert body["key"] == "ABC"
        assert body["lead"] == "svc"
        assert body["projectTemplateKey"] == "com.pyxis.greenhopper.jira:gh-scrum-template"
        assert result.bugtracker_url == f"{JIRA}/browse/ABC"


@pytest.mark.asyncio
async def test_create_project_uses_admin_as_lead(jira, project, ctx):
    project.admin_user = "alice"
    async with respx.mock(base_url=JIRA) as respx_mock:
        route = respx_mock.post("/rest/api/2/project").mock(
            return_value=httpx.Response(httpx.codes.CREATED, json={"key": "ABC"})
        )

        await jira.create_project(project, ctx)

        assert json.loads(route.calls.last.request.content)["lead"] == "alice"


@pytest.mark.asyncio
async def test_create_project_error_raises(jira, project, ctx):
    async with respx.mock(base_url=JIRA) as respx_mock:
        respx_mock.post("/rest/api/2/project").mock(
            return_value=httpx.Response(
                httpx.codes.BAD_REQUEST, json={"errors": {"key": "taken"}}
            )
        )

        with pytest.raises(httpx.HTTPStatusError):
            await jira.create_project(project, ctx)


@pytest.mark.asyncio
async def test_add_shortcuts(jira, project, ctx):
    async with respx.mock(base_url=JIRA) as respx_mock:
        route = respx_mock.post("/rest/projects/1.0/project/ABC/shortcut").mock(
            return_value=httpx.Response(httpx.codes.OK, json={})
        )

        created = await jira.add_shortcuts(project, ctx)

        assert created == 2
        names = [json.loads(call.request.content)["name"] for call in route.calls]
        assert names == ["Collaboration space", "Source code"]


@pytest.mark.asyncio
async def test_add_shortcuts_without_bugtracker_space(jira, project, ctx):
    project.bugtracker_space = False
    async with respx.mock(base_url=JIRA, assert_all_called=False) as respx_mock:
        route = respx_mock.post("/rest/projects/1.0/project/ABC/shortcut")

        assert await jira.add_shortcuts(project, ctx) == 0
        assert not route.called


@pytest.mark.asyncio
async def test_create_components_for_repositories(jira, project, ctx):
    project.repositories = {
        "abc-api": RepositoryData(name="abc-api", url=f"{JIRA}/repos/abc-api"),
        "abc-web": RepositoryData(name="abc-web"),
    }
    async with respx.mock(base_url=JIRA) as respx_mock:
        route = respx_mock.post("/rest/api/2/component").mock(
            return_value=httpx.Response(httpx.codes.CREATED, json={"id": "1"})
        )

        components = await jira.create_components_for_repositories(project, ctx)

        assert sorted(components) == ["abc-api", "abc-web"]
        assert route.call_count == 2


@pytest.mark.asyncio
async def test_project_key_exists(jira, ctx):
    async with respx.mock(base_url=JIRA) as respx_mock:
        respx_mock.get("/rest/api/2/project/ABC").mock(
            return_value=httpx.Response(httpx.codes.OK, json={"key": "ABC"})
        )
        respx_mock.get("/rest/api/2/project/NEW").mock(
            return_value=httpx.Response(httpx.codes.NOT_FOUND)
        )

        assert await jira.project_key_exists("ABC", ctx) is True
        assert await jira.project_key_exists("NEW", ctx) is False


@pytest.mark.asyncio
async def test_requires_request_session(jira, project):
    with pytest.raises(RuntimeError, match="outside of a request session"):
        await jira.create_project(project, RequestContext())
