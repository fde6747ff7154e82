"""Project record and the supporting DTOs.

Field aliases keep the camelCase wire format used by the provisioning UI.
"""

from pydantic import BaseModel, ConfigDict, Field

DESCRIPTION_MAX_LENGTH = 100
DESCRIPTION_TRUNCATED_LENGTH = 99


class RepositoryData(BaseModel):
    """Source-control repository created for a project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    url: str | None = Field(None, description="Browse URL")
    http_url: str | None = Field(None, alias="httpUrl", description="HTTPS clone URL")
    ssh_url: str | None = Field(None, alias="sshUrl", description="SSH clone URL")


class ProjectRecord(BaseModel):
    """Central project entity, used both as request and as stored record."""

    model_config = ConfigDict(populate_by_name=True)

    key: str | None = Field(None, alias="projectKey")
    name: str | None = Field(None, alias="projectName")
    description: str | None = None
    project_type: str | None = Field(None, alias="projectType")

    bugtracker_space: bool = Field(False, alias="bugtrackerSpace")
    platform_runtime: bool = Field(False, alias="platformRuntime")

    special_permission_set: bool = Field(False, alias="specialPermissionSet")
    admin_user: str | None = Field(None, alias="projectAdminUser")
    admin_group: str | None = Field(None, alias="projectAdminGroup")
    user_group: str | None = Field(None, alias="projectUserGroup")
    readonly_group: str | None = Field(None, alias="projectReadonlyGroup")

    scm_url: str | None = Field(None, alias="scmvcsUrl")
    bugtracker_url: str | None = Field(None, alias="bugtrackerUrl")
    collaboration_space_url: str | None = Field(None, alias="collaborationSpaceUrl")

    repositories: dict[str, RepositoryData] | None = None
    quickstarters: list[dict[str, str]] | None = None
    last_execution_jobs: list[str] | None = Field(None, alias="lastExecutionJobs")

    def copy_permissions_from(self, other: "ProjectRecord") -> None:
        self.special_permission_set = other.special_permission_set
        self.admin_user = other.admin_user
        self.admin_group = other.admin_group
        self.user_group = other.user_group
        self.readonly_group = other.readonly_group


class ExecutionsData(BaseModel):
    """A triggered job execution."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    permalink: str
    status: str | None = None


class JobDefinition(BaseModel):
    """Automation job known to the job runner."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    group: str | None = None
    description: str | None = None


class ProjectTemplates(BaseModel):
    """Templates the tracker and wiki use for a project type."""

    model_config = ConfigDict(populate_by_name=True)

    bug_tracker_template: str = Field(..., alias="bugTrackerTemplate")
    collab_space_template: str = Field(..., alias="collabSpaceTemplate")


class ExistsResult(BaseModel):
    """Answer of the validate endpoints when the name or key is taken."""

    error: bool = True
    error_message: str


class GeneratedKey(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_key: str = Field(..., alias="projectKey")
