"""Provisioner configuration with pydantic-settings.

Every collaborator endpoint and every policy switch lives here so the
orchestrator itself never reads the environment.

Usage:
    from provisioner.config import get_settings

    settings = get_settings()
    if settings.upgrade_allowed:
        ...
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProjectTemplate(BaseModel):
    """Template bindings for one project type."""

    bugtracker_template_type: str = Field(
        default="software",
        description="Issue tracker project type key",
    )
    bugtracker_template_key: str = Field(
        default="com.pyxis.greenhopper.jira:gh-scrum-template",
        description="Issue tracker project template key",
    )
    collaboration_template_key: str = Field(
        default=(
            "com.atlassian.confluence.plugins.confluence-space-blueprints"
            ":documentation-space-blueprint"
        ),
        description="Wiki space blueprint key",
    )


def _default_templates() -> dict[str, ProjectTemplate]:
    return {"default": ProjectTemplate()}


class Settings(BaseSettings):
    """Provisioner settings.

    Collaborator URLs default to empty strings; the matching adapter refuses
    to start a request against an unconfigured backend.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # === Logging ===
    service_name: str = Field(
        default="provisioner",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # === Provisioning policy ===
    upgrade_allowed: bool = Field(
        default=False,
        alias="PROJECT_UPGRADE_ALLOWED",
        description="Allow bugtracker-only projects to be upgraded to platform projects",
    )
    auxiliary_repositories: list[str] = Field(
        default_factory=lambda: ["occonfig-artifacts", "design"],
        description="Repositories created next to every new SCM project",
    )
    project_templates: dict[str, ProjectTemplate] = Field(
        default_factory=_default_templates,
        description="Template bindings per project type, must contain 'default'",
    )

    # === Collaborators ===
    http_timeout: float = Field(default=30.0, gt=0, description="Collaborator HTTP timeout")
    service_user: str = Field(default="", description="Service account user name")
    service_password: str = Field(default="", description="Service account password")

    jira_url: str = Field(default="", description="Issue tracker base URL")
    confluence_url: str = Field(default="", description="Wiki base URL")
    bitbucket_url: str = Field(default="", description="SCM host base URL")
    rundeck_url: str = Field(default="", description="Job runner base URL")
    rundeck_api_version: int = Field(default=32, ge=1)
    rundeck_project: str = Field(default="quickstarters", description="Job runner project")
    rundeck_quickstarter_group: str = Field(
        default="quickstarts",
        description="Job group holding the quickstarter jobs",
    )
    rundeck_create_projects_job: str = Field(
        default="create-projects",
        description="Name of the job that provisions platform projects",
    )
    crowd_url: str = Field(default="", description="Identity directory base URL")

    # === Storage & notifications ===
    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy async URL; in-memory storage when unset",
        examples=["postgresql+asyncpg://user:pass@db:5432/provisioner"],
    )
    notification_webhook_url: str = Field(
        default="",
        description="Webhook that receives project notifications (optional)",
    )

    # === CLI ===
    api_url: str = Field(
        default="http://localhost:8000",
        alias="PROVISIONER_API_URL",
        description="Provisioner API URL used by the CLI",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("project_templates")
    @classmethod
    def validate_project_templates(
        cls, v: dict[str, ProjectTemplate]
    ) -> dict[str, ProjectTemplate]:
        if "default" not in v:
            raise ValueError("project_templates must define a 'default' entry")
        return v

    def template_for(self, project_type: str | None) -> ProjectTemplate:
        """Template bindings for a project type, falling back to 'default'."""
        return self.project_templates.get(project_type or "default") or self.project_templates[
            "default"
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
