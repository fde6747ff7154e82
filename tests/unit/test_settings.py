"""Tests for provisioner settings."""

from pydantic import ValidationError
import pytest

from provisioner.config import ProjectTemplate, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PROJECT_UPGRADE_ALLOWED", raising=False)

    settings = Settings(_env_file=None)

    assert settings.upgrade_allowed is False
    assert settings.auxiliary_repositories == ["occonfig-artifacts", "design"]
    assert list(settings.project_templates) == ["default"]
    assert settings.database_url is None


def test_upgrade_policy_from_environment(monkeypatch):
    monkeypatch.setenv("PROJECT_UPGRADE_ALLOWED", "true")

    assert Settings(_env_file=None).upgrade_allowed is True


def test_log_level_is_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_templates_require_default():
    with pytest.raises(ValidationError, match="default"):
        Settings(_env_file=None, project_templates={"kanban": ProjectTemplate()})


def test_template_for_falls_back_to_default():
    kanban = ProjectTemplate(bugtracker_template_key="kanban-template")
    settings = Settings(
        _env_file=None,
        project_templates={"default": ProjectTemplate(), "kanban": kanban},
    )

    assert settings.template_for("kanban") is kanban
    assert settings.template_for("scrum") is settings.project_templates["default"]
    assert settings.template_for(None) is settings.project_templates["default"]
