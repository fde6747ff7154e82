"""Tests for the identity policy checker."""

import pytest

from provisioner.errors import IdentityPolicyViolationError
from provisioner.logging import RequestContext
from provisioner.orchestrator import IdentityPolicyChecker
from tests.mocks.collaborators import CallLog, MockIdentity


@pytest.fixture
def identity():
    return MockIdentity(CallLog())


@pytest.fixture
def permissions():
    return {
        "special_permission_set": True,
        "admin_user": "alice",
        "admin_group": "abc-admins",
        "user_group": "abc-users",
        "readonly_group": "abc-readers",
    }


@pytest.mark.asyncio
async def test_skipped_without_special_permissions(identity, make_project):
    checker = IdentityPolicyChecker(identity)

    await checker.check_if_requested(make_project(), RequestContext())

    assert identity.log.calls == []


@pytest.mark.asyncio
async def test_valid_settings_delegate_to_directory(identity, make_project, permissions):
    checker = IdentityPolicyChecker(identity)

    await checker.check_if_requested(make_project(**permissions), RequestContext())

    assert identity.log.calls == ["identity.validate"]


@pytest.mark.asyncio
async def test_missing_settings_rejected_before_directory_lookup(
    identity, make_project, permissions
):
    permissions["readonly_group"] = None
    checker = IdentityPolicyChecker(identity)

    with pytest.raises(IdentityPolicyViolationError) as exc_info:
        await checker.check_if_requested(make_project(**permissions), RequestContext())

    assert "projectReadonlyGroup" in exc_info.value.violations
    assert identity.log.calls == []


@pytest.mark.asyncio
async def test_unknown_group_rejected(identity, make_project, permissions):
    identity.unknown_groups.add("abc-users")
    checker = IdentityPolicyChecker(identity)

    with pytest.raises(IdentityPolicyViolationError) as exc_info:
        await checker.check_if_requested(make_project(**permissions), RequestContext())

    assert "abc-users" in exc_info.value.violations
